from pydantic import BaseModel
from typing import Any


class PresetSaveRequest(BaseModel):
    apiId: Any = None
    name: Any = None
    preset: Any = None


class PresetRenameRequest(BaseModel):
    apiId: Any = None
    oldName: Any = None
    newName: Any = None


class PresetDeleteRequest(BaseModel):
    apiId: Any = None
    name: Any = None


class PresetRestoreRequest(BaseModel):
    apiId: Any = None
    name: Any = None


class OpenAIPresetDeleteRequest(BaseModel):
    name: Any = None


class PresetSaved(BaseModel):
    name: str


class PresetRestore(BaseModel):
    isDefault: bool
    preset: Any = {}


# Response wrappers
class OkResponse(BaseModel):
    ok: bool = True

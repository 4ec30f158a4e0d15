from enum import Enum
from pathlib import Path
from typing import Any, NamedTuple, Optional

from preset_service.services.users import UserDirectoryList

PRESET_EXTENSION = ".json"


class BackendId(str, Enum):
    KOBOLD = "kobold"
    KOBOLD_HORDE = "koboldhorde"
    NOVEL = "novel"
    TEXTGEN = "textgenerationwebui"
    OPENAI = "openai"
    INSTRUCT = "instruct"
    CONTEXT = "context"


# Attribute of UserDirectoryList holding each backend's presets
BACKEND_FOLDERS = {
    BackendId.KOBOLD: "kobold_ai_settings",
    BackendId.KOBOLD_HORDE: "kobold_ai_settings",
    BackendId.NOVEL: "novel_ai_settings",
    BackendId.TEXTGEN: "textgen_settings",
    BackendId.OPENAI: "openai_settings",
    BackendId.INSTRUCT: "instruct",
    BackendId.CONTEXT: "context",
}


class BackendLocation(NamedTuple):
    folder: Optional[Path]
    extension: Optional[str]

    def path_for(self, name: str) -> Path:
        return self.folder / f"{name}{self.extension}"


def resolve_backend_location(api_id: Any, directories: UserDirectoryList) -> BackendLocation:
    """Get the folder and extension for presets of a backend; unknown ids resolve to (None, None)"""
    try:
        backend = BackendId(api_id)
    except (ValueError, TypeError):
        return BackendLocation(None, None)

    return BackendLocation(getattr(directories, BACKEND_FOLDERS[backend]), PRESET_EXTENSION)

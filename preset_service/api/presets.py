import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from starlette.concurrency import run_in_threadpool

from preset_service.api.deps import get_user_directories, raise_http_error
from preset_service.core.errors import PresetStoreError
from preset_service.models.schemas import (
    PresetSaveRequest, PresetRenameRequest, PresetDeleteRequest, PresetRestoreRequest,
    OpenAIPresetDeleteRequest, PresetSaved, PresetRestore, OkResponse
)
from preset_service.services.presets_store import (
    save_preset, rename_preset, delete_preset, restore_preset,
    save_openai_preset, delete_openai_preset
)
from preset_service.services.users import UserDirectoryList

router = APIRouter()


# Plain def routes run in the thread pool; the store does blocking file I/O.

@router.post("/save")
def presets_save(
    request: PresetSaveRequest,
    directories: UserDirectoryList = Depends(get_user_directories),
) -> PresetSaved:
    """Create or overwrite a preset"""
    try:
        name = save_preset(directories, request.apiId, request.name, request.preset)
    except PresetStoreError as e:
        raise_http_error(e)
    return PresetSaved(name=name)


@router.post("/rename")
def presets_rename(
    request: PresetRenameRequest,
    directories: UserDirectoryList = Depends(get_user_directories),
) -> OkResponse:
    """Rename a preset, refusing to overwrite an existing one"""
    try:
        rename_preset(directories, request.apiId, request.oldName, request.newName)
    except PresetStoreError as e:
        raise_http_error(e)
    return OkResponse(ok=True)


@router.post("/delete")
def presets_delete(
    request: PresetDeleteRequest,
    directories: UserDirectoryList = Depends(get_user_directories),
) -> Response:
    """Delete a preset"""
    try:
        delete_preset(directories, request.apiId, request.name)
    except PresetStoreError as e:
        raise_http_error(e)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/restore")
def presets_restore(
    request: PresetRestoreRequest,
    directories: UserDirectoryList = Depends(get_user_directories),
) -> PresetRestore:
    """Get the bundled default content for a preset, if there is one"""
    try:
        result = restore_preset(directories, request.apiId, request.name)
    except PresetStoreError as e:
        raise_http_error(e)
    return PresetRestore(isDefault=result.is_default, preset=result.content)


@router.post("/save-openai")
async def presets_save_openai(
    request: Request,
    name: Optional[str] = None,
    directories: UserDirectoryList = Depends(get_user_directories),
) -> PresetSaved:
    """Save a chat completion preset sent as the raw request body"""
    if name is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing `name`"
        )

    try:
        body = await request.body()
        payload = json.loads(body.decode("utf-8") or "null")
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON body"
        )

    try:
        saved = await run_in_threadpool(save_openai_preset, directories, name, payload)
    except PresetStoreError as e:
        raise_http_error(e)
    return PresetSaved(name=saved)


@router.post("/delete-openai")
def presets_delete_openai(
    request: OpenAIPresetDeleteRequest,
    directories: UserDirectoryList = Depends(get_user_directories),
) -> Dict[str, Any]:
    """Delete a chat completion preset"""
    if not request.name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing `name`"
        )

    try:
        deleted = delete_openai_preset(directories, request.name)
    except PresetStoreError as e:
        raise_http_error(e)

    if deleted:
        return {"ok": True}
    return {"error": True}

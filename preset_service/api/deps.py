from typing import NoReturn, Optional

from fastapi import Header, HTTPException, status
from loguru import logger

from preset_service.core.config import settings
from preset_service.core.errors import (
    InvalidPresetInput, PresetConflict, PresetNotFound, PresetStoreError
)
from preset_service.services.sanitize import sanitize_filename
from preset_service.services.users import (
    UserDirectoryList, ensure_user_directories, get_user_directory_list
)


def get_user_directories(x_user_handle: Optional[str] = Header(default=None)) -> UserDirectoryList:
    """Resolve the directory set of the requesting user"""
    handle = sanitize_filename(x_user_handle) or settings.DEFAULT_USER_HANDLE
    directories = get_user_directory_list(handle, settings.DATA_ROOT)
    ensure_user_directories(directories)
    return directories


def raise_http_error(error: PresetStoreError) -> NoReturn:
    """Translate a store error into the HTTP status the client sees"""
    if isinstance(error, PresetNotFound):
        logger.warning(str(error))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preset not found")
    if isinstance(error, PresetConflict):
        logger.warning(str(error))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Preset name is already in use")
    if isinstance(error, InvalidPresetInput):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    logger.opt(exception=error).error("Preset operation failed")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal Server Error"
    )

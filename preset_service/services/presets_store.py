import json
from typing import Any, NamedTuple, Optional

from loguru import logger

from preset_service.core.errors import (
    InvalidPresetInput, PresetConflict, PresetNotFound, PresetStoreError
)
from preset_service.services.backends import (
    PRESET_EXTENSION, BackendLocation, resolve_backend_location
)
from preset_service.services.default_presets import DefaultPresetIndex, get_default_preset_index
from preset_service.services.sanitize import sanitize_filename
from preset_service.services.users import UserDirectoryList
from preset_service.utils.file_utils import create_file_atomic, dump_json, write_file_atomic


class RestoreResult(NamedTuple):
    is_default: bool
    content: Any


def _is_missing(content: Any) -> bool:
    # Empty objects and lists are valid documents; null and empty scalars are not
    if content is None:
        return True
    if isinstance(content, (dict, list)):
        return False
    return not content


def _require_name(raw: Any, field: str = "name") -> str:
    name = sanitize_filename(raw)
    if not name:
        raise InvalidPresetInput(f"Preset {field} is missing or invalid")
    return name


def _require_location(api_id: Any, directories: UserDirectoryList) -> BackendLocation:
    location = resolve_backend_location(api_id, directories)
    if location.folder is None:
        raise InvalidPresetInput(f"Unknown API id: {api_id!r}")
    return location


def _write_preset(location: BackendLocation, name: str, content: Any) -> None:
    path = location.path_for(name)
    try:
        location.folder.mkdir(parents=True, exist_ok=True)
        write_file_atomic(path, dump_json(content))
    except (OSError, TypeError, ValueError) as e:
        raise PresetStoreError(f"Failed to write preset {path}") from e


def read_preset(location: BackendLocation, name: str) -> Any:
    """Load a stored preset document"""
    path = location.path_for(name)
    if not path.exists():
        raise PresetNotFound(f"Preset '{name}' not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PresetStoreError(f"Failed to read preset {path}") from e


def save_preset(directories: UserDirectoryList, api_id: Any, name: Any, content: Any) -> str:
    """Create or overwrite a preset; returns the sanitized name it was stored under"""
    name = sanitize_filename(name)
    if _is_missing(content) or not name:
        raise InvalidPresetInput("Preset name and content are required")

    location = _require_location(api_id, directories)
    _write_preset(location, name, content)
    logger.info(f"Saved {api_id} preset '{name}'")
    return name


def rename_preset(directories: UserDirectoryList, api_id: Any, old_name: Any, new_name: Any) -> None:
    """
    Move a preset to a new name and update the name stored inside it.

    The new file is published before the old one is removed. If the process
    dies in between, both files remain; the preset is duplicated, never lost.
    """
    old_name = _require_name(old_name, "oldName")
    new_name = _require_name(new_name, "newName")
    location = _require_location(api_id, directories)

    old_path = location.path_for(old_name)
    new_path = location.path_for(new_name)

    if not old_path.exists():
        raise PresetNotFound(f"Preset '{old_name}' not found")
    if new_path.exists():
        raise PresetConflict(f"Preset name '{new_name}' is already in use")

    data = read_preset(location, old_name)
    if isinstance(data, dict):
        data["name"] = new_name

    try:
        create_file_atomic(new_path, dump_json(data))
    except FileExistsError:
        raise PresetConflict(f"Preset name '{new_name}' is already in use")
    except OSError as e:
        raise PresetStoreError(f"Failed to write preset {new_path}") from e

    try:
        old_path.unlink()
    except FileNotFoundError:
        logger.warning(f"Preset '{old_name}' was removed before the rename finished")
    except OSError as e:
        raise PresetStoreError(
            f"Renamed preset written to {new_path} but {old_path} could not be removed"
        ) from e

    logger.info(f"Renamed {api_id} preset '{old_name}' to '{new_name}'")


def delete_preset(directories: UserDirectoryList, api_id: Any, name: Any) -> None:
    """Delete a preset"""
    name = _require_name(name)
    location = _require_location(api_id, directories)
    path = location.path_for(name)

    try:
        path.unlink()
    except FileNotFoundError:
        raise PresetNotFound(f"Preset '{name}' not found")
    except OSError as e:
        raise PresetStoreError(f"Failed to delete preset {path}") from e

    logger.info(f"Deleted {api_id} preset '{name}'")


def restore_preset(
    directories: UserDirectoryList,
    api_id: Any,
    name: Any,
    index: Optional[DefaultPresetIndex] = None,
) -> RestoreResult:
    """Look up the bundled default for a preset name. Never touches user storage."""
    if index is None:
        index = get_default_preset_index()

    location = resolve_backend_location(api_id, directories)
    name = sanitize_filename(name)

    try:
        default = index.find(directories, location.folder, name)
        if default is None:
            return RestoreResult(False, {})
        content = index.read_content(default.filename)
    except (OSError, ValueError) as e:
        raise PresetStoreError("Failed to consult the default preset index") from e

    return RestoreResult(True, content if content is not None else {})


# TODO: Fold into save_preset/delete_preset once clients send apiId="openai"
def _openai_location(directories: UserDirectoryList) -> BackendLocation:
    return BackendLocation(directories.openai_settings, PRESET_EXTENSION)


def save_openai_preset(directories: UserDirectoryList, name: Any, content: Any) -> str:
    """Save a chat completion preset"""
    name = sanitize_filename(name)
    if _is_missing(content) or not name:
        raise InvalidPresetInput("Preset name and content are required")

    _write_preset(_openai_location(directories), name, content)
    logger.info(f"Saved openai preset '{name}'")
    return name


def delete_openai_preset(directories: UserDirectoryList, name: Any) -> bool:
    """Delete a chat completion preset; returns False when there was nothing to delete"""
    name = _require_name(name)
    path = _openai_location(directories).path_for(name)

    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise PresetStoreError(f"Failed to delete preset {path}") from e

    logger.info(f"Deleted openai preset '{name}'")
    return True


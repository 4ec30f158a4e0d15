import json
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from loguru import logger

from preset_service.core.config import settings
from preset_service.services.users import UserDirectoryList

INDEX_FILENAME = "index.json"

# Content types in the bundled index that are presets, and the user folder they restore into
PRESET_CONTENT_TYPES: Dict[str, str] = {
    "kobold_preset": "kobold_ai_settings",
    "novel_preset": "novel_ai_settings",
    "textgen_preset": "textgen_settings",
    "openai_preset": "openai_settings",
    "instruct": "instruct",
    "context": "context",
}


class DefaultPreset(NamedTuple):
    name: str
    folder: Path
    filename: str


class DefaultPresetIndex:
    """
    Read-only view over the presets bundled with the service.

    The content directory holds an ``index.json`` manifest listing
    ``{"filename": ..., "type": ...}`` entries. Entries whose type is a preset
    type are exposed as defaults for the matching user folder; everything
    else in the manifest is ignored. Content is only read on demand.
    """

    def __init__(self, content_dir: Optional[Path] = None):
        self._content_dir = content_dir

    @property
    def content_dir(self) -> Path:
        if self._content_dir is None:
            return settings.DEFAULT_CONTENT_DIR
        return self._content_dir

    def _load_index(self) -> List[Dict[str, Any]]:
        index_path = self.content_dir / INDEX_FILENAME
        if not index_path.exists():
            return []

        entries = json.loads(index_path.read_text(encoding="utf-8"))
        if not isinstance(entries, list):
            raise ValueError(f"{index_path} must contain a list of entries")
        return entries

    def list_presets(self, directories: UserDirectoryList) -> List[DefaultPreset]:
        """List bundled presets with the user folder each one belongs to"""
        presets = []
        for entry in self._load_index():
            if not isinstance(entry, dict):
                continue
            folder_attr = PRESET_CONTENT_TYPES.get(entry.get("type"))
            filename = entry.get("filename")
            if folder_attr is None or not isinstance(filename, str):
                continue
            presets.append(DefaultPreset(
                name=Path(filename).stem,
                folder=getattr(directories, folder_attr),
                filename=filename,
            ))
        return presets

    def find(self, directories: UserDirectoryList, folder: Optional[Path], name: str) -> Optional[DefaultPreset]:
        """Find the bundled preset stored under `name` for `folder`"""
        if folder is None or not name:
            return None
        for preset in self.list_presets(directories):
            if preset.name == name and preset.folder == folder:
                return preset
        return None

    def read_content(self, filename: str) -> Optional[Any]:
        """Get the parsed content of a bundled preset, None if it can't be read"""
        path = self.content_dir / filename
        if not path.exists():
            logger.warning(f"Default preset file not found: {path}")
            return None

        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to read default preset {path}: {e}")
            return None


# Singleton
default_preset_index = DefaultPresetIndex()


def get_default_preset_index() -> DefaultPresetIndex:
    return default_preset_index

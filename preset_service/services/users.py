from pathlib import Path
from typing import Iterator, Optional

from preset_service.core.config import settings


class UserDirectoryList:
    """Filesystem locations owned by a single user."""

    def __init__(self, root: Path):
        self.root = root
        self.kobold_ai_settings = root / "KoboldAI Settings"
        self.novel_ai_settings = root / "NovelAI Settings"
        self.textgen_settings = root / "TextGen Settings"
        self.openai_settings = root / "OpenAI Settings"
        self.instruct = root / "instruct"
        self.context = root / "context"

    def preset_folders(self) -> Iterator[Path]:
        yield self.kobold_ai_settings
        yield self.novel_ai_settings
        yield self.textgen_settings
        yield self.openai_settings
        yield self.instruct
        yield self.context


def get_user_directory_list(handle: str, data_root: Optional[Path] = None) -> UserDirectoryList:
    """Get the directory list for a user handle"""
    if data_root is None:
        data_root = settings.DATA_ROOT
    return UserDirectoryList(data_root / handle)


def ensure_user_directories(directories: UserDirectoryList) -> None:
    """Create every preset folder for the user if missing"""
    for folder in directories.preset_folders():
        folder.mkdir(parents=True, exist_ok=True)

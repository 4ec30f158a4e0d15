from pydantic_settings import BaseSettings
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger

PACKAGE_DIR = Path(__file__).resolve().parent.parent


# Load .env file from multiple possible locations
def load_env_file() -> None:
    """Load .env file from various possible locations"""
    possible_env_paths = [
        PACKAGE_DIR.parent / ".env",  # Project root
        Path.cwd() / ".env",  # Current working directory
    ]

    for env_path in possible_env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug(f"Loaded .env from: {env_path}")
            break


# Load environment variables before defining settings
load_env_file()


class Settings(BaseSettings):
    # Basic settings
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Project paths
    BASE_DIR: Path = PACKAGE_DIR.parent
    DATA_ROOT: Path = BASE_DIR / "var" / "data"

    # Bundled read-only default presets
    DEFAULT_CONTENT_DIR: Path = PACKAGE_DIR / "default_content"

    # User resolution
    DEFAULT_USER_HANDLE: str = "default-user"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

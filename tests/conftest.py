import pytest
import tempfile
import shutil
from pathlib import Path
from fastapi.testclient import TestClient
import json

from main import app
from preset_service.core.config import settings
from preset_service.services.presets_store import save_preset
from preset_service.services.users import get_user_directory_list, ensure_user_directories


@pytest.fixture
def client():
    """Test client for FastAPI app"""
    return TestClient(app)


@pytest.fixture
def temp_dir():
    """Temporary directory for test files"""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def test_settings(temp_dir):
    """Test settings with temporary directories"""
    # Override settings for testing
    original_data_root = settings.DATA_ROOT
    original_content_dir = settings.DEFAULT_CONTENT_DIR
    original_handle = settings.DEFAULT_USER_HANDLE

    settings.DATA_ROOT = temp_dir / "data"
    settings.DEFAULT_CONTENT_DIR = temp_dir / "defaults"
    settings.DEFAULT_USER_HANDLE = "default-user"
    settings.DATA_ROOT.mkdir(parents=True, exist_ok=True)
    shutil.copytree(original_content_dir, settings.DEFAULT_CONTENT_DIR)

    yield settings

    # Restore original settings
    settings.DATA_ROOT = original_data_root
    settings.DEFAULT_CONTENT_DIR = original_content_dir
    settings.DEFAULT_USER_HANDLE = original_handle


@pytest.fixture
def user_dirs(test_settings):
    """Directory set of the default user, created on disk"""
    directories = get_user_directory_list(test_settings.DEFAULT_USER_HANDLE, test_settings.DATA_ROOT)
    ensure_user_directories(directories)
    return directories


@pytest.fixture
def default_content(test_settings, temp_dir):
    """A small bundled-defaults directory used instead of the packaged one"""
    content_dir = temp_dir / "content"
    TestDataManager.write_json(content_dir / "index.json", [
        {"filename": "presets/kobold/Godlike.json", "type": "kobold_preset"},
        {"filename": "presets/openai/Default.json", "type": "openai_preset"},
        {"filename": "presets/kobold/Missing.json", "type": "kobold_preset"},
        {"filename": "themes/Dark.json", "type": "theme"},
    ])
    TestDataManager.write_json(content_dir / "presets" / "kobold" / "Godlike.json", {"temp": 0.7, "top_p": 0.5})
    TestDataManager.write_json(content_dir / "presets" / "openai" / "Default.json", {"temperature": 1})
    TestDataManager.write_json(content_dir / "themes" / "Dark.json", {"main_text_color": "#fff"})

    test_settings.DEFAULT_CONTENT_DIR = content_dir
    return content_dir


@pytest.fixture
def sample_preset(user_dirs):
    """Create a sample kobold preset for testing"""
    preset_name = "myPreset"
    preset_values = {
        "name": preset_name,
        "temp": 0.7,
        "rep_pen": 1.1,
        "sampler_order": [6, 0, 1, 3, 4, 2, 5],
    }

    save_preset(user_dirs, "kobold", preset_name, preset_values)
    return {"name": preset_name, "values": preset_values, "folder": user_dirs.kobold_ai_settings}


class TestDataManager:
    """Helper class for managing test data"""

    @staticmethod
    def write_json(path: Path, payload):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=4)

    @staticmethod
    def read_json(path: Path):
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    @staticmethod
    def list_files(folder: Path):
        return sorted(p.name for p in folder.iterdir())

import pytest
from fastapi.testclient import TestClient

from orgchart.core.config import get_settings
from orgchart.services.state_store import reset_store


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("STATE_FILE_PATH", str(tmp_path / "state.json"))
    monkeypatch.setenv("PUBLIC_BASE_URL", "http://testserver")
    monkeypatch.delenv("STATE_BACKEND", raising=False)
    monkeypatch.delenv("MAX_REQUEST_BYTES", raising=False)
    get_settings.cache_clear()
    reset_store()
    yield
    get_settings.cache_clear()
    reset_store()


@pytest.fixture
def client():
    from orgchart.main import create_app

    return TestClient(create_app())

"""Pytest configuration and fixtures for vidtube.

Every test gets its own app built by create_app() over an in-memory SQLite
database, with caching disabled and a recording asset host in place of the
real one.
"""

import os
import tempfile

# Module-level app in vidtube.main reads these on import
_TMP_ROOT = tempfile.mkdtemp(prefix="vidtube-tests-")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("REFRESH_SECRET_KEY", "test-refresh-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("ASSET_BACKEND", "local")
os.environ.setdefault("ASSET_ROOT", os.path.join(_TMP_ROOT, "assets"))
os.environ.setdefault("UPLOAD_TMP_DIR", os.path.join(_TMP_ROOT, "temp"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from vidtube.config import Settings  # noqa: E402
from vidtube.database import Base  # noqa: E402
from vidtube.main import create_app  # noqa: E402

from helpers import RecordingAssetHost, make_user, publish_video  # noqa: E402


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        secret_key="test-secret-key",
        refresh_secret_key="test-refresh-secret-key",
        database_url="sqlite://",
        cache_enabled=False,
        asset_backend="local",
        asset_root=str(tmp_path / "assets"),
        upload_tmp_dir=str(tmp_path / "temp"),
        max_page_size=50,
    )


@pytest.fixture
def asset_host() -> RecordingAssetHost:
    return RecordingAssetHost()


@pytest.fixture
def app(settings, asset_host):
    """Fresh application with its tables created."""
    application = create_app(settings)
    application.state.asset_host = asset_host
    Base.metadata.create_all(application.state.engine)
    yield application
    Base.metadata.drop_all(application.state.engine)
    application.state.engine.dispose()


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def db(app):
    """Session on the test database for arranging and inspecting rows."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def alice(client) -> dict:
    return make_user(client, "alice")


@pytest.fixture
def bob(client) -> dict:
    return make_user(client, "bob")


@pytest.fixture
def video(client, alice) -> dict:
    return publish_video(client, alice["headers"])

"""
pytest configuration and fixtures.
"""

from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from feedhub.core.config import settings
from feedhub.core.db import get_async_db
from feedhub.core.security import create_access_token
from feedhub.main import app


@pytest.fixture
def images_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point image storage at a per-test directory."""
    directory = tmp_path / "images"
    directory.mkdir()
    monkeypatch.setattr(settings, "IMAGES_DIR", str(directory))
    return directory


@pytest.fixture
def mongo_db() -> Any:
    """In-memory Motor-compatible database."""
    return AsyncMongoMockClient()["feed_test"]


@pytest.fixture
def client(mongo_db) -> TestClient:
    """Test client without lifespan (no real MongoDB) and with the mock database injected."""
    app.dependency_overrides[get_async_db] = lambda: mongo_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> str:
    return str(ObjectId())


@pytest.fixture
def auth_headers() -> Callable[[str], Dict[str, str]]:
    def build(uid: str) -> Dict[str, str]:
        token = create_access_token({"id": uid, "email": "test@test.com"})
        return {"Authorization": f"Bearer {token}"}
    return build

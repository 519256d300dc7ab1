"""Shared fixtures: settings pointing at a temporary blob area, fresh registries, a test client."""
import pytest
from fastapi.testclient import TestClient

from localdrop.config import Settings
from localdrop.main import create_app
from localdrop.services.file_registry import FileRegistry
from localdrop.services.file_storage import BlobStore
from localdrop.services.message_registry import MessageRegistry

from tests.consts import ANONYMOUS


@pytest.fixture
def blob_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(blob_dir):
    return Settings(
        FILE_STORAGE_PATH=str(blob_dir),
        ANONYMOUS_NAME=ANONYMOUS,
        STATIC_DIR="",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def messages():
    return MessageRegistry(anonymous_name=ANONYMOUS)


@pytest.fixture
def storage(blob_dir):
    return BlobStore(blob_dir, chunk_size=64 * 1024)


@pytest.fixture
def files(storage):
    return FileRegistry(storage, max_upload_bytes=50 * 1024 * 1024, anonymous_name=ANONYMOUS)

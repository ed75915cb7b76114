"""Configure pytest fixtures and environment for inventory client tests."""

import pytest

from inventory_client.core.config import reset_settings
from inventory_client.data.secure_store import EncryptedKeyValueStore, MemoryKeyValueSurface
from inventory_client.session.state import SessionState
from tests.sample_data import TEST_SECRET


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point storage at a temp dir and drop any cached settings."""
    monkeypatch.setenv("INVENTORY_STORAGE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.setenv("INVENTORY_API_URL", "http://inventory.test/api")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def surface():
    """In-memory key-value surface."""
    return MemoryKeyValueSurface()


@pytest.fixture
def store(surface):
    """Encrypted store over the in-memory surface."""
    return EncryptedKeyValueStore(surface, TEST_SECRET)


@pytest.fixture
def session(store):
    """Anonymous session."""
    return SessionState(store)


@pytest.fixture
def user_session(session):
    """Session logged in without admin rights."""
    session.login("user-token", "USER")
    return session


@pytest.fixture
def admin_session(session):
    """Session logged in as administrator."""
    session.login("admin-token", "ADMIN")
    return session

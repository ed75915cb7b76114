"""Validate the encrypted key-value store and its storage surfaces."""

import json
import os

import pytest

from inventory_client.core.exceptions import StorageUnavailableError
from inventory_client.data.secure_store import (
    EncryptedKeyValueStore,
    FileKeyValueSurface,
    MemoryKeyValueSurface,
)

from tests.sample_data import TEST_SECRET


class TestEncryptedKeyValueStore:
    """Test encrypt-on-write and decrypt-on-read behaviour."""

    def test_value_is_not_stored_in_plaintext(self, store, surface):
        """Stored ciphertext must differ from the plaintext."""
        store.put("token", "secret-token")

        raw = surface.get_item("token")
        assert raw is not None
        assert "secret-token" not in raw
        assert store.get("token") == "secret-token"

    def test_put_overwrites_previous_value(self, store):
        """Writing the same key twice keeps the last value."""
        store.put("role", "USER")
        store.put("role", "ADMIN")
        assert store.get("role") == "ADMIN"

    def test_missing_key_reads_as_none(self, store):
        """A key that was never written is absent, not an error."""
        assert store.get("token") is None

    def test_corrupted_ciphertext_reads_as_none(self, store, surface):
        """Tampering with the stored value behaves like a missing entry."""
        store.put("token", "secret-token")
        surface.set_item("token", surface.get_item("token")[:-6] + "AAAAAA")

        assert store.get("token") is None

    def test_garbage_ciphertext_reads_as_none(self, store, surface):
        """Values that were never ciphertext are treated as absent."""
        surface.set_item("token", "not encrypted at all ✓")
        assert store.get("token") is None

    def test_other_key_cannot_decrypt(self, surface):
        """A store with a different secret sees entries as absent."""
        EncryptedKeyValueStore(surface, TEST_SECRET).put("token", "abc")
        other = EncryptedKeyValueStore(surface, "another-secret")
        assert other.get("token") is None

    def test_same_secret_reads_across_instances(self, surface):
        """The key is derived deterministically from the shared secret."""
        EncryptedKeyValueStore(surface, TEST_SECRET).put("token", "abc")
        assert EncryptedKeyValueStore(surface, TEST_SECRET).get("token") == "abc"

    def test_remove_is_unconditional(self, store):
        """Removing present and absent keys never raises."""
        store.put("token", "abc")
        store.remove("token")
        store.remove("token")
        assert store.get("token") is None

    def test_empty_value_reads_falsy(self, store):
        """An empty stored value cannot be told apart from a missing one."""
        store.put("token", "")
        assert not store.get("token")


class TestFileKeyValueSurface:
    """Test the JSON file surface."""

    def test_values_persist_across_instances(self, tmp_path):
        """A new surface over the same file sees earlier writes."""
        path = tmp_path / "nested" / "storage.json"
        FileKeyValueSurface(path).set_item("token", "ciphertext")

        assert FileKeyValueSurface(path).get_item("token") == "ciphertext"
        assert json.loads(path.read_text(encoding="utf-8")) == {"token": "ciphertext"}

    def test_missing_file_reads_empty(self, tmp_path):
        """No file means no entries, and nothing is created on read."""
        path = tmp_path / "storage.json"
        surface = FileKeyValueSurface(path)

        assert surface.get_item("token") is None
        assert not path.exists()

    def test_malformed_file_reads_empty(self, tmp_path):
        """A corrupt file is read as empty rather than raising."""
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")

        assert FileKeyValueSurface(path).get_item("token") is None

    def test_remove_item(self, tmp_path):
        """Removing a key drops it from the file."""
        path = tmp_path / "storage.json"
        surface = FileKeyValueSurface(path)
        surface.set_item("token", "a")
        surface.set_item("role", "b")

        surface.remove_item("token")
        surface.remove_item("missing")

        assert json.loads(path.read_text(encoding="utf-8")) == {"role": "b"}

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores file permissions"
    )
    def test_unwritable_location_is_fatal(self, tmp_path):
        """Writes to an unusable medium raise StorageUnavailableError."""
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            surface = FileKeyValueSurface(locked / "storage.json")
            with pytest.raises(StorageUnavailableError):
                surface.set_item("token", "a")
        finally:
            locked.chmod(0o700)

    def test_path_is_a_directory_is_fatal(self, tmp_path):
        """A directory where the file should be cannot be written."""
        path = tmp_path / "storage.json"
        path.mkdir()

        with pytest.raises(StorageUnavailableError) as exc_info:
            FileKeyValueSurface(path).set_item("token", "a")
        assert exc_info.value.path == str(path)

    def test_encrypted_store_over_file(self, tmp_path):
        """The encrypted store works end to end on disk."""
        path = tmp_path / "storage.json"
        EncryptedKeyValueStore(FileKeyValueSurface(path), TEST_SECRET).put("role", "ADMIN")

        reopened = EncryptedKeyValueStore(FileKeyValueSurface(path), TEST_SECRET)
        assert reopened.get("role") == "ADMIN"


class TestMemoryKeyValueSurface:
    """Test the in-memory surface."""

    def test_initial_values_are_copied(self):
        """The surface does not alias the mapping it was seeded with."""
        seed = {"token": "x"}
        surface = MemoryKeyValueSurface(seed)
        surface.remove_item("token")

        assert seed == {"token": "x"}
        assert surface.get_item("token") is None

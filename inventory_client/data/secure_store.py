"""Encrypted key-value persistence for session credentials."""

from __future__ import annotations

import base64
import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Protocol

import structlog
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from inventory_client.core.exceptions import StorageUnavailableError

logger = structlog.get_logger(__name__)

# Fixed so that every client derives the same key from the shared secret.
_KDF_SALT = b"inventory-client.secure-store.v1"
_KDF_ITERATIONS = 390000


class KeyValueSurface(Protocol):
    """Plain string key-value storage underneath the encrypted store."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueSurface:
    """Dict-backed surface, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueSurface:
    """JSON-file surface that survives restarts."""

    def __init__(self, state_path: Path):
        """Bind the surface to its backing file; nothing is created until a write."""
        self.state_path = Path(state_path)

    def _load(self) -> Dict[str, str]:
        """Load the whole mapping from disk."""
        if not self.state_path.exists():
            return {}
        try:
            raw = json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load key-value file", path=str(self.state_path), error=str(exc))
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed key-value file", path=str(self.state_path))
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _save(self, data: Dict[str, str]) -> None:
        """Persist the mapping, raising if the medium is unusable."""
        try:
            self.state_path.parent.mkdir(parents=True, exist_ok=True)
            self.state_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Key-value file not writable", path=str(self.state_path), error=str(exc))
            raise StorageUnavailableError(
                f"Cannot write {self.state_path}: {exc}",
                path=str(self.state_path),
                details={"error": str(exc)},
            ) from exc

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


@lru_cache(maxsize=8)
def derive_key(secret: str) -> bytes:
    """Derive a Fernet key from the shared application secret."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=_KDF_SALT,
        iterations=_KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret.encode("utf-8")))


class EncryptedKeyValueStore:
    """
    Encrypts values before they reach the surface and decrypts them on read.

    Entries that are missing or cannot be decrypted read back as ``None``.
    The key comes from a fixed shared secret, so this obscures the stored
    credentials without protecting them from anyone holding the client.
    """

    def __init__(self, surface: KeyValueSurface, secret: str):
        self.surface = surface
        self._cipher = Fernet(derive_key(secret))

    def put(self, key: str, plaintext: str) -> None:
        """Encrypt ``plaintext`` and store it under ``key``, replacing any prior value."""
        ciphertext = self._cipher.encrypt(plaintext.encode("utf-8")).decode("ascii")
        self.surface.set_item(key, ciphertext)

    def get(self, key: str) -> Optional[str]:
        """Return the decrypted value for ``key``, or ``None`` if absent or unreadable."""
        ciphertext = self.surface.get_item(key)
        if not ciphertext:
            return None
        try:
            return self._cipher.decrypt(ciphertext.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            logger.debug("Discarding undecryptable entry", key=key, error_type=type(exc).__name__)
            return None

    def remove(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        self.surface.remove_item(key)


def create_secure_store(settings) -> EncryptedKeyValueStore:
    """
    Factory function to create the on-disk credential store.

    Args:
        settings: Application settings

    Returns:
        Store backed by the configured JSON file
    """
    return EncryptedKeyValueStore(
        FileKeyValueSurface(settings.storage.path),
        settings.storage.encryption_key,
    )

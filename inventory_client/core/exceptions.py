"""
Custom exceptions for the inventory client.

Provides a hierarchy of exceptions for better error handling and debugging.
"""

from typing import Optional, Dict, Any


class InventoryClientError(Exception):
    """Base exception for all inventory client errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(InventoryClientError):
    """Data validation errors."""
    pass


class StorageError(InventoryClientError):
    """Base class for local storage errors."""
    pass


class StorageUnavailableError(StorageError):
    """The local key-value surface cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.path = path


class AuthenticationError(InventoryClientError):
    """Login response did not carry usable credentials."""
    pass


class RouteNotFoundError(InventoryClientError):
    """Navigation target is not in the route table."""

    def __init__(self, path: str, **kwargs):
        super().__init__(f"Unknown route: {path}", **kwargs)
        self.path = path


class DataAccessError(InventoryClientError):
    """Base class for data access errors."""
    pass


class InventoryApiError(DataAccessError):
    """Inventory API is unavailable or returning errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code

"""
Data models and type definitions for the inventory client.

Provides type-safe data structures with validation for the JSON payloads
returned by the inventory API.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """User roles understood by the client."""

    USER = "USER"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """Map a stored role string to a role; anything unrecognized is USER."""
        if value == cls.ADMIN.value:
            return cls.ADMIN
        return cls.USER


class SessionStatus(str, Enum):
    """Reachable session states."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


# Base Models


class ApiModel(BaseModel):
    """Base class for API payloads (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class ApiResponse(ApiModel):
    """Envelope shared by every API response."""

    status: int
    message: Optional[str] = None


class LoginResponse(ApiResponse):
    """Payload of ``auth/login``."""

    token: Optional[str] = None
    role: Optional[str] = None
    expiration_time: Optional[str] = None


# Inventory Models


class Category(ApiModel):
    """Product category."""

    id: Optional[int] = None
    name: str


class Supplier(ApiModel):
    """Supplier contact."""

    id: Optional[int] = None
    name: str
    contact_info: Optional[str] = None
    address: Optional[str] = None


class Product(ApiModel):
    """Product listed in the inventory."""

    id: Optional[int] = None
    name: str
    sku: Optional[str] = None
    price: float = 0.0
    stock_quantity: int = 0
    category_id: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class TransactionRecord(ApiModel):
    """
    A buy/sell transaction as returned by the API.

    Only ``transaction_type``, ``total_price`` and ``created_at`` are required;
    everything else the server sends is kept as extra data.
    """

    id: Optional[Union[int, str]] = None
    transaction_type: str
    total_price: float = Field(..., ge=0)
    created_at: datetime
    total_products: Optional[int] = None
    status: Optional[str] = None
    description: Optional[str] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v):
        """Accept any timestamp string the backend emits."""
        if isinstance(v, str):
            return date_parser.parse(v)
        return v


def parse_transactions(payload: Dict[str, Any]) -> List[TransactionRecord]:
    """Parse the ``transactions`` list of an API response."""
    return [TransactionRecord.model_validate(t) for t in payload.get("transactions") or []]


def parse_products(payload: Dict[str, Any]) -> List[Product]:
    """Parse the ``products`` list of an API response."""
    return [Product.model_validate(p) for p in payload.get("products") or []]

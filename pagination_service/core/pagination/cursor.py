"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode the position in a result set.
A cursor holds the value of the primary sort field for the row at a page
boundary, together with the name of that field, so the next query can seek
directly past it.

The cursor format is:
1. JSON object with sorted keys: ``{"field": ..., "value": ...}``
2. Base64 URL-safe encoded with the ``=`` padding stripped

Example cursor payload:
    {"field":"created_at","value":"2025-01-15T10:30:00Z"}

Encoded: eyJmaWVsZCI6ImNyZWF0ZWRfYXQiLCJ2YWx1ZSI6IjIwMjUtMDEtMTVUMTA6MzA6MDBaIn0

The format is an implementation detail. Clients must pass cursors back
unchanged and must not rely on their content across releases.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

_SCALARS = (str, int, float, bool, type(None))


class CursorData(BaseModel):
    """Decoded cursor content.

    Attributes:
        value: Sort field value of the boundary row (JSON scalar)
        field: Name of the sort field the value belongs to
    """

    value: Any = Field(description="Sort field value at the page boundary")
    field: str = Field(description="Sort field the value was taken from")

    model_config = {"frozen": True}


def read_field(row: Any, field: str) -> Any:
    """Read a field from an ORM object, dataclass, or mapping row."""
    if isinstance(row, Mapping):
        return row.get(field)
    return getattr(row, field, None)


def normalize_datetime(value: datetime) -> str:
    """Render a datetime as a canonical UTC ISO-8601 string.

    Naive datetimes are taken to be UTC. Sub-second precision is kept in full
    so a boundary never rounds below the row it was taken from.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def align_timezone(value: datetime, *, aware: bool) -> datetime:
    """Make ``value`` comparable with naive or aware datetimes stored as UTC."""
    if aware and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    if not aware and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def coerce_boundary(value: Any, like: Any) -> Any:
    """Convert a decoded cursor value back to the type of ``like``.

    ``like`` is either a sample value (a row's field value) or a Python type.
    Values that cannot be converted are returned unchanged; the store then
    compares them as they are.
    """
    if value is None or like is None:
        return value
    target = like if isinstance(like, type) else type(like)
    try:
        if issubclass(target, datetime):
            if isinstance(value, str):
                value = datetime.fromisoformat(value)
            if isinstance(value, datetime) and not isinstance(like, type):
                value = align_timezone(value, aware=like.tzinfo is not None)
            return value
        if issubclass(target, date) and isinstance(value, str):
            return date.fromisoformat(value)
        if issubclass(target, UUID) and isinstance(value, str):
            return UUID(value)
        if issubclass(target, Decimal) and isinstance(value, (str, int, float)):
            return Decimal(str(value))
    except (ValueError, InvalidOperation):
        return value
    return value


class CursorCodec:
    """Encode and decode pagination cursors.

    Encoding is deterministic: the same value and field always produce the
    same token. Decoding is total: malformed tokens yield ``None`` instead of
    raising, which lets callers fall back to the first page.

    Usage:
        # Encoding
        cursor = CursorCodec.encode(row.created_at, "created_at")

        # Decoding
        data = CursorCodec.decode(cursor)
        if data is not None:
            print(data.field, data.value)
    """

    @staticmethod
    def encode(value: Any, field: str) -> str:
        """Encode a sort field value to an opaque string.

        Args:
            value: The boundary row's sort field value
            field: Name of the sort field

        Returns:
            URL-safe base64 string without padding
        """
        payload = {"field": field, "value": CursorCodec._serialize_value(value)}
        json_str = json.dumps(payload, separators=(",", ":"), sort_keys=True, default=str)
        return base64.urlsafe_b64encode(json_str.encode()).decode().rstrip("=")

    @staticmethod
    def decode(cursor: str | None) -> CursorData | None:
        """Decode a cursor string.

        Args:
            cursor: Token previously produced by ``encode``

        Returns:
            CursorData, or None when the token is empty or malformed
        """
        if not cursor or not isinstance(cursor, str):
            return None
        padded = cursor + "=" * (-len(cursor) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode("ascii"))
            payload = json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeError, ValueError, RecursionError):
            # RecursionError: deeply nested JSON in a crafted token
            return None

        if not isinstance(payload, dict) or "value" not in payload:
            return None
        field = payload.get("field")
        value = payload["value"]
        if not isinstance(field, str) or not field or not isinstance(value, _SCALARS):
            return None
        return CursorData(value=value, field=field)

    @staticmethod
    def create_cursor(row: Any, field: str) -> str:
        """Create a cursor from a row's sort field.

        Args:
            row: ORM instance, dataclass, or mapping
            field: Sort field to read

        Returns:
            Encoded cursor string
        """
        return CursorCodec.encode(read_field(row, field), field)

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """Serialize a value to a JSON scalar."""
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, datetime):
            return normalize_datetime(value)
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, (UUID, Decimal)):
            return str(value)
        return value


__all__ = [
    "CursorCodec",
    "CursorData",
    "align_timezone",
    "coerce_boundary",
    "normalize_datetime",
    "read_field",
]

"""
Module 01 - Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic serialization of structured values so they can be
hashed into Merkle leaves and block digests.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Args:
        dt: A datetime object.

    Returns:
        ISO-8601 formatted string with Z suffix (e.g., "2026-01-27T21:35:00Z").
    """
    utc_dt = ensure_utc(dt)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (NaN/Infinity floats, non-string dict keys, unsupported types).
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Non-finite float value encountered: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        result = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise CanonicalizationException(
                    message=f"Dictionary keys must be strings, got {type(k).__name__}",
                    details={"path": path, "key": repr(k)},
                )
            result[k] = canonicalize_value(v, f"{path}.{k}" if path else k)
        return result

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, (set, frozenset)):
        # Sets have no order of their own; sort by canonical form
        items = [canonicalize_value(item, f"{path}{{}}") for item in value]
        return sorted(items, key=lambda item: json.dumps(item, sort_keys=True))

    if isinstance(value, bytes):
        return value.hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    The output has sorted keys, no whitespace, datetimes as ISO-8601 with a
    Z suffix, enums as their values and bytes as hex.

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def canonical_equals(obj1: Any, obj2: Any) -> bool:
    """Check whether two objects have identical canonical JSON forms."""
    try:
        return dumps_canonical(obj1) == dumps_canonical(obj2)
    except CanonicalizationException:
        return False

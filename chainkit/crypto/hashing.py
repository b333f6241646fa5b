"""
Module 02 - Hashing Utilities
SHA-256 digests for raw bytes, text, and canonically serialized objects.

This module provides:
- SHA-256 hashing returning lowercase hex digests
- Canonical hashing for structured objects (via dumps_canonical)
- Concatenated hashing of two digests (Merkle parents)

A digest is always a 64 character lowercase hex string. Concatenation
happens on the hex text, so a parent is sha256((left + right).encode()).
"""
from __future__ import annotations

import hashlib
import re
from typing import Any

from chainkit.schemas.canonical import dumps_canonical


DIGEST_SIZE: int = 32
DIGEST_HEX_LENGTH: int = DIGEST_SIZE * 2

_DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")


def sha256(data: bytes) -> str:
    """
    Compute the SHA-256 digest of raw bytes as lowercase hex.

    Example:
        >>> sha256(b"hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).hexdigest()


def hash_bytes(data: bytes) -> str:
    """Alias for sha256()."""
    return sha256(data)


def hash_text(text: str) -> str:
    """Hash the UTF-8 byte representation of a string."""
    return sha256(text.encode("utf-8"))


def hash_canonical(obj: Any) -> str:
    """
    Hash an object using canonical JSON serialization.

    Rule: digest = sha256(dumps_canonical(obj).encode("utf-8"))

    Raises:
        CanonicalizationException: If the object cannot be canonically serialized.
    """
    return hash_text(dumps_canonical(obj))


def hash_concat(left: str, right: str) -> str:
    """
    Hash the concatenation of two hex digests.

    Used for Merkle parents: parent = sha256(left ++ right).
    Order matters; hash_concat(a, b) != hash_concat(b, a) for a != b.
    """
    return hash_text(left + right)


def is_digest(value: Any) -> bool:
    """Return True if ``value`` looks like a digest produced by this module."""
    return isinstance(value, str) and _DIGEST_RE.match(value) is not None


__all__ = [
    "DIGEST_SIZE",
    "DIGEST_HEX_LENGTH",
    "sha256",
    "hash_bytes",
    "hash_text",
    "hash_canonical",
    "hash_concat",
    "is_digest",
]

"""
Module 02 - Content Hashing Capability

Any value stored in a Merkle tree, a hash pointer or a block must be able to
produce a deterministic digest of its logical content. Equal logical values
must yield equal digests in every process run; the tree and the chain depend
on this structurally.

Types opt in by implementing ``content_hash()``. Built-in types are covered
by ``hash_value``:
- str: sha256 of the UTF-8 bytes
- bytes: sha256 of the bytes
- everything else: sha256 of the canonical JSON form

The rules overlap across types ("2" and 2 share a digest). Commitments that
must tell such values apart record ``type_tag(value)`` next to the digest.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from chainkit.crypto.hashing import hash_bytes, hash_canonical, hash_text


@runtime_checkable
class ContentHashable(Protocol):
    """A value that knows how to digest its own logical content."""

    def content_hash(self) -> str:
        ...


def hash_value(value: Any) -> str:
    """
    Compute the digest of a value.

    This is the single hashing entry point for tree leaves, hash pointers and
    block payloads.

    Raises:
        CanonicalizationException: If the value has no deterministic form
            (e.g. a NaN float or an arbitrary object).
    """
    if isinstance(value, ContentHashable):
        return value.content_hash()
    if isinstance(value, str):
        return hash_text(value)
    if isinstance(value, (bytes, bytearray)):
        return hash_bytes(bytes(value))
    return hash_canonical(value)


def type_tag(value: Any) -> str:
    """Fully qualified type name of ``value``, e.g. ``builtins.dict``."""
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = ["ContentHashable", "hash_value", "type_tag"]

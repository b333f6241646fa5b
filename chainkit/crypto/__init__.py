"""
Core cryptographic utilities.

Module 02 provides hashing utilities and the ContentHashable capability.
"""
from .hashing import (
    DIGEST_HEX_LENGTH,
    DIGEST_SIZE,
    sha256,
    hash_bytes,
    hash_text,
    hash_canonical,
    hash_concat,
    is_digest,
)
from .hashable import ContentHashable, hash_value, type_tag

__all__ = [
    "DIGEST_HEX_LENGTH",
    "DIGEST_SIZE",
    "sha256",
    "hash_bytes",
    "hash_text",
    "hash_canonical",
    "hash_concat",
    "is_digest",
    "ContentHashable",
    "type_tag",
    "hash_value",
]

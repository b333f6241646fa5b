"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy, canonical serialization helpers and
validation result models.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

from .errors import (
    CanonicalizationException,
    ChainkitError,
    ChainkitException,
    EmptyInputException,
    ErrorCodes,
    PrunedTreeSearchException,
    StructuralException,
)

from .verification import (
    ValidationResult,
    ValidationStatus,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ChainkitError",
    "ChainkitException",
    "EmptyInputException",
    "ErrorCodes",
    "PrunedTreeSearchException",
    "StructuralException",
    # Verification
    "ValidationResult",
    "ValidationStatus",
]

"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for chainkit.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across chainkit."""

    # Construction & Search Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    PRUNED_TREE_SEARCH = "PRUNED_TREE_SEARCH"
    STRUCTURAL_ERROR = "STRUCTURAL_ERROR"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Validation Outcomes
    INVALID_HASH = "INVALID_HASH"
    INVALID_TREE = "INVALID_TREE"
    INVALID_LINK = "INVALID_LINK"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ChainkitError(BaseModel):
    """
    Base error model for structured error communication.

    Used to pass errors around (or serialize them) without raising,
    e.g. when turning a failed validation result into a report.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_HASH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "ChainkitException":
        """Convert this error model to a raised exception."""
        return ChainkitException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ChainkitException(Exception):
    """
    Base exception for all chainkit errors.

    Carries structured error information and can be converted
    to/from ChainkitError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "CHAINKIT_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> ChainkitError:
        """Convert this exception to a ChainkitError model."""
        return ChainkitError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(ChainkitException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class EmptyInputException(ChainkitException):
    """Exception raised when a Merkle tree is constructed from no values."""

    def __init__(
        self,
        message: str = "Cannot construct a Merkle tree from an empty sequence",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
        )


class PrunedTreeSearchException(ChainkitException):
    """
    Exception raised when a containment search lands among pruned leaves.

    A pruned leaf has discarded its value, so there is no way to tell whether
    the searched value was one of them.
    """

    def __init__(
        self,
        message: str,
        positions: list[int] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if positions is not None:
            full_details["positions"] = positions
        super().__init__(
            message=message,
            code=ErrorCodes.PRUNED_TREE_SEARCH,
            details=full_details,
        )


class StructuralException(ChainkitException):
    """Exception raised when a traversal meets a malformed tree node."""

    def __init__(
        self,
        message: str,
        node_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if node_id is not None:
            full_details["node_id"] = node_id
        super().__init__(
            message=message,
            code=ErrorCodes.STRUCTURAL_ERROR,
            details=full_details,
        )

"""
Module 01 - Schemas & Canonicalization
File: verification.py

Purpose: Standard result format for validation walks.
Merkle tree validation and chain validation both report through
ValidationResult. An invalid structure is a legitimate outcome of a
validation call, not a failure of the call, so it is returned rather
than raised.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import ChainkitError, ErrorCodes


class ValidationStatus(str, Enum):
    """Terminal states of a validation call."""

    VALID = "valid"
    INVALID_HASH = "invalid_hash"
    INVALID_TREE = "invalid_tree"
    INVALID_LINK = "invalid_link"


_STATUS_CODES: dict[ValidationStatus, str] = {
    ValidationStatus.INVALID_HASH: ErrorCodes.INVALID_HASH,
    ValidationStatus.INVALID_TREE: ErrorCodes.INVALID_TREE,
    ValidationStatus.INVALID_LINK: ErrorCodes.INVALID_LINK,
}


class ValidationResult(BaseModel):
    """
    Outcome of validating a Merkle tree or a blockchain.

    `position` identifies where the first failure was found: the arena
    node id for trees, the block index for chains.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: ValidationStatus = Field(
        ...,
        description="Terminal state of the validation",
    )
    message: str = Field(
        default="",
        description="Human-readable description of what went wrong",
    )
    position: int | None = Field(
        default=None,
        description="Node id or block index of the first failure",
    )

    @property
    def ok(self) -> bool:
        """Whether the structure validated."""
        return self.status is ValidationStatus.VALID

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(status=ValidationStatus.VALID)

    @classmethod
    def invalid_hash(cls, message: str, position: int | None = None) -> "ValidationResult":
        return cls(status=ValidationStatus.INVALID_HASH, message=message, position=position)

    @classmethod
    def invalid_tree(cls, message: str, position: int | None = None) -> "ValidationResult":
        return cls(status=ValidationStatus.INVALID_TREE, message=message, position=position)

    @classmethod
    def invalid_link(cls, message: str, position: int | None = None) -> "ValidationResult":
        return cls(status=ValidationStatus.INVALID_LINK, message=message, position=position)

    def to_error(self) -> ChainkitError | None:
        """Convert a failed result to a ChainkitError; None when valid."""
        if self.ok:
            return None
        details = {} if self.position is None else {"position": self.position}
        return ChainkitError(
            code=_STATUS_CODES[self.status],
            message=self.message,
            details=details,
        )

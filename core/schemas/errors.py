"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy across the distributor.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the distributor."""

    # Tree construction errors
    EMPTY_TREE = "EMPTY_TREE"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Allocation input errors
    ALLOCATION_INVALID = "ALLOCATION_INVALID"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"

    # Claim errors
    INVALID_PROOF = "INVALID_PROOF"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    TRANSFER_FAILED = "TRANSFER_FAILED"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class DistributorError(BaseModel):
    """
    Base error model for structured error communication.

    Used to report errors across process boundaries (HTTP, CLI JSON output)
    without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "DistributorException":
        """Convert this error model to a raised exception."""
        return DistributorException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class DistributorException(Exception):
    """
    Base exception for all distributor errors.

    Carries structured error information and can be converted to a
    DistributorError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "DISTRIBUTOR_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> DistributorError:
        """Convert this exception to a DistributorError model."""
        return DistributorError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyTreeError(DistributorException, ValueError):
    """Raised when a tree is built from zero entries."""

    def __init__(self, message: str = "Cannot build a Merkle tree with zero entries") -> None:
        super().__init__(message=message, code=ErrorCodes.EMPTY_TREE)


class IndexOutOfRange(DistributorException, IndexError):
    """Raised when a proof is requested for an index the tree does not have."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            message=f"Leaf index {index} out of range for {size} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details={"index": index, "size": size},
        )
        self.index = index
        self.size = size


class RootMismatchError(DistributorException):
    """Raised when a rebuilt tree does not match the trusted root."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            message=f"Merkle root mismatch: expected {expected}, built {actual}",
            code=ErrorCodes.ROOT_MISMATCH,
            details={"expected": expected, "actual": actual},
        )


class AllocationError(DistributorException):
    """Raised when an allocation file or balance map cannot be parsed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ALLOCATION_INVALID,
            details=details,
        )


class DuplicateAccountError(AllocationError):
    """Raised when a balance map lists the same account twice."""

    def __init__(self, account: str) -> None:
        super().__init__(
            message=f"Duplicate account in balance map: {account}",
            details={"account": account},
        )
        self.code = ErrorCodes.DUPLICATE_ACCOUNT
        self.account = account


class ClaimException(DistributorException):
    """Base class for failures on the claim path."""

    def __init__(
        self,
        message: str,
        code: str,
        index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        super().__init__(message=message, code=code, details=full_details)
        self.index = index


class InvalidProof(ClaimException):
    """Raised when a claim's proof does not verify against the trusted root."""

    def __init__(self, index: int | None = None, message: str = "Invalid proof") -> None:
        super().__init__(message=message, code=ErrorCodes.INVALID_PROOF, index=index)


class AlreadyClaimed(ClaimException):
    """Raised when a claim is replayed for an index that already paid out."""

    def __init__(self, index: int) -> None:
        super().__init__(
            message=f"Drop already claimed for index {index}",
            code=ErrorCodes.ALREADY_CLAIMED,
            index=index,
        )


class TransferFailed(ClaimException):
    """Raised when the transfer capability reports a failed transfer."""

    def __init__(
        self,
        index: int,
        reason: str = "",
        rolled_back: bool = False,
    ) -> None:
        message = f"Transfer failed for index {index}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSFER_FAILED,
            index=index,
            details={"reason": reason, "rolled_back": rolled_back},
        )
        self.reason = reason
        self.rolled_back = rolled_back

"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import record types and
the error taxonomy.
"""

# Error models and exceptions
from .errors import (
    AllocationError,
    AlreadyClaimed,
    ClaimException,
    DistributorError,
    DistributorException,
    DuplicateAccountError,
    EmptyTreeError,
    ErrorCodes,
    IndexOutOfRange,
    InvalidProof,
    RootMismatchError,
    TransferFailed,
)

# Distribution records
from .distribution import (
    ClaimInfo,
    ClaimReceipt,
    ClaimRequest,
    DistributionDocument,
    Entry,
    parse_amount,
)

__all__ = [
    # Errors
    "AllocationError",
    "AlreadyClaimed",
    "ClaimException",
    "DistributorError",
    "DistributorException",
    "DuplicateAccountError",
    "EmptyTreeError",
    "ErrorCodes",
    "IndexOutOfRange",
    "InvalidProof",
    "RootMismatchError",
    "TransferFailed",
    # Records
    "ClaimInfo",
    "ClaimReceipt",
    "ClaimRequest",
    "DistributionDocument",
    "Entry",
    "parse_amount",
]

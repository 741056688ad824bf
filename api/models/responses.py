"""
API Response Models

Pydantic models for API response serialization.
Amounts are rendered as decimal strings so 256-bit values survive JSON
clients that parse numbers as doubles.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-distributor-api"
    version: str = "v1"


class DistributionResponse(BaseModel):
    """Response for GET /distribution endpoint."""

    merkle_root: str = Field(..., description="Published root (0x-hex)")
    token: str = Field(..., description="Label of the distributed asset")
    entries: int = Field(..., description="Number of committed entries")
    token_total: str = Field(..., description="Sum of all entitlements (decimal)")
    claimed: int = Field(default=0, description="Number of indices already claimed")


class ProofResponse(BaseModel):
    """Response for GET /proofs/{index} endpoint."""

    index: int = Field(..., description="Leaf index")
    account: str = Field(..., description="Recipient address (checksum form)")
    amount: str = Field(..., description="Entitlement (decimal)")
    proof: list[str] = Field(default_factory=list, description="Sibling digests (0x-hex)")
    merkle_root: str = Field(..., description="Root the proof resolves to (0x-hex)")


class ClaimStatusResponse(BaseModel):
    """Response for GET /claims/{index} endpoint."""

    index: int = Field(..., description="Leaf index")
    claimed: bool = Field(..., description="Whether the index has been claimed")


class ClaimResponse(BaseModel):
    """Response for a successful POST /claims."""

    ok: bool = Field(default=True)
    index: int = Field(..., description="Claimed leaf index")
    account: str = Field(..., description="Recipient that was paid")
    amount: str = Field(..., description="Amount transferred (decimal)")
    merkle_root: str = Field(..., description="Root the proof was checked against")
    transfer_ref: str | None = Field(default=None, description="Transfer reference, if any")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")

"""
API Request Models

Pydantic models for API request validation.

Address, amount and proof fields are kept as raw strings here; the claim
service treats malformed values as an invalid proof rather than a schema
error.
"""

from pydantic import BaseModel, Field


class ClaimBody(BaseModel):
    """Request body for POST /claims endpoint."""

    index: int = Field(
        ...,
        ge=0,
        description="Leaf index of the claimed entry",
    )
    account: str = Field(
        ...,
        min_length=1,
        description="Recipient address (0x-hex)",
    )
    amount: int | str = Field(
        ...,
        description="Claimed amount as an integer, decimal string or 0x-hex string",
    )
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom-up, 0x-hex encoded",
    )

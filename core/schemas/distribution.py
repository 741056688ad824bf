"""
Schemas - Distribution Records
File: distribution.py

Purpose: Pydantic models for entitlement entries, claim requests and
receipts, and the published distribution document.

Amounts are unsigned 256-bit integers. On input they may be given as ints,
decimal strings or 0x-hex strings; accounts are normalized to their EIP-55
checksum form.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import to_hex
from core.crypto.leaf_encoding import MAX_UINT256, checksum_account


def parse_amount(value: Any) -> int:
    """
    Parse an unsigned 256-bit amount from an int, decimal string or 0x-hex string.

    Raises:
        ValueError: If the value is not a non-negative integer below 2**256
    """
    if isinstance(value, bool):
        raise ValueError("amount must be an integer, not a boolean")
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            amount = int(text, 16)
        elif text.isdigit():
            amount = int(text)
        else:
            raise ValueError(f"amount must be a non-negative integer string, got: {value!r}")
    elif isinstance(value, int):
        amount = value
    else:
        raise ValueError(f"amount must be an integer, got {type(value).__name__}")
    if amount < 0 or amount > MAX_UINT256:
        raise ValueError(f"amount must fit in uint256, got {amount}")
    return amount


def _check_account(value: Any) -> str:
    try:
        return checksum_account(value)
    except ValueError as e:
        raise ValueError(f"account is not a valid address: {value!r}") from e


class Entry(BaseModel):
    """
    One entitlement record.

    The entry's index is its position in the sequence used to build the tree.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    account: str = Field(
        ...,
        description="Recipient address (EIP-55 checksum form)",
    )
    amount: int = Field(
        ...,
        description="Entitlement as an unsigned 256-bit integer",
    )

    @field_validator("account", mode="before")
    @classmethod
    def _normalize_account(cls, v: Any) -> str:
        return _check_account(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> int:
        return parse_amount(v)


class ClaimRequest(BaseModel):
    """A claimant's request to redeem the entry at ``index``."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0, description="Leaf index of the claimed entry")
    account: str = Field(..., description="Recipient address")
    amount: int = Field(..., description="Claimed amount")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom-up, 0x-hex encoded",
    )

    @field_validator("account", mode="before")
    @classmethod
    def _normalize_account(cls, v: Any) -> str:
        return _check_account(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> int:
        return parse_amount(v)


class ClaimReceipt(BaseModel):
    """Result of a successful claim."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., description="Leaf index that was claimed")
    account: str = Field(..., description="Recipient that was paid")
    amount: int = Field(..., description="Amount transferred")
    merkle_root: str = Field(..., description="Root the proof was checked against (0x-hex)")
    transfer_ref: str | None = Field(
        default=None,
        description="Reference returned by the transfer capability, if any",
    )


class ClaimInfo(BaseModel):
    """One recipient's slice of a distribution document."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0)
    amount: str = Field(..., description="Amount, 0x-hex encoded")
    proof: list[str] = Field(default_factory=list, description="Proof, 0x-hex encoded")


class DistributionDocument(BaseModel):
    """
    Published distribution: the root plus every claimant's (index, amount, proof).

    Serialized with camelCase keys for compatibility with existing
    distributor tooling (``merkleRoot``, ``tokenTotal``).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    merkle_root: str = Field(..., alias="merkleRoot", description="Root digest (0x-hex)")
    token_total: str = Field(..., alias="tokenTotal", description="Sum of all amounts (0x-hex)")
    claims: dict[str, ClaimInfo] = Field(
        default_factory=dict,
        description="Claims keyed by checksum address",
    )

    def entries(self) -> list[Entry]:
        """Rebuild the ordered entry list the document was generated from."""
        ordered = sorted(self.claims.items(), key=lambda item: item[1].index)
        return [Entry(account=account, amount=info.amount) for account, info in ordered]

    @staticmethod
    def hex_amount(amount: int) -> str:
        return to_hex(amount.to_bytes(max(1, (amount.bit_length() + 7) // 8), "big"))


__all__ = [
    "parse_amount",
    "Entry",
    "ClaimRequest",
    "ClaimReceipt",
    "ClaimInfo",
    "DistributionDocument",
]

"""
Balance Map Parsing
Turn a balance map into the published distribution document.

Two input shapes are accepted:
- ``{"0xabc...": amount, ...}``
- ``[{"address": "0xabc...", "earnings": amount}, ...]``

Accounts are normalized to checksum form, duplicates are rejected, and the
entries are ordered by checksum address before indices are assigned, so the
same balances always produce the same root regardless of input order.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from core.merkle.balance_tree import BalanceTree
from core.schemas.distribution import ClaimInfo, DistributionDocument, Entry, parse_amount
from core.schemas.errors import AllocationError, DuplicateAccountError


def _records(balances: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Iterable[tuple[Any, Any]]:
    if isinstance(balances, Mapping):
        return balances.items()
    pairs = []
    for position, record in enumerate(balances):
        if not isinstance(record, Mapping):
            raise AllocationError(
                f"Balance record {position} must be an object",
                details={"position": position},
            )
        account = record.get("address", record.get("account"))
        amount = record.get("earnings", record.get("amount"))
        if account is None or amount is None:
            raise AllocationError(
                f"Balance record {position} needs an address and an amount",
                details={"position": position},
            )
        pairs.append((account, amount))
    return pairs


def normalize_balances(
    balances: Mapping[str, Any] | Sequence[Mapping[str, Any]],
) -> list[Entry]:
    """
    Validate a balance map and return its entries sorted by checksum address.

    Raises:
        DuplicateAccountError: If an account appears twice (in any casing)
        AllocationError: If an address or amount is invalid, or an amount is zero
    """
    seen: dict[str, Entry] = {}
    for account, amount in _records(balances):
        try:
            entry = Entry(account=account, amount=parse_amount(amount))
        except ValueError as e:
            raise AllocationError(
                f"Invalid balance entry for {account!r}: {e}",
                details={"account": str(account)},
            ) from e
        if entry.amount == 0:
            raise AllocationError(
                f"Invalid amount for account {entry.account}: must be positive",
                details={"account": entry.account},
            )
        if entry.account in seen:
            raise DuplicateAccountError(entry.account)
        seen[entry.account] = entry
    return [seen[account] for account in sorted(seen)]


def build_distribution(entries: Sequence[Entry]) -> DistributionDocument:
    """
    Build the distribution document for ``entries`` in the given order.

    The document is keyed by account, so each account may appear only once.
    Trees with repeated accounts can still be built and served through
    BalanceTree directly.

    Raises:
        EmptyTreeError: If ``entries`` is empty
        DuplicateAccountError: If an account appears twice
    """
    tree = BalanceTree(entries)
    claims: dict[str, ClaimInfo] = {}
    for index, entry in enumerate(tree.entries):
        if entry.account in claims:
            raise DuplicateAccountError(entry.account)
        claims[entry.account] = ClaimInfo(
            index=index,
            amount=DistributionDocument.hex_amount(entry.amount),
            proof=tree.hex_proof(index),
        )
    token_total = sum(entry.amount for entry in tree.entries)
    return DistributionDocument(
        merkle_root=tree.hex_root,
        token_total=DistributionDocument.hex_amount(token_total),
        claims=claims,
    )


def parse_balance_map(
    balances: Mapping[str, Any] | Sequence[Mapping[str, Any]],
) -> DistributionDocument:
    """Normalize, sort and commit a balance map; see module docstring."""
    return build_distribution(normalize_balances(balances))


__all__ = [
    "normalize_balances",
    "build_distribution",
    "parse_balance_map",
]

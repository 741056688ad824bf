"""
Common test fixtures shared by all modules.

Addresses are built from repeated decimal digits so their EIP-55 checksum
form equals the lowercase form, which keeps expected values readable.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20


def make_address(n: int) -> str:
    """Return a deterministic address for ``n`` in 1..99 (digits only)."""
    if not 1 <= n <= 99:
        raise ValueError("make_address supports 1..99")
    return "0x" + f"{n:02d}" * 20


def make_entries(count: int, base_amount: int = 100) -> list[tuple[str, int]]:
    """Return ``count`` (account, amount) pairs with distinct accounts and amounts."""
    return [(make_address(i + 1), base_amount * (i + 1)) for i in range(count)]


def write_allocation(path: Path, entries: list[tuple[str, Any]]) -> Path:
    """Write ``entries`` as a JSON allocation list and return the path."""
    path.write_text(
        json.dumps([{"account": account, "amount": amount} for account, amount in entries]),
        encoding="utf-8",
    )
    return path

"""
Test fixtures package for distributor tests.

Usage:
    from fixtures import ALICE, BOB, make_entries

    def test_something():
        tree = BalanceTree(make_entries(4))
"""

from .common import (
    ALICE,
    BOB,
    make_address,
    make_entries,
    write_allocation,
)

__all__ = [
    "ALICE",
    "BOB",
    "make_address",
    "make_entries",
    "write_allocation",
]

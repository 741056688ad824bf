"""
Transfer Capability
The external collaborator that moves value once a claim is accepted.

The claim service only needs ``transfer(account, amount) -> TransferResult``
plus a ``token`` label. ``InMemoryTransfer`` is a recording implementation
used by the HTTP API's default wiring and by tests.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class TransferResult:
    """Outcome reported by a transfer capability."""
    ok: bool
    reference: Optional[str] = None
    reason: str = ""

    @classmethod
    def success(cls, reference: Optional[str] = None) -> "TransferResult":
        return cls(ok=True, reference=reference)

    @classmethod
    def failure(cls, reason: str) -> "TransferResult":
        return cls(ok=False, reason=reason)


@runtime_checkable
class TransferCapability(Protocol):
    """Anything that can pay ``amount`` to ``account``."""

    token: str

    def transfer(self, account: str, amount: int) -> TransferResult:
        ...


class InMemoryTransfer:
    """
    Transfer capability that credits balances in memory.

    Balances are keyed by checksum address. Each transfer gets a sequential
    reference of the form ``tx_<n>``.
    """

    def __init__(self, token: str = "memory") -> None:
        self.token = token
        self._balances: dict[str, int] = {}
        self._transfers: list[tuple[str, int]] = []
        self._lock = threading.Lock()

    def transfer(self, account: str, amount: int) -> TransferResult:
        with self._lock:
            self._balances[account] = self._balances.get(account, 0) + amount
            self._transfers.append((account, amount))
            reference = f"tx_{len(self._transfers)}"
        return TransferResult.success(reference)

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._balances.get(account, 0)

    @property
    def transfers(self) -> list[tuple[str, int]]:
        with self._lock:
            return list(self._transfers)

    @property
    def total_transferred(self) -> int:
        with self._lock:
            return sum(amount for _, amount in self._transfers)


__all__ = [
    "TransferResult",
    "TransferCapability",
    "InMemoryTransfer",
]

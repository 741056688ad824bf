"""
Claim Service
Orchestrates one claim: replay check, proof verification, ledger update,
transfer, and the Claimed notification.

Claim sequence for (index, account, amount, proof):
1. Index already claimed           -> AlreadyClaimed (no further work)
2. Proof does not verify           -> InvalidProof
3. Compare-and-set the ledger bit  -> AlreadyClaimed if a concurrent claim won
4. transfer(account, amount)       -> TransferFailed on a reported failure;
                                      an exception from the capability propagates
5. Emit ClaimedEvent, return ClaimReceipt

Transfer failure policy:
- fail-closed (default): the ledger bit stays set, the index cannot be retried
- rollback: the bit is cleared before the failure is reported
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from core.claims.events import ClaimedEvent, ClaimEventBus, ClaimListener
from core.claims.ledger import ClaimLedger
from core.claims.transfer import TransferCapability, TransferResult
from core.crypto.hashing import to_digest, to_hex
from core.crypto.leaf_encoding import checksum_account
from core.merkle.balance_tree import BalanceTree
from core.merkle.merkle_proofs import ProofElement, ProofVerifier
from core.schemas.distribution import ClaimReceipt, ClaimRequest
from core.schemas.errors import (
    AlreadyClaimed,
    InvalidProof,
    RootMismatchError,
    TransferFailed,
)


logger = logging.getLogger(__name__)


class ClaimService:
    """
    One-time-claim distributor bound to a trusted Merkle root.

    Args:
        merkle_root: Trusted root (bytes or 0x-hex)
        transfer: Capability that pays out accepted claims
        size: Number of entries committed under the root
        rollback_on_transfer_failure: Clear the ledger bit when a transfer fails
        events: Bus for Claimed notifications (a private one by default)

    Example:
        >>> tree = BalanceTree([(alice, 1), (bob, 1)])
        >>> service = ClaimService.from_tree(tree, InMemoryTransfer())
        >>> service.claim(0, alice, 1, tree.hex_proof(0)).index
        0
    """

    def __init__(
        self,
        merkle_root: bytes | str,
        transfer: TransferCapability,
        size: int,
        *,
        rollback_on_transfer_failure: bool = False,
        events: Optional[ClaimEventBus] = None,
    ) -> None:
        self._verifier = ProofVerifier(merkle_root)
        self._transfer = transfer
        self._ledger = ClaimLedger(size)
        self._rollback = rollback_on_transfer_failure
        self._events = events or ClaimEventBus()

    @classmethod
    def from_tree(
        cls,
        tree: BalanceTree,
        transfer: TransferCapability,
        *,
        trusted_root: bytes | str | None = None,
        **kwargs: Any,
    ) -> "ClaimService":
        """
        Bind a service to the root of an already built tree.

        Raises:
            RootMismatchError: If ``trusted_root`` is given and differs
        """
        if trusted_root is not None and to_digest(trusted_root) != tree.root:
            expected = trusted_root if isinstance(trusted_root, str) else to_hex(trusted_root)
            raise RootMismatchError(expected=expected, actual=tree.hex_root)
        logger.info(f"Distribution bound: {len(tree)} entries, root {tree.hex_root}")
        return cls(tree.root, transfer, len(tree), **kwargs)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Any],
        transfer: TransferCapability,
        *,
        trusted_root: bytes | str | None = None,
        **kwargs: Any,
    ) -> "ClaimService":
        """
        Rebuild the tree from ``entries`` and bind a service to its root.

        Raises:
            EmptyTreeError: If ``entries`` is empty
            RootMismatchError: If ``trusted_root`` is given and differs
        """
        return cls.from_tree(BalanceTree(entries), transfer, trusted_root=trusted_root, **kwargs)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def merkle_root(self) -> bytes:
        return self._verifier.trusted_root

    @property
    def hex_root(self) -> str:
        return to_hex(self._verifier.trusted_root)

    @property
    def token(self) -> str:
        return getattr(self._transfer, "token", "")

    @property
    def size(self) -> int:
        return self._ledger.size

    @property
    def ledger(self) -> ClaimLedger:
        return self._ledger

    @property
    def events(self) -> ClaimEventBus:
        return self._events

    @property
    def rollback_on_transfer_failure(self) -> bool:
        return self._rollback

    def is_claimed(self, index: int) -> bool:
        return self._ledger.is_claimed(index)

    def subscribe(self, listener: ClaimListener) -> None:
        self._events.subscribe(listener)

    # ------------------------------------------------------------------
    # Claiming
    # ------------------------------------------------------------------

    def claim(
        self,
        index: int,
        account: str | bytes,
        amount: int,
        proof: Sequence[ProofElement],
    ) -> ClaimReceipt:
        """
        Redeem the entry at ``index``.

        Raises:
            AlreadyClaimed: The index has already been paid out
            InvalidProof: The proof does not place the entry under the root
            TransferFailed: The transfer capability reported failure
        """
        if self._ledger.is_claimed(index):
            logger.info(f"Rejected replay for index {index}")
            raise AlreadyClaimed(index)

        if not self._verifier.verify(index, account, amount, proof):
            logger.info(f"Rejected invalid proof for index {index}")
            raise InvalidProof(index=index)

        # The ledger only covers indices below size.
        try:
            marked = self._ledger.try_mark_claimed(index)
        except IndexError as e:
            logger.info(f"Rejected index {index} outside {self._ledger.size} entries")
            raise InvalidProof(
                index=index,
                message=f"Index {index} outside the {self._ledger.size} committed entries",
            ) from e
        if not marked:
            logger.info(f"Lost claim race for index {index}")
            raise AlreadyClaimed(index)

        recipient = checksum_account(account)
        try:
            result = self._transfer.transfer(recipient, amount)
        except Exception:
            self._on_transfer_failure(index, "transfer raised")
            raise

        if isinstance(result, TransferResult):
            ok, reference, reason = result.ok, result.reference, result.reason
        else:
            ok, reference, reason = bool(result), None, ""

        if not ok:
            rolled_back = self._on_transfer_failure(index, reason)
            raise TransferFailed(index, reason=reason, rolled_back=rolled_back)

        logger.info(f"Claimed index {index}: {amount} to {recipient}")
        self._events.emit(ClaimedEvent(index=index, account=recipient, amount=amount))
        return ClaimReceipt(
            index=index,
            account=recipient,
            amount=amount,
            merkle_root=self.hex_root,
            transfer_ref=reference,
        )

    def claim_request(self, request: ClaimRequest) -> ClaimReceipt:
        return self.claim(request.index, request.account, request.amount, request.proof)

    def _on_transfer_failure(self, index: int, reason: str) -> bool:
        if self._rollback:
            self._ledger.unmark(index)
            logger.warning(f"Transfer failed for index {index} ({reason}); claim rolled back")
            return True
        logger.warning(f"Transfer failed for index {index} ({reason}); claim stays recorded")
        return False


__all__ = ["ClaimService"]

"""
Merkle Proofs - Claim Verification
Recompute a candidate root from a claimed entitlement and its proof.

This module provides:
- verify_claim_proof: pure boolean check of (index, account, amount, proof)
  against a trusted root
- compute_root_from_proof: the folding step on its own
- ProofVerifier: class wrapper bound to one trusted root

Verification never raises. Claimants control every input, so malformed
data (bad address, oversized amount, wrong-length sibling, bad hex, an
index that does not fit the proof) is a failed verification.
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.crypto.hashing import to_digest
from core.crypto.leaf_encoding import hash_leaf
from core.merkle.merkle_tree import fold_proof


logger = logging.getLogger(__name__)


ProofElement = bytes | str


def _decode_siblings(proof: Sequence[ProofElement]) -> list[bytes]:
    if isinstance(proof, (bytes, str)):
        raise ValueError("Proof must be a sequence of sibling digests")
    return [to_digest(element) for element in proof]


def compute_root_from_proof(
    index: int,
    account: str | bytes,
    amount: int,
    proof: Sequence[ProofElement],
) -> bytes:
    """
    Fold ``proof`` into the leaf for ``(index, account, amount)``.

    Raises:
        ValueError: If any input is malformed
    """
    siblings = _decode_siblings(proof)
    if index >> len(siblings) != 0:
        raise ValueError(
            f"Index {index} does not fit a proof of {len(siblings)} levels"
        )
    leaf = hash_leaf(index, account, amount)
    return fold_proof(leaf, index, siblings)


def verify_claim_proof(
    index: int,
    account: str | bytes,
    amount: int,
    proof: Sequence[ProofElement],
    trusted_root: bytes | str,
) -> bool:
    """
    Return True iff ``proof`` places ``(index, account, amount)`` under
    ``trusted_root``.

    Args:
        index: Claimed leaf index
        account: Claimed recipient address
        amount: Claimed amount
        proof: Sibling digests, bottom-up, as bytes or 0x-hex strings
        trusted_root: Published root, as bytes or 0x-hex string

    Returns:
        True if the proof is valid, False otherwise (including malformed input)
    """
    try:
        root = to_digest(trusted_root)
        candidate = compute_root_from_proof(index, account, amount, proof)
    except (TypeError, ValueError) as e:
        logger.debug(f"Rejecting malformed proof for index {index!r}: {e}")
        return False
    return candidate == root


class ProofVerifier:
    """
    Verifier bound to one trusted root.

    Example:
        >>> verifier = ProofVerifier(tree.root)
        >>> verifier.verify(0, account, 1, tree.proof(0))
        True
    """

    def __init__(self, trusted_root: bytes | str) -> None:
        self._root = to_digest(trusted_root)

    @property
    def trusted_root(self) -> bytes:
        return self._root

    def verify(
        self,
        index: int,
        account: str | bytes,
        amount: int,
        proof: Sequence[ProofElement],
    ) -> bool:
        return verify_claim_proof(index, account, amount, proof, self._root)


__all__ = [
    "ProofElement",
    "compute_root_from_proof",
    "verify_claim_proof",
    "ProofVerifier",
]

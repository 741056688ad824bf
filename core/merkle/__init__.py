"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: immutable tree over ordered leaf hashes
- MerkleProof: Dataclass representing a Merkle inclusion proof
- verify_claim_proof / ProofVerifier: check a claimed entry against a root
- BalanceTree: tree over (account, amount) entries with positional indices

Canonical Commitment Rules:
1. Leaf hashing: keccak256(uint256 index || address account || uint256 amount)
2. Parent hashing: keccak256(left + right), left = even position
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: EmptyTreeError
5. Single leaf: root = leaf, empty proof

Usage:
    from core.merkle import BalanceTree, verify_claim_proof

    tree = BalanceTree([(alice, 1), (bob, 1)])
    proof = tree.get_proof(0, alice, 1)
    assert verify_claim_proof(0, alice, 1, proof, tree.hex_root)
"""
from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    merkle_parent,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    fold_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    ProofVerifier,
    compute_root_from_proof,
    verify_claim_proof,
)

from .balance_tree import BalanceTree


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    "BalanceTree",
    # Core functions
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "fold_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Claim verification
    "ProofVerifier",
    "compute_root_from_proof",
    "verify_claim_proof",
]

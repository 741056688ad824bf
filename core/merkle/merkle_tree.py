"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(encode_leaf(index, account, amount))
   - Implemented via core.crypto.leaf_encoding.hash_leaf()
2. Parent hashing: parent = keccak256(left + right), where left is the
   node at the even position of its level
3. Padding rule: Duplicate last node if odd number at any level
4. Empty leaves: construction fails with EmptyTreeError
5. Single leaf: root = leaf (the leaf hash itself), empty proof

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is defined by the caller; this module never sorts leaves
- Verifiers recover left/right placement from the bits of the leaf index
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import hash_concat
from core.schemas.errors import EmptyTreeError, IndexOutOfRange


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """Compute the parent hash of two child nodes: keccak256(left + right)."""
    return hash_concat(left, right)


def _next_level(level: Sequence[bytes]) -> list[bytes]:
    padded = list(level)
    if len(padded) % 2 == 1:
        padded.append(padded[-1])
    return [merkle_parent(padded[i], padded[i + 1]) for i in range(0, len(padded), 2)]


class MerkleTree:
    """
    Immutable Merkle tree over an ordered list of leaf digests.

    Every level is kept after construction, so ``proof()`` is a lookup and
    concurrent readers need no locking.

    Example:
        >>> tree = MerkleTree([hash_leaf(0, a, 1), hash_leaf(1, b, 1)])
        >>> siblings = tree.proof(0)
        >>> verify_merkle_proof(MerkleProof(tree.leaves[0], 0, siblings, tree.root))
        True
    """

    def __init__(self, leaves: Sequence[bytes]) -> None:
        if len(leaves) == 0:
            raise EmptyTreeError()

        levels: list[tuple[bytes, ...]] = [tuple(leaves)]
        while len(levels[-1]) > 1:
            levels.append(tuple(_next_level(levels[-1])))
        self._levels = tuple(levels)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self._levels[0]

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """All levels, leaves first and the root level last."""
        return self._levels

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def depth(self) -> int:
        """Number of levels from leaves to root, inclusive."""
        return len(self._levels)

    def __len__(self) -> int:
        return len(self.leaves)

    def proof(self, index: int) -> list[bytes]:
        """
        Return the sibling digests for the leaf at ``index``, bottom-up.

        A node padded at an odd level gets itself as its sibling.

        Raises:
            IndexOutOfRange: If index is negative or >= number of leaves
        """
        if index < 0 or index >= len(self):
            raise IndexOutOfRange(index, len(self))

        siblings: list[bytes] = []
        current = index
        for level in self._levels[:-1]:
            sibling = current ^ 1
            siblings.append(level[sibling] if sibling < len(level) else level[current])
            current //= 2
        return siblings

    def merkle_proof(self, index: int) -> MerkleProof:
        """Return a structured MerkleProof for the leaf at ``index``."""
        siblings = self.proof(index)
        return MerkleProof(
            leaf=self.leaves[index],
            index=index,
            siblings=siblings,
            root=self.root,
        )


def build_merkle_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """Build a MerkleTree from a sequence of leaf hashes."""
    return MerkleTree(leaves)


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]

    Raises:
        EmptyTreeError: If leaves is empty
    """
    return MerkleTree(leaves).root


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Raises:
        EmptyTreeError: If leaves is empty
        IndexOutOfRange: If index is out of range
    """
    return MerkleTree(leaves).merkle_proof(index)


def fold_proof(leaf: bytes, index: int, siblings: Sequence[bytes]) -> bytes:
    """
    Recompute a root by folding ``siblings`` into ``leaf``.

    At each level an even index means the current node is the left operand.
    """
    current_hash = leaf
    current_index = index
    for sibling in siblings:
        if current_index % 2 == 0:
            current_hash = merkle_parent(current_hash, sibling)
        else:
            current_hash = merkle_parent(sibling, current_hash)
        current_index //= 2
    return current_hash


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against the root it carries.

    The index must be addressable with ``len(siblings)`` bits; any higher
    bit means the proof is too short for the claimed position.
    """
    if proof.index >> len(proof.siblings) != 0:
        return False
    return fold_proof(proof.leaf, proof.index, proof.siblings) == proof.root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "fold_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]

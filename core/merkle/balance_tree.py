"""
Balance Tree
Merkle tree over an ordered list of (account, amount) entitlements.

The entry at position i is committed as leaf i:
    leaf = keccak256(uint256(i) || address(account) || uint256(amount))
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from core.crypto.hashing import to_hex
from core.crypto.leaf_encoding import hash_leaf, normalize_account
from core.merkle.merkle_proofs import ProofElement, verify_claim_proof
from core.merkle.merkle_tree import MerkleTree
from core.schemas.distribution import Entry
from core.schemas.errors import IndexOutOfRange, InvalidProof


def _to_entry(item: Entry | Mapping[str, Any] | tuple[Any, Any]) -> Entry:
    if isinstance(item, Entry):
        return item
    if isinstance(item, Mapping):
        return Entry(account=item["account"], amount=item["amount"])
    account, amount = item
    return Entry(account=account, amount=amount)


class BalanceTree:
    """
    Merkle commitment to a fixed, ordered entitlement list.

    Entries may be given as Entry models, ``{"account", "amount"}`` mappings
    or ``(account, amount)`` pairs.

    Raises:
        EmptyTreeError: If ``entries`` is empty
    """

    def __init__(self, entries: Iterable[Entry | Mapping[str, Any] | tuple[Any, Any]]) -> None:
        self._entries = tuple(_to_entry(item) for item in entries)
        self._tree = MerkleTree(
            [hash_leaf(i, e.account, e.amount) for i, e in enumerate(self._entries)]
        )

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def tree(self) -> MerkleTree:
        return self._tree

    @property
    def root(self) -> bytes:
        return self._tree.root

    @property
    def hex_root(self) -> str:
        return to_hex(self._tree.root)

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, index: int) -> Entry:
        if index < 0 or index >= len(self._entries):
            raise IndexOutOfRange(index, len(self._entries))
        return self._entries[index]

    def proof(self, index: int) -> list[bytes]:
        """Return the raw sibling digests for the entry at ``index``."""
        return self._tree.proof(index)

    def hex_proof(self, index: int) -> list[str]:
        return [to_hex(sibling) for sibling in self._tree.proof(index)]

    def get_proof(self, index: int, account: str | bytes, amount: int) -> list[str]:
        """
        Return the hex proof for ``index`` after checking the caller's view
        of the entry matches the committed one.

        Raises:
            IndexOutOfRange: If the tree has no such index
            InvalidProof: If ``account``/``amount`` differ from the entry
        """
        entry = self.entry(index)
        if normalize_account(account) != normalize_account(entry.account) or amount != entry.amount:
            raise InvalidProof(
                index=index,
                message=f"Entry {index} does not match the given account and amount",
            )
        return self.hex_proof(index)

    def verify(
        self,
        index: int,
        account: str | bytes,
        amount: int,
        proof: Sequence[ProofElement],
    ) -> bool:
        return verify_claim_proof(index, account, amount, proof, self.root)

    @staticmethod
    def verify_proof(
        index: int,
        account: str | bytes,
        amount: int,
        proof: Sequence[ProofElement],
        root: bytes | str,
    ) -> bool:
        """Check a proof against an arbitrary published root."""
        return verify_claim_proof(index, account, amount, proof, root)

    @staticmethod
    def to_node(index: int, account: str | bytes, amount: int) -> bytes:
        return hash_leaf(index, account, amount)


__all__ = ["BalanceTree"]

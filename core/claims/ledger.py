"""
Claim Ledger
Per-index record of which entries have already been paid out.

Layout: a bitmap of 256-bit words. Index ``i`` lives in word ``i // 256``
at bit ``i % 256``. Each word owns a lock created with the ledger, so a
check-and-set on one index is atomic and claims in different words never
contend. There is no ledger-wide lock.

State per index: Unclaimed -> Claimed. ``unmark`` exists only for the
rollback-on-transfer-failure policy.
"""
from __future__ import annotations

import threading
from typing import Iterator


WORD_BITS = 256


class ClaimLedger:
    """
    Bitmap of claimed indices for a distribution of ``size`` entries.

    Example:
        >>> ledger = ClaimLedger(3)
        >>> ledger.try_mark_claimed(1)
        True
        >>> ledger.try_mark_claimed(1)
        False
        >>> ledger.is_claimed(1)
        True
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Ledger size must be non-negative, got {size}")
        self._size = size
        num_words = (size + WORD_BITS - 1) // WORD_BITS
        self._words: list[int] = [0] * num_words
        self._locks = [threading.Lock() for _ in range(num_words)]

    @property
    def size(self) -> int:
        return self._size

    def _position(self, index: int) -> tuple[int, int]:
        return index // WORD_BITS, 1 << (index % WORD_BITS)

    def _in_range(self, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < self._size

    def is_claimed(self, index: int) -> bool:
        """Return True if ``index`` has been claimed. Unknown indices read as unclaimed."""
        if not self._in_range(index):
            return False
        word, mask = self._position(index)
        return bool(self._words[word] & mask)

    def try_mark_claimed(self, index: int) -> bool:
        """
        Atomically set the bit for ``index``.

        Returns:
            True if this call flipped the bit, False if it was already set

        Raises:
            IndexError: If ``index`` is outside the distribution
        """
        if not self._in_range(index):
            raise IndexError(f"Claim index {index} out of range for {self._size} entries")
        word, mask = self._position(index)
        with self._locks[word]:
            if self._words[word] & mask:
                return False
            self._words[word] |= mask
            return True

    def unmark(self, index: int) -> None:
        """Clear the bit for ``index``; used only to roll back a failed transfer."""
        if not self._in_range(index):
            raise IndexError(f"Claim index {index} out of range for {self._size} entries")
        word, mask = self._position(index)
        with self._locks[word]:
            self._words[word] &= ~mask

    def claimed_indices(self) -> Iterator[int]:
        """Yield claimed indices in ascending order."""
        for word_index, word in enumerate(self._words):
            base = word_index * WORD_BITS
            while word:
                low_bit = word & -word
                yield base + low_bit.bit_length() - 1
                word ^= low_bit

    def claimed_count(self) -> int:
        return sum(bin(word).count("1") for word in self._words)

    def __len__(self) -> int:
        return self._size


__all__ = ["WORD_BITS", "ClaimLedger"]

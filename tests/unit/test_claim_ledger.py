"""
Claim Ledger Unit Tests
Tests for core/claims/ledger.py
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.claims.ledger import WORD_BITS, ClaimLedger


class TestClaimLedger:

    def test_initially_unclaimed(self):
        ledger = ClaimLedger(10)
        assert not any(ledger.is_claimed(i) for i in range(10))
        assert ledger.claimed_count() == 0
        assert len(ledger) == ledger.size == 10

    def test_mark_once(self):
        ledger = ClaimLedger(3)
        assert ledger.try_mark_claimed(1) is True
        assert ledger.try_mark_claimed(1) is False
        assert ledger.is_claimed(1)
        assert not ledger.is_claimed(0)
        assert not ledger.is_claimed(2)

    def test_out_of_range_reads_unclaimed(self):
        ledger = ClaimLedger(3)
        assert ledger.is_claimed(3) is False
        assert ledger.is_claimed(-1) is False

    def test_out_of_range_mark_raises(self):
        ledger = ClaimLedger(3)
        with pytest.raises(IndexError):
            ledger.try_mark_claimed(3)
        with pytest.raises(IndexError):
            ledger.try_mark_claimed(-1)

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            ClaimLedger(-1)

    def test_word_boundaries(self):
        ledger = ClaimLedger(WORD_BITS * 2 + 1)
        for index in (WORD_BITS - 1, WORD_BITS, WORD_BITS * 2):
            assert ledger.try_mark_claimed(index)
        assert list(ledger.claimed_indices()) == [WORD_BITS - 1, WORD_BITS, WORD_BITS * 2]
        assert ledger.claimed_count() == 3
        assert not ledger.is_claimed(WORD_BITS + 1)

    def test_unmark(self):
        ledger = ClaimLedger(2)
        ledger.try_mark_claimed(0)
        ledger.unmark(0)
        assert not ledger.is_claimed(0)
        assert ledger.try_mark_claimed(0)

    def test_empty_ledger(self):
        ledger = ClaimLedger(0)
        assert ledger.claimed_count() == 0
        assert list(ledger.claimed_indices()) == []


class TestConcurrency:

    def test_same_index_single_winner(self):
        ledger = ClaimLedger(4)
        barrier = threading.Barrier(16)

        def attempt(_):
            barrier.wait()
            return ledger.try_mark_claimed(2)

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(attempt, range(16)))

        assert results.count(True) == 1
        assert ledger.claimed_count() == 1

    def test_distinct_indices_all_succeed(self):
        size = WORD_BITS * 3
        ledger = ClaimLedger(size)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(ledger.try_mark_claimed, range(size)))

        assert all(results)
        assert ledger.claimed_count() == size
        assert list(ledger.claimed_indices()) == list(range(size))

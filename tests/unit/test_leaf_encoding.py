"""
Leaf Encoding Unit Tests
Tests for core/crypto/leaf_encoding.py

The layout is uint256 index || 20-byte address || uint256 amount.
"""
import pytest

from core.crypto.hashing import keccak256
from core.crypto.leaf_encoding import (
    LEAF_ENCODING_SIZE,
    MAX_UINT256,
    LeafEncoder,
    checksum_account,
    encode_leaf,
    hash_leaf,
    normalize_account,
)
from fixtures import ALICE, BOB


MIXED = "0x" + "ab" * 20


class TestEncodeLeaf:

    def test_fixed_size(self):
        assert LEAF_ENCODING_SIZE == 84
        assert len(encode_leaf(0, ALICE, 1)) == 84
        assert len(encode_leaf(MAX_UINT256, ALICE, MAX_UINT256)) == 84

    def test_field_layout(self):
        encoded = encode_leaf(7, ALICE, 1000)
        assert encoded[:32] == (7).to_bytes(32, "big")
        assert encoded[32:52] == bytes.fromhex("11" * 20)
        assert encoded[52:] == (1000).to_bytes(32, "big")

    def test_distinct_triples_distinct_encodings(self):
        encodings = {
            encode_leaf(0, ALICE, 1),
            encode_leaf(1, ALICE, 1),
            encode_leaf(0, BOB, 1),
            encode_leaf(0, ALICE, 2),
        }
        assert len(encodings) == 4

    def test_raw_address_bytes_accepted(self):
        assert encode_leaf(0, bytes.fromhex("11" * 20), 1) == encode_leaf(0, ALICE, 1)

    @pytest.mark.parametrize("index", [-1, MAX_UINT256 + 1])
    def test_index_out_of_range(self, index):
        with pytest.raises(ValueError, match="index"):
            encode_leaf(index, ALICE, 1)

    @pytest.mark.parametrize("amount", [-1, MAX_UINT256 + 1])
    def test_amount_out_of_range(self, amount):
        with pytest.raises(ValueError, match="amount"):
            encode_leaf(0, ALICE, amount)

    def test_bool_and_float_rejected(self):
        with pytest.raises(ValueError):
            encode_leaf(True, ALICE, 1)
        with pytest.raises(ValueError):
            encode_leaf(0, ALICE, 1.0)


class TestAccounts:

    def test_case_insensitive(self):
        assert normalize_account(MIXED) == normalize_account(MIXED.upper().replace("0X", "0x"))
        assert normalize_account(checksum_account(MIXED)) == normalize_account(MIXED)

    def test_checksum_of_digit_address_is_lowercase(self):
        assert checksum_account(ALICE) == ALICE

    @pytest.mark.parametrize("bad", [
        "0x1234",
        "11" * 20,
        "0x" + "zz" * 20,
        "",
    ])
    def test_invalid_address_strings(self, bad):
        with pytest.raises(ValueError):
            normalize_account(bad)

    def test_wrong_length_bytes(self):
        with pytest.raises(ValueError, match="20 bytes"):
            normalize_account(b"\x11" * 19)

    def test_non_string_rejected(self):
        with pytest.raises(ValueError):
            normalize_account(12345)


class TestHashLeaf:

    def test_hash_is_keccak_of_encoding(self):
        assert hash_leaf(3, BOB, 42) == keccak256(encode_leaf(3, BOB, 42))

    def test_deterministic(self):
        assert hash_leaf(0, ALICE, 1) == hash_leaf(0, ALICE, 1)

    def test_leaf_encoder_matches_functions(self):
        assert LeafEncoder.size == LEAF_ENCODING_SIZE
        assert LeafEncoder.encode(1, ALICE, 5) == encode_leaf(1, ALICE, 5)
        assert LeafEncoder.leaf(1, ALICE, 5) == hash_leaf(1, ALICE, 5)
        assert LeafEncoder.hash(encode_leaf(1, ALICE, 5)) == hash_leaf(1, ALICE, 5)

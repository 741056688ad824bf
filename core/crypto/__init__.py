"""
Core cryptographic utilities.

Keccak-256 hashing plus the fixed-width leaf encoding that commits one
entitlement record to a Merkle leaf.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    hash_concat,
    to_hex,
    from_hex,
    to_digest,
)
from .leaf_encoding import (
    LEAF_ENCODING_SIZE,
    MAX_UINT256,
    LeafEncoder,
    normalize_account,
    checksum_account,
    encode_leaf,
    hash_leaf,
)

__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "to_digest",
    "LEAF_ENCODING_SIZE",
    "MAX_UINT256",
    "LeafEncoder",
    "normalize_account",
    "checksum_account",
    "encode_leaf",
    "hash_leaf",
]

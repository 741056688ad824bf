"""
Leaf Encoding
Deterministic serialization of one entitlement record into a Merkle leaf.

Leaf layout (84 bytes, Solidity ``abi.encodePacked(uint256, address, uint256)``):

    offset  size  field
    0       32    index   (big-endian unsigned)
    32      20    account (raw address bytes)
    52      32    amount  (big-endian unsigned)

Every field is fixed width, so no two distinct triples share an encoding.
The leaf digest is keccak256 over these bytes; anyone holding an entry can
compute it independently.
"""
from __future__ import annotations

from eth_utils import is_address, to_canonical_address, to_checksum_address

from core.crypto.hashing import keccak256


UINT256_SIZE = 32
ADDRESS_SIZE = 20
LEAF_ENCODING_SIZE = UINT256_SIZE + ADDRESS_SIZE + UINT256_SIZE
MAX_UINT256 = 2**256 - 1


def _encode_uint256(value: int, name: str) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"{name} must fit in uint256, got {value}")
    return value.to_bytes(UINT256_SIZE, byteorder="big")


def normalize_account(account: str | bytes) -> bytes:
    """
    Return the 20 raw bytes of an EVM address.

    Accepts a 0x-prefixed hex string (lowercase, uppercase or a valid EIP-55
    checksum) or 20 raw bytes.

    Raises:
        ValueError: If the value is not a valid address
    """
    if isinstance(account, (bytes, bytearray)):
        if len(account) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(account)}")
        return bytes(account)
    if not isinstance(account, str) or not is_address(account):
        raise ValueError(f"Invalid address: {account!r}")
    return to_canonical_address(account)


def checksum_account(account: str | bytes) -> str:
    """Return the EIP-55 checksum form of ``account``."""
    return to_checksum_address(normalize_account(account))


def encode_leaf(index: int, account: str | bytes, amount: int) -> bytes:
    """
    Encode ``(index, account, amount)`` into the fixed 84-byte leaf layout.

    Raises:
        ValueError: If any field is out of range or malformed
    """
    return (
        _encode_uint256(index, "index")
        + normalize_account(account)
        + _encode_uint256(amount, "amount")
    )


def hash_leaf(index: int, account: str | bytes, amount: int) -> bytes:
    """Return the 32-byte leaf digest for ``(index, account, amount)``."""
    return keccak256(encode_leaf(index, account, amount))


class LeafEncoder:
    """
    Class-based access to the leaf encoding, for callers that pass the
    encoder around as a collaborator.
    """

    size = LEAF_ENCODING_SIZE

    @staticmethod
    def encode(index: int, account: str | bytes, amount: int) -> bytes:
        return encode_leaf(index, account, amount)

    @staticmethod
    def hash(data: bytes) -> bytes:
        return keccak256(data)

    @staticmethod
    def leaf(index: int, account: str | bytes, amount: int) -> bytes:
        return hash_leaf(index, account, amount)


__all__ = [
    "UINT256_SIZE",
    "ADDRESS_SIZE",
    "LEAF_ENCODING_SIZE",
    "MAX_UINT256",
    "normalize_account",
    "checksum_account",
    "encode_leaf",
    "hash_leaf",
    "LeafEncoder",
]

"""
Hashing Utilities
Keccak-256 hashing and hex helpers for distribution commitments.

This module provides:
- Keccak-256 hashing for raw bytes (the Ethereum variant, not NIST SHA3-256)
- Parent hashing for Merkle nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- The same primitive hashes leaves and internal nodes
- Always hash raw bytes exactly as specified
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


DIGEST_SIZE = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=bytes(data))


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for computing Merkle parent hashes:
    parent = keccak256(left + right)
    """
    return keccak256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {str(hex_string)[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def to_digest(value: bytes | str) -> bytes:
    """
    Coerce a digest given as raw bytes or 0x-hex into 32 raw bytes.

    Raises:
        ValueError: If the value is not exactly 32 bytes once decoded
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raw = from_hex(value)
    if len(raw) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
    return raw


__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "to_digest",
]

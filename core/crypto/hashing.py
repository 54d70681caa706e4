"""
Module 02 - Hashing Utilities
Swappable 256-bit hash functions and hex helpers for Merkle commitments.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- keccak256 (Ethereum flavour, the default) and sha256 over raw bytes
- HashFunction: a named, swappable hash used by the tree and the verifier
- Sorted-pair hashing for internal tree nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given, no salt or domain tag
- Pair hashing orders children by raw byte value, so
  hash_sorted_pair(a, b) == hash_sorted_pair(b, a)
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable

from eth_utils import keccak as _eth_keccak

from core.schemas.errors import UnknownHashFunctionError


DIGEST_SIZE: int = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Ethereum Keccak-256 hash of raw bytes.

    This is the original Keccak padding used by Solidity's keccak256,
    not NIST SHA3-256.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return _eth_keccak(primitive=data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


@dataclass(frozen=True)
class HashFunction:
    """
    A named 256-bit cryptographic hash.

    Instances are callable, so a HashFunction can be passed anywhere a
    plain ``bytes -> bytes`` function is expected.

    Attributes:
        name: Registry name (e.g. "keccak256")
        digest: The underlying hashing callable
        digest_size: Output width in bytes
    """
    name: str
    digest: Callable[[bytes], bytes]
    digest_size: int = DIGEST_SIZE

    def __call__(self, data: bytes) -> bytes:
        return self.digest(data)


KECCAK256 = HashFunction(name="keccak256", digest=keccak256)
SHA256 = HashFunction(name="sha256", digest=sha256)

DEFAULT_HASH_FUNCTION = KECCAK256

_HASH_FUNCTIONS: dict[str, HashFunction] = {
    KECCAK256.name: KECCAK256,
    SHA256.name: SHA256,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a registered hash function by name (case-insensitive).

    Raises:
        UnknownHashFunctionError: If no hash function has that name
    """
    hash_fn = _HASH_FUNCTIONS.get(name.lower())
    if hash_fn is None:
        raise UnknownHashFunctionError(name, available=sorted(_HASH_FUNCTIONS))
    return hash_fn


def register_hash_function(hash_fn: HashFunction) -> None:
    """Register an additional hash function under its own name."""
    _HASH_FUNCTIONS[hash_fn.name.lower()] = hash_fn


def available_hash_functions() -> list[str]:
    """Names of all registered hash functions."""
    return sorted(_HASH_FUNCTIONS)


def hash_sorted_pair(
    left: bytes,
    right: bytes,
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
) -> bytes:
    """
    Hash two child digests after ordering them by raw byte value.

    parent = hash(min(left, right) + max(left, right))

    Args:
        left: First child digest
        right: Second child digest
        hash_fn: Hash to apply to the concatenation

    Returns:
        Parent digest
    """
    if right < left:
        left, right = right, left
    return hash_fn(left + right)


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

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith(("0x", "0X")):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
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


__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "sha256",
    "HashFunction",
    "KECCAK256",
    "SHA256",
    "DEFAULT_HASH_FUNCTION",
    "get_hash_function",
    "register_hash_function",
    "available_hash_functions",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
]

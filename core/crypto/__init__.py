"""
Core cryptographic utilities.

Module 02 provides hashing utilities: swappable 256-bit hash functions,
sorted-pair node hashing and 0x hex helpers.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    sha256,
    HashFunction,
    KECCAK256,
    SHA256,
    DEFAULT_HASH_FUNCTION,
    get_hash_function,
    register_hash_function,
    available_hash_functions,
    hash_sorted_pair,
    to_hex,
    from_hex,
)

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

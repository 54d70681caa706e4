"""
Module 03 - Whitelist

Address normalization, whitelist file loading and the WhitelistCommitment
that binds a whitelist to its Merkle tree.
"""
from .address import normalize_address, display_address

__all__ = [
    "normalize_address",
    "display_address",
]

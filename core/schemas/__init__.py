"""
Module 01 - Schemas & Errors
File: __init__.py

Purpose: Export the error taxonomy. Whitelist record schemas live in
core.schemas.whitelist and are imported from there directly, since they
depend on address normalization in core.whitelist.
"""

from .errors import (
    AmountOutOfRangeError,
    EmptyLeafSetError,
    ErrorCodes,
    IndexOutOfRangeError,
    InvalidAddressError,
    InvalidIdentityLength,
    InvalidLeafError,
    LeafNotFoundError,
    MalformedProofError,
    UnknownCodecError,
    UnknownHashFunctionError,
    WhitelistError,
    WhitelistException,
    WhitelistLoadError,
)

__all__ = [
    "AmountOutOfRangeError",
    "EmptyLeafSetError",
    "ErrorCodes",
    "IndexOutOfRangeError",
    "InvalidAddressError",
    "InvalidIdentityLength",
    "InvalidLeafError",
    "LeafNotFoundError",
    "MalformedProofError",
    "UnknownCodecError",
    "UnknownHashFunctionError",
    "WhitelistError",
    "WhitelistException",
    "WhitelistLoadError",
]

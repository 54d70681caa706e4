"""
Test fixtures package for whitelist Merkle tests.

This package provides reference data and factory functions.
- common.py: reference whitelists, leaf/tree factories, whitelist files

Usage:
    from fixtures.common import make_leaves, REFERENCE_ENTRIES

    def test_something():
        tree = build_merkle_tree(make_leaves(5))
"""

from .common import (
    EXTENDED_ENTRIES,
    REFERENCE_ENTRIES,
    make_identity,
    make_leaves,
    make_records,
    make_reference_leaves,
    make_tree,
    write_whitelist_file,
)

__all__ = [
    "EXTENDED_ENTRIES",
    "REFERENCE_ENTRIES",
    "make_identity",
    "make_leaves",
    "make_records",
    "make_reference_leaves",
    "make_tree",
    "write_whitelist_file",
]

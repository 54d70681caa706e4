"""
Common test fixtures shared by all modules.

Provides reference whitelist data and factory functions:
- Reference addresses (mixed, upper and lower case)
- Whitelist entries / leaves / trees
- Whitelist files on disk (JSON and YAML)
"""

import json
from pathlib import Path
from typing import Any, Optional

import yaml

from core.crypto.hashing import keccak256
from core.merkle.leaf_encoder import LeafEncoder
from core.merkle.merkle_tree import MerkleTree, build_merkle_tree


# Three entries used throughout the docs and the CLI examples
REFERENCE_ENTRIES: list[list[Any]] = [
    ["0x5B38DA6A701C568545DCFCB03FCB875F56BEDDC4", 1],
    ["0x5A641E5FB72A2FD9137312E7694D42996D689D99", 1],
    ["0xDCAB482177A592E424D1C8318A464FC922E8DE40", 2],
]

# Larger list with an address repeated in a different letter case
EXTENDED_ENTRIES: list[list[Any]] = [
    ["0x5B38DA6A701C568545DCFCB03FCB875F56BEDDC4", 1],
    ["0x5A641E5FB72A2FD9137312E7694D42996D689D99", 1],
    ["0xDCAB482177A592E424D1C8318A464FC922E8DE40", 2],
    ["0x6E21D37E07A6F7E53C7ACE372CEC63D4AE4B6BD0", 1],
    ["0x09BAAB19FC77C19898140DADD30C4685C597620B", 3],
    ["0xCC4C29997177253376528C05D3DF91CF2D69061A", 1],
    ["0x5B38Da6a701c568545dCfcB03FcB875f56beddC4", 1],
    ["0xb4c79dab8f259c7aee6e5b2aa729821864227e84", 3],
]


def make_identity(seed: int) -> bytes:
    """Deterministic 20-byte identity for a seed."""
    return keccak256(f"identity-{seed}".encode())[:20]


def make_leaves(count: int) -> list[bytes]:
    """Deterministic list of distinct 32-byte leaves."""
    return [keccak256(f"leaf-{i}".encode()) for i in range(count)]


def make_records(count: int, amount: int = 1) -> list[tuple[bytes, int]]:
    """Deterministic (identity, amount) records."""
    return [(make_identity(i), amount + i) for i in range(count)]


def make_reference_leaves(encoder: Optional[LeafEncoder] = None) -> list[bytes]:
    """Leaves for REFERENCE_ENTRIES, in file order."""
    encoder = encoder or LeafEncoder()
    return [
        encoder.encode(bytes.fromhex(address[2:]), amount)
        for address, amount in REFERENCE_ENTRIES
    ]


def make_tree(count: int, sort_leaves: bool = False) -> MerkleTree:
    """Tree over make_leaves(count)."""
    return build_merkle_tree(make_leaves(count), sort_leaves=sort_leaves)


def write_whitelist_file(
    directory: Path,
    entries: Optional[list[Any]] = None,
    name: str = "whitelist.json",
    wrap_key: Optional[str] = None,
) -> Path:
    """
    Write a whitelist file and return its path.

    The format follows the file suffix (.json, .yaml or .yml). With
    wrap_key the list is nested under that key.
    """
    entries = REFERENCE_ENTRIES if entries is None else entries
    data: Any = {wrap_key: entries} if wrap_key else entries

    path = Path(directory) / name
    if path.suffix in (".yaml", ".yml"):
        path.write_text(yaml.safe_dump(data))
    else:
        path.write_text(json.dumps(data))
    return path

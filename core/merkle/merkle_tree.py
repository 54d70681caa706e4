"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification
over whitelist leaves.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- MerkleTree: immutable, fully materialized tree (every layer kept)
- Sorted-pair parent hashing
- Odd-carry rule for odd layers
- Merkle proof generation for any leaf index (or leaf value)
- Merkle proof verification that needs no position bits

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: see core.merkle.leaf_encoder (hash(identity || uint256(amount)))
2. Parent hashing: parent = hash(min(a, b) + max(a, b)) on raw bytes
3. Odd layers: the last unpaired node is carried up unchanged, never duplicated
4. Empty leaves: rejected with EmptyLeafSetError, there is no empty root
5. Single leaf: root = leaf (the leaf hash itself), proof is empty

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is the caller's order unless sort_leaves=True is requested
- Because pairs are sorted, a proof is a plain list of sibling digests
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from core.crypto.hashing import (
    DEFAULT_HASH_FUNCTION,
    HashFunction,
    hash_sorted_pair,
    to_hex,
)
from core.schemas.errors import (
    EmptyLeafSetError,
    IndexOutOfRangeError,
    InvalidLeafError,
    LeafNotFoundError,
    MalformedProofError,
)


logger = logging.getLogger(__name__)


def merkle_parent(
    left: bytes,
    right: bytes,
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The children are ordered by byte value first, so
    merkle_parent(a, b) == merkle_parent(b, a).

    Args:
        left: Left child hash
        right: Right child hash
        hash_fn: Hash function (keccak256 by default)

    Returns:
        Parent hash (32 bytes)
    """
    return hash_sorted_pair(left, right, hash_fn)


@dataclass(frozen=True)
class MerkleTree:
    """
    A fully built Merkle tree.

    Attributes:
        layers: Every layer bottom-up; layers[0] are the leaves and
            layers[-1] holds exactly one node, the root
        hash_fn: Hash function the tree was built with
    """
    layers: tuple[tuple[bytes, ...], ...]
    hash_fn: HashFunction = field(default=DEFAULT_HASH_FUNCTION, compare=False)

    @property
    def root(self) -> bytes:
        return self.layers[-1][0]

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.layers[0]

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    @property
    def depth(self) -> int:
        """Number of layers from leaves to root, inclusive."""
        return len(self.layers)

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    def index_of(self, leaf: bytes) -> int:
        """
        Position of a leaf in layer 0.

        Duplicate leaves resolve to their first occurrence.

        Raises:
            LeafNotFoundError: If the leaf is not in the tree
        """
        try:
            return self.leaves.index(leaf)
        except ValueError:
            raise LeafNotFoundError(to_hex(bytes(leaf))) from None

    def proof(self, index: int) -> "MerkleProof":
        """Shorthand for build_merkle_proof(self, index)."""
        return build_merkle_proof(self, index)

    def hex_layers(self) -> list[list[str]]:
        return [[to_hex(node) for node in layer] for layer in self.layers]

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view of the tree for display or export."""
        return {
            "root": self.hex_root,
            "hash_function": self.hash_fn.name,
            "leaf_count": self.leaf_count,
            "depth": self.depth,
            "layers": self.hex_layers(),
        }


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    The proof allows verification that a leaf is included in a tree
    with a known root, without revealing the entire tree. Because
    parent hashing is order independent, no left/right markers are
    needed: siblings are consumed in order from leaf to root.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        index: The 0-based index of the leaf in the tree it came from
        siblings: Sibling hashes from bottom to top of tree; levels where
            the node was carried up without a sibling contribute nothing
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: tuple[bytes, ...]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        # Accept any sequence but store it immutably
        object.__setattr__(self, "siblings", tuple(self.siblings))

    def hex_siblings(self) -> list[str]:
        return [to_hex(s) for s in self.siblings]

    def to_dict(self) -> dict[str, Any]:
        return {
            "leaf": to_hex(self.leaf),
            "index": self.index,
            "proof": self.hex_siblings(),
            "root": to_hex(self.root),
        }


def _check_leaves(leaves: Sequence[bytes], digest_size: int) -> None:
    for position, leaf in enumerate(leaves):
        if not isinstance(leaf, (bytes, bytearray)):
            raise InvalidLeafError(
                f"Leaf at position {position} must be bytes, got {type(leaf).__name__}",
                position=position,
            )
        if len(leaf) != digest_size:
            raise InvalidLeafError(
                f"Leaf at position {position} must be {digest_size} bytes, got {len(leaf)}",
                position=position,
                details={"expected": digest_size, "actual": len(leaf)},
            )


def build_merkle_tree(
    leaves: Sequence[bytes],
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
    sort_leaves: bool = False,
) -> MerkleTree:
    """
    Build a Merkle tree from a sequence of leaf hashes.

    Algorithm:
    1. If empty: raise EmptyLeafSetError
    2. Optionally sort the leaves by byte value
    3. Pair node 2i with node 2i+1 and hash the sorted pair
    4. If a layer is odd, carry its last node up unchanged
    5. Repeat until a single root remains

    Example: [a, b, c] -> [parent(a,b), c] -> [parent(parent(a,b), c)]

    Args:
        leaves: Sequence of leaf hashes (digest_size bytes each).
                Order matters and is preserved unless sort_leaves is set.
        hash_fn: Hash function for internal nodes
        sort_leaves: Sort leaves by byte value before building, so the
                     root depends only on the set of leaves

    Returns:
        MerkleTree with every layer materialized

    Raises:
        EmptyLeafSetError: If leaves is empty
        InvalidLeafError: If a leaf is not a digest of the right width
    """
    if len(leaves) == 0:
        raise EmptyLeafSetError()

    _check_leaves(leaves, hash_fn.digest_size)

    current_level: list[bytes] = [bytes(leaf) for leaf in leaves]
    if sort_leaves:
        current_level.sort()

    layers: list[tuple[bytes, ...]] = [tuple(current_level)]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(
                merkle_parent(current_level[i], current_level[i + 1], hash_fn)
            )

        # Odd carry: last node moves up as is
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])

        layers.append(tuple(next_level))
        current_level = next_level

    tree = MerkleTree(layers=tuple(layers), hash_fn=hash_fn)
    logger.debug(
        f"Built Merkle tree: {tree.leaf_count} leaves, depth {tree.depth}, "
        f"root {tree.hex_root}"
    )
    return tree


def build_merkle_root(
    leaves: Sequence[bytes],
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
    sort_leaves: bool = False,
) -> bytes:
    """
    Compute only the Merkle root of a sequence of leaf hashes.

    Raises:
        EmptyLeafSetError: If leaves is empty
    """
    return build_merkle_tree(leaves, hash_fn=hash_fn, sort_leaves=sort_leaves).root


def build_merkle_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    The proof consists of the sibling hashes needed to recompute
    the path from the leaf to the root.

    Algorithm:
    1. Start at the target leaf index
    2. At each layer below the root:
       - Sibling index is index XOR 1
       - If that sibling exists, record it; if not, the node was
         carried up and this layer contributes nothing
       - Move up: index = index // 2
    3. Stop at the root layer

    Args:
        tree: A built MerkleTree
        index: 0-based index of the leaf to prove

    Returns:
        MerkleProof with leaf, index, siblings (bottom-up), and root

    Raises:
        IndexOutOfRangeError: If index is out of range
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexOutOfRangeError(index, tree.leaf_count)
    if index < 0 or index >= tree.leaf_count:
        raise IndexOutOfRangeError(index, tree.leaf_count)

    siblings: list[bytes] = []
    current_index = index

    for layer in tree.layers[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index < len(layer):
            siblings.append(layer[sibling_index])
        current_index = current_index // 2

    return MerkleProof(
        leaf=tree.leaves[index],
        index=index,
        siblings=tuple(siblings),
        root=tree.root,
    )


def _check_digest(value: Any, what: str, digest_size: int, position: int | None = None) -> None:
    if not isinstance(value, (bytes, bytearray)):
        raise MalformedProofError(
            f"{what} must be bytes, got {type(value).__name__}",
            position=position,
        )
    if len(value) != digest_size:
        raise MalformedProofError(
            f"{what} must be {digest_size} bytes, got {len(value)}",
            position=position,
            details={"expected": digest_size, "actual": len(value)},
        )


def verify_merkle_proof(
    leaf: bytes,
    siblings: Sequence[bytes],
    root: bytes,
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
) -> bool:
    """
    Verify that a leaf belongs to the tree with the given root.

    Algorithm:
    1. Start with the leaf hash
    2. For each sibling, in order: current = parent(current, sibling)
    3. Check computed root equals claimed root

    A proof that does not reproduce the root returns False; it is
    not an error.

    Args:
        leaf: Leaf hash being proven
        siblings: Sibling hashes, leaf to root
        root: Claimed Merkle root
        hash_fn: Hash function the tree was built with

    Returns:
        True if proof is valid, False otherwise

    Raises:
        MalformedProofError: If any input is not a digest of the right width
    """
    digest_size = hash_fn.digest_size
    _check_digest(leaf, "Leaf", digest_size)
    _check_digest(root, "Root", digest_size)
    if isinstance(siblings, (bytes, bytearray, str)):
        raise MalformedProofError(
            "Proof must be a sequence of digests, not a single byte string"
        )
    # Checked and hashed in two passes, so a one-shot iterator must be kept
    siblings = tuple(siblings)
    for position, sibling in enumerate(siblings):
        _check_digest(sibling, f"Proof element {position}", digest_size, position)

    current_hash = bytes(leaf)
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, bytes(sibling), hash_fn)

    return current_hash == bytes(root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, three or four
    leaves have depth 3, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleTree",
    "MerkleProof",
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]

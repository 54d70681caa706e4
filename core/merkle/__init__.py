"""
Module 02 - Merkle Tree and Commitments
Deterministic whitelist Merkle tree construction + proof generation/verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- LeafEncoder / Codec: (identity, amount) -> 32-byte leaf
- MerkleTree: immutable tree with every layer materialized
- build_merkle_tree / build_merkle_root: build from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against a claimed root

Canonical Commitment Rules:
1. Leaf hashing: keccak256(address || uint256(amount))
2. Parent hashing: keccak256(sorted(left, right))
3. Odd layers: carry the last node up unchanged
4. Empty tree: rejected
5. Single leaf: root = leaf

Usage:
    from core.merkle import LeafEncoder, build_merkle_tree, build_merkle_proof, verify_merkle_proof

    encoder = LeafEncoder()
    leaves = [encoder.encode(address, amount) for address, amount in records]

    tree = build_merkle_tree(leaves)
    proof = build_merkle_proof(tree, index=2)

    assert verify_merkle_proof(leaves[2], proof.siblings, tree.root)
"""
from .leaf_encoder import (
    IDENTITY_WIDTH,
    AMOUNT_WIDTH,
    Codec,
    PACKED_CODEC,
    PADDED_CODEC,
    DEFAULT_CODEC,
    LeafEncoder,
    available_codecs,
    encode_leaf,
    get_codec,
)

from .merkle_tree import (
    MerkleTree,
    MerkleProof,
    merkle_parent,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Leaf encoding
    "IDENTITY_WIDTH",
    "AMOUNT_WIDTH",
    "Codec",
    "PACKED_CODEC",
    "PADDED_CODEC",
    "DEFAULT_CODEC",
    "LeafEncoder",
    "available_codecs",
    "encode_leaf",
    "get_codec",
    # Core types
    "MerkleTree",
    "MerkleProof",
    # Core functions
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]

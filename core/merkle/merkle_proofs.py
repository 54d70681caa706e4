"""
Module 02 - Merkle Proofs Convenience Wrappers
Thin wrappers around core Merkle tree functions for cleaner API.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides class-based interfaces:
- MerkleProver: Build trees and generate proofs for leaves or records
- MerkleVerifier: Verify proofs, including 0x hex-encoded ones

These are convenience wrappers around the functions in merkle_tree.py
and leaf_encoder.py.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from core.crypto.hashing import DEFAULT_HASH_FUNCTION, HashFunction, from_hex
from core.merkle.leaf_encoder import LeafEncoder
from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_proof,
    build_merkle_tree,
    verify_merkle_proof,
)
from core.schemas.errors import MalformedProofError


class MerkleProver:
    """
    Convenience class for building trees and generating Merkle proofs.

    Provides static methods for proof generation from:
    - Pre-hashed leaves (bytes)
    - Raw (identity, amount) records (encoded with a LeafEncoder)

    Example:
        >>> leaves = [keccak256(b"a"), keccak256(b"b"), keccak256(b"c")]
        >>> tree = MerkleProver.build(leaves)
        >>> proof = MerkleProver.prove(tree, index=1)
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def build(
        leaves: Sequence[bytes],
        hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
        sort_leaves: bool = False,
    ) -> MerkleTree:
        """Build a MerkleTree from pre-hashed leaves."""
        return build_merkle_tree(leaves, hash_fn=hash_fn, sort_leaves=sort_leaves)

    @staticmethod
    def build_from_records(
        records: Iterable[tuple[bytes, int]],
        encoder: LeafEncoder | None = None,
        sort_leaves: bool = False,
    ) -> MerkleTree:
        """
        Build a MerkleTree from (identity, amount) records.

        The encoder's hash function is also used for internal nodes.
        """
        encoder = encoder or LeafEncoder()
        leaves = encoder.encode_many(records)
        return build_merkle_tree(leaves, hash_fn=encoder.hash_fn, sort_leaves=sort_leaves)

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            IndexOutOfRangeError: If index is out of range
        """
        return build_merkle_proof(tree, index)

    @staticmethod
    def prove_leaf(tree: MerkleTree, leaf: bytes) -> MerkleProof:
        """
        Generate a Merkle proof for a leaf value.

        Raises:
            LeafNotFoundError: If the leaf is not in the tree
        """
        return build_merkle_proof(tree, tree.index_of(leaf))

    @staticmethod
    def prove_record(
        tree: MerkleTree,
        identity: bytes,
        amount: int,
        encoder: LeafEncoder | None = None,
    ) -> MerkleProof:
        """
        Generate a Merkle proof for an (identity, amount) record.

        Raises:
            LeafNotFoundError: If the record's leaf is not in the tree
        """
        encoder = encoder or LeafEncoder(hash_fn=tree.hash_fn)
        return MerkleProver.prove_leaf(tree, encoder.encode(identity, amount))


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(tree, index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof, hash_fn: HashFunction = DEFAULT_HASH_FUNCTION) -> bool:
        """
        Verify a MerkleProof against the root it carries.

        Callers that received the proof from someone else should use
        verify_leaf_in_root() with the root they trust instead.
        """
        return verify_merkle_proof(proof.leaf, proof.siblings, proof.root, hash_fn)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
        hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
    ) -> bool:
        """
        Verify a leaf is included in a Merkle root using raw components.

        Args:
            leaf: The leaf hash to verify
            siblings: List of sibling hashes (bottom-up)
            root: The claimed Merkle root
            hash_fn: Hash function the tree was built with

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_merkle_proof(leaf, siblings, root, hash_fn)

    @staticmethod
    def verify_record(
        identity: bytes,
        amount: int,
        siblings: Sequence[bytes],
        root: bytes,
        encoder: LeafEncoder | None = None,
    ) -> bool:
        """
        Verify an (identity, amount) record is included in a Merkle root.

        The record is encoded to its leaf first, so a wrong amount
        fails verification just like a wrong address.
        """
        encoder = encoder or LeafEncoder()
        leaf = encoder.encode(identity, amount)
        return verify_merkle_proof(leaf, siblings, root, encoder.hash_fn)

    @staticmethod
    def verify_hex(
        leaf: str,
        siblings: Sequence[str],
        root: str,
        hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
    ) -> bool:
        """
        Verify a proof given as 0x-prefixed hex strings.

        Raises:
            MalformedProofError: If any value is not valid 0x hex
        """
        if isinstance(siblings, str):
            raise MalformedProofError("Proof must be a list of hex strings")
        leaf_bytes = _decode_hex(leaf, "Leaf")
        root_bytes = _decode_hex(root, "Root")
        sibling_bytes = [
            _decode_hex(s, f"Proof element {i}", position=i)
            for i, s in enumerate(siblings)
        ]
        return verify_merkle_proof(leaf_bytes, sibling_bytes, root_bytes, hash_fn)


def _decode_hex(value: str, what: str, position: int | None = None) -> bytes:
    if not isinstance(value, str):
        raise MalformedProofError(
            f"{what} must be a hex string, got {type(value).__name__}",
            position=position,
        )
    try:
        return from_hex(value)
    except ValueError as e:
        raise MalformedProofError(f"{what} is not valid hex: {e}", position=position) from e


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]

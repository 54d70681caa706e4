"""
Module 03 - Whitelist Commitment

Binds a Whitelist to the Merkle tree built from it. This is the object
the CLI and the HTTP API work with: it keeps the entries, their leaves
and the tree side by side so proofs can be requested by index or by
address.

The tree is built once at construction and never mutated; a changed
whitelist needs a new WhitelistCommitment.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from core.config.runtime import MerkleConfig
from core.crypto.hashing import to_hex
from core.merkle.leaf_encoder import LeafEncoder
from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_proof,
    build_merkle_tree,
    verify_merkle_proof,
)
from core.schemas.errors import LeafNotFoundError
from core.schemas.whitelist import Whitelist, WhitelistEntry
from core.whitelist.address import normalize_address


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryProof:
    """A proof together with the whitelist entry it proves."""
    entry: WhitelistEntry
    proof: MerkleProof

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.entry.address,
            "amount": self.entry.amount,
            **self.proof.to_dict(),
        }


class WhitelistCommitment:
    """
    Merkle commitment to an ordered whitelist.

    Example:
        >>> commitment = WhitelistCommitment.from_entries([("0x5B38...", 1)])
        >>> commitment.hex_root
        '0x...'
    """

    def __init__(self, whitelist: Whitelist, config: MerkleConfig | None = None) -> None:
        self.config = config or MerkleConfig()
        self.encoder: LeafEncoder = self.config.build_encoder()
        self.entries: tuple[WhitelistEntry, ...] = tuple(whitelist.entries)

        leaves = self.encoder.encode_many(entry.as_record() for entry in self.entries)
        self.tree: MerkleTree = build_merkle_tree(
            leaves,
            hash_fn=self.encoder.hash_fn,
            sort_leaves=self.config.sort_leaves,
        )

        # Duplicate records share a leaf; the first occurrence wins
        self._entry_by_leaf: dict[bytes, WhitelistEntry] = {}
        self._leaf_by_entry: dict[WhitelistEntry, bytes] = {}
        for leaf, entry in zip(leaves, self.entries):
            self._entry_by_leaf.setdefault(leaf, entry)
            self._leaf_by_entry.setdefault(entry, leaf)
        self._index_by_leaf: dict[bytes, int] = {}
        for position, leaf in enumerate(self.tree.leaves):
            self._index_by_leaf.setdefault(leaf, position)

        logger.info(
            f"Committed {len(self.entries)} whitelist entries "
            f"({self.encoder.hash_fn.name}/{self.encoder.codec.name}): {self.tree.hex_root}"
        )

    @classmethod
    def from_entries(
        cls,
        entries: Sequence[Any],
        config: MerkleConfig | None = None,
    ) -> "WhitelistCommitment":
        """Build from raw [address, amount] pairs or entry mappings."""
        return cls(Whitelist(entries=list(entries)), config=config)

    @property
    def root(self) -> bytes:
        return self.tree.root

    @property
    def hex_root(self) -> str:
        return self.tree.hex_root

    def leaf_for(self, address: str | bytes, amount: int) -> bytes:
        return self.encoder.encode(normalize_address(address), amount)

    def _entry_at_leaf(self, leaf: bytes) -> WhitelistEntry:
        # With sort_leaves, tree positions no longer follow entry order
        try:
            return self._entry_by_leaf[leaf]
        except KeyError:
            raise LeafNotFoundError(to_hex(leaf)) from None

    def proof_at(self, index: int) -> EntryProof:
        """
        Proof for the leaf at a tree position.

        Raises:
            IndexOutOfRangeError: If index is out of range
        """
        proof = build_merkle_proof(self.tree, index)
        return EntryProof(entry=self._entry_at_leaf(proof.leaf), proof=proof)

    def proof_for(self, address: str | bytes, amount: int | None = None) -> EntryProof:
        """
        Proof for an address, optionally pinned to an amount.

        Without an amount the first entry for the address is used.

        Raises:
            InvalidAddressError: If the address is malformed
            LeafNotFoundError: If no matching entry is whitelisted
        """
        target = "0x" + normalize_address(address).hex()
        for entry in self.entries:
            if entry.address == target and (amount is None or entry.amount == amount):
                leaf = self._leaf_by_entry[entry]
                proof = build_merkle_proof(self.tree, self._index_by_leaf[leaf])
                return EntryProof(entry=entry, proof=proof)

        what = target if amount is None else f"{target} with amount {amount}"
        raise LeafNotFoundError(what)

    def all_proofs(self) -> list[EntryProof]:
        """Proofs for every tree position, in tree order."""
        return [self.proof_at(i) for i in range(self.tree.leaf_count)]

    def verify(
        self,
        address: str | bytes,
        amount: int,
        siblings: Sequence[bytes],
        root: bytes | None = None,
    ) -> bool:
        """
        Check a claimed (address, amount) against a proof.

        Uses this commitment's root unless an explicit root is given.
        """
        leaf = self.leaf_for(address, amount)
        return verify_merkle_proof(
            leaf,
            siblings,
            self.root if root is None else root,
            self.encoder.hash_fn,
        )

    def to_dict(self, include_proofs: bool = False) -> dict[str, Any]:
        data = {
            "root": self.hex_root,
            "hash_function": self.encoder.hash_fn.name,
            "codec": self.encoder.codec.name,
            "sort_leaves": self.config.sort_leaves,
            "leaf_count": self.tree.leaf_count,
            "depth": self.tree.depth,
        }
        if include_proofs:
            data["proofs"] = [p.to_dict() for p in self.all_proofs()]
        return data


__all__ = [
    "EntryProof",
    "WhitelistCommitment",
]

"""
Module 05 - API Request Models

Pydantic models for API request validation.

Whitelist entries are accepted as raw values (``[address, amount]`` pairs
or ``{"address", "amount"}`` objects) and validated by the whitelist
loader, so the API and the CLI reject bad entries the same way.
"""

from typing import Any

from pydantic import BaseModel, Field


class MerkleOptions(BaseModel):
    """Per-request overrides of the server's commitment settings."""

    hash_function: str | None = Field(
        default=None,
        description="Hash function name (keccak256 or sha256); server default if omitted",
    )
    codec: str | None = Field(
        default=None,
        description="Leaf codec (packed or padded); server default if omitted",
    )


class TreeRequest(MerkleOptions):
    """Request body for POST /tree endpoint."""

    entries: list[Any] = Field(
        ...,
        min_length=1,
        description="Whitelist entries in leaf order",
    )
    sort_leaves: bool | None = Field(
        default=None,
        description="Sort leaves by hash before building",
    )
    include_layers: bool = Field(
        default=False,
        description="Include every tree layer in the response",
    )
    include_proofs: bool = Field(
        default=False,
        description="Include a proof for every entry in the response",
    )


class ProofRequest(MerkleOptions):
    """Request body for POST /proof endpoint."""

    entries: list[Any] = Field(
        ...,
        min_length=1,
        description="Whitelist entries in leaf order",
    )
    sort_leaves: bool | None = Field(default=None)
    index: int | None = Field(
        default=None,
        ge=0,
        description="Leaf index to prove (tree order)",
    )
    address: str | None = Field(
        default=None,
        description="Address to prove; alternative to index",
    )
    amount: int | None = Field(
        default=None,
        ge=0,
        description="Pin address to a specific amount",
    )


class VerifyRequest(MerkleOptions):
    """Request body for POST /verify endpoint."""

    root: str = Field(..., description="Claimed Merkle root (0x hex)")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling hashes from leaf to root (0x hex)",
    )
    leaf: str | None = Field(
        default=None,
        description="Leaf hash (0x hex); alternative to address/amount",
    )
    address: str | None = Field(default=None, description="Claimed address")
    amount: int | None = Field(default=None, ge=0, description="Claimed amount")

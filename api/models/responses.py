"""
Module 05 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "whitelist-merkle-api"
    version: str = "v1"


class ProofResponse(BaseModel):
    """Inclusion proof for one whitelist entry."""

    ok: bool = True
    address: str = Field(..., description="Normalized address")
    amount: int = Field(..., description="Whitelisted amount")
    index: int = Field(..., description="Leaf index in the tree")
    leaf: str = Field(..., description="Leaf hash (0x hex)")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf to root")
    root: str = Field(..., description="Merkle root (0x hex)")


class TreeResponse(BaseModel):
    """Response for POST /tree endpoint."""

    ok: bool = True
    root: str = Field(..., description="Merkle root (0x hex)")
    leaf_count: int = Field(..., description="Number of leaves")
    depth: int = Field(..., description="Number of layers, leaves to root inclusive")
    hash_function: str = Field(..., description="Hash function used")
    codec: str = Field(..., description="Leaf codec used")
    sort_leaves: bool = Field(..., description="Whether leaves were sorted")
    layers: list[list[str]] | None = Field(default=None)
    proofs: list[ProofResponse] | None = Field(default=None)


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = True
    verified: bool = Field(..., description="Whether the proof reproduces the root")
    leaf: str = Field(..., description="Leaf hash that was checked")
    root: str = Field(..., description="Root it was checked against")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")

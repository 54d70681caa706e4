"""API request and response models."""

from api.models.requests import MerkleOptions, TreeRequest, ProofRequest, VerifyRequest
from api.models.responses import (
    HealthResponse,
    TreeResponse,
    ProofResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "MerkleOptions",
    "TreeRequest",
    "ProofRequest",
    "VerifyRequest",
    "HealthResponse",
    "TreeResponse",
    "ProofResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]

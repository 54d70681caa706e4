"""
Module 05 - Verify Route

Verify an inclusion proof against a claimed root.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_merkle_config
from api.errors import InvalidRequestError
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.crypto.hashing import to_hex
from core.merkle.merkle_proofs import MerkleVerifier
from core.whitelist.address import normalize_address


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify_proof(request: VerifyRequest) -> VerifyResponse:
    """
    Recompute the root from a leaf and its proof.

    A proof that does not reproduce the root is a normal response with
    ``verified: false``; only malformed input is an error.
    """
    if request.leaf is None and (request.address is None or request.amount is None):
        raise InvalidRequestError("Provide 'leaf', or both 'address' and 'amount'")

    merkle_config = get_merkle_config(request)

    if request.leaf is not None:
        leaf_hex = request.leaf
    else:
        encoder = merkle_config.build_encoder()
        leaf_hex = to_hex(encoder.encode(normalize_address(request.address), request.amount))

    verified = MerkleVerifier.verify_hex(
        leaf_hex, request.proof, request.root, merkle_config.hash_fn
    )
    logger.info(f"Verified {leaf_hex} against {request.root}: {verified}")

    return VerifyResponse(ok=True, verified=verified, leaf=leaf_hex, root=request.root)

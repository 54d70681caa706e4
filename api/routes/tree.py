"""
Module 05 - Tree & Proof Routes

Build a whitelist commitment from the request body and return its root
or an inclusion proof. Nothing is stored: every request carries its
own whitelist.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_merkle_config
from api.errors import InvalidRequestError
from api.models.requests import ProofRequest, TreeRequest
from api.models.responses import ProofResponse, TreeResponse
from core.whitelist.commitment import EntryProof, WhitelistCommitment
from core.whitelist.loader import parse_whitelist


logger = logging.getLogger(__name__)

router = APIRouter(tags=["commitment"])


def _proof_response(entry_proof: EntryProof) -> ProofResponse:
    return ProofResponse(ok=True, **entry_proof.to_dict())


@router.post("/tree", response_model=TreeResponse, response_model_exclude_none=True)
async def build_tree(request: TreeRequest) -> TreeResponse:
    """
    Compute the Merkle root of a whitelist.

    Optionally returns every layer and a proof for every entry.
    """
    whitelist = parse_whitelist(request.entries, source="request")
    commitment = WhitelistCommitment(
        whitelist,
        config=get_merkle_config(request, sort_leaves=request.sort_leaves),
    )

    response = TreeResponse(ok=True, **commitment.to_dict())
    if request.include_layers:
        response.layers = commitment.tree.hex_layers()
    if request.include_proofs:
        response.proofs = [_proof_response(p) for p in commitment.all_proofs()]
    return response


@router.post("/proof", response_model=ProofResponse)
async def get_proof(request: ProofRequest) -> ProofResponse:
    """
    Generate an inclusion proof for one whitelist entry, by index or address.
    """
    if request.index is None and request.address is None:
        raise InvalidRequestError("Either 'index' or 'address' is required")
    if request.index is not None and request.address is not None:
        raise InvalidRequestError("Provide only one of 'index' or 'address'")

    whitelist = parse_whitelist(request.entries, source="request")
    commitment = WhitelistCommitment(
        whitelist,
        config=get_merkle_config(request, sort_leaves=request.sort_leaves),
    )

    if request.index is not None:
        entry_proof = commitment.proof_at(request.index)
    else:
        entry_proof = commitment.proof_for(request.address, request.amount)

    logger.info(f"Served proof for leaf {entry_proof.proof.index} of {commitment.hex_root}")
    return _proof_response(entry_proof)

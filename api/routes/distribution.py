"""
Distribution Routes

Published commitment and per-index proofs.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import Distribution, get_distribution
from api.models.responses import DistributionResponse, ProofResponse


router = APIRouter(tags=["distribution"])


@router.get("/distribution", response_model=DistributionResponse)
async def get_distribution_info(
    distribution: Distribution = Depends(get_distribution),
) -> DistributionResponse:
    """Return the published root, asset label and claim progress."""
    tree = distribution.tree
    service = distribution.service
    return DistributionResponse(
        merkle_root=service.hex_root,
        token=service.token,
        entries=len(tree),
        token_total=str(sum(entry.amount for entry in tree.entries)),
        claimed=service.ledger.claimed_count(),
    )


@router.get("/proofs/{index}", response_model=ProofResponse)
async def get_proof(
    index: int,
    distribution: Distribution = Depends(get_distribution),
) -> ProofResponse:
    """
    Return the entry at ``index`` with its inclusion proof.

    Unknown indices produce a 404 via IndexOutOfRange.
    """
    tree = distribution.tree
    entry = tree.entry(index)
    return ProofResponse(
        index=index,
        account=entry.account,
        amount=str(entry.amount),
        proof=tree.hex_proof(index),
        merkle_root=tree.hex_root,
    )

"""
Claim Routes

Claim status queries and the claim entry point.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import Distribution, get_distribution
from api.models.requests import ClaimBody
from api.models.responses import ClaimResponse, ClaimStatusResponse
from core.schemas.distribution import parse_amount
from core.schemas.errors import InvalidProof


logger = logging.getLogger(__name__)

router = APIRouter(tags=["claims"])


@router.get("/claims/{index}", response_model=ClaimStatusResponse)
async def get_claim_status(
    index: int,
    distribution: Distribution = Depends(get_distribution),
) -> ClaimStatusResponse:
    """Return whether ``index`` has been claimed."""
    return ClaimStatusResponse(
        index=index,
        claimed=distribution.service.is_claimed(index),
    )


@router.post("/claims", response_model=ClaimResponse)
def post_claim(
    body: ClaimBody,
    distribution: Distribution = Depends(get_distribution),
) -> ClaimResponse:
    """
    Redeem one entry.

    Error responses:
    - 400 INVALID_PROOF: proof, account or amount do not match the root
    - 409 ALREADY_CLAIMED: the index has already been paid out
    - 502 TRANSFER_FAILED: the transfer capability reported failure
    """
    try:
        amount = parse_amount(body.amount)
    except ValueError as e:
        raise InvalidProof(index=body.index, message=f"Invalid amount: {e}") from e

    logger.info(f"Claim request for index {body.index}")
    receipt = distribution.service.claim(body.index, body.account, amount, body.proof)

    return ClaimResponse(
        ok=True,
        index=receipt.index,
        account=receipt.account,
        amount=str(receipt.amount),
        merkle_root=receipt.merkle_root,
        transfer_ref=receipt.transfer_ref,
    )

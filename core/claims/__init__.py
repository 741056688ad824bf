"""
Claims
Per-index claim ledger, transfer capability seam, Claimed events, and the
orchestrating ClaimService.
"""
from .ledger import WORD_BITS, ClaimLedger
from .transfer import InMemoryTransfer, TransferCapability, TransferResult
from .events import ClaimedEvent, ClaimEventBus, ClaimListener
from .service import ClaimService

__all__ = [
    "WORD_BITS",
    "ClaimLedger",
    "InMemoryTransfer",
    "TransferCapability",
    "TransferResult",
    "ClaimedEvent",
    "ClaimEventBus",
    "ClaimListener",
    "ClaimService",
]

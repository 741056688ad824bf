"""
API Dependencies

Dependency injection for the API.
Builds the distribution (tree + claim service) once from runtime config and
hands it to the routes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from api.errors import NotConfiguredError
from core.claims import ClaimService, InMemoryTransfer, TransferCapability
from core.config.runtime import RuntimeConfig, get_default_config
from core.distribution import load_allocation
from core.merkle import BalanceTree

logger = logging.getLogger(__name__)


@dataclass
class Distribution:
    """The loaded tree and the service that redeems claims against it."""
    tree: BalanceTree
    service: ClaimService


_distribution: Optional[Distribution] = None
_lock = threading.Lock()


def load_distribution_from_config(
    config: RuntimeConfig,
    transfer: TransferCapability | None = None,
) -> Distribution:
    """
    Load the allocation named by ``config`` and bind a claim service to it.

    Raises:
        NotConfiguredError: If no allocation path is configured
        AllocationError: If the allocation file cannot be read
        RootMismatchError: If a trusted root is configured and differs
    """
    allocation_path = config.distribution.allocation_path
    if not allocation_path:
        raise NotConfiguredError(
            "No allocation configured; set DISTRIBUTOR_ALLOCATION_PATH "
            "or distribution.allocation_path in distributor.json"
        )

    entries = load_allocation(allocation_path)
    logger.info(f"Loaded {len(entries)} entries from {allocation_path}")

    tree = BalanceTree(entries)
    service = ClaimService.from_tree(
        tree,
        transfer or InMemoryTransfer(token=config.distribution.token),
        trusted_root=config.distribution.merkle_root,
        rollback_on_transfer_failure=config.claims.rollback_on_transfer_failure,
    )
    return Distribution(tree=tree, service=service)


def get_distribution() -> Distribution:
    """FastAPI dependency: the process-wide distribution, built on first use."""
    global _distribution
    with _lock:
        if _distribution is None:
            _distribution = load_distribution_from_config(get_default_config())
        return _distribution


def set_distribution(distribution: Optional[Distribution]) -> None:
    """Install (or clear, with None) the process-wide distribution."""
    global _distribution
    with _lock:
        _distribution = distribution

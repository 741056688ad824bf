"""
CLI Build Command

Commit an allocation file to a Merkle root and write the distribution
document (root, total, and every claimant's index/amount/proof).

Usage:
    distributor build allocation.json [--out distribution.json] [--sort] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.distribution import (
    build_distribution,
    load_allocation,
    normalize_balances,
    save_distribution,
)
from core.schemas.distribution import DistributionDocument
from core.schemas.errors import DistributorException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a distribution build for CLI output."""
    allocation_path: str = ""
    output_path: str | None = None
    merkle_root: str = ""
    entries: int = 0
    token_total: str = "0"
    sorted: bool = False

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["output_path"] is None:
            del d["output_path"]
        return d


def build_document(allocation_path: Path, sort: bool = False) -> DistributionDocument:
    """
    Load an allocation and commit it.

    With ``sort``, entries are validated and reordered by checksum address
    the way a balance map is; otherwise file order is the index order.
    Either way an account may appear only once, since the document is keyed
    by account.
    """
    entries = load_allocation(allocation_path)
    if sort:
        entries = normalize_balances(
            [{"account": e.account, "amount": e.amount} for e in entries]
        )
    logger.info(f"Building distribution over {len(entries)} entries")
    return build_distribution(entries)


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    allocation_path = Path(args.allocation)

    try:
        document = build_document(allocation_path, sort=args.sort)
    except DistributorException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary(
        allocation_path=str(allocation_path),
        merkle_root=document.merkle_root,
        entries=len(document.claims),
        token_total=str(int(document.token_total, 16)),
        sorted=args.sort,
    )

    if args.out:
        out_path = save_distribution(document, args.out)
        summary.output_path = str(out_path)
        logger.info(f"Distribution written to {out_path}")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"merkle_root: {summary.merkle_root}")
        print(f"entries: {summary.entries}")
        print(f"token_total: {summary.token_total}")
        if summary.output_path:
            print(f"output: {summary.output_path}")

    return EXIT_SUCCESS

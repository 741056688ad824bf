"""
CLI Verify Command

Check an (index, account, amount, proof) claim against a root, offline.

The claim can be given explicitly:
    distributor verify --root 0x.. --index 0 --account 0x.. --amount 100 --proof 0x.. 0x..

or looked up in a distribution document by account:
    distributor verify --distribution distribution.json --account 0x..
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.leaf_encoding import checksum_account
from core.distribution import load_distribution
from core.merkle import verify_claim_proof
from core.schemas.distribution import parse_amount
from core.schemas.errors import DistributorException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a proof check for CLI output."""
    merkle_root: str = ""
    index: int = 0
    account: str = ""
    amount: str = "0"
    proof: list[str] = field(default_factory=list)
    ok: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class _UsageError(Exception):
    pass


def _claim_from_distribution(args: Namespace) -> VerifySummary:
    document = load_distribution(args.distribution)
    try:
        account = checksum_account(args.account)
    except ValueError as e:
        raise _UsageError(str(e)) from e
    info = document.claims.get(account)
    if info is None:
        raise _UsageError(f"Account {account} is not in {args.distribution}")
    return VerifySummary(
        merkle_root=args.root or document.merkle_root,
        index=info.index,
        account=account,
        amount=str(parse_amount(info.amount)),
        proof=list(info.proof),
    )


def _claim_from_args(args: Namespace) -> VerifySummary:
    missing = [
        flag for flag, value in (
            ("--root", args.root),
            ("--index", args.index),
            ("--account", args.account),
            ("--amount", args.amount),
        )
        if value is None
    ]
    if missing:
        raise _UsageError(f"Missing required options: {', '.join(missing)}")
    try:
        amount = parse_amount(args.amount)
    except ValueError as e:
        raise _UsageError(str(e)) from e
    return VerifySummary(
        merkle_root=args.root,
        index=args.index,
        account=args.account,
        amount=str(amount),
        proof=list(args.proof or []),
    )


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 1 usage/IO error, 2 proof rejected)
    """
    try:
        if args.distribution:
            summary = _claim_from_distribution(args)
        else:
            summary = _claim_from_args(args)
    except (_UsageError, DistributorException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary.ok = verify_claim_proof(
        summary.index,
        summary.account,
        int(summary.amount),
        summary.proof,
        summary.merkle_root,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"merkle_root: {summary.merkle_root}")
        print(f"index: {summary.index}")
        print(f"account: {summary.account}")
        print(f"amount: {summary.amount}")
        print(f"valid: {str(summary.ok).lower()}")

    if summary.ok:
        logger.info("Proof verified")
        return EXIT_SUCCESS
    logger.warning("Proof rejected")
    return EXIT_VERIFICATION_FAILED

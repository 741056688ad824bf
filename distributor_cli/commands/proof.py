"""
CLI Proof Command

Print the inclusion proof for one index of an allocation.

Usage:
    distributor proof allocation.json --index 3 [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.distribution import load_allocation
from core.merkle import BalanceTree
from core.schemas.errors import DistributorException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    try:
        tree = BalanceTree(load_allocation(args.allocation))
        entry = tree.entry(args.index)
        proof = tree.hex_proof(args.index)
    except DistributorException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "index": args.index,
            "account": entry.account,
            "amount": str(entry.amount),
            "proof": proof,
            "merkle_root": tree.hex_root,
        }, indent=2))
    else:
        print(f"index: {args.index}")
        print(f"account: {entry.account}")
        print(f"amount: {entry.amount}")
        print(f"merkle_root: {tree.hex_root}")
        print(f"proof ({len(proof)}):")
        for sibling in proof:
            print(f"  {sibling}")

    return EXIT_SUCCESS

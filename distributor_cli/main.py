"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m distributor_cli build <allocation> [--out PATH] [--sort] [--json]
    python -m distributor_cli proof <allocation> --index N [--json]
    python -m distributor_cli verify --root 0x.. --index N --account 0x.. --amount X --proof 0x.. [0x.. ...]
    python -m distributor_cli verify --distribution PATH --account 0x..
    python -m distributor_cli config --init

Environment Variables:
    DISTRIBUTOR_ALLOCATION_PATH               Allocation file served by the API
    DISTRIBUTOR_MERKLE_ROOT                   Trusted root the allocation must reproduce
    DISTRIBUTOR_TOKEN                         Label of the distributed asset
    DISTRIBUTOR_ROLLBACK_ON_TRANSFER_FAILURE  Clear the claim when a transfer fails (default: false)
    DISTRIBUTOR_LOG_LEVEL                     Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from distributor_cli.commands import build, proof, verify
from core.config.runtime import get_default_config_template, load_runtime_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="distributor",
        description="Merkle Distributor CLI - Build distributions, print proofs, and verify claims.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./distributor.json or ~/.config/distributor/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Commit an allocation to a Merkle root",
        description=(
            "Build the distribution document (root, total, per-account proofs) for an allocation file. "
            "The document is keyed by account, so each account may appear only once."
        ),
    )
    build_parser.add_argument(
        "allocation",
        type=str,
        help="Allocation file (JSON list/mapping or CSV account,amount; one entry per account)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the distribution document to this path",
    )
    build_parser.add_argument(
        "--sort",
        action="store_true",
        default=False,
        help="Order entries by checksum address and reject zero amounts",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the inclusion proof for one index",
    )
    proof_parser.add_argument(
        "allocation",
        type=str,
        help="Allocation file (file order is the index order)",
    )
    proof_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Leaf index",
    )
    proof_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="JSON output",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a claim proof offline",
        description="Check (index, account, amount, proof) against a Merkle root.",
    )
    verify_parser.add_argument("--root", type=str, default=None, help="Trusted Merkle root (0x-hex)")
    verify_parser.add_argument("--index", type=int, default=None, help="Leaf index")
    verify_parser.add_argument("--account", type=str, default=None, help="Recipient address")
    verify_parser.add_argument("--amount", type=str, default=None, help="Amount (decimal or 0x-hex)")
    verify_parser.add_argument(
        "--proof",
        type=str,
        nargs="*",
        default=None,
        help="Sibling digests, bottom-up (0x-hex)",
    )
    verify_parser.add_argument(
        "--distribution",
        type=str,
        default=None,
        help="Look the claim up by --account in this distribution document",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="distributor.json",
        help="Path for config file (default: distributor.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (DISTRIBUTOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: distributor config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())

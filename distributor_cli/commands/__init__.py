"""
CLI command modules.
"""

from distributor_cli.commands import build, proof, verify

__all__ = ["build", "proof", "verify"]

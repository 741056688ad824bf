"""
Distributor CLI

Command-line interface for building and checking Merkle distributions.

Usage:
    python -m distributor_cli build allocation.json --out distribution.json
    python -m distributor_cli proof allocation.json --index 0
    python -m distributor_cli verify --distribution distribution.json --account 0x...
    python -m distributor_cli config --init
"""

__version__ = "0.1.0"

"""
Distribution
Balance-map parsing and allocation/document file IO.
"""
from .balance_map import build_distribution, normalize_balances, parse_balance_map
from .io import dump_distribution, load_allocation, load_distribution, save_distribution

__all__ = [
    "build_distribution",
    "normalize_balances",
    "parse_balance_map",
    "dump_distribution",
    "load_allocation",
    "load_distribution",
    "save_distribution",
]

"""
Distribution IO
File: io.py

Purpose: Load allocation files and save/load distribution documents.

Allocation formats (order in the file is the entry index):
- JSON list:    [{"account": "0x..", "amount": 10}, ...]
                ("address"/"earnings" are accepted as key aliases)
- JSON mapping: {"0x..": 10, ...}
- CSV:          account,amount rows, with or without a header row
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.schemas.distribution import DistributionDocument, Entry
from core.schemas.errors import AllocationError


def _entry(account: Any, amount: Any, position: int) -> Entry:
    try:
        return Entry(account=account, amount=amount)
    except ValidationError as e:
        raise AllocationError(
            f"Invalid allocation entry at position {position}: {e.errors()[0]['msg']}",
            details={"position": position, "account": str(account)},
        ) from e


def _entries_from_json(data: Any) -> list[Entry]:
    if isinstance(data, dict):
        return [_entry(account, amount, i) for i, (account, amount) in enumerate(data.items())]
    if isinstance(data, list):
        entries = []
        for i, record in enumerate(data):
            if not isinstance(record, dict):
                raise AllocationError(
                    f"Allocation record {i} must be an object",
                    details={"position": i},
                )
            account = record.get("account", record.get("address"))
            amount = record.get("amount", record.get("earnings"))
            entries.append(_entry(account, amount, i))
        return entries
    raise AllocationError("Allocation JSON must be a list or an object")


def _entries_from_csv(text: str) -> list[Entry]:
    rows = [row for row in csv.reader(text.splitlines()) if row and any(cell.strip() for cell in row)]
    if rows and rows[0][0].strip().lower() in ("account", "address"):
        rows = rows[1:]
    entries = []
    for i, row in enumerate(rows):
        if len(row) < 2:
            raise AllocationError(
                f"CSV row {i} needs an account and an amount",
                details={"position": i},
            )
        entries.append(_entry(row[0].strip(), row[1].strip(), i))
    return entries


def load_allocation(path: str | Path) -> list[Entry]:
    """
    Load an ordered entry list from a JSON or CSV allocation file.

    Raises:
        AllocationError: If the file is missing, unparsable or has invalid entries
    """
    file_path = Path(path)
    if not file_path.exists():
        raise AllocationError(f"Allocation file not found: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise AllocationError(f"Allocation file {file_path} is not valid UTF-8: {e}") from e

    if file_path.suffix.lower() == ".csv":
        return _entries_from_csv(text)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AllocationError(f"Invalid JSON in {file_path}: {e}") from e
    return _entries_from_json(data)


def dump_distribution(document: DistributionDocument) -> str:
    """Serialize a distribution document with camelCase keys."""
    return json.dumps(document.model_dump(mode="json", by_alias=True), indent=2)


def save_distribution(document: DistributionDocument, path: str | Path) -> Path:
    """Write ``document`` as JSON to ``path``, creating parent directories."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_distribution(document) + "\n", encoding="utf-8")
    return out_path


def load_distribution(path: str | Path) -> DistributionDocument:
    """
    Read a distribution document written by ``save_distribution``.

    Raises:
        AllocationError: If the file is missing or not a valid document
    """
    file_path = Path(path)
    if not file_path.exists():
        raise AllocationError(f"Distribution file not found: {file_path}")
    try:
        return DistributionDocument.model_validate_json(file_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise AllocationError(f"Distribution file {file_path} is not valid UTF-8: {e}") from e
    except ValidationError as e:
        raise AllocationError(f"Invalid distribution document {file_path}: {e}") from e


__all__ = [
    "load_allocation",
    "dump_distribution",
    "save_distribution",
    "load_distribution",
]

"""
Export functionality for the default interface snapshot.

Provides JSON and CSV export for automation. Unset values are written as
JSON null and as empty CSV cells.

Usage:
    >>> from export import export_to_json
    >>> print(export_to_json(snapshot))
"""

import csv
import json
from datetime import datetime
from io import StringIO
from typing import Any, Dict, Optional

from models import InterfaceSnapshot, EgressInfo, CONFIG_FIELDS


CSV_FIELDS = ["alias", "index", "mode", *CONFIG_FIELDS]
EGRESS_FIELDS = ["external_ip", "isp", "country"]


def _snapshot_to_dict(
    snapshot: InterfaceSnapshot,
    egress: Optional[EgressInfo] = None
) -> Dict[str, Any]:
    """
    Convert a snapshot (and optional egress info) to plain values.

    max_width is a display detail and is not exported.
    """
    data: Dict[str, Any] = {
        "alias": snapshot.alias,
        "index": snapshot.index,
        "mode": str(snapshot.mode),
    }
    for name in CONFIG_FIELDS:
        data[name] = getattr(snapshot, name)
    if egress is not None:
        for name in EGRESS_FIELDS:
            data[name] = str(getattr(egress, name))
    return data


def export_to_json(
    snapshot: InterfaceSnapshot,
    egress: Optional[EgressInfo] = None,
    indent: int = 2,
    include_metadata: bool = True
) -> str:
    """
    Export the snapshot to JSON.

    Args:
        snapshot: Snapshot to export
        egress: Optional egress information
        indent: Number of spaces for JSON indentation
        include_metadata: Include timestamp and tool metadata

    Returns:
        JSON document as string
    """
    data: Dict[str, Any] = {}

    if include_metadata:
        data["metadata"] = {
            "timestamp": datetime.now().isoformat(),
            "tool": "ifdefault",
            "version": "1.0",
        }

    data["interface"] = _snapshot_to_dict(snapshot, egress)

    return json.dumps(data, indent=indent, ensure_ascii=False)


def export_to_csv(
    snapshot: InterfaceSnapshot,
    egress: Optional[EgressInfo] = None,
    include_header: bool = True,
    delimiter: str = ","
) -> str:
    """
    Export the snapshot to CSV (one header row, one data row).

    Args:
        snapshot: Snapshot to export
        egress: Optional egress information (adds columns)
        include_header: Include column headers as first row
        delimiter: CSV delimiter character

    Returns:
        CSV text
    """
    output = StringIO()
    fieldnames = CSV_FIELDS + (EGRESS_FIELDS if egress is not None else [])

    writer = csv.DictWriter(
        output,
        fieldnames=fieldnames,
        delimiter=delimiter,
        lineterminator="\n"
    )

    if include_header:
        writer.writeheader()

    row = {key: "" if value is None else value for key, value in _snapshot_to_dict(snapshot, egress).items()}
    writer.writerow(row)

    return output.getvalue()


def save_json(snapshot: InterfaceSnapshot, filepath: str, egress: Optional[EgressInfo] = None) -> None:
    """
    Save the snapshot as JSON.

    Raises:
        OSError: If file cannot be written
    """
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(export_to_json(snapshot, egress))


def save_csv(snapshot: InterfaceSnapshot, filepath: str, egress: Optional[EgressInfo] = None) -> None:
    """
    Save the snapshot as CSV.

    Raises:
        OSError: If file cannot be written
    """
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(export_to_csv(snapshot, egress))

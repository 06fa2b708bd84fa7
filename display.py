"""
Display and formatting module.

Renders an interface snapshot as a two-column (label, value) table.
Unset values are shown as a placeholder. No decision logic lives here.
"""

from typing import Any, Optional

from models import InterfaceSnapshot, EgressInfo
from config import TABLE_ROWS, EGRESS_ROWS, TABLE_TITLE, COLUMN_SEPARATOR
from enums import DataMarker


def cleanup_isp_name(isp: str) -> str:
    """
    Clean ISP name by removing ASN prefix.

    Examples:
        >>> cleanup_isp_name("AS12345 Example ISP")
        'Example ISP'
        >>> cleanup_isp_name("Example ISP")
        'Example ISP'
    """
    if isp and isp.startswith("AS") and len(parts := isp.split()) > 1:
        return " ".join(parts[1:])
    return isp


def display_value(value: Any) -> str:
    """Text shown for a field value; None becomes the placeholder."""
    return str(DataMarker.NOT_APPLICABLE) if value is None else str(value)


def _rows(snapshot: InterfaceSnapshot, egress: Optional[EgressInfo]) -> list[tuple[str, str]]:
    rows = [(label, display_value(getattr(snapshot, attr))) for label, attr in TABLE_ROWS]
    if egress is not None:
        for label, attr in EGRESS_ROWS:
            value = getattr(egress, attr)
            if attr == "isp":
                value = cleanup_isp_name(str(value))
            rows.append((label, display_value(value)))
    return rows


def render_snapshot(snapshot: InterfaceSnapshot, egress: Optional[EgressInfo] = None) -> str:
    """
    Format a snapshot as an aligned table.

    The value column is as wide as the snapshot's longest value
    (snapshot.max_width), widened only for the placeholder or egress rows.

    Args:
        snapshot: Snapshot to render
        egress: Optional egress information appended below the snapshot

    Returns:
        Multi-line table text without trailing newline
    """
    rows = _rows(snapshot, egress)

    label_width = max(len(label) for label, _ in rows)
    value_width = max([snapshot.max_width] + [len(value) for _, value in rows])
    total_width = max(label_width + len(COLUMN_SEPARATOR) + value_width, len(TABLE_TITLE))

    lines = [
        "=" * total_width,
        TABLE_TITLE,
        "-" * total_width,
    ]
    for label, value in rows:
        lines.append(f"{label.ljust(label_width)}{COLUMN_SEPARATOR}{value}")
    lines.append("=" * total_width)

    return "\n".join(lines)


def format_output(snapshot: InterfaceSnapshot, egress: Optional[EgressInfo] = None) -> None:
    """Print the snapshot table to stdout."""
    print(render_snapshot(snapshot, egress))

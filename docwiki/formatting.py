"""Human-readable formatting for sizes and stored timestamps."""

from __future__ import annotations

import math
from datetime import datetime

_UNITS = ["B", "KB", "MB", "GB"]


def format_bytes(size: object) -> str:
    """Format a byte count using 1024-based units.

    Bytes and kilobytes have no decimals, larger units one. Invalid or
    negative input yields an empty string.
    """
    try:
        value = float(size)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(value) or value < 0:
        return ""

    i = 0
    while value >= 1024 and i < len(_UNITS) - 1:
        value /= 1024
        i += 1
    digits = 0 if i <= 1 else 1
    return f"{value:.{digits}f} {_UNITS[i]}"


def format_date(iso: str | None) -> str:
    """Render an ISO-8601 timestamp as dd/mm/yyyy, or "" if unparseable."""
    if not iso:
        return ""
    try:
        return datetime.fromisoformat(iso).strftime("%d/%m/%Y")
    except ValueError:
        return ""

# Filename: formatting.py
# Author: Rich Lewis @RichLewis007
# Description: Formatting helpers for user-facing values. Renders entry sizes, deletion dates
#              and placeholder text for the trash listing and viewer.

from __future__ import annotations

from datetime import datetime
from typing import Final

UNKNOWN: Final[str] = "Unknown"

_SIZE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB", "PB", "EB")
_DISPLAY_DATE: Final[str] = "%Y-%m-%d %H:%M:%S"


def format_bytes(
    num_bytes: int | float | None,
    *,
    empty: str = UNKNOWN,
    decimals: int = 1,
) -> str:
    """Return a human-friendly string for a byte count.

    Whole bytes are shown without decimals; larger values use binary
    multiples (powers of 1024) up to exabytes.
    """
    if num_bytes is None:
        return empty

    value = float(max(num_bytes, 0))
    if value < 1024:
        return f"{int(value)} B"

    decimals = max(decimals, 0)
    for unit in _SIZE_UNITS[1:]:
        value /= 1024
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{value:,.{decimals}f} {unit}"

    return f"{value:,.{decimals}f} {_SIZE_UNITS[-1]}"


def format_date(value: datetime | None, *, empty: str = UNKNOWN) -> str:
    # Render a deletion date, or the placeholder when it is unknown.
    if value is None:
        return empty
    return value.strftime(_DISPLAY_DATE)


def or_unknown(value: str | None) -> str:
    return value if value else UNKNOWN


__all__ = ["UNKNOWN", "format_bytes", "format_date", "or_unknown"]

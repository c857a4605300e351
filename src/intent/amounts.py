"""Conversions between display amounts and integer base units."""

from __future__ import annotations

import math

DEFAULT_DECIMALS = 9


def one_unit(decimals: int = DEFAULT_DECIMALS) -> int:
    """Base units in one whole token."""

    return 10 ** decimals


def parse_amount(raw: str, decimals: int = DEFAULT_DECIMALS) -> int | None:
    """Parse a captured amount like "1,250.50" into base units (floored).

    Returns `None` when the capture is not a number (e.g. a lone ",") or too large to scale.
    """

    cleaned = (raw or "").replace(",", "")
    try:
        value = float(cleaned)
    except ValueError:
        return None
    scaled = value * one_unit(decimals)
    if not math.isfinite(scaled):
        return None
    return math.floor(scaled)


def format_amount(base_units: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """Render base units as a dollar amount with two decimals, ties rounded up (lossy)."""

    unit = one_unit(decimals)
    sign = "-" if base_units < 0 else ""
    cents = (abs(base_units) * 100 + unit // 2) // unit
    return f"${sign}{cents // 100}.{cents % 100:02d}"

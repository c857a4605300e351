"""Human-readable rendering of parsed intents (for confirmation prompts)."""

from __future__ import annotations

import math

from src.intent.amounts import DEFAULT_DECIMALS, format_amount
from src.intent.schema import ParsedIntent


def format_intent(intent: ParsedIntent, decimals: int = DEFAULT_DECIMALS) -> str:
    """Render one line per present field, always ending with the confidence line.

    Amounts are shown with two decimals, so sub-cent base units do not survive a round trip.
    """

    lines: list[str] = []

    if intent.action is not None:
        lines.append(f"Action: {intent.action}")

    amount_fields = (
        ("Daily limit", intent.daily_limit),
        ("Per-transaction limit", intent.per_tx_limit),
        ("Alert threshold", intent.alert_threshold),
        ("Minimum balance", intent.min_balance),
    )
    for label, value in amount_fields:
        if value is not None:
            lines.append(f"{label}: {format_amount(value, decimals)}")

    if intent.yield_enabled is not None:
        lines.append(f"Yield: {'enabled' if intent.yield_enabled else 'disabled'}")

    lines.append(f"Confidence: {math.floor(intent.confidence * 100 + 0.5)}%")
    return "\n".join(lines)

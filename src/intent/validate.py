"""Policy validation of parsed intents.

Validation collects every violation instead of stopping at the first one, and never raises. The
on-chain contract remains the enforcement authority; these checks are a local pre-flight.
"""

from __future__ import annotations

from src.intent.amounts import DEFAULT_DECIMALS, one_unit
from src.intent.schema import IntentValidation, ParsedIntent

MAX_DAILY_LIMIT_UNITS = 1_000_000


def validate_intent(intent: ParsedIntent, decimals: int = DEFAULT_DECIMALS) -> IntentValidation:
    """Check an intent against the daily-limit policy bounds and the per-tx <= daily rule."""

    errors: list[str] = []
    unit = one_unit(decimals)

    if intent.daily_limit is None:
        errors.append("Could not determine daily limit from intent")
    else:
        if intent.daily_limit < unit:
            errors.append("Daily limit must be at least $1")
        if intent.daily_limit > unit * MAX_DAILY_LIMIT_UNITS:
            errors.append("Daily limit cannot exceed $1,000,000")

    if intent.per_tx_limit is not None and intent.daily_limit is not None:
        if intent.per_tx_limit > intent.daily_limit:
            errors.append("Per-transaction limit cannot exceed daily limit")

    return IntentValidation(valid=not errors, errors=errors)

"""Vault-creation defaults derived from a parsed intent."""

from __future__ import annotations

from src.intent.amounts import DEFAULT_DECIMALS
from src.intent.schema import ParsedIntent, SuggestedConstraints
from src.intent.validate import validate_intent


def suggest_constraints(
        intent: ParsedIntent,
        decimals: int = DEFAULT_DECIMALS,
) -> SuggestedConstraints | None:
    """Return a complete constraint set for a valid intent, otherwise `None`.

    Fields the intent leaves unset fall back to: per-tx = daily / 2, alert = 80% of daily,
    minimum balance = 0, yield disabled.
    """

    if not validate_intent(intent, decimals).valid or intent.daily_limit is None:
        return None

    daily_limit = intent.daily_limit
    return SuggestedConstraints(
        daily_limit=daily_limit,
        per_tx_limit=intent.per_tx_limit if intent.per_tx_limit is not None else daily_limit // 2,
        alert_threshold=(
            intent.alert_threshold if intent.alert_threshold is not None else daily_limit * 4 // 5
        ),
        min_balance=intent.min_balance or 0,
        yield_enabled=bool(intent.yield_enabled),
    )

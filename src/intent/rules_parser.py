"""Rules-based parser for free-text spending intent.

The parser is deterministic and total:
    - each constraint field is filled by the first matching pattern in its priority list,
    - defaults for per-transaction limit and alert threshold are derived from the daily limit,
    - unrecognized input is not an error; the field is simply left unset.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from src.intent.amounts import DEFAULT_DECIMALS, parse_amount
from src.intent.normalize import normalize_text
from src.intent.patterns import (
    ALERT_THRESHOLD_PATTERNS,
    DAILY_LIMIT_PATTERNS,
    MIN_BALANCE_PATTERNS,
    PER_TX_LIMIT_PATTERNS,
    detect_action,
    detect_yield_preference,
)
from src.intent.schema import Action, ParsedIntent

logger = logging.getLogger(__name__)

_SCORED_FIELD_COUNT = 5
_DAILY_LIMIT_BONUS = 0.2


def _extract_amount(
        text: str,
        patterns: Sequence[re.Pattern[str]],
        *,
        decimals: int = DEFAULT_DECIMALS,
) -> int | None:
    """Return the amount captured by the first matching pattern, in base units."""

    for pattern in patterns:
        match = pattern.search(text)
        if not match or not match.group(1):
            continue
        amount = parse_amount(match.group(1), decimals)
        if amount is not None:
            return amount
    return None


def _confidence(
        *,
        daily_limit: int | None,
        per_tx_limit: int | None,
        alert_threshold: int | None,
        min_balance: int | None,
        action: Action | None,
) -> float:
    """Score how complete the intent is: share of found fields plus a daily-limit bonus."""

    found = sum(
        value is not None
        for value in (daily_limit, per_tx_limit, alert_threshold, min_balance, action)
    )
    score = found / _SCORED_FIELD_COUNT
    if daily_limit is not None:
        score = min(1.0, score + _DAILY_LIMIT_BONUS)
    return round(score * 100) / 100


def parse_intent(text: str) -> ParsedIntent:
    """Parse a spending intent such as "Spend up to $100 per day, max $25 per trade".

    Never raises for any string input; fields that cannot be found stay `None`.
    """

    normalized = normalize_text(text)

    daily_limit = _extract_amount(normalized, DAILY_LIMIT_PATTERNS)
    per_tx_limit = _extract_amount(normalized, PER_TX_LIMIT_PATTERNS)
    alert_threshold = _extract_amount(normalized, ALERT_THRESHOLD_PATTERNS)
    min_balance = _extract_amount(normalized, MIN_BALANCE_PATTERNS)
    action = detect_action(normalized)
    yield_enabled = detect_yield_preference(normalized)

    if daily_limit is not None:
        if per_tx_limit is None:
            per_tx_limit = daily_limit // 2
        if alert_threshold is None:
            alert_threshold = daily_limit * 4 // 5

    confidence = _confidence(
        daily_limit=daily_limit,
        per_tx_limit=per_tx_limit,
        alert_threshold=alert_threshold,
        min_balance=min_balance,
        action=action,
    )

    logger.debug(
        "parsed intent daily=%s per_tx=%s alert=%s min_balance=%s action=%s yield=%s confidence=%.2f",
        daily_limit,
        per_tx_limit,
        alert_threshold,
        min_balance,
        action,
        yield_enabled,
        confidence,
    )

    return ParsedIntent(
        raw_text=text,
        daily_limit=daily_limit,
        per_tx_limit=per_tx_limit,
        alert_threshold=alert_threshold,
        min_balance=min_balance,
        yield_enabled=yield_enabled,
        action=action,
        confidence=confidence,
    )

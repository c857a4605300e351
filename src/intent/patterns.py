"""English phrase patterns for spending constraints, actions and yield preference.

Each field has an ordered pattern list. Order is priority: the first pattern that matches wins and
later patterns for the same field are never tried. Keep overlapping phrasings in their current
relative order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.intent.schema import Action

# "$1,250.50" -> group 1 is "1,250.50"; the dollar sign is optional.
_AMOUNT = r"\$?([\d,]+(?:\.\d{2})?)"

# ASCII keeps \d and \b to plain digits and letters.
_FLAGS = re.IGNORECASE | re.ASCII


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, flags=_FLAGS) for p in patterns)


DAILY_LIMIT_PATTERNS = _compile(
    rf"(?:spend|trade|swap|buy|sell)\s*(?:up\s*to\s*)?{_AMOUNT}\s*(?:per\s*day|daily|/day|a\s*day)",
    rf"daily\s*(?:limit|max|maximum)\s*(?:of\s*)?{_AMOUNT}",
    rf"{_AMOUNT}\s*(?:per\s*day|daily|/day)\s*(?:limit|max)?",
    rf"limit\s*(?:my\s*)?(?:spending|trading|swaps?)\s*to\s*{_AMOUNT}\s*(?:per\s*day|daily)?",
)

PER_TX_LIMIT_PATTERNS = _compile(
    rf"(?:max|maximum)\s*(?:of\s*)?{_AMOUNT}\s*(?:per\s*(?:tx|transaction|trade|swap))",
    rf"{_AMOUNT}\s*(?:per\s*(?:tx|transaction|trade|swap))",
    rf"(?:transaction|tx|trade|swap)\s*limit\s*(?:of\s*)?{_AMOUNT}",
    rf"no\s*(?:single\s*)?(?:tx|transaction|trade|swap)\s*(?:over|above|more\s*than)\s*{_AMOUNT}",
)

ALERT_THRESHOLD_PATTERNS = _compile(
    rf"alert\s*(?:me\s*)?(?:at|when|if)\s*(?:spending|usage)?\s*"
    rf"(?:reaches?|exceeds?|hits?|over)?\s*{_AMOUNT}",
    rf"notify\s*(?:me\s*)?(?:at|when)\s*{_AMOUNT}",
    rf"{_AMOUNT}\s*(?:alert|notification)\s*(?:threshold)?",
    rf"warn\s*(?:me\s*)?(?:at|when|if)\s*{_AMOUNT}",
)

MIN_BALANCE_PATTERNS = _compile(
    rf"(?:keep|maintain|reserve)\s*(?:at\s*least\s*)?{_AMOUNT}\s*(?:minimum|min)?",
    rf"(?:minimum|min)\s*balance\s*(?:of\s*)?{_AMOUNT}",
    rf"(?:don't|do\s*not|never)\s*go\s*below\s*{_AMOUNT}",
    rf"floor\s*(?:of\s*)?{_AMOUNT}",
)


@dataclass(frozen=True)
class ActionPattern:
    """A keyword test mapped to the action it signals."""

    action: Action
    pattern: re.Pattern[str]


# Tested in this order; the first hit is the intent's action.
ACTION_PATTERNS: tuple[ActionPattern, ...] = (
    ActionPattern(Action.trade, re.compile(r"\b(?:trade|trading)\b", flags=_FLAGS)),
    ActionPattern(Action.swap, re.compile(r"\b(?:swap|swapping)\b", flags=_FLAGS)),
    ActionPattern(Action.buy, re.compile(r"\b(?:buy|buying|purchase)\b", flags=_FLAGS)),
    ActionPattern(Action.sell, re.compile(r"\b(?:sell|selling)\b", flags=_FLAGS)),
    ActionPattern(
        Action.spend, re.compile(r"\b(?:spend|spending|pay|payment)\b", flags=_FLAGS)
    ),
)

# The leading \b keeps "deactivate"/"disable" from matching the enable verbs.
YIELD_ENABLE_PATTERN = re.compile(
    r"\b(?:enable|turn\s*on|activate|yes)\s*(?:to\s*)?(?:yield|earning|interest)",
    flags=_FLAGS,
)
YIELD_DISABLE_PATTERN = re.compile(
    r"\b(?:disable|turn\s*off|deactivate|no)\s*(?:to\s*)?(?:yield|earning|interest)",
    flags=_FLAGS,
)


def detect_action(text: str) -> Action | None:
    """Return the first action whose keywords appear in the text."""

    for candidate in ACTION_PATTERNS:
        if candidate.pattern.search(text):
            return candidate.action
    return None


def detect_yield_preference(text: str) -> bool | None:
    """Whether the text asks to enable (True) or disable (False) yield; enable wins on conflict."""

    if YIELD_ENABLE_PATTERN.search(text):
        return True
    if YIELD_DISABLE_PATTERN.search(text):
        return False
    return None

"""Text normalization for deterministic intent parsing."""

from __future__ import annotations


def normalize_text(text: str) -> str:
    """Normalize user text for rules-based parsing.

    Only lower-cases and trims. Punctuation is kept because the amount patterns depend on `$`,
    `,`, `.`, `/` and apostrophes (e.g. "$1,000.50/day", "don't go below").
    """

    return (text or "").lower().strip()

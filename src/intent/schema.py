"""Parsed intent models (Pydantic).

`ParsedIntent` is the contract between the free-text parser and everything that consumes spending
constraints (validator, formatter, vault-creation defaults). Amounts are always integer base units.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Action(StrEnum):
    """Primary verb detected in an intent."""

    trade = "trade"
    swap = "swap"
    buy = "buy"
    sell = "sell"
    spend = "spend"


class ParsedIntent(BaseModel):
    """Structured spending constraints extracted from one input string."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    raw_text: str = ""
    daily_limit: int | None = Field(default=None, ge=0)
    per_tx_limit: int | None = Field(default=None, ge=0)
    alert_threshold: int | None = Field(default=None, ge=0)
    min_balance: int | None = Field(default=None, ge=0)
    yield_enabled: bool | None = None
    action: Action | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class IntentValidation(BaseModel):
    """Result of a validation pass: every violation, not just the first."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    errors: list[str] = Field(default_factory=list)


class SuggestedConstraints(BaseModel):
    """Complete constraint set to prefill a create-vault request."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    daily_limit: int = Field(ge=0)
    per_tx_limit: int = Field(ge=0)
    alert_threshold: int = Field(ge=0)
    min_balance: int = Field(default=0, ge=0)
    yield_enabled: bool = False

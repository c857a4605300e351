"""Vault state models (Pydantic).

The chain returns u64 fields as decimal strings; they are validated into Python ints, which are
arbitrary precision, so no value is truncated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ASSET_TYPE = "0x2::sui::SUI"


class VaultConstraints(BaseModel):
    """Spending rules stored on the vault object."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    daily_limit: int = Field(ge=0)
    per_tx_limit: int = Field(ge=0)
    alert_threshold: int = Field(ge=0)
    min_balance: int = Field(default=0, ge=0)
    yield_enabled: bool = False
    paused: bool = False


class VaultData(BaseModel):
    """Decoded state of one vault object."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    owner: str
    agent: str
    balance: int = Field(ge=0)
    asset_type: str = DEFAULT_ASSET_TYPE
    constraints: VaultConstraints
    spent_today: int = Field(default=0, ge=0)
    last_reset_timestamp: int = Field(default=0, ge=0)
    total_spent: int = Field(default=0, ge=0)
    tx_count: int = Field(default=0, ge=0)
    yield_position_id: str | None = None
    yield_earned: int = Field(default=0, ge=0)

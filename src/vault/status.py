"""Vault status summaries and local spend pre-flight checks.

These mirror the contract's checks so a user can see why an action would fail before signing.
They are advisory only: the contract re-checks everything on chain.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.intent.amounts import DEFAULT_DECIMALS, format_amount
from src.vault.errors import VaultErrorCode, error_message
from src.vault.schema import VaultData


class VaultStatus(BaseModel):
    """Spending summary of one vault."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    vault: VaultData
    remaining_daily: int = Field(ge=0)
    daily_usage_percent: int = Field(ge=0)
    alert_triggered: bool


class SpendCheck(BaseModel):
    """Outcome of checking one spend amount against a vault."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    vault_id: str
    amount: int = Field(ge=0)
    failures: list[VaultErrorCode] = Field(default_factory=list)
    max_allowed: int = Field(ge=0)

    @property
    def can_spend(self) -> bool:
        return not self.failures

    @property
    def reasons(self) -> list[str]:
        return [error_message(code) for code in self.failures]


def summarize_vault(vault: VaultData) -> VaultStatus:
    """Compute remaining daily allowance, usage percent and alert state."""

    daily_limit = vault.constraints.daily_limit
    remaining = max(0, daily_limit - vault.spent_today)
    usage = vault.spent_today * 100 // daily_limit if daily_limit else 0

    return VaultStatus(
        vault=vault,
        remaining_daily=remaining,
        daily_usage_percent=usage,
        alert_triggered=vault.spent_today >= vault.constraints.alert_threshold,
    )


def check_can_spend(vault: VaultData, amount: int, sender: str | None = None) -> SpendCheck:
    """Run every contract spend check locally and collect all failures.

    Args:
        vault: Current vault state.
        amount: Amount to spend, in base units.
        sender: Address that would sign; checked against the vault agent when given.
    """

    if amount < 0:
        raise ValueError("amount must be non-negative")

    constraints = vault.constraints
    failures: list[VaultErrorCode] = []

    if constraints.paused:
        failures.append(VaultErrorCode.VAULT_PAUSED)
    if sender is not None and sender != vault.agent:
        failures.append(VaultErrorCode.NOT_AGENT)
    if amount > constraints.per_tx_limit:
        failures.append(VaultErrorCode.EXCEEDS_PER_TX_LIMIT)
    if vault.spent_today + amount > constraints.daily_limit:
        failures.append(VaultErrorCode.EXCEEDS_DAILY_LIMIT)
    if amount > vault.balance:
        failures.append(VaultErrorCode.INSUFFICIENT_BALANCE)
    if vault.balance - amount < constraints.min_balance:
        failures.append(VaultErrorCode.BELOW_MIN_BALANCE)

    max_allowed = min(
        constraints.per_tx_limit,
        constraints.daily_limit - vault.spent_today,
        vault.balance,
        vault.balance - constraints.min_balance,
    )

    return SpendCheck(
        vault_id=vault.id,
        amount=amount,
        failures=failures,
        max_allowed=max(0, max_allowed),
    )


def render_vault_status(status: VaultStatus, decimals: int = DEFAULT_DECIMALS) -> str:
    """Multi-line status text for chat replies."""

    vault = status.vault
    constraints = vault.constraints

    lines = [
        f"Vault: {vault.id}",
        f"Agent: {vault.agent}",
        f"Asset: {vault.asset_type}",
        f"Status: {'paused' if constraints.paused else 'active'}",
        f"Balance: {format_amount(vault.balance, decimals)}",
        f"Spent today: {format_amount(vault.spent_today, decimals)}"
        f" of {format_amount(constraints.daily_limit, decimals)} ({status.daily_usage_percent}%)",
        f"Remaining today: {format_amount(status.remaining_daily, decimals)}",
        f"Per-transaction limit: {format_amount(constraints.per_tx_limit, decimals)}",
        f"Alert threshold: {format_amount(constraints.alert_threshold, decimals)}"
        + (" (triggered)" if status.alert_triggered else ""),
        f"Minimum balance: {format_amount(constraints.min_balance, decimals)}",
        f"Total spent: {format_amount(vault.total_spent, decimals)} in {vault.tx_count} transactions",
    ]
    if constraints.yield_enabled:
        lines.append(f"Yield earned: {format_amount(vault.yield_earned, decimals)}")
    return "\n".join(lines)


def render_spend_check(check: SpendCheck, decimals: int = DEFAULT_DECIMALS) -> str:
    """Verdict, reasons and the largest amount the vault would currently accept."""

    amount = format_amount(check.amount, decimals)
    lines = [f"Can spend {amount}: {'yes' if check.can_spend else 'no'}"]
    lines.extend(f"- {reason}" for reason in check.reasons)
    lines.append(f"Max allowed now: {format_amount(check.max_allowed, decimals)}")
    return "\n".join(lines)

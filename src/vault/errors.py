"""Vault error taxonomy shared by on-chain aborts and local pre-flight checks."""

from __future__ import annotations

import re
from enum import StrEnum


class VaultErrorCode(StrEnum):
    """Reasons the vault contract rejects an agent action."""

    NOT_AGENT = "NOT_AGENT"
    VAULT_PAUSED = "VAULT_PAUSED"
    EXCEEDS_PER_TX_LIMIT = "EXCEEDS_PER_TX_LIMIT"
    EXCEEDS_DAILY_LIMIT = "EXCEEDS_DAILY_LIMIT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    BELOW_MIN_BALANCE = "BELOW_MIN_BALANCE"
    INVALID_POOL = "INVALID_POOL"
    UNKNOWN = "UNKNOWN"


ERROR_MESSAGES: dict[VaultErrorCode, str] = {
    VaultErrorCode.NOT_AGENT: "Not authorized agent for this vault",
    VaultErrorCode.VAULT_PAUSED: "Vault is paused",
    VaultErrorCode.EXCEEDS_PER_TX_LIMIT: "Exceeds per-transaction limit",
    VaultErrorCode.EXCEEDS_DAILY_LIMIT: "Would exceed daily limit",
    VaultErrorCode.INSUFFICIENT_BALANCE: "Insufficient balance",
    VaultErrorCode.BELOW_MIN_BALANCE: "Would go below minimum balance",
    VaultErrorCode.INVALID_POOL: "Invalid pool",
    VaultErrorCode.UNKNOWN: "Unknown error",
}

# Move abort constant names and their numeric codes in the vault module.
_ABORT_PATTERNS: tuple[tuple[VaultErrorCode, re.Pattern[str]], ...] = (
    (VaultErrorCode.EXCEEDS_DAILY_LIMIT, re.compile(r"EExceedsDailyLimit|abort code: 2\b")),
    (VaultErrorCode.EXCEEDS_PER_TX_LIMIT, re.compile(r"EExceedsPerTxLimit|abort code: 3\b")),
    (VaultErrorCode.INSUFFICIENT_BALANCE, re.compile(r"EInsufficientBalance|abort code: 5\b")),
    (VaultErrorCode.VAULT_PAUSED, re.compile(r"EVaultPaused|abort code: 4\b")),
    (VaultErrorCode.NOT_AGENT, re.compile(r"ENotAgent|abort code: 1\b")),
    (VaultErrorCode.BELOW_MIN_BALANCE, re.compile(r"EBelowMinBalance|abort code: 9\b")),
    (VaultErrorCode.INVALID_POOL, re.compile(r"EInvalidPool")),
)


def error_code_from_abort(message: str | None) -> VaultErrorCode:
    """Map a transaction failure message to a `VaultErrorCode`."""

    if not message:
        return VaultErrorCode.UNKNOWN
    for code, pattern in _ABORT_PATTERNS:
        if pattern.search(message):
            return code
    return VaultErrorCode.UNKNOWN


def error_message(code: VaultErrorCode) -> str:
    """Human-readable description of an error code."""

    return ERROR_MESSAGES[code]

"""aiogram message handlers.

Every incoming message gets exactly one text reply. Chain failures and internal errors are logged
and answered with a short generic message; details never reach the chat.
"""

from __future__ import annotations

import asyncio
import logging
import re
from time import monotonic

from aiogram.filters import CommandObject
from aiogram.types import Message

from src.app import App
from src.chain.rpc import ChainRPCError
from src.intent.amounts import format_amount
from src.intent.constraints import suggest_constraints
from src.intent.format import format_intent
from src.intent.rules_parser import parse_intent
from src.intent.validate import validate_intent
from src.vault.reader import VaultDecodeError, fetch_vault, fetch_vaults_by_owner
from src.vault.status import (
    check_can_spend,
    render_spend_check,
    render_vault_status,
    summarize_vault,
)

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Describe your agent's spending rules, for example:\n"
    "Spend up to $100 per day, max $25 per trade, keep $50 minimum\n\n"
    "Commands:\n"
    "/vault <vault_id> - vault status\n"
    "/vaults <owner_address> - vaults created by an owner\n"
    "/canspend <vault_id> <amount> [sender] - check a spend (amount in base units)"
)
CHAIN_UNAVAILABLE_TEXT = "Chain is unavailable right now, try again later."
INTERNAL_ERROR_TEXT = "Something went wrong."


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


def _render_intent_reply(text: str, decimals: int) -> str:
    intent = parse_intent(text)
    validation = validate_intent(intent, decimals)

    sections = [format_intent(intent, decimals)]
    if validation.valid:
        suggested = suggest_constraints(intent, decimals)
        if suggested is not None:
            sections.append(
                "Suggested vault settings:\n"
                f"daily {format_amount(suggested.daily_limit, decimals)}, "
                f"per-tx {format_amount(suggested.per_tx_limit, decimals)}, "
                f"alert {format_amount(suggested.alert_threshold, decimals)}, "
                f"min balance {format_amount(suggested.min_balance, decimals)}, "
                f"yield {'on' if suggested.yield_enabled else 'off'}"
            )
    else:
        sections.append("Problems:\n" + "\n".join(f"- {error}" for error in validation.errors))

    logger.info(
        "intent action=%s confidence=%.2f valid=%s",
        intent.action,
        intent.confidence,
        validation.valid,
    )
    return "\n\n".join(sections)


async def handle_start(message: Message) -> None:
    """Reply with usage help."""

    await message.answer(HELP_TEXT)


async def handle_intent(message: Message, app: App) -> None:
    """Parse free text into spending constraints and reply with the confirmation text."""

    raw_text = message.text or message.caption or ""
    if not raw_text.strip() or _is_command_text(raw_text):
        await message.answer(HELP_TEXT)
        return

    # noinspection PyBroadException
    try:
        reply = _render_intent_reply(raw_text, app.settings.token_decimals)
    except Exception:
        logger.exception("intent handler failed")
        reply = INTERNAL_ERROR_TEXT

    await message.answer(reply)


async def handle_vault(message: Message, command: CommandObject, app: App) -> None:
    """`/vault <id>`: fetch the vault and reply with its spending summary."""

    args = (command.args or "").split()
    if len(args) != 1:
        await message.answer("Usage: /vault <vault_id>")
        return
    vault_id = args[0]

    started = monotonic()
    # noinspection PyBroadException
    try:
        vault = await asyncio.to_thread(fetch_vault, app.chain, vault_id)
        if vault is None:
            reply = "Vault not found."
        else:
            reply = render_vault_status(summarize_vault(vault), app.settings.token_decimals)
        logger.info(
            "vault status vault_id=%s found=%s latency_ms=%d",
            vault_id,
            vault is not None,
            int((monotonic() - started) * 1000),
        )
    except (ChainRPCError, VaultDecodeError) as exc:
        logger.warning("vault status unavailable vault_id=%s reason=%s", vault_id, exc)
        reply = CHAIN_UNAVAILABLE_TEXT
    except Exception:
        logger.exception("vault handler failed")
        reply = INTERNAL_ERROR_TEXT

    await message.answer(reply)


async def handle_can_spend(message: Message, command: CommandObject, app: App) -> None:
    """`/canspend <id> <amount> [sender]`: run the spend checks against current vault state."""

    args = (command.args or "").split()
    if len(args) not in (2, 3) or not re.fullmatch(r"\d+", args[1], flags=re.ASCII):
        await message.answer("Usage: /canspend <vault_id> <amount> [sender]")
        return
    vault_id, amount = args[0], int(args[1])
    sender = args[2] if len(args) == 3 else None

    # noinspection PyBroadException
    try:
        vault = await asyncio.to_thread(fetch_vault, app.chain, vault_id)
        if vault is None:
            reply = "Vault not found."
        else:
            check = check_can_spend(vault, amount, sender=sender)
            reply = render_spend_check(check, app.settings.token_decimals)
            logger.info(
                "spend check vault_id=%s amount=%d can_spend=%s failures=%s",
                vault_id,
                amount,
                check.can_spend,
                ",".join(check.failures),
            )
    except (ChainRPCError, VaultDecodeError) as exc:
        logger.warning("spend check unavailable vault_id=%s reason=%s", vault_id, exc)
        reply = CHAIN_UNAVAILABLE_TEXT
    except Exception:
        logger.exception("can-spend handler failed")
        reply = INTERNAL_ERROR_TEXT

    await message.answer(reply)


async def handle_owner_vaults(message: Message, command: CommandObject, app: App) -> None:
    """`/vaults <owner>`: list the vaults created by an owner address."""

    args = (command.args or "").split()
    if len(args) != 1:
        await message.answer("Usage: /vaults <owner_address>")
        return
    owner = args[0]

    if not app.settings.package_id:
        await message.answer("Vault lookup by owner is not configured.")
        return

    # noinspection PyBroadException
    try:
        vaults = await asyncio.to_thread(
            fetch_vaults_by_owner, app.chain, owner, app.settings.package_id
        )
        if not vaults:
            reply = "No vaults found."
        else:
            decimals = app.settings.token_decimals
            reply = "\n".join(
                f"{vault.id}: balance {format_amount(vault.balance, decimals)}, "
                f"daily limit {format_amount(vault.constraints.daily_limit, decimals)}"
                + (" (paused)" if vault.constraints.paused else "")
                for vault in vaults
            )
        logger.info("owner vaults owner=%s count=%d", owner, len(vaults))
    except (ChainRPCError, VaultDecodeError) as exc:
        logger.warning("owner vaults unavailable owner=%s reason=%s", owner, exc)
        reply = CHAIN_UNAVAILABLE_TEXT
    except Exception:
        logger.exception("owner vaults handler failed")
        reply = INTERNAL_ERROR_TEXT

    await message.answer(reply)

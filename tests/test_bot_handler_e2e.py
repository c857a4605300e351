"""Tests for the aiogram message handlers.

Every incoming message must produce exactly one reply. Chain failures must be reported with a
generic message and never leak RPC details into the chat.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from src.bot.handlers import (
    CHAIN_UNAVAILABLE_TEXT,
    HELP_TEXT,
    handle_can_spend,
    handle_intent,
    handle_owner_vaults,
    handle_start,
    handle_vault,
)
from src.chain.rpc import ChainRPCError

VAULT_ID = "0x" + "ab" * 32
OWNER = "0x" + "01" * 32
UNIT = 10 ** 9


class _FakeMessage:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.caption = None
        self.answers: list[str] = []

    async def answer(self, text: str) -> None:
        """Record the outgoing bot reply (aiogram's `Message.answer` substitute)."""
        self.answers.append(text)


class _FakeChain:
    def __init__(self, objects: dict[str, Any], *, fail: bool = False) -> None:
        self.objects = objects
        self.fail = fail

    def get_object(self, object_id: str) -> dict[str, Any]:
        if self.fail:
            raise ChainRPCError("RPC HTTP error: 503")
        return self.objects.get(object_id, {"error": {"code": "notExists"}})

    def query_events(self, move_event_type: str, *, limit: int = 50) -> list[dict[str, Any]]:
        if self.fail:
            raise ChainRPCError("RPC connection error")
        return [{"parsedJson": {"vault_id": VAULT_ID, "owner": OWNER}}]


def _make_app(chain: _FakeChain | None = None, package_id: str = "0xfeed") -> Any:
    return SimpleNamespace(
        settings=SimpleNamespace(token_decimals=9, package_id=package_id),
        chain=chain or _FakeChain({}),
    )


def _command(args: str | None) -> Any:
    return SimpleNamespace(args=args)


def _single_reply(message: _FakeMessage) -> str:
    assert len(message.answers) == 1
    return message.answers[0]


@pytest.mark.asyncio
async def test_start_replies_with_help() -> None:
    message = _FakeMessage("/start")

    await handle_start(message)  # type: ignore[arg-type]

    assert _single_reply(message) == HELP_TEXT


@pytest.mark.asyncio
async def test_intent_reply_for_valid_text() -> None:
    message = _FakeMessage("Spend up to $100 per day, keep $50 minimum")

    await handle_intent(message, _make_app())  # type: ignore[arg-type]

    reply = _single_reply(message)
    assert reply.startswith("Action: spend\nDaily limit: $100.00")
    assert "Minimum balance: $50.00" in reply
    assert "Suggested vault settings:" in reply
    assert "per-tx $50.00" in reply
    assert "Problems:" not in reply


@pytest.mark.asyncio
async def test_intent_reply_lists_every_problem() -> None:
    message = _FakeMessage("Spend $50 per day, max $80 per trade")

    await handle_intent(message, _make_app())  # type: ignore[arg-type]

    reply = _single_reply(message)
    assert "Problems:\n- Per-transaction limit cannot exceed daily limit" in reply
    assert "Suggested vault settings:" not in reply


@pytest.mark.asyncio
async def test_intent_reply_for_unparseable_text() -> None:
    message = _FakeMessage("hello")

    await handle_intent(message, _make_app())  # type: ignore[arg-type]

    assert _single_reply(message) == (
        "Confidence: 0%\n\nProblems:\n- Could not determine daily limit from intent"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "   ", "/unknown"])
async def test_intent_handler_replies_help_for_empty_or_command(text: str | None) -> None:
    message = _FakeMessage(text)

    await handle_intent(message, _make_app())  # type: ignore[arg-type]

    assert _single_reply(message) == HELP_TEXT


@pytest.mark.asyncio
async def test_vault_status(vault_object: dict[str, Any]) -> None:
    message = _FakeMessage(f"/vault {VAULT_ID}")
    app = _make_app(_FakeChain({VAULT_ID: vault_object}))

    await handle_vault(message, _command(VAULT_ID), app)  # type: ignore[arg-type]

    reply = _single_reply(message)
    assert reply.startswith(f"Vault: {VAULT_ID}")
    assert "Spent today: $30.00 of $100.00 (30%)" in reply


@pytest.mark.asyncio
async def test_vault_not_found() -> None:
    message = _FakeMessage("/vault 0xmissing")

    await handle_vault(message, _command("0xmissing"), _make_app())  # type: ignore[arg-type]

    assert _single_reply(message) == "Vault not found."


@pytest.mark.asyncio
async def test_vault_usage_without_id() -> None:
    message = _FakeMessage("/vault")

    await handle_vault(message, _command(None), _make_app())  # type: ignore[arg-type]

    assert _single_reply(message) == "Usage: /vault <vault_id>"


@pytest.mark.asyncio
async def test_vault_chain_failure_is_not_leaked() -> None:
    message = _FakeMessage(f"/vault {VAULT_ID}")
    app = _make_app(_FakeChain({}, fail=True))

    await handle_vault(message, _command(VAULT_ID), app)  # type: ignore[arg-type]

    assert _single_reply(message) == CHAIN_UNAVAILABLE_TEXT


@pytest.mark.asyncio
async def test_can_spend(vault_object: dict[str, Any]) -> None:
    message = _FakeMessage(f"/canspend {VAULT_ID} {30 * UNIT}")
    app = _make_app(_FakeChain({VAULT_ID: vault_object}))

    await handle_can_spend(message, _command(f"{VAULT_ID} {30 * UNIT}"), app)  # type: ignore[arg-type]

    assert _single_reply(message) == (
        "Can spend $30.00: no\n"
        "- Exceeds per-transaction limit\n"
        "Max allowed now: $25.00"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "args", [None, VAULT_ID, f"{VAULT_ID} ten", f"{VAULT_ID} -5", f"{VAULT_ID} ²", f"{VAULT_ID} ١٠"]
)
async def test_can_spend_usage(args: str | None) -> None:
    message = _FakeMessage(f"/canspend {args or ''}")

    await handle_can_spend(message, _command(args), _make_app())  # type: ignore[arg-type]

    assert _single_reply(message) == "Usage: /canspend <vault_id> <amount> [sender]"


@pytest.mark.asyncio
async def test_owner_vaults(vault_object: dict[str, Any]) -> None:
    message = _FakeMessage(f"/vaults {OWNER}")
    app = _make_app(_FakeChain({VAULT_ID: vault_object}))

    await handle_owner_vaults(message, _command(OWNER), app)  # type: ignore[arg-type]

    assert _single_reply(message) == f"{VAULT_ID}: balance $500.00, daily limit $100.00"


@pytest.mark.asyncio
async def test_owner_vaults_requires_package_id() -> None:
    message = _FakeMessage(f"/vaults {OWNER}")

    await handle_owner_vaults(message, _command(OWNER), _make_app(package_id=""))  # type: ignore[arg-type]

    assert _single_reply(message) == "Vault lookup by owner is not configured."


@pytest.mark.asyncio
async def test_owner_vaults_chain_failure() -> None:
    message = _FakeMessage(f"/vaults {OWNER}")
    app = _make_app(_FakeChain({}, fail=True))

    await handle_owner_vaults(message, _command(OWNER), app)  # type: ignore[arg-type]

    assert _single_reply(message) == CHAIN_UNAVAILABLE_TEXT

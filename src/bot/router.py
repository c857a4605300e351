"""Bot router composition."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart

from src.bot.handlers import (
    handle_can_spend,
    handle_intent,
    handle_owner_vaults,
    handle_start,
    handle_vault,
)

router = Router(name="root")
router.message.register(handle_start, CommandStart())
router.message.register(handle_start, Command("help"))
router.message.register(handle_vault, Command("vault"))
router.message.register(handle_owner_vaults, Command("vaults"))
router.message.register(handle_can_spend, Command("canspend"))
router.message.register(handle_intent)

"""Logging configuration for the vault bot process."""

from __future__ import annotations

import logging
import os


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    Logs are for operators only; chain errors and stack traces are never echoed to chat users.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    logging.getLogger("aiogram.event").setLevel(logging.WARNING)

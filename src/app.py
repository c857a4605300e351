"""Application composition root.

This module wires together configuration and the chain RPC client for the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.chain.rpc import SuiRpcClient, create_rpc_client
from src.config.settings import Settings


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    chain: SuiRpcClient


def create_app(settings: Settings) -> App:
    """Create the application container."""

    chain = create_rpc_client(settings.rpc_url, timeout_s=settings.rpc_timeout_s)
    return App(settings=settings, chain=chain)

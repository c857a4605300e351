"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SuiNetwork = Literal["mainnet", "testnet", "devnet", "localnet"]

NETWORK_RPC_URLS: dict[str, str] = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")

    sui_network: SuiNetwork = Field(default="testnet", alias="SUI_NETWORK")
    sui_rpc_url: str | None = Field(default=None, alias="SUI_RPC_URL")
    package_id: str = Field(default="", alias="PACKAGE_ID")
    rpc_timeout_s: float = Field(default=30.0, gt=0, alias="RPC_TIMEOUT_S")

    # Most Sui testnet tokens (SUI itself, DBUSDC) use 9 decimals.
    token_decimals: int = Field(default=9, ge=0, le=18, alias="TOKEN_DECIMALS")

    @field_validator("sui_network", mode="before")
    @classmethod
    def normalize_network(cls, value: object) -> object:
        """Accept network names case-insensitively (e.g. `Testnet`)."""

        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def rpc_url(self) -> str:
        """Explicit `SUI_RPC_URL` if set, otherwise the public full node for the network."""

        if self.sui_rpc_url:
            return self.sui_rpc_url
        return NETWORK_RPC_URLS[self.sui_network]


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc

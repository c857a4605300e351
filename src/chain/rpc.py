"""Minimal Sui JSON-RPC client.

Only the read calls the vault layer needs are wrapped. Transaction building, signing and
broadcasting belong to the wallet and are not handled here.
"""

from __future__ import annotations

import itertools
import json
import os
from dataclasses import dataclass, field
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from dotenv import load_dotenv


class ChainRPCError(RuntimeError):
    """Raised when a JSON-RPC call fails or returns an unexpected payload."""


@dataclass(frozen=True)
class RpcConfig:
    """Where and how to reach a Sui full node."""

    url: str
    timeout_s: float = 30.0


@dataclass
class SuiRpcClient:
    """Blocking JSON-RPC 2.0 client; run it in a worker thread from async code."""

    config: RpcConfig
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1), repr=False)

    def call(self, method: str, params: list[Any]) -> Any:
        """Invoke `method` and return the `result` member of the response."""

        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        req = Request(
            self.config.url,
            method="POST",
            headers={"Content-Type": "application/json"},
            data=json.dumps(payload).encode(),
        )

        try:
            with urlopen(req, timeout=self.config.timeout_s) as resp:  # noqa: S310 (configured node URL)
                body = resp.read()
        except HTTPError as exc:
            raise ChainRPCError(f"RPC HTTP error: {exc.code}") from exc
        except URLError as exc:
            raise ChainRPCError("RPC connection error") from exc

        try:
            decoded = json.loads(body)
        except json.JSONDecodeError as exc:
            raise ChainRPCError("RPC returned invalid JSON") from exc

        if not isinstance(decoded, dict):
            raise ChainRPCError("Unexpected RPC response format")
        if decoded.get("error"):
            error = decoded["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ChainRPCError(f"RPC error in {method}: {message}")
        if "result" not in decoded:
            raise ChainRPCError("Unexpected RPC response format")
        return decoded["result"]

    def get_object(self, object_id: str) -> dict[str, Any]:
        """Fetch an object with its Move content and type."""

        return self.call("sui_getObject", [object_id, {"showContent": True, "showType": True}])

    def query_events(self, move_event_type: str, *, limit: int = 50) -> list[dict[str, Any]]:
        """Return the most recent events of a Move event type (newest first)."""

        result = self.call(
            "suix_queryEvents",
            [{"MoveEventType": move_event_type}, None, limit, True],
        )
        return list((result or {}).get("data") or [])

    def get_balance(self, owner: str) -> int:
        """Total balance of the owner's SUI coins, in base units."""

        result = self.call("suix_getBalance", [owner])
        return int((result or {}).get("totalBalance") or 0)


def create_rpc_client(rpc_url: str | None = None, *, timeout_s: float = 30.0) -> SuiRpcClient:
    """Create an RPC client.

    If `rpc_url` is omitted, the function loads `.env` and reads `SUI_RPC_URL`.
    """

    if rpc_url is None:
        load_dotenv(".env")
        rpc_url = os.getenv("SUI_RPC_URL")
        if not rpc_url:
            raise RuntimeError("SUI_RPC_URL is required (set it in .env or environment)")

    return SuiRpcClient(RpcConfig(url=rpc_url, timeout_s=timeout_s))

"""Vault state reader.

Decodes `sui_getObject` responses into `VaultData`. Decoding is pure; the fetch helpers only add
the RPC calls and leave RPC failures to the caller.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from src.chain.rpc import SuiRpcClient
from src.vault.schema import DEFAULT_ASSET_TYPE, VaultConstraints, VaultData

logger = logging.getLogger(__name__)

OWNER_SCAN_LIMIT = 50

# "0xabc::vault::Vault<0x2::sui::SUI>" -> "0x2::sui::SUI"
_GENERIC_ARG_RE = re.compile(r"<(.+)>$")


class VaultDecodeError(ValueError):
    """Raised when a Move object looks like a vault but its fields are malformed."""


def _option_value(raw: Any) -> str | None:
    """Unwrap a Move `Option` rendered as `{"vec": [value]}`, a bare value, or null."""

    if isinstance(raw, dict):
        vec = raw.get("vec")
        if isinstance(vec, list) and vec:
            return str(vec[0])
        return None
    if isinstance(raw, str) and raw:
        return raw
    return None


def _balance_value(raw: Any) -> str:
    if isinstance(raw, dict) and isinstance(raw.get("value"), str):
        return raw["value"]
    if isinstance(raw, str):
        return raw
    return "0"


def _struct_fields(raw: Any) -> dict[str, Any]:
    """Return the fields of a nested Move struct, whether wrapped in `{"fields": ...}` or not."""

    if isinstance(raw, dict):
        inner = raw.get("fields")
        if isinstance(inner, dict):
            return inner
        return raw
    return {}


def _asset_type(object_type: str | None) -> str:
    if not object_type:
        return DEFAULT_ASSET_TYPE
    match = _GENERIC_ARG_RE.search(object_type)
    return match.group(1) if match else DEFAULT_ASSET_TYPE


def vault_from_object(object_id: str, response: dict[str, Any] | None) -> VaultData | None:
    """Decode a `sui_getObject` result.

    Returns:
        `None` if the object does not exist or is not a Move object.

    Raises:
        VaultDecodeError: If the Move object fields do not form a valid vault.
    """

    data = (response or {}).get("data") or {}
    content = data.get("content") or {}
    if content.get("dataType") != "moveObject":
        return None

    fields = content.get("fields") or {}
    constraints = _struct_fields(fields.get("constraints"))

    try:
        return VaultData(
            id=object_id,
            owner=fields.get("owner"),
            agent=fields.get("agent"),
            balance=_balance_value(fields.get("balance")),
            asset_type=_asset_type(data.get("type") or content.get("type")),
            constraints=VaultConstraints(
                daily_limit=constraints.get("daily_limit"),
                per_tx_limit=constraints.get("per_tx_limit"),
                alert_threshold=constraints.get("alert_threshold"),
                min_balance=constraints.get("min_balance") or 0,
                yield_enabled=bool(constraints.get("yield_enabled")),
                paused=bool(constraints.get("paused")),
            ),
            spent_today=fields.get("spent_today") or 0,
            last_reset_timestamp=fields.get("last_reset_timestamp") or 0,
            total_spent=fields.get("total_spent") or 0,
            tx_count=fields.get("tx_count") or 0,
            yield_position_id=_option_value(fields.get("yield_position_id")),
            yield_earned=fields.get("yield_earned") or 0,
        )
    except ValidationError as exc:
        raise VaultDecodeError(f"malformed vault object {object_id}: {exc}") from exc


def fetch_vault(client: SuiRpcClient, vault_id: str) -> VaultData | None:
    """Fetch and decode one vault (`None` if the object is missing)."""

    return vault_from_object(vault_id, client.get_object(vault_id))


def fetch_vaults_by_owner(client: SuiRpcClient, owner: str, package_id: str) -> list[VaultData]:
    """Find the owner's vaults among the most recent `VaultCreated` events.

    Vaults are shared objects, so ownership is discovered through creation events rather than an
    owned-objects query. Only the latest `OWNER_SCAN_LIMIT` events are scanned.
    """

    events = client.query_events(f"{package_id}::events::VaultCreated", limit=OWNER_SCAN_LIMIT)

    vaults: list[VaultData] = []
    seen: set[str] = set()
    for event in events:
        parsed = event.get("parsedJson") or {}
        vault_id = parsed.get("vault_id")
        if not vault_id or parsed.get("owner") != owner or vault_id in seen:
            continue
        seen.add(vault_id)

        vault = fetch_vault(client, vault_id)
        if vault is None:
            logger.info("vault from event no longer readable vault_id=%s", vault_id)
            continue
        vaults.append(vault)

    return vaults

"""Pytest configuration and shared fixtures.

The repository uses a flat `src/` namespace. Inserting the repo root keeps `import src...` working
when running `pytest` without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

VAULT_ID = "0x" + "ab" * 32
OWNER = "0x" + "01" * 32
AGENT = "0x" + "02" * 32
UNIT = 10 ** 9


@pytest.fixture
def vault_object() -> dict[str, Any]:
    """A `sui_getObject` result for a SUI vault, shaped like the full node returns it."""

    return {
        "data": {
            "objectId": VAULT_ID,
            "type": "0xfeed::vault::Vault<0x2::sui::SUI>",
            "content": {
                "dataType": "moveObject",
                "type": "0xfeed::vault::Vault<0x2::sui::SUI>",
                "fields": {
                    "owner": OWNER,
                    "agent": AGENT,
                    "balance": str(500 * UNIT),
                    "constraints": {
                        "type": "0xfeed::vault::Constraints",
                        "fields": {
                            "daily_limit": str(100 * UNIT),
                            "per_tx_limit": str(25 * UNIT),
                            "alert_threshold": str(80 * UNIT),
                            "min_balance": str(50 * UNIT),
                            "yield_enabled": False,
                            "paused": False,
                        },
                    },
                    "spent_today": str(30 * UNIT),
                    "last_reset_timestamp": "1760000000000",
                    "total_spent": str(230 * UNIT),
                    "tx_count": "12",
                    "yield_position_id": {"vec": []},
                    "yield_earned": "0",
                },
            },
        }
    }

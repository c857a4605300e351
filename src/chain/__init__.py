"""Sui chain access (read-only JSON-RPC)."""

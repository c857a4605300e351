"""Vault state reading and local pre-flight checks against vault constraints."""

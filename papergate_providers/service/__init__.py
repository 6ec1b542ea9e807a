"""Operator-facing entrypoints (CLI)."""

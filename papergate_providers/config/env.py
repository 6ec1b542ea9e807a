"""papergate_providers.config.env
===============================

Environment variable mapping and helpers for provider credentials and
per-provider overrides.

Design Notes
------------
- ``ENV_PREFIX`` maps a provider id to the prefix of its variables:
  ``<PREFIX>_API_KEY``, ``<PREFIX>_BASE_URL``, ``<PREFIX>_MODEL``,
  ``<PREFIX>_TIMEOUT_MS``.
- Providers that historically accepted several key variables list them in
  ``ENV_ALIASES`` with the canonical name first to establish precedence.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and let the caller decide.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_PREFIX: Dict[str, str] = {
    "openai": "OPENAI",
    "openai-compat": "OPENAI_COMPAT",
    "openrouter": "OPENROUTER",
    "gemini": "GEMINI",
    "anthropic": "ANTHROPIC",
    "ark": "ARK",
}

# Provider → ordered tuple of acceptable API key variables (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "ark": ("ARK_API_KEY", "VOLCANOARK_API_KEY"),
}


def env_prefix(provider: str) -> str:
    """Return the variable prefix for a provider (derived for unknown ids)."""
    p = (provider or "").strip().lower()
    return ENV_PREFIX.get(p, p.upper().replace("-", "_"))


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test credential.

    Heuristics (case-insensitive): contains ``placeholder``, ``changeme`` or
    ``your_``, or starts with ``test_``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "your_" in v or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    """Canonical API key variable for a known provider, else ``None``."""
    p = (provider or "").strip().lower()
    if p not in ENV_PREFIX:
        return None
    return f"{ENV_PREFIX[p]}_API_KEY"


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API key variables, canonical first."""
    p = (provider or "").strip().lower()
    canonical = get_env_var_name(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable)`` for the first non-placeholder key set.

    ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_PREFIX",
    "ENV_ALIASES",
    "env_prefix",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]

"""Unified configuration layer for the gateway.

Goals
-----
* Centralize defaults (endpoints, models).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``PROVIDERS_CONFIG_FILE``
    3. Environment variables (``OPENAI_API_KEY``, ``GEMINI_MODEL`` ...)
    4. In-code overrides passed to the helper
* Return a validated :class:`ProviderConfig`.

Environment Variable Conventions
--------------------------------
``<PREFIX>_API_KEY``, ``<PREFIX>_BASE_URL``, ``<PREFIX>_MODEL``,
``<PREFIX>_TIMEOUT_MS`` with the prefix from ``config.env.ENV_PREFIX``
(e.g. ``OPENAI_COMPAT_BASE_URL``). Key aliases such as ``GOOGLE_API_KEY``
are honoured.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example::

    openai:
      model: gpt-4o
    ark:
      base_url: https://ark.cn-beijing.volces.com/api/v3
      vendor_options:
        answer_language: Chinese

Public API
----------
* get_provider_config(provider, overrides=None) -> ProviderConfig
* get_model(provider) -> str | None
* reset_config_cache()
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from ..base.models import ProviderConfig
from ..base.registry import normalize_provider_id
from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    ARK_DEFAULT_BASE_URL,
    ARK_DEFAULT_MODEL,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    OPENAI_COMPAT_DEFAULT_BASE_URL,
    OPENAI_COMPAT_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .env import env_prefix, resolve_provider_key


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL, "model": OPENAI_DEFAULT_MODEL},
    "openai-compat": {"base_url": OPENAI_COMPAT_DEFAULT_BASE_URL, "model": OPENAI_COMPAT_DEFAULT_MODEL},
    "openrouter": {"base_url": OPENROUTER_DEFAULT_BASE_URL, "model": OPENROUTER_DEFAULT_MODEL},
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL, "model": GEMINI_DEFAULT_MODEL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL, "model": ANTHROPIC_DEFAULT_MODEL},
    "ark": {"base_url": ARK_DEFAULT_BASE_URL, "model": ARK_DEFAULT_MODEL},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
    "request_timeout_ms": "TIMEOUT_MS",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None


def reset_config_cache() -> None:
    """Forget the parsed external config file (tests, hot reload)."""
    global _FILE_CACHE  # noqa: PLW0603 - module cache
    _FILE_CACHE = None


def _load_external_config() -> Dict[str, Any]:
    """Load ``PROVIDERS_CONFIG_FILE`` once; unreadable files yield ``{}``."""
    global _FILE_CACHE  # noqa: PLW0603 - module cache
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = {normalize_provider_id(k): v for k, v in data.items() if isinstance(k, str)}
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = env_prefix(provider)
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    # keys go through alias and placeholder resolution
    key, _ = resolve_provider_key(provider)
    if key:
        out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> ProviderConfig:
    """Return the merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored; ``vendor_options`` mappings
    are merged key by key rather than replaced.

    Raises:
        pydantic.ValidationError: When a merged value fails validation
            (e.g. a non-numeric ``*_TIMEOUT_MS``).
    """
    name = normalize_provider_id(provider)
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    vendor_options: Dict[str, Any] = {}

    def _merge(source: Dict[str, Any]) -> None:
        for k, v in source.items():
            if v is None:
                continue
            if k == "vendor_options" and isinstance(v, dict):
                vendor_options.update(v)
            else:
                cfg[k] = v

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        _merge(file_cfg)
    _merge(_env_overrides(name))
    if overrides:
        _merge(overrides)
    cfg["vendor_options"] = vendor_options
    return ProviderConfig(**cfg)


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).model or None


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]

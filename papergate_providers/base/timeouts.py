"""Unified timeout utilities for the gateway.

Every call carries a single request timeout in milliseconds. It bounds both
the httpx request timeout and the wall-clock deadline the stream session
checks between chunks; expiry is reported through the same abort and
partial-result path as a vendor HTTP error.

Key Components
--------------
TimeoutConfig
    Frozen dataclass with the process-wide defaults. Fields are stable.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the relevant variables change). Supported
    environment variables (all optional, milliseconds):
        PROVIDERS_REQUEST_TIMEOUT_MS
        PROVIDERS_MIN_REQUEST_TIMEOUT_MS
        PROVIDERS_CONNECTIVITY_TIMEOUT_MS

resolve_request_timeout_ms(configured)
    Applies the default and the enforced floor to a per-call value.

Deadline
    Monotonic wall-clock deadline for one call.

Failure Modes
-------------
None. Invalid or non-positive values fall back to defaults.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
import time
from typing import Optional, Union

from .constants import (
    CONNECTIVITY_TEST_TIMEOUT_MS,
    DEFAULT_REQUEST_TIMEOUT_MS,
    MIN_REQUEST_TIMEOUT_MS,
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (milliseconds).

    Attributes:
        request_timeout_ms: Default per-call timeout when the caller sets none.
        min_request_timeout_ms: Floor applied to every resolved call timeout.
        connectivity_timeout_ms: Fixed timeout for connectivity tests.
    """

    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    min_request_timeout_ms: int = MIN_REQUEST_TIMEOUT_MS
    connectivity_timeout_ms: int = CONNECTIVITY_TEST_TIMEOUT_MS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = (
    "PROVIDERS_REQUEST_TIMEOUT_MS",
    "PROVIDERS_MIN_REQUEST_TIMEOUT_MS",
    "PROVIDERS_CONNECTIVITY_TIMEOUT_MS",
)


def _coerce_ms(raw: Union[int, float, str, None]) -> Optional[int]:
    """Return a positive integer millisecond value or ``None``."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        val = int(float(raw))
    except (TypeError, ValueError):
        return None
    return val if val > 0 else None


def _parse_env_ms(name: str, default: int) -> int:
    val = _coerce_ms(os.getenv(name))
    return default if val is None else val


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        request_timeout_ms=_parse_env_ms("PROVIDERS_REQUEST_TIMEOUT_MS", DEFAULT_REQUEST_TIMEOUT_MS),
        min_request_timeout_ms=_parse_env_ms("PROVIDERS_MIN_REQUEST_TIMEOUT_MS", MIN_REQUEST_TIMEOUT_MS),
        connectivity_timeout_ms=_parse_env_ms("PROVIDERS_CONNECTIVITY_TIMEOUT_MS", CONNECTIVITY_TEST_TIMEOUT_MS),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def resolve_request_timeout_ms(configured: Union[int, float, str, None] = None) -> int:
    """Resolve the effective per-call timeout.

    Parameters
    ----------
    configured:
        Caller-provided timeout in milliseconds. ``None``, non-numeric and
        non-positive values select the configured default.

    Returns
    -------
    int
        Timeout in milliseconds, never below the configured floor.
    """
    cfg = get_timeout_config()
    val = _coerce_ms(configured)
    if val is None:
        val = cfg.request_timeout_ms
    return max(val, cfg.min_request_timeout_ms)


def ms_to_seconds(ms: int) -> float:
    return ms / 1000.0


class Deadline:
    """Monotonic deadline for one call."""

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        self._expires_at = time.monotonic() + ms_to_seconds(timeout_ms)

    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at

    def remaining_seconds(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "resolve_request_timeout_ms",
    "ms_to_seconds",
    "Deadline",
]

"""Shared HTTP client pool for the gateway.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so every
    adapter call shares connections. Per-call timeouts are passed on each
    request by the transport; the pool default only guards callers that use
    a client directly.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``. Adapters use full URLs,
      so the gateway transport keys on purpose alone (``base_url=None``).
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config, ms_to_seconds

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client for relative
            requests. ``None`` groups clients under a shared key.
        purpose: Short pool discriminator (e.g. ``"gateway"``, ``"cli"``).

    Returns:
        A reusable ``httpx.Client`` instance.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = ms_to_seconds(get_timeout_config().request_timeout_ms)
        if base_url:
            client = httpx.Client(base_url=base_url, timeout=timeout)
        else:
            client = httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # teardown failures during interpreter exit are not actionable
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]

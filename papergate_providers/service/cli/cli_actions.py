"""CLI action handlers.

Purpose
-------
Subcommand handlers for the gateway CLI, keeping the entrypoint minimal
(thin presentation layer). This module has no top-level side effects and is
safe to import in tests.

Fallback & Error Semantics
--------------------------
- Configuration problems (unknown provider, missing key or URL) print a JSON
  hint to stderr and return ``2`` before any network access.
- Call failures print JSON to stderr and return ``1``; connectivity failures
  include the full diagnostics bundle.
- Streamed text goes to stdout only; console log handlers are detached while
  streaming so JSON log lines never interleave with output.
"""

from __future__ import annotations

import argparse
import base64
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ...base.errors import ConnectivityTestError, ProviderConfigError, ProviderError
from ...base.logging import get_logger, log_event
from ...base.models import ProviderConfig
from ...client import GatewayClient, get_client
from ...config.env import get_env_var_candidates
from .cli_utils import emit_json, suppress_console_logs

_logger = get_logger("cli")


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "model": getattr(args, "model", None),
        "base_url": getattr(args, "base_url", None),
        "request_timeout_ms": getattr(args, "timeout_ms", None),
    }
    if hasattr(args, "stream"):
        out["stream"] = args.stream
    return out


def _resolve(args: argparse.Namespace, client: GatewayClient):
    """Return ``(provider_id, config)`` or an exit code on configuration errors."""
    try:
        adapter = client.provider(args.provider)
    except ProviderConfigError as exc:
        emit_json({"error": exc.message, "available": client.list_providers()}, sys.stderr)
        return None, 2
    config = client.config(adapter.provider_id, **_overrides(args))
    missing = config.missing_fields()
    if missing:
        hint: Dict[str, Any] = {"error": f"missing {', '.join(missing)} for provider '{adapter.provider_id}'"}
        if "api_key" in missing:
            hint["set_one_of_env"] = list(get_env_var_candidates(adapter.provider_id))
        emit_json(hint, sys.stderr)
        return None, 2
    return (adapter.provider_id, config), 0


def handle_providers(args: argparse.Namespace, *, client: Optional[GatewayClient] = None) -> int:
    client = client or get_client()
    ids = client.list_providers()
    if args.json:
        emit_json(ids, sys.stdout)
    else:
        sys.stdout.write("\n".join(ids) + "\n")
    return 0


def handle_test(args: argparse.Namespace, *, client: Optional[GatewayClient] = None) -> int:
    """Run a connectivity test and print the report.

    Returns
    -------
    int
        ``0`` on success, ``1`` with diagnostics on stderr on failure, ``2``
        on configuration errors.
    """
    client = client or get_client()
    resolved, code = _resolve(args, client)
    if resolved is None:
        return code
    provider_id, config = resolved
    try:
        report = client.test_connection(provider_id, config)
    except ConnectivityTestError as exc:
        emit_json({"provider": provider_id, "model": exc.model, **exc.diagnostics.to_dict()}, sys.stderr)
        return 1
    sys.stdout.write(report + "\n")
    return 0


def _read_document(path: Path, encoded: bool) -> str:
    if encoded:
        return base64.b64encode(path.read_bytes()).decode("ascii")
    return path.read_text(encoding="utf-8")


def handle_summarize(args: argparse.Namespace, *, client: Optional[GatewayClient] = None) -> int:
    """Summarize ``--file`` and stream increments to stdout.

    Blocking calls print the final text once. Partial results (stream failed
    after output began) are printed like complete ones; the failure itself is
    visible in the ``stream.partial`` log event.
    """
    client = client or get_client()
    path = Path(args.file)
    if not path.is_file():
        emit_json({"error": f"file not found: {args.file}"}, sys.stderr)
        return 2
    resolved, code = _resolve(args, client)
    if resolved is None:
        return code
    provider_id, config = resolved
    content = _read_document(path, args.encoded)
    log_event(_logger, "cli.summarize", provider=provider_id, encoded=args.encoded, chars=len(content))

    def _write(delta: str) -> None:
        sys.stdout.write(delta)
        sys.stdout.flush()

    try:
        with suppress_console_logs():
            client.summarize(
                content,
                is_encoded=args.encoded,
                prompt=args.prompt,
                provider=provider_id,
                config=config,
                on_progress=_write,
            )
    except ProviderError as exc:
        sys.stdout.write("\n")
        emit_json({"error": exc.code.value, "message": str(exc), "status": exc.status}, sys.stderr)
        return 1
    sys.stdout.write("\n")
    return 0


__all__ = ["handle_providers", "handle_test", "handle_summarize"]

"""CLI parser construction for papergate-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    Parameters
    ----------
    v: str | None
        Incoming string value (e.g., "true", "false", "1", "0"). When ``None``
        and used via argparse with ``const=True``, this returns ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean and defaults to ``True`` so the
    CLI mirrors the gateway default; ``--no-stream`` forces a blocking call.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=True)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def add_connection_flags(parser: argparse.ArgumentParser) -> None:
    """Per-invocation overrides layered over file and environment config."""
    parser.add_argument("--provider", default=None, help="provider id (default: openai)")
    parser.add_argument("--model", default=None)
    parser.add_argument("--base-url", default=None)
    parser.add_argument("--timeout-ms", type=int, default=None)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``providers``, ``test`` and ``summarize`` subcommands.
    """
    p = argparse.ArgumentParser(prog="papergate-cli", description="LLM gateway operator CLI")
    p.add_argument("--log-level", default=None, help="debug/info/warning/error or a synonym such as quiet")
    sub = p.add_subparsers(dest="cmd")

    p_list = sub.add_parser("providers", help="List registered provider ids")
    p_list.add_argument("--json", action="store_true")

    p_test = sub.add_parser("test", help="Run a connectivity test and print the report")
    add_connection_flags(p_test)

    p_sum = sub.add_parser("summarize", help="Summarize a document, streaming text to stdout")
    add_connection_flags(p_sum)
    p_sum.add_argument("--file", required=True, help="text file, or PDF with --encoded")
    p_sum.add_argument("--prompt", default=None)
    p_sum.add_argument("--encoded", action="store_true", help="send the file as a base64 document")
    add_stream_flags(p_sum)

    return p


__all__ = ["build_parser", "add_stream_flags", "add_connection_flags"]

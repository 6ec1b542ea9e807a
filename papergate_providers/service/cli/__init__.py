"""Gateway operator CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no provider logic directly; every call goes through the
:class:`GatewayClient` facade.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import handle_providers, handle_summarize, handle_test
from .cli_parser import build_parser
from .cli_utils import parse_verbosity


def main(argv: Optional[list[str]] = None, *, client=None) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.
	client: Optional[GatewayClient]
		Facade to dispatch through; the process-wide one when omitted
		(tests inject a client bound to a fake transport).

	Returns
	-------
	int
		Process exit code (0 success, 1 call failure, 2 usage/config error).
	"""
	p = build_parser()
	args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
	if args.log_level:
		level = parse_verbosity(args.log_level)
		if level is None:
			p.error(f"invalid log level: {args.log_level}")
		configure_logger(level=level)

	if args.cmd == "providers":
		return handle_providers(args, client=client)
	if args.cmd == "test":
		return handle_test(args, client=client)
	if args.cmd == "summarize":
		return handle_summarize(args, client=client)
	p.print_help()
	return 2


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())

"""Incremental ``data:``-framed stream parser.

Purpose
-------
Turn response text arriving in arbitrary chunks into an ordered sequence of
text deltas, exactly once each, regardless of where the network split the
bytes. One instance serves one call; nothing is shared between calls.

State
-----
processed_length
    Characters of raw response text already scanned. ``feed_snapshot`` uses it
    to diff a growing response body against what was seen before.
partial_line
    Trailing fragment not yet terminated by a newline. It is prepended to the
    next arrival before re-splitting, so a record split across chunks is
    parsed once, whole.
text / delivered_length
    All extracted deltas concatenated, and how much of it ``on_progress`` has
    already received. Each callback gets exactly ``text[delivered_length:]``.
received_any_delta
    Distinguishes "ended with zero output" from "produced output then failed".

Failure modes
-------------
- Lines without the data prefix (``event:``, comments, keep-alives) are
  ignored.
- A record that fails to decode, or decodes to a shape the dialect cannot
  read, is skipped and counted; it never aborts.
- A raising ``on_progress`` is logged as ``stream.callback_error``; the text
  keeps accumulating and is still returned.
- An in-band error record halts the parser and is exposed as
  ``vendor_error``; the owning session turns it into an abort.
"""
from __future__ import annotations

import logging
import re
import time
from typing import Callable, Optional, Tuple

from ..logging import LogContext, log_event
from ..utils.json_safe import safe_json_parse
from .dialect import StreamDialect
from .metrics import StreamMetrics

ProgressCallback = Callable[[str], None]

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_NEWLINE_RUN_RE = re.compile(r"\n+")


class IncrementalStreamParser:
    """Call-scoped state machine shared by every vendor dialect."""

    def __init__(
        self,
        dialect: StreamDialect,
        on_progress: Optional[ProgressCallback] = None,
        *,
        collapse_newlines: bool = True,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
        metrics: Optional[StreamMetrics] = None,
    ) -> None:
        self.dialect = dialect
        self._on_progress = on_progress
        self._collapse_newlines = collapse_newlines
        self._logger = logger
        self._ctx = ctx
        self.metrics = metrics if metrics is not None else StreamMetrics()
        self._prefix_re = re.compile(r"^" + re.escape(dialect.data_prefix) + r"\s*")
        self._started = time.perf_counter()

        self.processed_length = 0
        self.partial_line = ""
        self.text = ""
        self.delivered_length = 0
        self.received_any_delta = False
        self.sentinel_seen = False
        self.vendor_error: Optional[Tuple[Optional[str], Optional[str]]] = None

    @property
    def halted(self) -> bool:
        """True once the sentinel or an in-band error ended parsing."""
        return self.sentinel_seen or self.vendor_error is not None

    def feed(self, chunk: str) -> bool:
        """Consume newly arrived text; returns ``halted``."""
        if self.halted or not chunk:
            return self.halted
        self.metrics.chunks += 1
        self.processed_length += len(chunk)
        lines = _LINE_SPLIT_RE.split(self.partial_line + chunk)
        self.partial_line = lines.pop()
        for line in lines:
            self._process_line(line)
            if self.halted:
                break
        return self.halted

    def feed_snapshot(self, response_text: str) -> bool:
        """Consume the whole response body received so far.

        Only the suffix beyond ``processed_length`` is new.
        """
        if len(response_text) <= self.processed_length:
            return self.halted
        return self.feed(response_text[self.processed_length:])

    def finish(self) -> str:
        """Flush a final unterminated line after clean completion."""
        if not self.halted and self.partial_line.strip():
            line, self.partial_line = self.partial_line, ""
            self._process_line(line)
        return self.text

    def _process_line(self, line: str) -> None:
        match = self._prefix_re.match(line)
        if match is None:
            return
        payload = line[match.end():].strip()
        if not payload:
            return
        if self.dialect.sentinel is not None and payload == self.dialect.sentinel:
            self.sentinel_seen = True
            return
        record = safe_json_parse(payload)
        if record is None:
            self._skip(payload)
            return
        try:
            err = self.dialect.detect_error(record) if self.dialect.detect_error is not None else None
            delta = None if err is not None else self.dialect.extract_delta(record)
        except (TypeError, ValueError, KeyError, IndexError, AttributeError) as exc:
            # valid JSON in a shape the extractor cannot read
            self._skip(payload, error=type(exc).__name__)
            return
        if err is not None:
            self.vendor_error = err
            return
        if not delta or not isinstance(delta, str):
            return
        if self._collapse_newlines:
            delta = _NEWLINE_RUN_RE.sub("\n", delta)
        self._deliver(delta)

    def _skip(self, payload: str, **extra) -> None:
        self.metrics.skipped_records += 1
        if self._logger is not None:
            log_event(
                self._logger,
                "stream.skip_malformed",
                self._ctx,
                level=logging.DEBUG,
                dialect=self.dialect.name,
                length=len(payload),
                **extra,
            )

    def _deliver(self, delta: str) -> None:
        self.text += delta
        if not self.received_any_delta:
            self.received_any_delta = True
            self.metrics.time_to_first_delta_ms = (time.perf_counter() - self._started) * 1000.0
        increment = self.text[self.delivered_length:]
        self.delivered_length = len(self.text)
        self.metrics.deltas += 1
        self.metrics.chars += len(increment)
        if self._on_progress is None:
            return
        try:
            self._on_progress(increment)
        except Exception as exc:  # noqa: BLE001
            self.metrics.callback_errors += 1
            if self._logger is not None:
                log_event(
                    self._logger,
                    "stream.callback_error",
                    self._ctx,
                    level=logging.WARNING,
                    dialect=self.dialect.name,
                    error=f"{type(exc).__name__}: {exc}",
                )


__all__ = ["IncrementalStreamParser", "ProgressCallback"]

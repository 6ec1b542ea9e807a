"""One streaming call: transport → parser → policy.

``StreamSession.run`` drives a single request. It owns the per-call parser,
the wall-clock deadline and the captured errors, then hands the outcome to
:func:`settle_stream_result`. A session must not be reused; construct one per
call (adapters do this inside each operation).

Abort triggers
--------------
- A chunk carrying an HTTP status >= 400: the body is parsed as the vendor
  error envelope into a :class:`VendorResponseError`; no further bytes are
  parsed.
- An in-band error record detected by the dialect.
- ``httpx`` timeouts / transport failures and deadline expiry, wrapped as a
  :class:`ProviderError` with ``TIMEOUT`` or ``NETWORK``.
"""
from __future__ import annotations

import contextlib
import logging
import time
from typing import Mapping, Optional, Sequence

import httpx

from ..errors import (
    DEFAULT_CODE_FIELDS,
    ErrorCode,
    ProviderError,
    VendorResponseError,
    classify_exception,
    parse_error_envelope,
)
from ..http.transport import HttpTransport
from ..logging import LogContext, normalized_log_event
from ..timeouts import Deadline, ms_to_seconds
from .dialect import StreamDialect
from .metrics import StreamMetrics
from .policy import PartialResultPolicy, settle_stream_result
from .sse_parser import IncrementalStreamParser, ProgressCallback


def transport_failure(
    exc: BaseException, *, provider: str, model: Optional[str], timeout_ms: int
) -> ProviderError:
    """Wrap an httpx/timeout exception into a normalized ``ProviderError``."""
    code = classify_exception(exc) if isinstance(exc, Exception) else ErrorCode.UNKNOWN
    if code is ErrorCode.TIMEOUT:
        message = f"Timeout: request exceeded {timeout_ms} ms"
    else:
        code = ErrorCode.NETWORK
        message = f"NetworkError: {exc}" if str(exc) else "NetworkError: connection failed"
    return ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=True,
        raw=exc if isinstance(exc, Exception) else None,
    )


class StreamSession:
    """Drives one streaming request through the shared parser."""

    def __init__(
        self,
        *,
        transport: HttpTransport,
        dialect: StreamDialect,
        provider: str,
        model: Optional[str],
        timeout_ms: int,
        on_progress: Optional[ProgressCallback] = None,
        policy: PartialResultPolicy = PartialResultPolicy.FALLBACK,
        collapse_newlines: bool = True,
        error_code_fields: Sequence[str] = DEFAULT_CODE_FIELDS,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._transport = transport
        self._dialect = dialect
        self._provider = provider
        self._model = model
        self._timeout_ms = timeout_ms
        self._policy = policy
        self._error_code_fields = error_code_fields
        self._logger = logger
        self._ctx = ctx or LogContext(provider=provider, model=model)
        self.metrics = StreamMetrics()
        self.parser = IncrementalStreamParser(
            dialect,
            on_progress,
            collapse_newlines=collapse_newlines,
            logger=logger,
            ctx=self._ctx,
            metrics=self.metrics,
        )
        self.abort_error: Optional[ProviderError] = None
        self.transport_error: Optional[ProviderError] = None

    def _abort_from_status(self, status: int, body: str) -> VendorResponseError:
        vendor_code, message = parse_error_envelope(body, self._error_code_fields)
        return VendorResponseError(
            provider=self._provider,
            model=self._model,
            status=status,
            vendor_code=vendor_code,
            message=message,
        )

    def _log(self, event: str, phase: str, *, level: int = logging.INFO, **fields) -> None:
        if self._logger is None:
            return
        normalized_log_event(
            self._logger,
            event,
            self._ctx,
            phase=phase,
            emitted=self.parser.received_any_delta,
            level=level,
            **fields,
        )

    def run(self, url: str, *, headers: Mapping[str, str], body: str) -> str:
        """Execute the request and return the final (or partial) text.

        Raises
        ------
        ProviderError
            When the stream failed and the policy forbids a partial result.
        """
        started = time.perf_counter()
        deadline = Deadline(self._timeout_ms)
        parser = self.parser
        self._log("stream.start", "start", dialect=self._dialect.name)
        chunks = None
        try:
            chunks = self._transport.stream_post(
                url, headers=headers, body=body, timeout_s=ms_to_seconds(self._timeout_ms)
            )
            for chunk in chunks:
                if chunk.status >= 400:
                    self.abort_error = self._abort_from_status(chunk.status, chunk.text)
                    break
                if parser.feed(chunk.text):
                    break
                if deadline.expired():
                    self.transport_error = transport_failure(
                        TimeoutError("deadline exceeded"),
                        provider=self._provider,
                        model=self._model,
                        timeout_ms=self._timeout_ms,
                    )
                    break
            else:
                parser.finish()
        except (httpx.RequestError, TimeoutError) as exc:
            self.transport_error = transport_failure(
                exc, provider=self._provider, model=self._model, timeout_ms=self._timeout_ms
            )
        finally:
            close = getattr(chunks, "close", None)
            if callable(close):
                with contextlib.suppress(httpx.HTTPError):
                    close()

        if parser.vendor_error is not None and self.abort_error is None:
            vendor_code, message = parser.vendor_error
            self.abort_error = VendorResponseError(
                provider=self._provider, model=self._model, vendor_code=vendor_code, message=message
            )

        self.metrics.total_duration_ms = (time.perf_counter() - started) * 1000.0
        failure = self.abort_error or self.transport_error
        if failure is not None:
            partial = self._policy is PartialResultPolicy.FALLBACK and parser.received_any_delta
            self._log(
                "stream.partial" if partial else "stream.abort",
                "finalize",
                level=logging.WARNING,
                error_code=failure.code.value,
                status=failure.status,
                vendor_code=failure.vendor_code,
                policy=self._policy.value,
                **self.metrics.to_dict(),
            )
        else:
            self._log("stream.end", "finalize", sentinel=parser.sentinel_seen, **self.metrics.to_dict())

        return settle_stream_result(
            policy=self._policy,
            text=parser.text,
            received_any_delta=parser.received_any_delta,
            abort_error=self.abort_error,
            transport_error=self.transport_error,
        )


__all__ = ["StreamSession", "transport_failure"]

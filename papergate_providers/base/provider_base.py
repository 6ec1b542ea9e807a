"""Shared adapter base class.

Purpose:
    Hold the plumbing every vendor adapter needs so adapters only describe
    their dialect: endpoint, headers, typed payloads and delta extraction.

Responsibilities:
    - Fail fast on incomplete configuration (before any request is built).
    - Serialize typed payload models in one place.
    - Run streaming calls through :class:`StreamSession` with the operation's
      partial-result policy, or non-streaming calls through ``post_json``.
    - Run connectivity tests and build their diagnostics.

Timeouts:
    Per-call timeout from :func:`resolve_request_timeout_ms`; connectivity
    tests use the fixed connectivity timeout from :func:`get_timeout_config`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

import httpx
from pydantic import BaseModel

from .connectivity import (
    diagnostics_from_exception,
    diagnostics_from_response,
    format_connectivity_report,
)
from .errors import (
    DEFAULT_CODE_FIELDS,
    ConnectivityTestError,
    ErrorCode,
    ProviderConfigError,
    ProviderError,
    VendorResponseError,
    parse_error_envelope,
)
from .http.transport import HttpTransport, HttpxTransport
from .interfaces import ProgressCallback
from .logging import LogContext, get_logger, normalized_log_event
from .models import ProviderConfig
from .streaming import PartialResultPolicy, StreamDialect, StreamSession, transport_failure
from .timeouts import get_timeout_config, ms_to_seconds, resolve_request_timeout_ms
from .utils.json_safe import safe_json_parse

TextExtractor = Callable[[Any], Optional[str]]

# Outcome of a failed stream per contract operation
OPERATION_POLICIES: Mapping[str, PartialResultPolicy] = {
    "summarize": PartialResultPolicy.FALLBACK,
    "chat": PartialResultPolicy.FALLBACK,
    "summarize_multi_file": PartialResultPolicy.FALLBACK,
    "test_connection": PartialResultPolicy.ALWAYS_FATAL,
}

_FIELD_LABELS = {"base_url": "API URL", "api_key": "API key"}


class BaseGatewayProvider:
    """Reusable base for vendor adapters.

    Subclasses set ``provider_id``, ``DEFAULT_MODEL`` and ``dialect`` and
    implement the contract operations using the ``_execute`` /
    ``_connectivity_test`` helpers.
    """

    provider_id: str = ""
    DEFAULT_MODEL: str = ""
    dialect: StreamDialect
    # Envelope fields tried, in order, for the vendor error code
    error_code_fields: Sequence[str] = DEFAULT_CODE_FIELDS

    def __init__(self, transport: Optional[HttpTransport] = None, logger: Optional[logging.Logger] = None) -> None:
        self._transport: HttpTransport = transport if transport is not None else HttpxTransport()
        self.logger = logger or get_logger(self.provider_id or "adapter")

    def default_model(self) -> str:
        return self.DEFAULT_MODEL

    # ----- configuration -----

    def _require_config(self, config: ProviderConfig) -> str:
        """Validate connection fields and return the effective model id.

        Raises:
            ProviderConfigError: When base URL or API key is empty.
        """
        missing = config.missing_fields()
        if missing:
            labels = " and ".join(_FIELD_LABELS.get(m, m) for m in missing)
            raise ProviderConfigError(
                f"{labels} not configured for provider {self.provider_id!r}",
                provider=self.provider_id,
                model=config.model or None,
            )
        return config.model or self.DEFAULT_MODEL

    def _headers(self, config: ProviderConfig) -> Dict[str, str]:
        """Bearer auth; vendors with their own key header override this."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.api_key}",
        }

    def _policy_for(self, operation: str, override: Optional[PartialResultPolicy]) -> PartialResultPolicy:
        if override is not None:
            return PartialResultPolicy(override)
        return OPERATION_POLICIES.get(operation, PartialResultPolicy.ALWAYS_FATAL)

    def _ctx(self, model: str, operation: str) -> LogContext:
        return LogContext(provider=self.provider_id, model=model, operation=operation)

    @staticmethod
    def _serialize(payload: BaseModel) -> str:
        """Shared serialization step for every typed vendor payload."""
        return json.dumps(
            payload.model_dump(by_alias=True, exclude_none=True),
            ensure_ascii=False,
            indent=2,
        )

    # ----- request execution -----

    def _execute(
        self,
        url: str,
        payload: BaseModel,
        config: ProviderConfig,
        model: str,
        on_progress: Optional[ProgressCallback],
        *,
        operation: str,
        extract_text: TextExtractor,
        policy: Optional[PartialResultPolicy] = None,
        dialect: Optional[StreamDialect] = None,
    ) -> str:
        """Stream when ``config.stream`` is set, else one blocking request.

        In the blocking case ``on_progress`` receives the full text once.
        ``dialect`` overrides the class dialect for adapters speaking two.
        """
        if config.stream:
            return self._stream(
                url, payload, config, model, on_progress, operation=operation, policy=policy, dialect=dialect
            )
        return self._complete(url, payload, config, model, on_progress, operation=operation, extract_text=extract_text)

    def _stream(
        self,
        url: str,
        payload: BaseModel,
        config: ProviderConfig,
        model: str,
        on_progress: Optional[ProgressCallback],
        *,
        operation: str,
        policy: Optional[PartialResultPolicy] = None,
        dialect: Optional[StreamDialect] = None,
    ) -> str:
        session = StreamSession(
            transport=self._transport,
            dialect=dialect or self.dialect,
            provider=self.provider_id,
            model=model,
            timeout_ms=resolve_request_timeout_ms(config.request_timeout_ms),
            on_progress=on_progress,
            policy=self._policy_for(operation, policy),
            collapse_newlines=bool(config.option("collapse_newlines", True)),
            error_code_fields=self.error_code_fields,
            logger=self.logger,
            ctx=self._ctx(model, operation),
        )
        return session.run(url, headers=self._headers(config), body=self._serialize(payload))

    def _request(
        self,
        url: str,
        payload: BaseModel,
        config: ProviderConfig,
        model: str,
        *,
        operation: str,
    ) -> Any:
        """POST a non-streaming request and return the decoded JSON body.

        Raises:
            ProviderError: ``NETWORK``/``TIMEOUT`` on transport failure,
                :class:`VendorResponseError` on non-2xx, ``SERVER_ERROR`` when
                a 2xx body is not JSON.
        """
        timeout_ms = resolve_request_timeout_ms(config.request_timeout_ms)
        ctx = self._ctx(model, operation)
        normalized_log_event(self.logger, "request.start", ctx, phase="start", emitted=False)
        try:
            resp = self._transport.post_json(
                url, headers=self._headers(config), body=self._serialize(payload), timeout_s=ms_to_seconds(timeout_ms)
            )
        except (httpx.RequestError, TimeoutError) as exc:
            err = transport_failure(exc, provider=self.provider_id, model=model, timeout_ms=timeout_ms)
            normalized_log_event(
                self.logger, "request.error", ctx, phase="finalize", error_code=err.code.value, level=logging.WARNING
            )
            raise err from exc
        if not resp.ok:
            vendor_code, message = parse_error_envelope(resp.text, self.error_code_fields)
            err = VendorResponseError(
                provider=self.provider_id, model=model, status=resp.status, vendor_code=vendor_code, message=message
            )
            normalized_log_event(
                self.logger,
                "request.error",
                ctx,
                phase="finalize",
                error_code=err.code.value,
                status=resp.status,
                level=logging.WARNING,
            )
            raise err
        record = safe_json_parse(resp.text)
        if record is None:
            raise ProviderError(
                code=ErrorCode.SERVER_ERROR,
                message="response body is not valid JSON",
                provider=self.provider_id,
                model=model,
                status=resp.status,
            )
        normalized_log_event(self.logger, "request.end", ctx, phase="finalize", emitted=True, status=resp.status)
        return record

    def _complete(
        self,
        url: str,
        payload: BaseModel,
        config: ProviderConfig,
        model: str,
        on_progress: Optional[ProgressCallback],
        *,
        operation: str,
        extract_text: TextExtractor,
    ) -> str:
        record = self._request(url, payload, config, model, operation=operation)
        text = extract_text(record) or ""
        if text and on_progress is not None:
            try:
                on_progress(text)
            except Exception as exc:  # noqa: BLE001
                normalized_log_event(
                    self.logger,
                    "stream.callback_error",
                    self._ctx(model, operation),
                    phase="finalize",
                    emitted=True,
                    level=logging.WARNING,
                    error=f"{type(exc).__name__}: {exc}",
                )
        return text

    # ----- connectivity -----

    def _connectivity_test(
        self,
        url: str,
        payload: BaseModel,
        config: ProviderConfig,
        model: str,
        *,
        extract_reply: TextExtractor,
    ) -> str:
        """Minimal non-streaming request; report on success, diagnostics on failure.

        Raises:
            ConnectivityTestError: On any transport failure or non-2xx status.
        """
        body = self._serialize(payload)
        timeout_ms = get_timeout_config().connectivity_timeout_ms
        ctx = self._ctx(model, "test_connection")
        try:
            resp = self._transport.post_json(
                url, headers=self._headers(config), body=body, timeout_s=ms_to_seconds(timeout_ms)
            )
        except (httpx.RequestError, TimeoutError) as exc:
            diag = diagnostics_from_exception(exc, request_url=url, request_body=body, timeout_ms=timeout_ms)
            normalized_log_event(
                self.logger, "connectivity.error", ctx, phase="finalize", error_code=diag.error_name, level=logging.WARNING
            )
            raise ConnectivityTestError(diag, provider=self.provider_id, model=model) from exc
        if not resp.ok:
            diag = diagnostics_from_response(
                resp, request_url=url, request_body=body, code_fields=self.error_code_fields
            )
            normalized_log_event(
                self.logger,
                "connectivity.error",
                ctx,
                phase="finalize",
                error_code=diag.error_name,
                status=resp.status,
                level=logging.WARNING,
            )
            raise ConnectivityTestError(diag, provider=self.provider_id, model=model)
        record = safe_json_parse(resp.text)
        reply = (extract_reply(record) if record is not None else None) or ""
        normalized_log_event(self.logger, "connectivity.ok", ctx, phase="finalize", emitted=bool(reply))
        return format_connectivity_report(model, reply, resp.text)


__all__ = ["BaseGatewayProvider", "OPERATION_POLICIES", "TextExtractor"]

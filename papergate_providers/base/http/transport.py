"""HTTP transport used by every adapter.

The transport is deliberately thin: it sends a pre-serialized JSON body and
hands back either one complete response (``post_json``) or the decoded text
chunks of a streaming response in arrival order (``stream_post``). It never
interprets payloads and never retries.

Failure semantics:
    - Non-2xx responses are *returned*, not raised. For streams the error body
      is read fully and delivered as a single chunk carrying the status, which
      the stream session treats as an abort trigger.
    - Connection failures and timeouts propagate as ``httpx`` exceptions
      (``httpx.TimeoutException`` / ``httpx.TransportError``); callers classify
      them with :func:`classify_exception`.

Tests inject either an ``httpx.Client`` built on ``httpx.MockTransport`` or a
fake object implementing :class:`HttpTransport`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional, Protocol, runtime_checkable

import httpx

from .client import get_httpx_client


@dataclass(frozen=True)
class TransportResponse:
    """A fully read HTTP response."""

    status: int
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True)
class TransportChunk:
    """One arrival of decoded response text from a streaming request."""

    status: int
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class HttpTransport(Protocol):
    """Minimal transport contract consumed by adapters."""

    def post_json(
        self, url: str, *, headers: Mapping[str, str], body: str, timeout_s: float
    ) -> TransportResponse:
        ...

    def stream_post(
        self, url: str, *, headers: Mapping[str, str], body: str, timeout_s: float
    ) -> Iterator[TransportChunk]:
        ...


def _headers_dict(resp: httpx.Response) -> Dict[str, str]:
    return {k: v for k, v in resp.headers.items()}


class HttpxTransport:
    """``HttpTransport`` backed by a (pooled by default) ``httpx.Client``."""

    def __init__(self, client: Optional[httpx.Client] = None, purpose: str = "gateway") -> None:
        self._client = client
        self._purpose = purpose

    @property
    def client(self) -> httpx.Client:
        return self._client or get_httpx_client(None, self._purpose)

    def post_json(
        self, url: str, *, headers: Mapping[str, str], body: str, timeout_s: float
    ) -> TransportResponse:
        resp = self.client.post(
            url,
            headers=dict(headers),
            content=body.encode("utf-8"),
            timeout=httpx.Timeout(timeout_s),
        )
        return TransportResponse(status=resp.status_code, text=resp.text, headers=_headers_dict(resp))

    def stream_post(
        self, url: str, *, headers: Mapping[str, str], body: str, timeout_s: float
    ) -> Iterator[TransportChunk]:
        """Yield decoded text chunks as they arrive.

        The generator owns the response; closing it early (the session does
        this on abort or sentinel) closes the underlying connection.
        """
        with self.client.stream(
            "POST",
            url,
            headers=dict(headers),
            content=body.encode("utf-8"),
            timeout=httpx.Timeout(timeout_s),
        ) as resp:
            hdrs = _headers_dict(resp)
            if resp.status_code >= 400:
                resp.read()
                yield TransportChunk(status=resp.status_code, text=resp.text, headers=hdrs)
                return
            for text in resp.iter_text():
                if text:
                    yield TransportChunk(status=resp.status_code, text=text, headers=hdrs)


__all__ = ["HttpTransport", "HttpxTransport", "TransportChunk", "TransportResponse"]

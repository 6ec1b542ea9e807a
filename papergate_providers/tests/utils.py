"""Test helpers shared across the gateway test-suite.

Adapters are exercised against :class:`FakeTransport`, which records every
request and replays scripted responses, so no test touches the network.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from papergate_providers.base.http import TransportChunk, TransportResponse
from papergate_providers.base.models import ProviderConfig

PROVIDER_IDS = ("openai", "openai-compat", "openrouter", "gemini", "anthropic", "ark")

BASE_URLS: Dict[str, str] = {
    "openai": "https://api.example.test",
    "openai-compat": "https://relay.example.test/v1/chat/completions",
    "openrouter": "https://router.example.test/api/v1/chat/completions",
    "gemini": "https://gemini.example.test",
    "anthropic": "https://anthropic.example.test",
    "ark": "https://ark.example.test/api/v3",
}


@dataclass
class RecordedRequest:
    url: str
    headers: Mapping[str, str]
    body: str
    timeout_s: float
    streaming: bool

    @property
    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class FakeTransport:
    """Scriptable ``HttpTransport``.

    ``chunks`` are yielded by ``stream_post`` in order; ``raise_after`` is
    raised once they are exhausted. ``post_json`` returns ``response`` unless
    ``post_error`` is set.
    """

    chunks: Sequence[TransportChunk] = ()
    raise_after: Optional[BaseException] = None
    response: TransportResponse = field(default_factory=lambda: TransportResponse(200, "{}"))
    post_error: Optional[BaseException] = None
    requests: List[RecordedRequest] = field(default_factory=list)

    def post_json(self, url: str, *, headers: Mapping[str, str], body: str, timeout_s: float) -> TransportResponse:
        self.requests.append(RecordedRequest(url, dict(headers), body, timeout_s, streaming=False))
        if self.post_error is not None:
            raise self.post_error
        return self.response

    def stream_post(
        self, url: str, *, headers: Mapping[str, str], body: str, timeout_s: float
    ) -> Iterator[TransportChunk]:
        self.requests.append(RecordedRequest(url, dict(headers), body, timeout_s, streaming=True))
        return self._iterate()

    def _iterate(self) -> Iterator[TransportChunk]:
        yield from self.chunks
        if self.raise_after is not None:
            raise self.raise_after


class ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        out = []
        for msg in self.messages:
            try:
                payload = json.loads(msg)
            except ValueError:
                continue
            if isinstance(payload, dict):
                out.append(payload)
        return out


def sse(*records: Any, done: bool = False) -> str:
    """Render records as ``data:`` lines (dicts are JSON-encoded)."""
    lines = [f"data: {r if isinstance(r, str) else json.dumps(r)}\n\n" for r in records]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines)


def ok_chunks(*texts: str) -> List[TransportChunk]:
    return [TransportChunk(status=200, text=t) for t in texts]


def make_config(provider_id: str = "openai", **changes: Any) -> ProviderConfig:
    """A complete config for ``provider_id`` pointed at a fake host."""
    data: Dict[str, Any] = {
        "base_url": BASE_URLS[provider_id],
        "api_key": "sk-unit",  # pragma: allowlist secret
        "model": "unit-model",
        "stream": True,
    }
    data.update(changes)
    return ProviderConfig(**data)


# Two-delta stream per dialect, followed by the dialect's own terminator
def two_delta_stream(provider_id: str, first: str = "A", second: str = "B") -> str:
    if provider_id in ("openai-compat", "openrouter"):
        return sse(
            {"choices": [{"delta": {"content": first}}]},
            {"choices": [{"delta": {"content": second}}]},
        )
    if provider_id in ("openai", "ark"):
        return sse(
            {"type": "response.output_text.delta", "delta": first},
            {"type": "response.output_text.delta", "delta": second},
        )
    if provider_id == "gemini":
        return sse(
            {"candidates": [{"content": {"parts": [{"text": first}]}}]},
            {"candidates": [{"content": {"parts": [{"text": second}]}}]},
        )
    return sse(
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": first}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": second}},
    )


def connectivity_body(provider_id: str, reply: str = "OK") -> str:
    """A minimal successful non-streaming reply in the provider's shape."""
    if provider_id in ("openai-compat", "openrouter"):
        record: Dict[str, Any] = {"choices": [{"message": {"role": "assistant", "content": reply}}]}
    elif provider_id in ("openai", "ark"):
        record = {"output": [{"type": "message", "content": [{"type": "output_text", "text": reply}]}]}
    elif provider_id == "gemini":
        record = {"candidates": [{"content": {"parts": [{"text": reply}]}}]}
    else:
        record = {"content": [{"type": "text", "text": reply}]}
    return json.dumps(record)


__all__ = [
    "PROVIDER_IDS",
    "BASE_URLS",
    "RecordedRequest",
    "FakeTransport",
    "ListHandler",
    "sse",
    "ok_chunks",
    "make_config",
    "two_delta_stream",
    "connectivity_body",
]

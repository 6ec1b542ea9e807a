"""Streaming primitives shared by every adapter.

- :class:`StreamDialect` specializes the parser per vendor.
- :class:`IncrementalStreamParser` is the call-scoped state machine.
- :class:`StreamSession` drives one request through transport and parser.
- :class:`PartialResultPolicy` / :func:`settle_stream_result` decide the
  outcome when a stream fails.
"""

from .dialect import StreamDialect
from .metrics import StreamMetrics
from .policy import PartialResultPolicy, settle_stream_result
from .sse_parser import IncrementalStreamParser, ProgressCallback
from .session import StreamSession, transport_failure

__all__ = [
    "StreamDialect",
    "StreamMetrics",
    "PartialResultPolicy",
    "settle_stream_result",
    "IncrementalStreamParser",
    "ProgressCallback",
    "StreamSession",
    "transport_failure",
]

"""HTTP utilities package: pooled httpx clients and the adapter transport."""

from .client import get_httpx_client, close_all_clients
from .transport import HttpTransport, HttpxTransport, TransportChunk, TransportResponse

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "HttpTransport",
    "HttpxTransport",
    "TransportChunk",
    "TransportResponse",
]

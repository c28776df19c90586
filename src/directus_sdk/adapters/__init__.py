"""Adaptadores de I/O: httpx (REST/GraphQL), websockets (realtime), tokens."""

from directus_sdk.adapters.http_client import DirectusTransport, build_async_client
from directus_sdk.adapters.realtime import RealtimeService
from directus_sdk.adapters.token_stores import FileTokenStore, InMemoryTokenStore

__all__ = [
    "DirectusTransport",
    "FileTokenStore",
    "InMemoryTokenStore",
    "RealtimeService",
    "build_async_client",
]

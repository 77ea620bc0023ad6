"""HTTP client factory: builds AbstractHttpClient instances (no provider logic in reporters)."""
from __future__ import annotations

import httpx

from error_reporting.app.ports.http_client import AbstractHttpClient
from error_reporting.app.infrastructure.http.httpx_client import HttpxHttpClient


def create_http_client(transport: httpx.AsyncBaseTransport | None = None) -> AbstractHttpClient:
    """Build an HTTP client. Timeouts are applied per-request by the adapter.

    `transport` lets callers route requests through e.g. httpx.MockTransport.
    """
    async_client = httpx.AsyncClient(transport=transport)
    return HttpxHttpClient(async_client)

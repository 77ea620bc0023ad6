"""Generic webhook reporter: sends records to any HTTP endpoint through the retrying Transport."""
from __future__ import annotations

import json
from typing import Any

from loguru import logger

from error_reporting.app.constants import (
    HTTP_METHOD,
    PACKAGE_NAME,
    PACKAGE_VERSION,
    PLATFORM,
    SERVICE_NAME,
    USER_AGENT,
)
from error_reporting.app.domain.models import ErrorRecord, RetryPolicy, TransportOutcome
from error_reporting.app.domain.transport import Transport
from error_reporting.app.infrastructure.http.factory import create_http_client
from error_reporting.app.infrastructure.reporters.base import UserTrackingReporter
from error_reporting.app.ports.http_client import AbstractHttpClient

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
}


class WebhookReporter(UserTrackingReporter):
    """Posts a JSON document per record, or encodes a flat query string for GET.

    The record's own context and the caller's extra context are emitted as
    separate keys (`errorContext` and `context`), so neither overwrites the other.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        method: str = HTTP_METHOD.POST,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
        http_client: AbstractHttpClient | None = None,
    ) -> None:
        super().__init__()
        self.endpoint = endpoint
        self.method = method
        self.headers = dict(headers) if headers else {}
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self._http_client = http_client or create_http_client()
        self._transport = Transport(
            self._http_client,
            RetryPolicy(
                max_attempts=retry_attempts,
                retry_delay=retry_delay,
                request_timeout=timeout,
            ),
        )
        self._closed = False
        self.last_outcome: TransportOutcome | None = None

    async def _deliver(self, record: ErrorRecord, context: dict[str, Any]) -> None:
        if self.method.upper() == HTTP_METHOD.GET:
            outcome = await self._transport.send(
                self.endpoint,
                method=self.method,
                headers=self.build_headers(),
                params=self.build_query_params(record, context),
            )
        else:
            body = json.dumps(self.build_payload(record, context), default=str).encode()
            outcome = await self._transport.send(
                self.endpoint,
                method=self.method,
                headers=self.build_headers(),
                body=body,
            )
        self.last_outcome = outcome

    def build_headers(self) -> dict[str, str]:
        # header names are case-insensitive; a caller key replaces the default in any casing
        overridden = {name.lower() for name in self.headers}
        merged = {name: value for name, value in DEFAULT_HEADERS.items() if name.lower() not in overridden}
        merged.update(self.headers)
        return merged

    def build_payload(self, record: ErrorRecord, context: dict[str, Any]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": {
                "type": record.error_type,
                "message": record.message,
                "stackTrace": record.trace_text,
                "severity": record.severity.value,
                "errorType": record.category.value,
                "errorSource": record.source,
                "timestamp": record.occurred_at.isoformat() if record.occurred_at else None,
            },
            "context": dict(context),
            "errorContext": record.context_dict(),
            "userData": record.user_data_dict(),
            "metadata": {
                "platform": PLATFORM,
                "package": PACKAGE_NAME,
                "version": PACKAGE_VERSION,
            },
        }
        if self._user.is_identified:
            payload["user"] = {
                "id": self._user.id,
                "properties": dict(self._user.properties),
            }
        return payload

    def build_query_params(self, record: ErrorRecord, context: dict[str, Any]) -> dict[str, str]:
        """Flattened subset for GET; only str/int/float/bool context values are kept."""
        timestamp = ""
        if record.occurred_at is not None:
            timestamp = str(int(record.occurred_at.timestamp() * 1000))
        params: dict[str, str] = {
            "error_type": record.error_type,
            "error_message": record.message,
            "severity": record.severity.value,
            "error_type_category": record.category.value,
            "timestamp": timestamp,
        }
        if self._user.is_identified:
            params["user_id"] = str(self._user.id)
        for key, value in context.items():
            if isinstance(value, bool):
                params[f"ctx_{key}"] = "true" if value else "false"
            elif isinstance(value, (str, int, float)):
                params[f"ctx_{key}"] = str(value)
        return params

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._http_client.close()
        logger.bind(service_name=SERVICE_NAME, event="reporter_closed", reporter="webhook").info("")

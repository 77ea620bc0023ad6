"""Sentry reporter: posts store-API events built from a DSN. One attempt per record, no retry."""
from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

from loguru import logger

from error_reporting.app.constants import PLATFORM, SERVICE_NAME, USER_AGENT
from error_reporting.app.domain.models import ErrorRecord, ErrorSeverity
from error_reporting.app.infrastructure.http.factory import create_http_client
from error_reporting.app.infrastructure.reporters.base import UserTrackingReporter
from error_reporting.app.ports.http_client import AbstractHttpClient, RequestTimeout

SENTRY_PROTOCOL_VERSION = 7

SENTRY_LEVELS: dict[ErrorSeverity, str] = {
    ErrorSeverity.LOW: "info",
    ErrorSeverity.MEDIUM: "warning",
    ErrorSeverity.HIGH: "error",
    ErrorSeverity.CRITICAL: "fatal",
}


def parse_frames(trace: str | traceback.StackSummary) -> list[dict[str, Any]]:
    """Frames oldest-first (most recent call last), as Sentry expects.

    A `StackSummary` is already in that order. Text traces are split naively,
    one frame per non-blank line, and listed newest-first, so they are reversed.
    """
    frames: list[dict[str, Any]] = []
    if isinstance(trace, traceback.StackSummary):
        for frame in trace:
            frames.append(
                {
                    "filename": frame.filename,
                    "function": frame.name,
                    "lineno": frame.lineno or 0,
                    "context_line": frame.line,
                }
            )
    else:
        for line in trace.splitlines():
            if not line.strip():
                continue
            frames.append({"filename": "unknown", "function": line.strip(), "lineno": 0})
        frames.reverse()
    return frames


class SentryReporter(UserTrackingReporter):
    def __init__(
        self,
        dsn: str,
        project_id: str,
        *,
        environment: str = "production",
        release: str | None = None,
        server_name: str | None = None,
        timeout: float = 30.0,
        http_client: AbstractHttpClient | None = None,
    ) -> None:
        super().__init__()
        parsed = urlparse(dsn)
        if not parsed.scheme or not parsed.hostname or not parsed.username:
            raise ValueError(f"DSN must look like scheme://key@host/path: {dsn!r}")
        self.dsn = dsn
        self.project_id = project_id
        self.environment = environment
        self.release = release
        self.server_name = server_name
        self._public_key = parsed.username
        self._secret_key = parsed.password
        host = parsed.hostname
        if parsed.port is not None:
            host = f"{host}:{parsed.port}"
        self._store_url = f"{parsed.scheme}://{host}/api/{project_id}/store/"
        self._timeout = RequestTimeout.uniform(timeout)
        self._http_client = http_client or create_http_client()
        self._closed = False

    @property
    def store_url(self) -> str:
        return self._store_url

    def build_headers(self) -> dict[str, str]:
        auth = f"Sentry sentry_version={SENTRY_PROTOCOL_VERSION}, sentry_client={USER_AGENT}, sentry_key={self._public_key}"
        if self._secret_key:
            auth += f", sentry_secret={self._secret_key}"
        return {
            "Content-Type": "application/json",
            "X-Sentry-Auth": auth,
            "User-Agent": USER_AGENT,
        }

    def build_event(self, record: ErrorRecord, context: dict[str, Any]) -> dict[str, Any]:
        occurred_at = record.occurred_at or datetime.now(timezone.utc)
        event: dict[str, Any] = {
            "event_id": uuid.uuid4().hex,
            "timestamp": occurred_at.astimezone(timezone.utc).isoformat(),
            "level": SENTRY_LEVELS[record.severity],
            "logger": SERVICE_NAME,
            "platform": PLATFORM,
            "server_name": self.server_name,
            "release": self.release,
            "environment": self.environment,
            "exception": {
                "values": [
                    {
                        "type": record.error_type,
                        "value": record.message,
                        "stacktrace": {"frames": parse_frames(record.trace)},
                    }
                ]
            },
            "tags": {
                "error_type": record.category.value,
                "error_source": record.source or "unknown",
            },
            "extra": {
                "context": dict(context),
                "error_context": record.context_dict(),
                "user_data": record.user_data_dict(),
            },
        }
        if self._user.is_identified:
            event["user"] = {**self._user.properties, "id": self._user.id}
        return event

    async def _deliver(self, record: ErrorRecord, context: dict[str, Any]) -> None:
        try:
            body = json.dumps(self.build_event(record, context), default=str).encode()
            response = await self._http_client.request(
                "POST",
                self._store_url,
                timeout=self._timeout,
                headers=self.build_headers(),
                content=body,
            )
            if not response.is_success:
                logger.warning(
                    "sentry error reporting failed: {} - {}", response.status_code, response.text
                )
        except Exception as exc:
            logger.warning("failed to send error to sentry: {}", exc)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._http_client.close()
        logger.bind(service_name=SERVICE_NAME, event="reporter_closed", reporter="sentry").info("")

"""Crashlytics reporter: posts crash reports to the Firebase reports API. One attempt per record, no retry."""
from __future__ import annotations

import json
from datetime import timezone
from typing import Any

from loguru import logger

from error_reporting.app.constants import PACKAGE_NAME, PLATFORM, SERVICE_NAME, USER_AGENT
from error_reporting.app.domain.models import ErrorRecord, ErrorSeverity
from error_reporting.app.infrastructure.http.factory import create_http_client
from error_reporting.app.infrastructure.reporters.base import UserTrackingReporter
from error_reporting.app.ports.http_client import AbstractHttpClient, RequestTimeout

CRASHLYTICS_HOST = "firebase.googleapis.com"

CRASHLYTICS_LEVELS: dict[ErrorSeverity, str] = {
    ErrorSeverity.LOW: "INFO",
    ErrorSeverity.MEDIUM: "WARNING",
    ErrorSeverity.HIGH: "ERROR",
    ErrorSeverity.CRITICAL: "FATAL",
}


class CrashlyticsReporter(UserTrackingReporter):
    def __init__(
        self,
        project_id: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        http_client: AbstractHttpClient | None = None,
    ) -> None:
        super().__init__()
        self.project_id = project_id
        self.api_key = api_key
        self._timeout = RequestTimeout.uniform(timeout)
        self._http_client = http_client or create_http_client()
        self._closed = False

    @property
    def reports_url(self) -> str:
        return f"https://{CRASHLYTICS_HOST}/v1/projects/{self.project_id}/reports:create"

    def build_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
            "User-Agent": USER_AGENT,
        }

    def build_event(self, record: ErrorRecord, context: dict[str, Any]) -> dict[str, Any]:
        occurred_at = record.occurred_at
        crash_report: dict[str, Any] = {
            "exception": {
                "type": record.error_type,
                "message": record.message,
                "stackTrace": record.trace_text,
            },
            "severity": CRASHLYTICS_LEVELS[record.severity],
            "errorType": record.category.value,
            "errorSource": record.source or "unknown",
            "context": dict(context),
            "errorContext": record.context_dict(),
            "userData": record.user_data_dict(),
            "metadata": {
                "platform": PLATFORM,
                "package": PACKAGE_NAME,
                "timestamp": int(occurred_at.timestamp() * 1000) if occurred_at else None,
            },
        }
        if self._user.is_identified:
            crash_report["userId"] = self._user.id
            if self._user.properties:
                crash_report["userProperties"] = dict(self._user.properties)
        return {
            "report": {
                "eventTime": occurred_at.astimezone(timezone.utc).isoformat() if occurred_at else None,
                "type": "crash",
                "data": {"crashReport": crash_report},
            }
        }

    async def _deliver(self, record: ErrorRecord, context: dict[str, Any]) -> None:
        try:
            body = json.dumps(self.build_event(record, context), default=str).encode()
            response = await self._http_client.request(
                "POST",
                self.reports_url,
                timeout=self._timeout,
                headers=self.build_headers(),
                content=body,
            )
            if not response.is_success:
                logger.warning(
                    "crashlytics error reporting failed: {} - {}", response.status_code, response.text
                )
        except Exception as exc:
            logger.warning("failed to send error to crashlytics: {}", exc)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._http_client.close()
        logger.bind(service_name=SERVICE_NAME, event="reporter_closed", reporter="crashlytics").info("")

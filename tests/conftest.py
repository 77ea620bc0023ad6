from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import pytest
from loguru import logger

from error_reporting.app.domain.models import ErrorCategory, ErrorRecord, ErrorSeverity
from error_reporting.app.ports.http_client import RequestTimeout


class FakeResponse:
    """Implements HttpResponse for tests."""

    def __init__(self, status_code: int = 200, text: str = "", url: str = "") -> None:
        self._status_code = status_code
        self._text = text
        self._url = url

    @property
    def headers(self) -> dict[str, str]:
        return {}

    @property
    def text(self) -> str:
        return self._text

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_success(self) -> bool:
        return 200 <= self._status_code < 300


class ScriptedHttpClient:
    """Implements AbstractHttpClient; replays a script of responses/exceptions and records each request.

    When the script runs out, the last entry repeats.
    """

    def __init__(self, script: list[Any] | None = None) -> None:
        self._script = list(script) if script else [FakeResponse(200)]
        self.requests: list[dict[str, Any]] = []
        self.close_calls = 0

    async def request(
        self,
        method: str,
        url: str,
        *,
        timeout: RequestTimeout,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        params: dict[str, str] | None = None,
    ) -> FakeResponse:
        self.requests.append(
            {
                "method": method,
                "url": url,
                "timeout": timeout,
                "headers": dict(headers or {}),
                "content": content,
                "params": params,
            }
        )
        index = min(len(self.requests) - 1, len(self._script) - 1)
        step = self._script[index]
        if isinstance(step, BaseException):
            raise step
        return step

    async def close(self) -> None:
        self.close_calls += 1


class RecordingReporter:
    """Implements ErrorReporter for tests; records every call into a shared or private journal."""

    def __init__(
        self,
        name: str = "recording",
        *,
        journal: list[tuple[str, str]] | None = None,
        raise_on_report: Exception | None = None,
        raise_on_setters: Exception | None = None,
        raise_on_close: Exception | None = None,
    ) -> None:
        self.name = name
        self.journal = journal if journal is not None else []
        self.reported: list[tuple[ErrorRecord, dict[str, Any] | None]] = []
        self.user_ids: list[str] = []
        self.user_properties: list[dict[str, Any]] = []
        self.clear_calls = 0
        self.close_calls = 0
        self._raise_on_report = raise_on_report
        self._raise_on_setters = raise_on_setters
        self._raise_on_close = raise_on_close

    async def report(self, record: ErrorRecord) -> None:
        self.journal.append((self.name, "report"))
        self.reported.append((record, None))
        if self._raise_on_report is not None:
            raise self._raise_on_report

    async def report_with_context(self, record: ErrorRecord, context: Mapping[str, Any]) -> None:
        self.journal.append((self.name, "report_with_context"))
        self.reported.append((record, dict(context)))
        if self._raise_on_report is not None:
            raise self._raise_on_report

    def identify_user(self, user_id: str) -> None:
        self.user_ids.append(user_id)
        if self._raise_on_setters is not None:
            raise self._raise_on_setters

    def set_user_properties(self, properties: Mapping[str, Any]) -> None:
        self.user_properties.append(dict(properties))
        if self._raise_on_setters is not None:
            raise self._raise_on_setters

    def clear_user(self) -> None:
        self.clear_calls += 1
        if self._raise_on_setters is not None:
            raise self._raise_on_setters

    async def close(self) -> None:
        self.close_calls += 1
        if self._raise_on_close is not None:
            raise self._raise_on_close

    @property
    def report_calls(self) -> int:
        return len(self.reported)


def make_record(
    *,
    cause: Any = None,
    trace: str = "#0 main (app.py:10)\n#1 render (widget.py:42)\n",
    severity: ErrorSeverity = ErrorSeverity.HIGH,
    category: ErrorCategory = ErrorCategory.RUNTIME,
    source: str | None = "CheckoutScreen",
    occurred_at: datetime | None = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
    context: dict[str, Any] | None = None,
    user_data: dict[str, Any] | None = None,
) -> ErrorRecord:
    return ErrorRecord(
        cause=cause if cause is not None else ValueError("boom"),
        trace=trace,
        severity=severity,
        category=category,
        source=source,
        occurred_at=occurred_at,
        context=context,
        user_data=user_data,
    )


@pytest.fixture()
def record() -> ErrorRecord:
    return make_record(context={"screen": "checkout"}, user_data={"plan": "pro"})


@pytest.fixture()
def log_events() -> list[dict[str, Any]]:
    """Captures loguru records (message plus bound extra) for the duration of a test."""
    captured: list[dict[str, Any]] = []

    def _sink(message: Any) -> None:
        rec = message.record
        captured.append(
            {
                "level": rec["level"].name,
                "message": rec["message"],
                **rec["extra"],
            }
        )

    handler_id = logger.add(_sink, level="DEBUG")
    yield captured
    logger.remove(handler_id)


def events_named(events: list[dict[str, Any]], name: str) -> list[dict[str, Any]]:
    return [e for e in events if e.get("event") == name]



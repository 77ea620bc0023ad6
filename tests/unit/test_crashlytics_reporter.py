"""Unit tests for CrashlyticsReporter endpoint, headers and crash report payload."""
from __future__ import annotations

import asyncio
import json

import pytest

from error_reporting.app.domain.models import ErrorSeverity
from error_reporting.app.infrastructure.reporters.crashlytics_reporter import CrashlyticsReporter
from error_reporting.app.ports.http_client import HttpClientTimeoutError
from tests.conftest import FakeResponse, ScriptedHttpClient, make_record


def _reporter(client: ScriptedHttpClient) -> CrashlyticsReporter:
    return CrashlyticsReporter("demo-project", "api-key-123", http_client=client)


def test_endpoint_and_bearer_header():
    client = ScriptedHttpClient()
    reporter = _reporter(client)

    asyncio.run(reporter.report(make_record()))

    sent = client.requests[0]
    assert sent["method"] == "POST"
    assert sent["url"] == "https://firebase.googleapis.com/v1/projects/demo-project/reports:create"
    assert sent["headers"]["Authorization"] == "Bearer api-key-123"


def test_crash_report_payload():
    client = ScriptedHttpClient()
    reporter = _reporter(client)
    record = make_record(context={"screen": "checkout"}, user_data={"plan": "pro"})

    asyncio.run(reporter.report_with_context(record, {"route": "/pay"}))

    report = json.loads(client.requests[0]["content"])["report"]
    assert report["type"] == "crash"
    assert report["eventTime"] == "2024-01-01T12:00:00+00:00"
    crash = report["data"]["crashReport"]
    assert crash["exception"] == {"type": "ValueError", "message": "boom", "stackTrace": record.trace_text}
    assert crash["severity"] == "ERROR"
    assert crash["errorType"] == "runtime"
    assert crash["errorSource"] == "CheckoutScreen"
    assert crash["context"] == {"route": "/pay"}
    assert crash["errorContext"] == {"screen": "checkout"}
    assert crash["userData"] == {"plan": "pro"}
    assert crash["metadata"]["platform"] == "python"
    assert crash["metadata"]["timestamp"] == int(record.occurred_at.timestamp() * 1000)
    assert "userId" not in crash
    assert "userProperties" not in crash


@pytest.mark.parametrize(
    "severity,level",
    [
        (ErrorSeverity.LOW, "INFO"),
        (ErrorSeverity.MEDIUM, "WARNING"),
        (ErrorSeverity.HIGH, "ERROR"),
        (ErrorSeverity.CRITICAL, "FATAL"),
    ],
)
def test_severity_maps_to_crashlytics_level(severity, level):
    reporter = _reporter(ScriptedHttpClient())
    event = reporter.build_event(make_record(severity=severity), {})
    assert event["report"]["data"]["crashReport"]["severity"] == level


def test_user_id_without_properties_omits_user_properties():
    reporter = _reporter(ScriptedHttpClient())
    reporter.identify_user("u-3")
    crash = reporter.build_event(make_record(), {})["report"]["data"]["crashReport"]
    assert crash["userId"] == "u-3"
    assert "userProperties" not in crash

    reporter.set_user_properties({"tier": "gold"})
    crash = reporter.build_event(make_record(), {})["report"]["data"]["crashReport"]
    assert crash["userProperties"] == {"tier": "gold"}


def test_missing_timestamp_yields_nulls():
    reporter = _reporter(ScriptedHttpClient())
    report = reporter.build_event(make_record(occurred_at=None, source=None), {})["report"]
    assert report["eventTime"] is None
    assert report["data"]["crashReport"]["metadata"]["timestamp"] is None
    assert report["data"]["crashReport"]["errorSource"] == "unknown"


@pytest.mark.failure_path
@pytest.mark.parametrize("step", [FakeResponse(403, "forbidden"), HttpClientTimeoutError("timeout")])
def test_failures_are_swallowed(step):
    client = ScriptedHttpClient([step])
    reporter = _reporter(client)

    asyncio.run(reporter.report(make_record()))

    assert len(client.requests) == 1

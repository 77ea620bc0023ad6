"""Unit tests for ReportingService and ReportingPolicy."""
from __future__ import annotations

import asyncio

import pytest

from error_reporting.app.application.reporting_service import ReportingPolicy, ReportingService
from error_reporting.app.domain.models import ErrorCategory, ErrorSeverity
from tests.conftest import RecordingReporter, events_named, make_record


@pytest.mark.parametrize(
    "severity,expected",
    [
        (ErrorSeverity.LOW, False),
        (ErrorSeverity.MEDIUM, False),
        (ErrorSeverity.HIGH, True),
        (ErrorSeverity.CRITICAL, True),
    ],
)
def test_default_policy_reports_high_and_critical_only(severity, expected):
    assert ReportingPolicy().should_report(make_record(severity=severity)) is expected


def test_report_all_errors_policy_accepts_everything():
    assert ReportingPolicy(report_all_errors=True).should_report(make_record(severity=ErrorSeverity.LOW))


def test_capture_builds_record_and_dispatches():
    reporter = RecordingReporter()
    service = ReportingService(reporter)

    try:
        raise LookupError("no such widget")
    except LookupError as exc:
        delivered = asyncio.run(
            service.capture(
                exc,
                severity=ErrorSeverity.CRITICAL,
                category=ErrorCategory.RENDERING,
                source="ProductList",
                context={"screen": "catalog"},
            )
        )

    assert delivered is True
    record, context = reporter.reported[0]
    assert context is None
    assert record.error_type == "LookupError"
    assert record.category is ErrorCategory.RENDERING
    assert record.source == "ProductList"
    assert dict(record.context) == {"screen": "catalog"}
    assert record.occurred_at is not None


def test_capture_with_extra_context_uses_report_with_context():
    reporter = RecordingReporter()
    service = ReportingService(reporter)

    asyncio.run(service.capture(RuntimeError("x"), extra_context={"route": "/home"}))

    assert reporter.journal == [("recording", "report_with_context")]
    assert reporter.reported[0][1] == {"route": "/home"}


def test_filtered_record_is_not_dispatched(log_events):
    reporter = RecordingReporter()
    service = ReportingService(reporter)

    delivered = asyncio.run(service.report(make_record(severity=ErrorSeverity.LOW)))

    assert delivered is False
    assert reporter.report_calls == 0
    assert events_named(log_events, "report_filtered")[0]["severity"] == "low"


@pytest.mark.failure_path
def test_reporter_failure_never_reaches_the_caller():
    reporter = RecordingReporter(raise_on_report=ValueError("Unsupported HTTP method: DELETE"))
    service = ReportingService(reporter, ReportingPolicy(report_all_errors=True))

    delivered = asyncio.run(service.report(make_record()))

    assert delivered is False
    assert reporter.report_calls == 1

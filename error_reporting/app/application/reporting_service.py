"""
Entry point for the UI boundary: turn caught exceptions into records and hand them to a reporter.

Reporting never blocks or breaks the host: policy-filtered records are dropped,
and anything the reporter raises is logged and absorbed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from loguru import logger

from error_reporting.app.constants import SERVICE_NAME
from error_reporting.app.domain.models import ErrorCategory, ErrorRecord, ErrorSeverity
from error_reporting.app.ports.error_reporter import ErrorReporter

_REPORTED_BY_DEFAULT = frozenset({ErrorSeverity.HIGH, ErrorSeverity.CRITICAL})


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


@dataclass(frozen=True)
class ReportingPolicy:
    """Decides which records leave the process. By default only high and critical ones do."""

    report_all_errors: bool = False

    def should_report(self, record: ErrorRecord) -> bool:
        if self.report_all_errors:
            return True
        return record.severity in _REPORTED_BY_DEFAULT


class ReportingService:
    def __init__(self, reporter: ErrorReporter, policy: ReportingPolicy | None = None) -> None:
        self._reporter = reporter
        self._policy = policy or ReportingPolicy()

    @property
    def reporter(self) -> ErrorReporter:
        return self._reporter

    @property
    def policy(self) -> ReportingPolicy:
        return self._policy

    async def capture(
        self,
        exc: BaseException,
        *,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        category: ErrorCategory = ErrorCategory.RUNTIME,
        source: str | None = None,
        context: Mapping[str, Any] | None = None,
        user_data: Mapping[str, Any] | None = None,
        extra_context: Mapping[str, Any] | None = None,
    ) -> bool:
        record = ErrorRecord.from_exception(
            exc,
            severity=severity,
            category=category,
            source=source,
            context=context,
            user_data=user_data,
        )
        return await self.report(record, extra_context)

    async def report(self, record: ErrorRecord, extra_context: Mapping[str, Any] | None = None) -> bool:
        """Returns True when the record was handed to the reporter without error."""
        if not self._policy.should_report(record):
            _log(
                "report_filtered",
                error_type=record.error_type,
                severity=record.severity.value,
                source=record.source,
            )
            return False
        try:
            if extra_context:
                await self._reporter.report_with_context(record, extra_context)
            else:
                await self._reporter.report(record)
            return True
        except Exception as exc:
            logger.warning("error reporting failed for {}: {}", record.error_type, exc)
            return False

"""Console reporter: writes a readable summary of each record to the loguru log. No network I/O."""
from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from error_reporting.app.constants import SERVICE_NAME
from error_reporting.app.domain.models import ErrorRecord


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class ConsoleReporter:
    """Logs records for local development.

    With extra context, the record's own context and the extra keys are combined
    into one mapping; extra keys win on collision.
    """

    async def report(self, record: ErrorRecord) -> None:
        self._write(record, record.context_dict(), with_context=False)

    async def report_with_context(self, record: ErrorRecord, context: Mapping[str, Any]) -> None:
        combined = {**(record.context_dict() or {}), **dict(context)}
        self._write(record, combined, with_context=True)

    def _write(self, record: ErrorRecord, context: dict[str, Any] | None, *, with_context: bool) -> None:
        title = "Error report (with context)" if with_context else "Error report"
        logger.error(
            "{}: {}: {}\n  Type: {}\n  Severity: {}\n  Source: {}\n  Context: {}",
            title,
            record.error_type,
            record.message,
            record.category.value,
            record.severity.value,
            record.source or "unknown",
            context,
        )
        logger.debug("Stack trace:\n{}", record.trace_text)
        _log(
            "error_reported",
            error_type=record.error_type,
            category=record.category.value,
            severity=record.severity.value,
            source=record.source,
        )

    def identify_user(self, user_id: str) -> None:
        _log("user_identified", user_id=user_id)

    def set_user_properties(self, properties: Mapping[str, Any]) -> None:
        _log("user_properties_set", properties=dict(properties))

    def clear_user(self) -> None:
        _log("user_cleared")

    async def close(self) -> None:
        return

"""No-op reporter for tests or when reporting is disabled."""
from __future__ import annotations

from typing import Any, Mapping

from error_reporting.app.domain.models import ErrorRecord


class NullReporter:
    async def report(self, record: ErrorRecord) -> None:
        return

    async def report_with_context(self, record: ErrorRecord, context: Mapping[str, Any]) -> None:
        return

    def identify_user(self, user_id: str) -> None:
        return

    def set_user_properties(self, properties: Mapping[str, Any]) -> None:
        return

    def clear_user(self) -> None:
        return

    async def close(self) -> None:
        return

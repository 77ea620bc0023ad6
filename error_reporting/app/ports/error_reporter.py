"""Port: error reporter capability. The UI boundary talks to reporters only through this contract."""
from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from error_reporting.app.domain.models import ErrorRecord


@runtime_checkable
class ErrorReporter(Protocol):
    """Transmits ErrorRecords to some destination and tracks the current user.

    Implementations must not let delivery failures escape; only configuration
    errors may raise.
    """

    async def report(self, record: ErrorRecord) -> None: ...

    async def report_with_context(self, record: ErrorRecord, context: Mapping[str, Any]) -> None: ...

    def identify_user(self, user_id: str) -> None: ...

    def set_user_properties(self, properties: Mapping[str, Any]) -> None: ...

    def clear_user(self) -> None: ...

    async def close(self) -> None: ...

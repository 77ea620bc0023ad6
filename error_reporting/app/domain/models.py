"""Domain models."""
from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    BUILD = "build"
    RUNTIME = "runtime"
    RENDERING = "rendering"
    STATE = "state"
    EXTERNAL = "external"
    UNKNOWN = "unknown"


def _frozen_mapping(value: Mapping[str, Any] | None, name: str) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be a mapping or None")
    return MappingProxyType(dict(value))


@dataclass(frozen=True, eq=False)
class ErrorRecord:
    """One captured error occurrence (value object).

    `trace` is either preformatted text or a `traceback.StackSummary`. The
    `context` and `user_data` mappings are copied into read-only views so the
    record cannot be changed after construction.
    """

    cause: Any
    trace: str | traceback.StackSummary
    severity: ErrorSeverity
    category: ErrorCategory
    source: str | None = None
    occurred_at: datetime | None = None
    context: Mapping[str, Any] | None = None
    user_data: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.cause is None:
            raise TypeError("error record cause is required")
        if not isinstance(self.trace, (str, traceback.StackSummary)):
            raise TypeError("error record trace must be a str or StackSummary")
        if not isinstance(self.severity, ErrorSeverity):
            object.__setattr__(self, "severity", ErrorSeverity(self.severity))
        if not isinstance(self.category, ErrorCategory):
            object.__setattr__(self, "category", ErrorCategory(self.category))
        if self.occurred_at is not None and not isinstance(self.occurred_at, datetime):
            raise TypeError("error record occurred_at must be a datetime or None")
        object.__setattr__(self, "context", _frozen_mapping(self.context, "context"))
        object.__setattr__(self, "user_data", _frozen_mapping(self.user_data, "user_data"))

    @staticmethod
    def from_exception(
        exc: BaseException,
        *,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        category: ErrorCategory = ErrorCategory.RUNTIME,
        source: str | None = None,
        context: Mapping[str, Any] | None = None,
        user_data: Mapping[str, Any] | None = None,
        occurred_at: datetime | None = None,
    ) -> "ErrorRecord":
        """Build a record from a caught exception, timestamped now (UTC) by default."""
        if exc.__traceback__ is not None:
            trace: str | traceback.StackSummary = traceback.extract_tb(exc.__traceback__)
        else:
            trace = "".join(traceback.format_exception_only(type(exc), exc))
        return ErrorRecord(
            cause=exc,
            trace=trace,
            severity=severity,
            category=category,
            source=source,
            occurred_at=occurred_at or datetime.now(timezone.utc),
            context=context,
            user_data=user_data,
        )

    @property
    def error_type(self) -> str:
        return type(self.cause).__name__

    @property
    def message(self) -> str:
        return str(self.cause)

    @property
    def trace_text(self) -> str:
        if isinstance(self.trace, traceback.StackSummary):
            return "".join(self.trace.format())
        return self.trace

    def context_dict(self) -> dict[str, Any] | None:
        return dict(self.context) if self.context is not None else None

    def user_data_dict(self) -> dict[str, Any] | None:
        return dict(self.user_data) if self.user_data is not None else None

    def __str__(self) -> str:
        return (
            f"ErrorRecord(error: {self.message}, severity: {self.severity.value}, "
            f"category: {self.category.value}, source: {self.source})"
        )


@dataclass
class UserIdentity:
    """Currently known end user for one reporter instance. Never shared between reporters."""

    id: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    def identify(self, user_id: str) -> None:
        self.id = user_id

    def merge_properties(self, properties: Mapping[str, Any]) -> None:
        self.properties = {**self.properties, **dict(properties)}

    def clear(self) -> None:
        self.id = None
        self.properties = {}

    @property
    def is_identified(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry configuration for Transport. Durations in seconds."""

    max_attempts: int = 3
    retry_delay: float = 1.0
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        if not isinstance(self.max_attempts, int) or self.max_attempts < 1:
            raise ValueError("retry policy max_attempts must be an int >= 1")
        if self.retry_delay < 0:
            raise ValueError("retry policy retry_delay must be non-negative")
        if self.request_timeout <= 0:
            raise ValueError("retry policy request_timeout must be positive")


@dataclass(frozen=True)
class CompositeConfig:
    """Fan-out policy of a CompositeReporter."""

    continue_on_failure: bool = True
    parallel: bool = True


@dataclass(frozen=True)
class TransportOutcome:
    """Result of Transport.send.
    succeeded=True => status_code is the 2xx status of the final attempt.
    succeeded=False => error describes the last failed attempt.
    """

    succeeded: bool
    attempts: int
    status_code: int | None = None
    error: str | None = None

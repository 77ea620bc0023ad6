"""Error reporting for UI error boundaries: composite fan-out over Sentry, Crashlytics and webhook reporters."""

from __future__ import annotations

from .app.application.composite_reporter import CompositeReporter
from .app.application.presets import ReporterFactory
from .app.application.reporting_service import ReportingPolicy, ReportingService
from .app.composition import ReportingDependencies, create_reporting_dependencies
from .app.constants import PACKAGE_VERSION as __version__
from .app.domain.models import (
    CompositeConfig,
    ErrorCategory,
    ErrorRecord,
    ErrorSeverity,
    RetryPolicy,
    TransportOutcome,
    UserIdentity,
)
from .app.domain.transport import Transport, UnsupportedMethodError
from .app.infrastructure.reporters.console_reporter import ConsoleReporter
from .app.infrastructure.reporters.crashlytics_reporter import CrashlyticsReporter
from .app.infrastructure.reporters.null_reporter import NullReporter
from .app.infrastructure.reporters.sentry_reporter import SentryReporter
from .app.infrastructure.reporters.webhook_reporter import WebhookReporter
from .app.ports.error_reporter import ErrorReporter

__all__ = [
    "__version__",
    "CompositeConfig",
    "CompositeReporter",
    "ConsoleReporter",
    "CrashlyticsReporter",
    "ErrorCategory",
    "ErrorRecord",
    "ErrorReporter",
    "ErrorSeverity",
    "NullReporter",
    "ReporterFactory",
    "ReportingDependencies",
    "ReportingPolicy",
    "ReportingService",
    "RetryPolicy",
    "SentryReporter",
    "Transport",
    "TransportOutcome",
    "UnsupportedMethodError",
    "UserIdentity",
    "WebhookReporter",
    "create_reporting_dependencies",
]

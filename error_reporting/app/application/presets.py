"""Reporter presets: build common reporter configurations for named environments.

Pure construction helpers; the returned composites own the reporters they hold.
"""
from __future__ import annotations

from typing import Iterable

from error_reporting.app.application.composite_reporter import CompositeReporter
from error_reporting.app.constants import HTTP_METHOD
from error_reporting.app.infrastructure.reporters.console_reporter import ConsoleReporter
from error_reporting.app.infrastructure.reporters.crashlytics_reporter import CrashlyticsReporter
from error_reporting.app.infrastructure.reporters.sentry_reporter import SentryReporter
from error_reporting.app.infrastructure.reporters.webhook_reporter import WebhookReporter
from error_reporting.app.ports.error_reporter import ErrorReporter


class ReporterFactory:
    @staticmethod
    def sentry_reporter(
        dsn: str,
        project_id: str,
        *,
        environment: str = "production",
        release: str | None = None,
        server_name: str | None = None,
    ) -> SentryReporter:
        return SentryReporter(
            dsn,
            project_id,
            environment=environment,
            release=release,
            server_name=server_name,
        )

    @staticmethod
    def crashlytics_reporter(project_id: str, api_key: str) -> CrashlyticsReporter:
        return CrashlyticsReporter(project_id, api_key)

    @staticmethod
    def webhook_reporter(
        endpoint: str,
        *,
        method: str = HTTP_METHOD.POST,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
    ) -> WebhookReporter:
        return WebhookReporter(
            endpoint,
            method=method,
            headers=headers,
            timeout=timeout,
            retry_attempts=retry_attempts,
            retry_delay=retry_delay,
        )

    @staticmethod
    def production_preset(
        sentry_dsn: str,
        sentry_project_id: str,
        crashlytics_project_id: str,
        crashlytics_api_key: str,
        *,
        environment: str = "production",
        release: str | None = None,
        continue_on_failure: bool = True,
        parallel: bool = True,
    ) -> CompositeReporter:
        """Sentry and Crashlytics side by side."""
        return CompositeReporter(
            [
                ReporterFactory.sentry_reporter(
                    sentry_dsn,
                    sentry_project_id,
                    environment=environment,
                    release=release,
                ),
                ReporterFactory.crashlytics_reporter(crashlytics_project_id, crashlytics_api_key),
            ],
            continue_on_failure=continue_on_failure,
            parallel=parallel,
        )

    @staticmethod
    def development_preset(
        webhook_endpoint: str | None = None,
        webhook_headers: dict[str, str] | None = None,
        *,
        include_console: bool = True,
    ) -> CompositeReporter:
        """Console first, then an optional single-attempt webhook. Always sequential."""
        reporters: list[ErrorReporter] = []
        if include_console:
            reporters.append(ConsoleReporter())
        if webhook_endpoint is not None:
            reporters.append(
                ReporterFactory.webhook_reporter(
                    webhook_endpoint,
                    headers=webhook_headers,
                    retry_attempts=1,
                )
            )
        return CompositeReporter(reporters, continue_on_failure=True, parallel=False)

    @staticmethod
    def staging_preset(
        sentry_dsn: str,
        sentry_project_id: str,
        webhook_endpoint: str | None = None,
        webhook_headers: dict[str, str] | None = None,
        *,
        environment: str = "staging",
        release: str | None = None,
    ) -> CompositeReporter:
        reporters: list[ErrorReporter] = [
            ReporterFactory.sentry_reporter(
                sentry_dsn,
                sentry_project_id,
                environment=environment,
                release=release,
            )
        ]
        if webhook_endpoint is not None:
            reporters.append(
                ReporterFactory.webhook_reporter(
                    webhook_endpoint,
                    headers=webhook_headers,
                    retry_attempts=2,
                )
            )
        return CompositeReporter(reporters, continue_on_failure=True, parallel=True)

    @staticmethod
    def custom_preset(
        reporters: Iterable[ErrorReporter],
        *,
        continue_on_failure: bool = True,
        parallel: bool = True,
    ) -> CompositeReporter:
        return CompositeReporter(
            reporters,
            continue_on_failure=continue_on_failure,
            parallel=parallel,
        )

"""Reporting composition root: build and lifecycle-manage the configured reporter.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle.
"""
from __future__ import annotations

from loguru import logger

from error_reporting.app.application.reporting_service import ReportingPolicy, ReportingService
from error_reporting.app.config.settings import Settings
from error_reporting.app.infrastructure.reporters.factory import create_error_reporter
from error_reporting.app.ports.error_reporter import ErrorReporter


class ReportingDependencies:
    """Holds the wired reporter and service; the UI boundary keeps one of these per application."""

    def __init__(self, *, settings: Settings) -> None:
        self._settings = settings
        self._reporter: ErrorReporter | None = None
        self._service: ReportingService | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def reporter(self) -> ErrorReporter:
        if self._reporter is None:
            self._reporter = create_error_reporter(self._settings)
        return self._reporter

    @property
    def service(self) -> ReportingService:
        if self._service is None:
            self._service = ReportingService(
                self.reporter,
                ReportingPolicy(report_all_errors=self._settings.report_all_errors),
            )
        return self._service

    async def close(self) -> None:
        if self._reporter is not None:
            try:
                await self._reporter.close()
            except Exception as exc:
                logger.warning("reporter close failed: {}", exc)
        self._reporter = None
        self._service = None


def create_reporting_dependencies(settings: Settings | None = None) -> ReportingDependencies:
    return ReportingDependencies(settings=settings or Settings())

"""Reporter factory: selects a reporter configuration from settings. Only place that maps config to presets.

REPORTING_CONTINUE_ON_FAILURE and REPORTING_PARALLEL apply to the production preset
only; staging and development use fixed fan-out settings.
"""
from __future__ import annotations

from loguru import logger

from error_reporting.app.application.presets import ReporterFactory
from error_reporting.app.config.settings import Settings
from error_reporting.app.constants import REPORTING_ENVIRONMENT, SERVICE_NAME
from error_reporting.app.infrastructure.reporters.null_reporter import NullReporter
from error_reporting.app.ports.error_reporter import ErrorReporter

_FAN_OUT_SETTINGS = ("continue_on_failure", "parallel")


def _require(settings: Settings, *names: str) -> None:
    missing = [name for name in names if not getattr(settings, name)]
    if missing:
        raise ValueError(
            f"Missing reporting settings for {settings.environment}: {', '.join(missing)}"
        )


def _log_ignored_fan_out(settings: Settings) -> None:
    ignored = [name for name in _FAN_OUT_SETTINGS if name in settings.model_fields_set]
    if ignored:
        logger.bind(
            service_name=SERVICE_NAME,
            event="fan_out_settings_ignored",
            environment=settings.environment,
            settings=ignored,
        ).warning("")


def create_error_reporter(settings: Settings) -> ErrorReporter:
    environment = settings.environment.strip().lower()
    webhook_endpoint = settings.webhook_endpoint or None

    if environment == REPORTING_ENVIRONMENT.PRODUCTION:
        _require(
            settings,
            "sentry_dsn",
            "sentry_project_id",
            "crashlytics_project_id",
            "crashlytics_api_key",
        )
        return ReporterFactory.production_preset(
            settings.sentry_dsn,
            settings.sentry_project_id,
            settings.crashlytics_project_id,
            settings.crashlytics_api_key,
            environment=settings.environment,
            release=settings.release,
            continue_on_failure=settings.continue_on_failure,
            parallel=settings.parallel,
        )

    if environment == REPORTING_ENVIRONMENT.STAGING:
        _require(settings, "sentry_dsn", "sentry_project_id")
        _log_ignored_fan_out(settings)
        return ReporterFactory.staging_preset(
            settings.sentry_dsn,
            settings.sentry_project_id,
            webhook_endpoint,
            environment=settings.environment,
            release=settings.release,
        )

    if environment == REPORTING_ENVIRONMENT.DEVELOPMENT:
        _log_ignored_fan_out(settings)
        return ReporterFactory.development_preset(
            webhook_endpoint,
            include_console=settings.include_console,
        )

    if environment == REPORTING_ENVIRONMENT.NONE:
        return NullReporter()

    raise ValueError(f"Unsupported reporting environment: {environment}")

"""Settings for error reporting."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field("development", validation_alias="REPORTING_ENVIRONMENT")
    release: str | None = Field(None, validation_alias="REPORTING_RELEASE")

    sentry_dsn: str = Field("", validation_alias="SENTRY_DSN")
    sentry_project_id: str = Field("", validation_alias="SENTRY_PROJECT_ID")

    crashlytics_project_id: str = Field("", validation_alias="CRASHLYTICS_PROJECT_ID")
    crashlytics_api_key: str = Field("", validation_alias="CRASHLYTICS_API_KEY")

    webhook_endpoint: str = Field("", validation_alias="WEBHOOK_ENDPOINT")

    include_console: bool = Field(True, validation_alias="REPORTING_INCLUDE_CONSOLE")
    continue_on_failure: bool = Field(True, validation_alias="REPORTING_CONTINUE_ON_FAILURE")
    parallel: bool = Field(True, validation_alias="REPORTING_PARALLEL")
    report_all_errors: bool = Field(False, validation_alias="REPORT_ALL_ERRORS")

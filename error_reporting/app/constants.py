"""Reporting-level constants shared across modules."""
from __future__ import annotations

SERVICE_NAME = "error_reporting"

PACKAGE_NAME = "error-boundary-reporting"
PACKAGE_VERSION = "0.1.0"
PLATFORM = "python"

USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION}"


class HTTP_METHOD:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"


SUPPORTED_HTTP_METHODS = frozenset(
    {HTTP_METHOD.GET, HTTP_METHOD.POST, HTTP_METHOD.PUT, HTTP_METHOD.PATCH}
)


class REPORTING_ENVIRONMENT:
    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    NONE = "none"

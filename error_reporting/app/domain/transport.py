"""Transport: sends one report request with bounded, fixed-delay retries.

Uses the HTTP port (AbstractHttpClient); the client is owned by the reporter that
builds the Transport. Never raises for delivery failures: every attempt that
ends in a non-2xx status or a client error counts as failed, and after the last
attempt the outcome is logged and returned.
"""
from __future__ import annotations

from typing import Any

from loguru import logger

from error_reporting.app.constants import SERVICE_NAME, SUPPORTED_HTTP_METHODS
from error_reporting.app.core.backoff import fixed_backoff
from error_reporting.app.domain.models import RetryPolicy, TransportOutcome
from error_reporting.app.ports.http_client import (
    AbstractHttpClient,
    HttpClientError,
    RequestTimeout,
)


class UnsupportedMethodError(ValueError):
    """Raised when a reporter is configured with an HTTP method Transport cannot send."""


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class Transport:
    """Retrying HTTP request sender with an immutable RetryPolicy."""

    def __init__(self, client: AbstractHttpClient, policy: RetryPolicy) -> None:
        self._client = client
        self._policy = policy
        self._timeout = RequestTimeout.uniform(policy.request_timeout)

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def send(
        self,
        url: str,
        *,
        method: str,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        params: dict[str, str] | None = None,
    ) -> TransportOutcome:
        verb = method.upper()
        if verb not in SUPPORTED_HTTP_METHODS:
            raise UnsupportedMethodError(f"Unsupported HTTP method: {method}")

        attempts = 0
        last_error: str | None = None
        last_status: int | None = None
        async for attempt in fixed_backoff(self._policy.retry_delay, self._policy.max_attempts):
            attempts = attempt
            try:
                response = await self._client.request(
                    verb,
                    url,
                    timeout=self._timeout,
                    headers=headers,
                    content=body,
                    params=params,
                )
            except HttpClientError as exc:
                last_status = None
                last_error = str(exc)
            except Exception as exc:
                last_status = None
                last_error = f"{type(exc).__name__}: {exc}"
            else:
                last_status = response.status_code
                if 200 <= response.status_code < 300:
                    _log("report_delivered", url=url, method=verb, attempt=attempt, status=last_status)
                    return TransportOutcome(succeeded=True, attempts=attempt, status_code=last_status)
                last_error = f"http status {response.status_code}: {response.text}"

            _log(
                "report_attempt_failed",
                url=url,
                method=verb,
                attempt=attempt,
                max_attempts=self._policy.max_attempts,
                error=last_error,
            )

        logger.warning(
            "report to {} dropped after {} attempts: {}", url, attempts, last_error
        )
        _log("report_dropped", url=url, method=verb, attempts=attempts, error=last_error)
        return TransportOutcome(
            succeeded=False,
            attempts=attempts,
            status_code=last_status,
            error=last_error,
        )

"""Composite reporter: fans one report out to an ordered, immutable list of reporters."""
from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping

from loguru import logger

from error_reporting.app.constants import SERVICE_NAME
from error_reporting.app.domain.models import CompositeConfig, ErrorRecord
from error_reporting.app.ports.error_reporter import ErrorReporter


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class CompositeReporter:
    """
    Sends each record to every child reporter under one failure policy.

    parallel=True runs all children concurrently and always waits for all of them.
    parallel=False runs children one at a time in list order.
    continue_on_failure=False re-raises the first child failure: in sequential mode
    the remaining children are skipped, in parallel mode it is raised after every
    child has finished. With continue_on_failure=True child failures are logged
    and absorbed.

    The reporter list never changes; add_reporter, remove_reporter and
    with_settings return new composites.
    """

    def __init__(
        self,
        reporters: Iterable[ErrorReporter],
        *,
        continue_on_failure: bool = True,
        parallel: bool = True,
    ) -> None:
        self._reporters: tuple[ErrorReporter, ...] = tuple(reporters)
        self._config = CompositeConfig(continue_on_failure=continue_on_failure, parallel=parallel)

    @property
    def config(self) -> CompositeConfig:
        return self._config

    @property
    def continue_on_failure(self) -> bool:
        return self._config.continue_on_failure

    @property
    def parallel(self) -> bool:
        return self._config.parallel

    @property
    def reporter_count(self) -> int:
        return len(self._reporters)

    @property
    def reporters(self) -> tuple[ErrorReporter, ...]:
        return self._reporters

    async def report(self, record: ErrorRecord) -> None:
        await self._report_to_all(record, {})

    async def report_with_context(self, record: ErrorRecord, context: Mapping[str, Any]) -> None:
        await self._report_to_all(record, dict(context))

    def identify_user(self, user_id: str) -> None:
        for reporter in self._reporters:
            try:
                reporter.identify_user(user_id)
            except Exception as exc:
                self._log_setter_failure(reporter, "identify_user", exc)

    def set_user_properties(self, properties: Mapping[str, Any]) -> None:
        for reporter in self._reporters:
            try:
                reporter.set_user_properties(properties)
            except Exception as exc:
                self._log_setter_failure(reporter, "set_user_properties", exc)

    def clear_user(self) -> None:
        for reporter in self._reporters:
            try:
                reporter.clear_user()
            except Exception as exc:
                self._log_setter_failure(reporter, "clear_user", exc)

    async def close(self) -> None:
        """Close every child; the composite owns the reporters it was built with."""
        for reporter in self._reporters:
            try:
                await reporter.close()
            except Exception as exc:
                logger.warning("reporter {} close failed: {}", type(reporter).__name__, exc)

    def add_reporter(self, reporter: ErrorReporter) -> "CompositeReporter":
        return CompositeReporter(
            [*self._reporters, reporter],
            continue_on_failure=self.continue_on_failure,
            parallel=self.parallel,
        )

    def remove_reporter(self, reporter: ErrorReporter) -> "CompositeReporter":
        return CompositeReporter(
            [r for r in self._reporters if r is not reporter],
            continue_on_failure=self.continue_on_failure,
            parallel=self.parallel,
        )

    def with_settings(
        self,
        *,
        continue_on_failure: bool | None = None,
        parallel: bool | None = None,
    ) -> "CompositeReporter":
        return CompositeReporter(
            self._reporters,
            continue_on_failure=self.continue_on_failure if continue_on_failure is None else continue_on_failure,
            parallel=self.parallel if parallel is None else parallel,
        )

    async def _report_to_all(self, record: ErrorRecord, context: dict[str, Any]) -> None:
        if not self._reporters:
            return
        if self.parallel:
            await self._report_in_parallel(record, context)
        else:
            await self._report_sequentially(record, context)

    async def _report_in_parallel(self, record: ErrorRecord, context: dict[str, Any]) -> None:
        results = await asyncio.gather(
            *(self._dispatch(reporter, record, context) for reporter in self._reporters),
            return_exceptions=True,
        )
        if self.continue_on_failure:
            return
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _report_sequentially(self, record: ErrorRecord, context: dict[str, Any]) -> None:
        for reporter in self._reporters:
            try:
                await self._dispatch(reporter, record, context)
            except Exception:
                if not self.continue_on_failure:
                    raise

    async def _dispatch(self, reporter: ErrorReporter, record: ErrorRecord, context: dict[str, Any]) -> None:
        try:
            if context:
                await reporter.report_with_context(record, context)
            else:
                await reporter.report(record)
        except Exception as exc:
            _log(
                "reporter_failed",
                reporter=type(reporter).__name__,
                error=str(exc),
                continue_on_failure=self.continue_on_failure,
            )
            raise

    def _log_setter_failure(self, reporter: ErrorReporter, method: str, exc: Exception) -> None:
        _log(
            "reporter_setter_failed",
            reporter=type(reporter).__name__,
            method=method,
            error=str(exc),
        )

"""Shared base for reporters that keep their own user identity."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from error_reporting.app.domain.models import ErrorRecord, UserIdentity


class UserTrackingReporter(ABC):
    """Owns one UserIdentity; subclasses only implement delivery."""

    def __init__(self) -> None:
        self._user = UserIdentity()

    @property
    def user(self) -> UserIdentity:
        """Snapshot of the current identity; mutating it does not affect the reporter."""
        return UserIdentity(id=self._user.id, properties=dict(self._user.properties))

    async def report(self, record: ErrorRecord) -> None:
        await self._deliver(record, {})

    async def report_with_context(self, record: ErrorRecord, context: Mapping[str, Any]) -> None:
        await self._deliver(record, dict(context))

    def identify_user(self, user_id: str) -> None:
        self._user.identify(user_id)

    def set_user_properties(self, properties: Mapping[str, Any]) -> None:
        self._user.merge_properties(properties)

    def clear_user(self) -> None:
        self._user.clear()

    @abstractmethod
    async def _deliver(self, record: ErrorRecord, context: dict[str, Any]) -> None: ...

    async def close(self) -> None:
        return

"""
gratitude.services.errors — Exceptions raised by collaborators
===============================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gratitude.engine.events import DispatchResult


class GratitudeError(Exception):
    """Base class for recognition pipeline failures."""


class UserLookupError(GratitudeError):
    """The chat platform rejected a user lookup.

    ``str(exc)`` is the platform's raw error text and is shown to the giver.
    """


class LedgerWriteError(GratitudeError):
    """Persisting a recognition unit failed."""


class DispatchError(GratitudeError):
    """One or more units failed to persist.  Units that succeeded stay."""

    def __init__(self, results: list[DispatchResult]) -> None:
        self.results = results
        failed = [r for r in results if not r.ok]
        super().__init__(
            f"{len(failed)} of {len(results)} recognition unit(s) failed to persist"
        )

    @property
    def failures(self) -> list[DispatchResult]:
        return [r for r in self.results if not r.ok]


class NotificationError(GratitudeError):
    """Delivering a notification to a receiver failed."""

    def __init__(self, recipient_id: str, cause: BaseException) -> None:
        self.recipient_id = recipient_id
        self.cause = cause
        super().__init__(f"Failed to notify {recipient_id}: {cause}")

"""Exception hierarchy and diagnostic records for langpack.

Hierarchy:
    LangPackError (base)
    └─ RetrievalError (primary and failover fetch both failed)

Lookup misses are not exceptions. TranslationService.get_string() recovers
locally and describes the miss with a MissingKeyInfo record instead.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langpack.enums import FetchSource
    from langpack.types import MessageKey, PackIdentifier

__all__ = [
    "FetchAttempt",
    "LangPackError",
    "MissingKeyInfo",
    "RetrievalError",
]


@dataclass(frozen=True, slots=True)
class FetchAttempt:
    """Record of a single HTTP request for a pack.

    Attributes:
        source: Which location was tried (primary or failover)
        url: Full request URL, cache-busting parameter included
        status_code: HTTP status, or None if the request never got a response
        error: Transport error text, if any
    """

    source: FetchSource
    url: str
    status_code: int | None = None
    error: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if the attempt returned HTTP 200."""
        return self.status_code == 200

    def describe(self) -> str:
        """Return a one-line summary for error messages."""
        if self.status_code is not None:
            return f"{self.source} {self.url} -> HTTP {self.status_code}"
        return f"{self.source} {self.url} -> {self.error or 'no response'}"


@dataclass(frozen=True, slots=True)
class MissingKeyInfo:
    """Information about a message key that had no entry.

    Provided to the on_missing callback of TranslationService.

    Attributes:
        key: The key that was requested
        active_pack: Pack identifier active at lookup time ('' if none)
    """

    key: MessageKey
    active_pack: PackIdentifier


class LangPackError(Exception):
    """Base exception for all langpack errors."""


class RetrievalError(LangPackError):
    """A language pack could not be fetched from any location.

    Raised once both the primary and the failover request have failed.
    No retry is attempted; callers decide on retry policy.

    Attributes:
        identifier: Pack identifier that was requested
        attempts: Every request made, in order
    """

    def __init__(self, identifier: PackIdentifier, attempts: tuple[FetchAttempt, ...]) -> None:
        """Initialize RetrievalError.

        Args:
            identifier: Pack identifier that was requested
            attempts: Every request made, in order
        """
        self.identifier = identifier
        self.attempts = attempts
        details = "; ".join(attempt.describe() for attempt in attempts)
        super().__init__(f"Could not retrieve language pack '{identifier}': {details}")

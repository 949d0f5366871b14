"""Enumerations for langpack type-safe constants.

Uses StrEnum for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class FetchSource(StrEnum):
    """Location a pack was requested from.

    StrEnum provides automatic string conversion: str(FetchSource.PRIMARY) == "primary"
    """

    PRIMARY = "primary"
    """Directory of the current page."""

    FAILOVER = "failover"
    """Fixed remote proxy, used after the primary fails."""


class LoadStatus(StrEnum):
    """Outcome of a TranslationService.load() call.

    Failed loads raise RetrievalError and have no status.
    """

    LOADED = "loaded"
    """Pack fetched, parsed and activated."""

    ALREADY_ACTIVE = "already_active"
    """Requested pack was already active; nothing was fetched."""


class PublishKind(StrEnum):
    """Kind of update sent to a StatePublisher."""

    SET_LANG_MESSAGE = "SET_LANG_MESSAGE"
    """One parsed key/value entry."""

    TRANSLATION_BANNER = "translationBanner"
    """Show (payload) or hide (None) the switch-back-to-English banner."""


__all__ = [
    "FetchSource",
    "LoadStatus",
    "PublishKind",
]

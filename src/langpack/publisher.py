"""Outbound notifications from TranslationService.

TranslationService does not know how or where strings are rendered. It
emits two kinds of updates to a StatePublisher:

    publish_message(LangMessage)       once per parsed entry
    publish_banner(TranslationBanner)  once per load; None hides the banner

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from langpack.enums import PublishKind
from langpack.types import MessageKey, MessageTemplate

__all__ = [
    "LangMessage",
    "NullStatePublisher",
    "RecordingStatePublisher",
    "StatePublisher",
    "TranslationBanner",
]


@dataclass(frozen=True, slots=True)
class LangMessage:
    """A single key/value entry published after it is merged."""

    key: MessageKey
    value: MessageTemplate

    @property
    def kind(self) -> PublishKind:
        return PublishKind.SET_LANG_MESSAGE


@dataclass(frozen=True, slots=True)
class TranslationBanner:
    """Payload for the "switch back to English" banner.

    All strings are already rendered with the active pack's language name.

    Attributes:
        to_en: Link label offering the English version
        detected_as: Label naming the detected language
        keep: Label for keeping the current language
        reset: Loads the baseline pack when called
    """

    to_en: str
    detected_as: str
    keep: str
    reset: Callable[[], object] = field(compare=False, repr=False)

    @property
    def kind(self) -> PublishKind:
        return PublishKind.TRANSLATION_BANNER


class StatePublisher(Protocol):
    """Receiver of language updates (UI store, message bus, test recorder)."""

    def publish_message(self, message: LangMessage) -> None:
        """Receive one merged entry."""

    def publish_banner(self, banner: TranslationBanner | None) -> None:
        """Show the banner, or hide it when banner is None."""


class NullStatePublisher:
    """Publisher that discards every update."""

    __slots__ = ()

    def publish_message(self, message: LangMessage) -> None:
        pass

    def publish_banner(self, banner: TranslationBanner | None) -> None:
        pass


class RecordingStatePublisher:
    """Publisher that keeps every update in memory.

    Attributes:
        messages: Published entries in publish order
        banners: Published banner states in publish order
    """

    __slots__ = ("banners", "messages")

    def __init__(self) -> None:
        self.messages: list[LangMessage] = []
        self.banners: list[TranslationBanner | None] = []

    @property
    def banner(self) -> TranslationBanner | None:
        """Most recent banner state (None if hidden or never published)."""
        return self.banners[-1] if self.banners else None

    def publish_message(self, message: LangMessage) -> None:
        self.messages.append(message)

    def publish_banner(self, banner: TranslationBanner | None) -> None:
        self.banners.append(banner)

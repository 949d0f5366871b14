"""Translation service: resolve, fetch, parse and publish language packs.

TranslationService owns the string table and the active pack identifier.
It orchestrates LanguageCatalog, a ResourceFetcher and the pack parser,
and reports every change to a StatePublisher.

Load semantics:
    - Loading the active pack is a no-op (nothing is fetched).
    - A failed fetch raises RetrievalError before any entry is merged;
      the table and the active pack stay as they were.
    - Entries are merged and published one by one in line order.
      Entries of the previous pack that the new pack does not redefine
      remain available.

Thread Safety:
    load() is serialized per instance with a reentrant lock, so the
    idempotence check and the merge never interleave with another load.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from langpack.catalog import LanguageCatalog
from langpack.constants import (
    BANNER_DETECTED_AS_KEY,
    BANNER_KEEP_KEY,
    BANNER_TO_EN_KEY,
    BASELINE_PACK,
    LANG_NAME_KEY,
    LANG_NAME_PLACEHOLDER,
    MISSING_KEY_TEMPLATE,
)
from langpack.enums import LoadStatus
from langpack.errors import MissingKeyInfo, RetrievalError
from langpack.fetcher import ResourceFetcher
from langpack.parser import iter_entries
from langpack.publisher import (
    LangMessage,
    NullStatePublisher,
    StatePublisher,
    TranslationBanner,
)
from langpack.types import MessageKey, MessageTemplate, PackIdentifier, RegionCode

__all__ = ["PackLoadResult", "TranslationService"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PackLoadResult:
    """Outcome of one TranslationService.load() call.

    Attributes:
        identifier: Requested pack identifier
        status: LOADED, or ALREADY_ACTIVE when nothing was fetched
        entries: Number of entries merged (0 for ALREADY_ACTIVE)
    """

    identifier: PackIdentifier
    status: LoadStatus
    entries: int = 0

    @property
    def is_loaded(self) -> bool:
        """Check if the pack was fetched and activated by this call."""
        return self.status == LoadStatus.LOADED


class TranslationService:
    """Holds the active language pack and serves strings from it.

    Example:
        >>> config = FetchConfig(page_url="https://example.org/client/")
        >>> service = TranslationService(HttpResourceFetcher(config), publisher)
        >>> service.load_default()
        >>> service.handle_region("FR")
        >>> service.get_string("lang.toEn", [("%langName", "French")])
        'Translate French to English'
    """

    __slots__ = (
        "_active_pack",
        "_baseline",
        "_catalog",
        "_fetcher",
        "_history",
        "_lock",
        "_messages",
        "_on_missing",
        "_publisher",
    )

    def __init__(
        self,
        fetcher: ResourceFetcher,
        publisher: StatePublisher | None = None,
        catalog: LanguageCatalog | None = None,
        *,
        baseline: PackIdentifier = BASELINE_PACK,
        on_missing: Callable[[MissingKeyInfo], None] | None = None,
    ) -> None:
        """Initialize service with an empty table and no active pack.

        Args:
            fetcher: Retrieves raw pack lines. Only fetch() is required;
                describe_url() is used for diagnostics when present.
            publisher: Receives entries and banner updates (default: discard)
            catalog: Region mapping (default: built-in LanguageCatalog)
            baseline: Pack that hides the banner; loaded by load_default()
            on_missing: Optional callback invoked for every lookup miss
        """
        self._fetcher = fetcher
        self._publisher: StatePublisher = publisher if publisher is not None else NullStatePublisher()
        self._catalog = catalog if catalog is not None else LanguageCatalog()
        self._baseline = baseline
        self._on_missing = on_missing
        self._messages: dict[MessageKey, MessageTemplate] = {}
        self._active_pack: PackIdentifier = ""
        self._history: list[PackLoadResult] = []
        self._lock = threading.RLock()

    @property
    def active_pack(self) -> PackIdentifier:
        """Identifier of the loaded pack ('' before the first load)."""
        return self._active_pack

    @property
    def baseline(self) -> PackIdentifier:
        return self._baseline

    @property
    def catalog(self) -> LanguageCatalog:
        return self._catalog

    @property
    def messages(self) -> Mapping[MessageKey, MessageTemplate]:
        """Read-only snapshot of the string table."""
        return MappingProxyType(dict(self._messages))

    def has_message(self, key: MessageKey) -> bool:
        return key in self._messages

    def get_load_history(self) -> tuple[PackLoadResult, ...]:
        """Results of every load() call that did not raise, oldest first."""
        return tuple(self._history)

    def load_default(self) -> PackLoadResult:
        """Load the baseline pack."""
        return self.load(self._baseline)

    def handle_region(self, region_code: RegionCode) -> PackLoadResult | None:
        """Load the pack mapped to a region.

        Unmapped regions are ignored: the current pack stays active and
        None is returned.

        Raises:
            RetrievalError: If the mapped pack could not be fetched
        """
        pack = self._catalog.resolve(region_code)
        if pack is None:
            logger.debug("No language pack for region %s", region_code)
            return None
        logger.info("Switching to %s > %s", self._catalog.describe(region_code), pack)
        return self.load(pack)

    def load(self, identifier: PackIdentifier) -> PackLoadResult:
        """Fetch, parse and activate a pack.

        Args:
            identifier: Pack identifier (e.g., 'fr.lang')

        Returns:
            PackLoadResult; status ALREADY_ACTIVE if identifier was active

        Raises:
            RetrievalError: If the pack could not be fetched. Nothing is
                merged and the active pack is unchanged.
            ValueError: If the fetcher rejects the identifier
        """
        with self._lock:
            if identifier == self._active_pack:
                logger.debug("Language pack %s already active", identifier)
                result = PackLoadResult(identifier=identifier, status=LoadStatus.ALREADY_ACTIVE)
                self._history.append(result)
                return result

            try:
                lines = self._fetcher.fetch(identifier)
            except RetrievalError:
                logger.warning(
                    "Failed to load language pack %s from %s, keeping %s",
                    identifier,
                    self._describe_location(identifier),
                    self._active_pack or "no pack",
                )
                raise

            merged = 0
            for entry in iter_entries(lines):
                self._messages[entry.key] = entry.value
                self._publisher.publish_message(LangMessage(key=entry.key, value=entry.value))
                merged += 1

            self._active_pack = identifier
            logger.info("Loaded language pack %s (%d entries)", identifier, merged)
            self.update_banner_state()

            result = PackLoadResult(identifier=identifier, status=LoadStatus.LOADED, entries=merged)
            self._history.append(result)
            return result

    def get_string(
        self,
        key: MessageKey,
        substitutions: Iterable[tuple[str, str]] = (),
    ) -> str:
        """Look up a message and fill in its placeholders.

        Each (token, replacement) pair replaces the first occurrence of
        token only, in the order given.

        A missing key never raises: it is logged, reported to on_missing,
        and rendered as '?? key ??' so it is visible on screen.

        Example:
            >>> service.get_string("lang.toEn", [("%langName", "French")])
            'Translate French to English'
            >>> service.get_string("missing.key")
            '?? missing.key ??'
        """
        template = self._messages.get(key)
        if template is None:
            logger.error("Couldn't find message key %s", key)
            if self._on_missing is not None:
                self._on_missing(MissingKeyInfo(key=key, active_pack=self._active_pack))
            return MISSING_KEY_TEMPLATE.format(key=key)

        for token, replacement in substitutions:
            template = template.replace(token, replacement, 1)
        return template

    def update_banner_state(self) -> None:
        """Publish the banner for the active pack.

        The baseline pack hides the banner. Any other pack shows it with
        labels rendered in that pack and a reset action that loads the
        baseline.
        """
        if self._active_pack == self._baseline:
            self._publisher.publish_banner(None)
            return

        placeholders = [(LANG_NAME_PLACEHOLDER, self.get_string(LANG_NAME_KEY))]
        self._publisher.publish_banner(
            TranslationBanner(
                to_en=self.get_string(BANNER_TO_EN_KEY, placeholders),
                detected_as=self.get_string(BANNER_DETECTED_AS_KEY, placeholders),
                keep=self.get_string(BANNER_KEEP_KEY, placeholders),
                reset=self.load_default,
            )
        )

    def _describe_location(self, identifier: PackIdentifier) -> str:
        # describe_url is optional for fetchers that do not subclass ResourceFetcher
        describe = getattr(self._fetcher, "describe_url", None)
        return describe(identifier) if describe is not None else identifier

    def __repr__(self) -> str:
        return (
            f"TranslationService(active_pack={self._active_pack!r}, "
            f"messages={len(self._messages)})"
        )

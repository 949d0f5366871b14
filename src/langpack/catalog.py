"""Static region-code to language-pack mapping.

LanguageCatalog answers one question: which pack best fits a region?
It holds no state beyond the mapping fixed at construction.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from langpack.constants import DEFAULT_REGION_PACKS
from langpack.locale_utils import territory_display_name
from langpack.types import PackIdentifier, RegionCode

__all__ = ["LanguageCatalog"]


class LanguageCatalog:
    """Read-only mapping from two-letter region codes to pack identifiers.

    Region codes are matched case-insensitively and exactly: 'GB' and 'gb'
    both resolve, 'en-GB' does not. Several regions may alias the same pack.

    Example:
        >>> catalog = LanguageCatalog()
        >>> catalog.resolve("BE")
        'nl.lang'
        >>> catalog.resolve("xx") is None
        True
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[RegionCode, PackIdentifier] | None = None) -> None:
        """Initialize catalog.

        Args:
            mapping: Region code -> pack identifier. Defaults to the built-in
                table. Keys are lowercased; the mapping is copied.

        Raises:
            ValueError: If a region code is not exactly two characters or a
                pack identifier is empty
        """
        source = DEFAULT_REGION_PACKS if mapping is None else mapping
        normalized: dict[RegionCode, PackIdentifier] = {}
        for region, pack in source.items():
            if len(region) != 2:
                msg = f"Region code must be two characters, got: '{region}'"
                raise ValueError(msg)
            if not pack:
                msg = f"Pack identifier for region '{region}' cannot be empty"
                raise ValueError(msg)
            normalized[region.lower()] = pack
        self._mapping: Mapping[RegionCode, PackIdentifier] = MappingProxyType(normalized)

    def resolve(self, region_code: RegionCode) -> PackIdentifier | None:
        """Return the pack for a region, or None if the region is unmapped.

        None means "no better pack available": callers keep the current one.
        """
        return self._mapping.get(region_code.lower())

    def describe(self, region_code: RegionCode) -> str:
        """Return a display label like 'France (fr)' for log messages."""
        code = region_code.lower()
        return f"{territory_display_name(code)} ({code})"

    @property
    def regions(self) -> tuple[RegionCode, ...]:
        """Mapped region codes in definition order."""
        return tuple(self._mapping)

    @property
    def packs(self) -> frozenset[PackIdentifier]:
        """Distinct pack identifiers reachable from some region."""
        return frozenset(self._mapping.values())

    def as_mapping(self) -> Mapping[RegionCode, PackIdentifier]:
        """Read-only view of the whole mapping."""
        return self._mapping

    def __contains__(self, region_code: object) -> bool:
        return isinstance(region_code, str) and region_code.lower() in self._mapping

    def __iter__(self) -> Iterator[RegionCode]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"LanguageCatalog(regions={len(self._mapping)}, packs={len(self.packs)})"

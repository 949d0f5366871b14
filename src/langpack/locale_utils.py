"""Region display names for diagnostics.

Python 3.13+.
"""

from __future__ import annotations

import functools

__all__ = ["territory_display_name"]


@functools.lru_cache(maxsize=128)
def territory_display_name(region_code: str, display_locale: str = "en") -> str:
    """Return the human-readable name of a region code.

    Used in log messages only. Codes Babel does not know as territories
    (e.g., 'sp', 'ja') are returned upper-cased, unchanged otherwise.

    Args:
        region_code: Two-letter region code, any case
        display_locale: Locale the name is rendered in

    Returns:
        Territory name (e.g., 'United Kingdom') or the upper-cased code

    Example:
        >>> territory_display_name("gb")
        'United Kingdom'
        >>> territory_display_name("sp")
        'SP'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    code = region_code.upper()
    try:
        territories = Locale.parse(display_locale).territories
    except (UnknownLocaleError, ValueError):
        return code
    return territories.get(code, code)

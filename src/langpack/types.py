"""Type aliases for the language-pack domain.

Python 3.13+.
"""

__all__ = [
    "MessageKey",
    "MessageTemplate",
    "PackIdentifier",
    "RegionCode",
]

type RegionCode = str
"""Two-letter region code (e.g., 'gb', 'FR'). Case-insensitive."""

type PackIdentifier = str
"""Language-pack resource name (e.g., 'en.lang', 'nl.lang')."""

type MessageKey = str
"""Message key inside a pack (e.g., 'lang.toEn')."""

type MessageTemplate = str
"""Message text, possibly containing placeholder tokens like '%langName'."""

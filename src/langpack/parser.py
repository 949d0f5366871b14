"""Parser for the line-oriented .lang language-pack format.

Grammar, one record per line:

    # comment                  ignored
    key=value                  value may itself contain '='
    <fewer than 5 characters>  ignored (UTF-16 code units)

The parser is tolerant: comments, short lines, lines without '=' and
lines with an empty value are skipped without raising. Whitespace is
preserved verbatim; nothing is trimmed.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from langpack.constants import COMMENT_PREFIX, KEY_VALUE_SEPARATOR, MIN_LINE_LENGTH
from langpack.types import MessageKey, MessageTemplate

__all__ = [
    "PackEntry",
    "iter_entries",
    "parse",
    "parse_line",
    "utf16_length",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PackEntry:
    """One key/value record parsed from a pack.

    Attributes:
        key: Everything before the first '='
        value: Everything after the first '=' (never empty)
    """

    key: MessageKey
    value: MessageTemplate


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units, the unit the line minimum uses.

    Example:
        >>> utf16_length("ab=😀")
        5
    """
    return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


def parse_line(line: str) -> PackEntry | None:
    """Parse a single pack line.

    Args:
        line: Raw line without its trailing newline

    Returns:
        PackEntry, or None if the line is a comment, too short, or has an
        empty value

    Example:
        >>> parse_line("a=b=c")
        PackEntry(key='a', value='b=c')
        >>> parse_line("ab=c") is None
        True
    """
    if line.startswith(COMMENT_PREFIX) or utf16_length(line) < MIN_LINE_LENGTH:
        return None
    # partition() leaves value empty when there is no separator at all
    key, _, value = line.partition(KEY_VALUE_SEPARATOR)
    if not value:
        return None
    return PackEntry(key=key, value=value)


def iter_entries(lines: Iterable[str]) -> Iterator[PackEntry]:
    """Yield entries in line order, skipping lines parse_line() rejects.

    Lazy: each entry is yielded as soon as its line is read, so callers can
    apply entries incrementally.
    """
    skipped = 0
    for line in lines:
        entry = parse_line(line)
        if entry is None:
            skipped += 1
            continue
        yield entry
    if skipped:
        logger.debug("Skipped %d comment, short or malformed lines", skipped)


def parse(lines: Iterable[str]) -> dict[MessageKey, MessageTemplate]:
    """Parse pack lines into a string table.

    Later duplicate keys overwrite earlier ones.

    Example:
        >>> parse(["# header", "greeting=Hello", "greeting=Hi there"])
        {'greeting': 'Hi there'}
    """
    return {entry.key: entry.value for entry in iter_entries(lines)}

"""Hypothesis strategies for langpack property-based testing.

Usage:
    from tests.strategies import pack_documents, region_codes
"""

from .packs import (
    entry_lines,
    message_keys,
    message_values,
    pack_documents,
    pack_lines,
    region_codes,
)

__all__ = [
    "entry_lines",
    "message_keys",
    "message_values",
    "pack_documents",
    "pack_lines",
    "region_codes",
]

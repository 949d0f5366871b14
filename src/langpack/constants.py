"""Shared constants for langpack.

Constants are grouped by domain:
- Packs: baseline pack and the default region mapping
- Format: line grammar of the .lang text format
- Banner: message keys and placeholder used by the translation banner
- Transport: default failover location

Python 3.13+.
"""

from types import MappingProxyType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Packs
    "BASELINE_PACK",
    "DEFAULT_REGION_PACKS",
    # Format
    "COMMENT_PREFIX",
    "KEY_VALUE_SEPARATOR",
    "BYTE_ORDER_MARK",
    "MIN_LINE_LENGTH",
    # Banner
    "BANNER_DETECTED_AS_KEY",
    "BANNER_KEEP_KEY",
    "BANNER_TO_EN_KEY",
    "LANG_NAME_KEY",
    "LANG_NAME_PLACEHOLDER",
    # Lookup
    "MISSING_KEY_TEMPLATE",
    # Transport
    "CACHE_BUST_PARAM",
    "DEFAULT_BUILD_VERSION",
    "DEFAULT_PROXY_BASE_URL",
    "DEFAULT_TIMEOUT",
]

# ============================================================================
# PACKS
# ============================================================================

# English pack. Loading it hides the translation banner.
BASELINE_PACK: str = "en.lang"

# Region code -> pack identifier. Several regions may share one pack.
DEFAULT_REGION_PACKS: MappingProxyType[str, str] = MappingProxyType(
    {
        "gb": "en.lang",
        "us": "en.lang",
        "nl": "nl.lang",
        "be": "nl.lang",
        "sp": "es.lang",
        "es": "es.lang",
        "fr": "fr.lang",
        "de": "de.lang",
        "ja": "jp.lang",
    }
)

# ============================================================================
# FORMAT
# ============================================================================

COMMENT_PREFIX: str = "#"
KEY_VALUE_SEPARATOR: str = "="

# Stripped once from the start of a fetched body.
BYTE_ORDER_MARK: str = "\ufeff"

# Lines shorter than this cannot hold a meaningful key=value pair. Length is
# counted in UTF-16 code units, so a non-BMP character counts twice.
MIN_LINE_LENGTH: int = 5

# ============================================================================
# BANNER
# ============================================================================

LANG_NAME_KEY: str = "lang.name"
BANNER_TO_EN_KEY: str = "lang.toEn"
BANNER_DETECTED_AS_KEY: str = "lang.detectedAs"
BANNER_KEEP_KEY: str = "lang.keep"
LANG_NAME_PLACEHOLDER: str = "%langName"

# ============================================================================
# LOOKUP
# ============================================================================

# Rendered for keys with no entry, so missing translations stand out.
MISSING_KEY_TEMPLATE: str = "?? {key} ??"

# ============================================================================
# TRANSPORT
# ============================================================================

CACHE_BUST_PARAM: str = "v"
DEFAULT_BUILD_VERSION: str = "dev"
# Upstream client host. Deployments behind a content proxy pass a prefix that
# wraps it, e.g. "https://proxy.example.org/get?url=https://client.openaudiomc.net/".
DEFAULT_PROXY_BASE_URL: str = "https://client.openaudiomc.net/"
DEFAULT_TIMEOUT: float = 10.0

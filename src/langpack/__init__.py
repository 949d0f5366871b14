"""langpack - Language-pack loader with HTTP failover.

Resolves a language from a region code, fetches the matching .lang pack
from the page directory (or a proxy if that fails), parses its
``key=value`` lines and publishes the strings plus a translation banner to
an observer.

Public API:
    TranslationService - Load packs, look up strings, publish updates
    LanguageCatalog - Region code -> pack identifier mapping
    HttpResourceFetcher - httpx-based fetcher with a single failover hop
    FetchConfig - Page URL, proxy URL, build token and timeout
    parse_pack - Parse pack lines into a string table

Exceptions:
    LangPackError - Base exception class
    RetrievalError - Pack unavailable from both locations

Submodules:
    langpack.parser - Line parser (parse_line, iter_entries, parse)
    langpack.publisher - StatePublisher protocol and payload types
    langpack.fetcher - ResourceFetcher protocol and URL helpers
"""

from .catalog import LanguageCatalog
from .config import FetchConfig
from .enums import FetchSource, LoadStatus, PublishKind
from .errors import FetchAttempt, LangPackError, MissingKeyInfo, RetrievalError
from .fetcher import HttpResourceFetcher, ResourceFetcher
from .parser import parse as parse_pack
from .publisher import (
    LangMessage,
    NullStatePublisher,
    RecordingStatePublisher,
    StatePublisher,
    TranslationBanner,
)
from .service import PackLoadResult, TranslationService

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("langpack")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "FetchAttempt",
    "FetchConfig",
    "FetchSource",
    "HttpResourceFetcher",
    "LangMessage",
    "LangPackError",
    "LanguageCatalog",
    "LoadStatus",
    "MissingKeyInfo",
    "NullStatePublisher",
    "PackLoadResult",
    "PublishKind",
    "RecordingStatePublisher",
    "ResourceFetcher",
    "RetrievalError",
    "StatePublisher",
    "TranslationBanner",
    "TranslationService",
    "__version__",
    "parse_pack",
]

"""Language-pack retrieval over HTTP with a single failover hop.

Components:
    ResourceFetcher - Protocol for pack fetchers (structural typing)
    HttpResourceFetcher - httpx-based fetcher: page directory first, proxy second
    page_base_url - Directory URL of a page location

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Protocol, Self
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from langpack.constants import BYTE_ORDER_MARK, CACHE_BUST_PARAM
from langpack.enums import FetchSource
from langpack.errors import FetchAttempt, RetrievalError
from langpack.types import PackIdentifier

if TYPE_CHECKING:
    from types import TracebackType

    from langpack.config import FetchConfig

__all__ = [
    "HttpResourceFetcher",
    "ResourceFetcher",
    "page_base_url",
    "validate_identifier",
]

logger = logging.getLogger(__name__)


class ResourceFetcher(Protocol):
    """Protocol for retrieving raw language-pack text.

    Implementations return the pack body split into lines, or raise
    RetrievalError. They know nothing about the pack format.

    Example:
        >>> class DictFetcher:
        ...     def __init__(self, packs: dict[str, str]) -> None:
        ...         self.packs = packs
        ...     def fetch(self, identifier: str) -> list[str]:
        ...         return self.packs[identifier].split("\\n")
        ...     def describe_url(self, identifier: str) -> str:
        ...         return f"memory://{identifier}"
    """

    def fetch(self, identifier: PackIdentifier) -> list[str]:
        """Retrieve a pack.

        Args:
            identifier: Pack identifier (e.g., 'en.lang')

        Returns:
            Pack body split on newline characters, in order

        Raises:
            RetrievalError: If the pack could not be retrieved
        """

    def describe_url(self, identifier: PackIdentifier) -> str:
        """Return a human-readable location for diagnostics.

        Default implementation returns the identifier itself.
        """
        return identifier


def page_base_url(location: str) -> str:
    """Return the directory URL of a page location.

    Strips the query string, the fragment and the trailing file name, the
    same way a browser resolves a relative link from that page.

    Example:
        >>> page_base_url("https://example.org/client/index.html?session=1")
        'https://example.org/client/'
        >>> page_base_url("https://example.org")
        'https://example.org/'
    """
    parts = urlsplit(location)
    path = parts.path[: parts.path.rfind("/") + 1]
    if parts.netloc and not path:
        path = "/"
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def validate_identifier(identifier: PackIdentifier) -> None:
    """Validate a pack identifier before it is appended to a base URL.

    Raises:
        ValueError: If the identifier is empty, has surrounding whitespace,
            is absolute, climbs directories, or carries a query or fragment
    """
    if not identifier:
        msg = "Pack identifier cannot be empty"
        raise ValueError(msg)
    stripped = identifier.strip()
    if stripped != identifier:
        msg = (
            f"Pack identifier contains leading/trailing whitespace: {identifier!r}. "
            f"Stripped would be: {stripped!r}"
        )
        raise ValueError(msg)
    if identifier.startswith(("/", "\\")):
        msg = f"Leading path separator not allowed in pack identifier: '{identifier}'"
        raise ValueError(msg)
    if ".." in PurePosixPath(identifier.replace("\\", "/")).parts:
        msg = f"Path traversal sequences not allowed in pack identifier: '{identifier}'"
        raise ValueError(msg)
    if "?" in identifier or "#" in identifier:
        msg = f"Query or fragment not allowed in pack identifier: '{identifier}'"
        raise ValueError(msg)


class HttpResourceFetcher:
    """Fetch packs over HTTP, failing over to a proxy exactly once.

    Request order for identifier ``en.lang``:
        1. ``<page directory>en.lang?v=<build_version>``
        2. ``<proxy_base_url>en.lang?v=<build_version>``, only if (1) did not
           return HTTP 200

    If (2) does not return HTTP 200 either, RetrievalError is raised with
    both attempts attached. There are no further retries.

    Example:
        >>> config = FetchConfig(page_url="https://example.org/client/", build_version="42")
        >>> with HttpResourceFetcher(config) as fetcher:
        ...     lines = fetcher.fetch("fr.lang")
    """

    __slots__ = ("_client", "_config", "_owns_client", "_primary_base")

    def __init__(self, config: FetchConfig, client: httpx.Client | None = None) -> None:
        """Initialize fetcher.

        Args:
            config: Locations, cache-busting token and timeout
            client: Optional preconfigured httpx client. When omitted the
                fetcher creates its own and closes it in close().
        """
        self._config = config
        self._primary_base = page_base_url(config.page_url)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=config.timeout)

    @property
    def config(self) -> FetchConfig:
        """Fetch configuration (read-only)."""
        return self._config

    def base_url(self, source: FetchSource) -> str:
        """Return the base URL identifiers are appended to for a source."""
        match source:
            case FetchSource.PRIMARY:
                return self._primary_base
            case FetchSource.FAILOVER:
                return self._config.proxy_base_url

    def describe_url(self, identifier: PackIdentifier) -> str:
        """Return the primary URL for diagnostics (without cache busting)."""
        return f"{self._primary_base}{identifier}"

    def request_url(self, source: FetchSource, identifier: PackIdentifier) -> str:
        """Return the exact URL requested for a source, cache busting included.

        The identifier and token are appended to the base as text. A base
        that already carries a query (a proxy wrapping the upstream URL)
        therefore passes ``?v=`` through to the upstream file.

        Example:
            >>> fetcher.request_url(FetchSource.FAILOVER, "fr.lang")
            'https://proxy.example.org/get?url=https://client.example.org/fr.lang?v=42'
        """
        token = quote(self._config.build_version, safe="")
        return f"{self.base_url(source)}{identifier}?{CACHE_BUST_PARAM}={token}"

    def fetch(self, identifier: PackIdentifier) -> list[str]:
        """Retrieve a pack, trying the page directory then the proxy.

        Raises:
            ValueError: If the identifier is unsafe to append to a URL
            RetrievalError: If neither location returned HTTP 200
        """
        validate_identifier(identifier)

        attempt, body = self._request(FetchSource.PRIMARY, identifier)
        if body is None:
            logger.warning("Using fetch fail over for lang: %s", attempt.describe())
            failover, body = self._request(FetchSource.FAILOVER, identifier)
            if body is None:
                raise RetrievalError(identifier, (attempt, failover))
        return body.split("\n")

    def _request(
        self, source: FetchSource, identifier: PackIdentifier
    ) -> tuple[FetchAttempt, str | None]:
        """Issue one GET request and record its outcome.

        Returns:
            The attempt record and the body text, or None as body if the
            request failed or returned anything but HTTP 200
        """
        request = self._client.build_request("GET", self.request_url(source, identifier))
        url = str(request.url)
        logger.debug("Requesting %s pack: %s", source, url)
        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            return FetchAttempt(source=source, url=url, error=f"{type(e).__name__}: {e}"), None

        attempt = FetchAttempt(source=source, url=url, status_code=response.status_code)
        if not attempt.is_success:
            return attempt, None
        # httpx keeps a UTF-8 byte order mark as U+FEFF; it is not part of line 1
        return attempt, response.text.removeprefix(BYTE_ORDER_MARK)

    def close(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

"""Fetch configuration for HttpResourceFetcher.

Provides a single frozen dataclass holding the values a client build
would otherwise inject as constants: the current page location, the failover proxy and
the build-version token used for cache busting.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from langpack.constants import DEFAULT_BUILD_VERSION, DEFAULT_PROXY_BASE_URL, DEFAULT_TIMEOUT

__all__ = ["FetchConfig"]


@dataclass(frozen=True, slots=True)
class FetchConfig:
    """Immutable configuration for language-pack retrieval.

    Only page_url is required; the other fields default to the public
    client proxy, a "dev" build token and a 10 second timeout.

    Attributes:
        page_url: Absolute http(s) URL of the current page.
            May include a file name and query string; both are stripped
            to derive the primary base URL.
        proxy_base_url: Base URL of the failover location. Must end in '/'.
        build_version: Cache-busting token appended as ``?v=<token>``.
        timeout: Per-request timeout in seconds.

    Example:
        >>> config = FetchConfig(
        ...     page_url="https://example.org/client/index.html?session=abc",
        ...     build_version="1.4.2",
        ... )
        >>> fetcher = HttpResourceFetcher(config)
    """

    page_url: str
    proxy_base_url: str = DEFAULT_PROXY_BASE_URL
    build_version: str = DEFAULT_BUILD_VERSION
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If page_url is not an absolute http(s) URL,
                build_version is empty, timeout is not positive, or
                proxy_base_url does not end with '/'.
        """
        parts = urlsplit(self.page_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            msg = f"page_url must be an absolute http(s) URL, got: '{self.page_url}'"
            raise ValueError(msg)
        if not self.build_version:
            msg = "build_version must not be empty"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if not self.proxy_base_url.endswith("/"):
            msg = f"proxy_base_url must end with '/', got: '{self.proxy_base_url}'"
            raise ValueError(msg)

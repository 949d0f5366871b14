"""Tests for HttpResourceFetcher primary/failover retrieval.

All HTTP goes through httpx.MockTransport; see tests.helpers.http.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
import pytest

from langpack import FetchConfig, FetchSource, HttpResourceFetcher, RetrievalError
from langpack.fetcher import page_base_url, validate_identifier
from tests.helpers.http import BUILD_VERSION, PRIMARY_BASE, PROXY_BASE, PackServer

type FetcherFactory = Callable[[], HttpResourceFetcher]


class TestPageBaseUrl:
    """Test derivation of the primary base URL from the page location."""

    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("https://example.org/app/index.html", "https://example.org/app/"),
            ("https://example.org/app/index.html?x=1&y=2", "https://example.org/app/"),
            ("https://example.org/app/?session=1", "https://example.org/app/"),
            ("https://example.org/app/#top", "https://example.org/app/"),
            ("https://example.org/app", "https://example.org/"),
            ("https://example.org", "https://example.org/"),
            ("http://localhost:8080/a/b/c.htm", "http://localhost:8080/a/b/"),
            ("/client/index.html", "/client/"),
            ("index.html", ""),
        ],
    )
    def test_strips_file_and_query(self, location: str, expected: str) -> None:
        """Only the directory part of the location survives."""
        assert page_base_url(location) == expected


class TestValidateIdentifier:
    """Test identifier checks before URL construction."""

    @pytest.mark.parametrize("identifier", ["en.lang", "packs/fr.lang", "jp.lang"])
    def test_valid(self, identifier: str) -> None:
        validate_identifier(identifier)

    @pytest.mark.parametrize(
        ("identifier", "message"),
        [
            ("", "cannot be empty"),
            (" en.lang", "whitespace"),
            ("en.lang\n", "whitespace"),
            ("/etc/passwd", "Leading path separator"),
            ("\\en.lang", "Leading path separator"),
            ("../secret.lang", "Path traversal"),
            ("packs/../../x.lang", "Path traversal"),
            ("en.lang?v=1", "Query or fragment"),
            ("en.lang#x", "Query or fragment"),
        ],
    )
    def test_invalid(self, identifier: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            validate_identifier(identifier)

    def test_dots_inside_name_allowed(self) -> None:
        """Only '..' path segments are rejected."""
        validate_identifier("en..backup.lang")


class TestPrimaryFetch:
    """Test the happy path against the page directory."""

    def test_returns_lines(self, pack_server: PackServer, make_fetcher: FetcherFactory) -> None:
        """Body is split on newlines, in order."""
        pack_server.serve("fr.lang", "# French\nlang.name=French\nhello=Bonjour")
        lines = make_fetcher().fetch("fr.lang")
        assert lines == ["# French", "lang.name=French", "hello=Bonjour"]

    def test_trailing_newline_yields_empty_last_line(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        pack_server.serve("fr.lang", "hello=Bonjour\n")
        assert make_fetcher().fetch("fr.lang") == ["hello=Bonjour", ""]

    def test_utf8_body(self, pack_server: PackServer, make_fetcher: FetcherFactory) -> None:
        pack_server.serve("jp.lang", "lang.name=日本語")
        assert make_fetcher().fetch("jp.lang") == ["lang.name=日本語"]

    def test_byte_order_mark_stripped(self, fetch_config: FetchConfig) -> None:
        """A UTF-8 BOM does not leak into the first line."""
        body = b"\xef\xbb\xbf# French\nlang.name=French"
        client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=body))
        )
        with client, HttpResourceFetcher(fetch_config, client=client) as fetcher:
            assert fetcher.fetch("fr.lang") == ["# French", "lang.name=French"]

    def test_only_leading_byte_order_mark_stripped(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        pack_server.serve("fr.lang", "\ufefflang.name=French\nmark=\ufeff")
        assert make_fetcher().fetch("fr.lang") == ["lang.name=French", "mark=\ufeff"]

    def test_cache_busting_parameter(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        """Every request carries ?v=<build_version>."""
        pack_server.serve("en.lang", "hello=Hello")
        make_fetcher().fetch("en.lang")
        assert pack_server.requested_urls() == [f"{PRIMARY_BASE}en.lang?v={BUILD_VERSION}"]

    def test_no_failover_on_success(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        pack_server.serve("en.lang", "hello=Hello")
        pack_server.serve("en.lang", "hello=Proxy", base=PROXY_BASE)
        assert make_fetcher().fetch("en.lang") == ["hello=Hello"]
        assert len(pack_server.requests) == 1

    def test_invalid_identifier_makes_no_request(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        with pytest.raises(ValueError):
            make_fetcher().fetch("../en.lang")
        assert pack_server.requests == []


class TestFailover:
    """Test the single failover hop to the proxy."""

    @pytest.mark.parametrize("status", [404, 500, 204, 301])
    def test_non_200_primary_uses_proxy(
        self, status: int, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        """Any status other than 200 triggers exactly one proxy request."""
        pack_server.serve("de.lang", "ignored", status=status)
        pack_server.serve("de.lang", "hallo=Hallo", base=PROXY_BASE)

        assert make_fetcher().fetch("de.lang") == ["hallo=Hallo"]
        assert pack_server.requested_urls() == [
            f"{PRIMARY_BASE}de.lang?v={BUILD_VERSION}",
            f"{PROXY_BASE}de.lang?v={BUILD_VERSION}",
        ]

    def test_transport_error_on_primary_uses_proxy(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        pack_server.fail("de.lang", httpx.ConnectError("refused"))
        pack_server.serve("de.lang", "hallo=Hallo", base=PROXY_BASE)
        assert make_fetcher().fetch("de.lang") == ["hallo=Hallo"]

    def test_failover_logged_as_warning(
        self,
        pack_server: PackServer,
        make_fetcher: FetcherFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        pack_server.serve("de.lang", "hallo=Hallo", base=PROXY_BASE)
        with caplog.at_level(logging.WARNING, logger="langpack.fetcher"):
            make_fetcher().fetch("de.lang")
        assert "Using fetch fail over for lang" in caplog.text
        assert "HTTP 404" in caplog.text

    def test_both_fail_raises_retrieval_error(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        """Failover is tried once; its failure propagates."""
        pack_server.serve("de.lang", "gone", base=PROXY_BASE, status=503)

        with pytest.raises(RetrievalError) as exc_info:
            make_fetcher().fetch("de.lang")

        error = exc_info.value
        assert error.identifier == "de.lang"
        assert [a.source for a in error.attempts] == [FetchSource.PRIMARY, FetchSource.FAILOVER]
        assert [a.status_code for a in error.attempts] == [404, 503]
        assert len(pack_server.requests) == 2
        assert "de.lang" in str(error)
        assert "HTTP 503" in str(error)

    def test_wrapping_proxy_passes_token_upstream(self) -> None:
        """A proxy base carrying a query gets '?v=' appended as text, not '&v='."""
        proxy = "https://proxy.example.org/get?url=https://client.example.net/"
        config = FetchConfig(
            page_url="https://client.example.org/app/", proxy_base_url=proxy, build_version="B7"
        )
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            if request.url.host == "proxy.example.org":
                return httpx.Response(200, text="bonjour=Bonjour")
            return httpx.Response(404)

        with (
            httpx.Client(transport=httpx.MockTransport(handler)) as client,
            HttpResourceFetcher(config, client=client) as fetcher,
        ):
            assert fetcher.fetch("fr.lang") == ["bonjour=Bonjour"]

        assert requested == [
            "https://client.example.org/app/fr.lang?v=B7",
            f"{proxy}fr.lang?v=B7",
        ]
        assert "&v=" not in requested[1]

    def test_build_version_is_quoted(self) -> None:
        config = FetchConfig(page_url="https://client.example.org/", build_version="1.0 beta&x")
        with HttpResourceFetcher(config) as fetcher:
            url = fetcher.request_url(FetchSource.PRIMARY, "en.lang")
        assert url == "https://client.example.org/en.lang?v=1.0%20beta%26x"

    def test_failover_transport_error(
        self, pack_server: PackServer, make_fetcher: FetcherFactory
    ) -> None:
        """A transport error on the proxy is recorded, not raised raw."""
        pack_server.fail("de.lang", httpx.ReadTimeout("slow"), base=PROXY_BASE)

        with pytest.raises(RetrievalError) as exc_info:
            make_fetcher().fetch("de.lang")

        failover = exc_info.value.attempts[1]
        assert failover.status_code is None
        assert failover.error is not None
        assert "ReadTimeout" in failover.error
        assert not failover.is_success


class TestClientLifecycle:
    """Test ownership of the underlying httpx client."""

    def test_injected_client_not_closed(self, fetch_config: FetchConfig) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with HttpResourceFetcher(fetch_config, client=client):
            pass
        assert not client.is_closed
        client.close()

    def test_owned_client_closed(self, fetch_config: FetchConfig) -> None:
        fetcher = HttpResourceFetcher(fetch_config)
        fetcher.close()
        assert fetcher._client.is_closed

    def test_base_urls(self, fetch_config: FetchConfig) -> None:
        fetcher = HttpResourceFetcher(fetch_config)
        assert fetcher.base_url(FetchSource.PRIMARY) == PRIMARY_BASE
        assert fetcher.base_url(FetchSource.FAILOVER) == PROXY_BASE
        assert fetcher.describe_url("en.lang") == f"{PRIMARY_BASE}en.lang"
        fetcher.close()

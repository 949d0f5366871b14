"""TranslationService Example - Region Switch with Failover.

Demonstrates the full load cycle without touching the network:
1. Load the English baseline pack
2. Switch to French from a region code; the page directory misses the
   pack, so it is served by the proxy
3. Read the banner the service published and reset to English

Requests are answered by httpx.MockTransport. Replace the client with a
plain ``HttpResourceFetcher(config)`` to fetch real packs.

Python 3.13+.
"""

from __future__ import annotations

import logging

import httpx

from langpack import (
    FetchConfig,
    HttpResourceFetcher,
    RecordingStatePublisher,
    TranslationService,
)

PACKS = {
    "https://example.org/client/en.lang": "# English\nlang.name=English\nhello=Hello, %name!",
    "https://proxy.example.org/fr.lang": "\n".join(
        [
            "# French",
            "lang.name=French",
            "hello=Bonjour, %name !",
            "lang.toEn=Translate %langName to English",
            "lang.detectedAs=We detected your language as %langName",
            "lang.keep=Keep %langName",
        ]
    ),
}


def handler(request: httpx.Request) -> httpx.Response:
    body = PACKS.get(str(request.url).split("?", 1)[0])
    if body is None:
        return httpx.Response(404)
    return httpx.Response(200, text=body)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = FetchConfig(
        page_url="https://example.org/client/index.html?session=42",
        proxy_base_url="https://proxy.example.org/",
        build_version="2024.1",
    )
    publisher = RecordingStatePublisher()
    client = httpx.Client(transport=httpx.MockTransport(handler))

    with HttpResourceFetcher(config, client=client) as fetcher:
        service = TranslationService(fetcher, publisher)

        service.load_default()
        print(service.get_string("hello", [("%name", "Anna")]))

        service.handle_region("FR")
        print(service.get_string("hello", [("%name", "Anna")]))

        banner = publisher.banner
        if banner is not None:
            print(f"Banner: {banner.detected_as} | {banner.to_en} | {banner.keep}")
            banner.reset()

        print(f"Active pack: {service.active_pack}, banner shown: {publisher.banner is not None}")
        print(service.get_string("missing.key"))

    client.close()


if __name__ == "__main__":
    main()

"""Pytest configuration for langpack test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

HTTP is never touched: fetchers are built on httpx.MockTransport backed by
tests.helpers.http.PackServer.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator

import httpx
import pytest
from hypothesis import Phase, Verbosity, settings

from langpack import FetchConfig, HttpResourceFetcher
from tests.helpers.http import BUILD_VERSION, PAGE_URL, PROXY_BASE, PackServer

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# HTTP FIXTURES
# =============================================================================


@pytest.fixture
def pack_server() -> PackServer:
    return PackServer()


@pytest.fixture
def fetch_config() -> FetchConfig:
    return FetchConfig(page_url=PAGE_URL, proxy_base_url=PROXY_BASE, build_version=BUILD_VERSION)


@pytest.fixture
def make_fetcher(
    pack_server: PackServer, fetch_config: FetchConfig
) -> Iterator[Callable[[], HttpResourceFetcher]]:
    """Factory for fetchers wired to pack_server."""
    clients: list[httpx.Client] = []

    def _make() -> HttpResourceFetcher:
        client = httpx.Client(transport=httpx.MockTransport(pack_server.handler))
        clients.append(client)
        return HttpResourceFetcher(fetch_config, client=client)

    yield _make
    for client in clients:
        client.close()

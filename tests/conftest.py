# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from collections.abc import Callable

import httpx
import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Redirect Fixtures
# =============================================================================


def make_request(url: str, method: str = "GET") -> httpx.Request:
    """Build an httpx.Request for policy tests (never sent)."""
    return httpx.Request(method, url)


@pytest.fixture
def redirect_routes() -> Callable[[dict[str, tuple[int, str | None]]], tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build a MockTransport from a route table.

    Keys are "host/path" strings. Values are (status, location); a None
    location means a plain response with body "OK". The builder returns
    the transport and the list of every request it received, in order.
    """

    def _build(routes: dict[str, tuple[int, str | None]]) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            key = f"{request.url.host}{request.url.path}"
            status, location = routes.get(key, (404, None))
            if location is None:
                return httpx.Response(status, text="OK" if status < 400 else "missing")
            return httpx.Response(status, headers={"location": location})

        return httpx.MockTransport(handler), seen

    return _build


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))

"""Shared test fixtures for hubapi.

Provides isolation of the process-wide configuration and output state,
plus helpers for building mock HTTP adapters. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from hubapi.configuration import ENV_PREFIX, reset_configuration
from hubapi.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset library-wide defaults and the global OutputManager around every test.

    Also clears any ``HUBAPI_*`` environment variables so the developer's
    shell never leaks into option resolution.
    """
    for var in [
        "ENDPOINT",
        "OAUTH_TOKEN",
        "CLIENT_ID",
        "CLIENT_SECRET",
        "USER_AGENT",
        "BASIC_AUTH",
    ]:
        monkeypatch.delenv(f"{ENV_PREFIX}{var}", raising=False)
    reset_configuration()
    reset_output()
    yield
    reset_configuration()
    reset_output()


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless OutputManager for the test."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a verbose, colourless OutputManager so debug traces reach stderr."""
    output = OutputManager(no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """List collecting every request seen by :func:`mock_adapter`."""
    return []


@pytest.fixture
def mock_adapter(
    recorded_requests: list[httpx.Request],
) -> Callable[..., httpx.MockTransport]:
    """Factory building an ``httpx.MockTransport`` that records requests.

    Usage::

        adapter = mock_adapter(json={"id": 1}, status_code=200)
        api = API(adapter=adapter)
    """

    def factory(status_code: int = 200, json: Any = None, **kwargs: Any) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if json is not None:
                return httpx.Response(status_code, json=json, **kwargs)
            return httpx.Response(status_code, **kwargs)

        return httpx.MockTransport(handler)

    return factory

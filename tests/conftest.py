"""Pytest configuration and shared fixtures."""
import os
from collections.abc import Callable
from datetime import datetime

import httpx
import pytest

from assistbot.config import ChatSettings
from assistbot.llm import OpenRouterProvider
from assistbot.session import SessionStore

FIXED_NOW = datetime(2024, 5, 17, 14, 30, 5)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


class CapturedRequests:
    """httpx.MockTransport handler wrapper that records every request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openrouter": os.getenv("OPENROUTER_API_KEY"),
    }


@pytest.fixture
def store():
    """Return a fresh session store with a fixed clock."""
    return SessionStore(clock=lambda: FIXED_NOW)


@pytest.fixture
def settings():
    """Return settings with no simulated latency."""
    return ChatSettings(fallback_delay=0.0)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def mock_provider_factory():
    """Build provider factories backed by an in-process HTTP transport.

    Usage:
        captured, factory = mock_provider_factory(handler)
    """

    def _build(handler: Callable[[httpx.Request], httpx.Response]):
        captured = CapturedRequests(handler)

        def _factory(credential: str) -> OpenRouterProvider:
            return OpenRouterProvider(
                api_key=credential,
                http_client=httpx.AsyncClient(transport=httpx.MockTransport(captured)),
            )

        return captured, _factory

    return _build

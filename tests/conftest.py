"""
Pytest configuration and shared fixtures for the addon tests.
"""
from unittest.mock import AsyncMock

import pytest

from khmerdubbed.core.caching import TTLCache
from khmerdubbed.core.errors import FetchError
from khmerdubbed.providers.khmerave.base import KhmerAveBaseClient

BASE_URL = "https://www.khmeravenue.com"
NAMESPACE = "khmerave"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client():
    """Build a KhmerAveBaseClient whose network layer serves canned pages.

    Unknown URLs fail with HTTP 404; exception values are raised.
    """

    def _make(pages=None) -> KhmerAveBaseClient:
        client = KhmerAveBaseClient(
            BASE_URL,
            html_cache=TTLCache(50, ttl=600),
            negative_cache=TTLCache(50, ttl=60),
            user_agent="test-agent",
        )
        served = dict(pages or {})

        async def fake_get(url, timeout=None):
            value = served.get(url)
            if value is None:
                raise FetchError(url, status=404)
            if isinstance(value, Exception):
                raise value
            return value

        client._get = AsyncMock(side_effect=fake_get)
        return client

    return _make


@pytest.fixture
def app():
    from khmerdubbed.app import create_app

    return create_app({"TESTING": True, "RATELIMIT_ENABLED": False})


@pytest.fixture
def test_client(app):
    return app.test_client()

"""Shared pytest fixtures."""

import httpx
import pytest

from folio.config import Settings, clear_settings_cache

TEST_API_KEY = "test-api-key-123"


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Ensure cached settings never leak between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings_factory():
    """Factory fixture for Settings with an explicit credential."""
    def _make(api_key=TEST_API_KEY, **overrides):
        return Settings(upstream_api_key=api_key, **overrides)
    return _make


@pytest.fixture
def upstream():
    """Factory for an httpx MockTransport standing in for the storage API.

    Every request the transport sees is appended to ``requests``.
    """
    requests: list[httpx.Request] = []

    def _make(status_code=200, content=b"", headers=None, exc=None):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc
            return httpx.Response(status_code, content=content, headers=headers or {})

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return _make

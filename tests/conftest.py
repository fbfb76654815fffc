"""Pytest configuration and shared fixtures for toornament-client tests."""

import httpx
import pytest

from toornament_client.testing import TEST_CREDENTIALS, FakeToornament


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "TOORNAMENT_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake():
    return FakeToornament()


@pytest.fixture
def client(fake, clock):
    from toornament_client import Toornament

    with Toornament(**TEST_CREDENTIALS, transport=httpx.MockTransport(fake), clock=clock) as toornament:
        yield toornament

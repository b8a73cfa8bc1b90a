"""Shared pytest fixtures for all tests."""

import pytest
import pytest_asyncio

from config import Config
from services.base import Services
from tests.helpers import FakeBackend, MemoryStorage


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing at temporary directories.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "tally",
        api_base_url="http://testserver",
        request_timeout=5.0,
        session_dir=tmp_path / "tally" / "session",
        session_filename="session.toml",
        log_level="DEBUG",
        log_dir=tmp_path / "tally" / "logs",
    )


@pytest.fixture
def storage():
    """Empty in-memory durable storage."""
    return MemoryStorage()


@pytest.fixture
def backend():
    """Fake finance backend that accepts alice/secret."""
    return FakeBackend(users={"alice": "secret"})


@pytest_asyncio.fixture
async def services(test_config, storage, backend):
    """Create a Services container wired to the fake backend.

    The session starts logged out; tests call ``services.session.login``.

    Args:
        test_config: Test configuration fixture.
        storage: In-memory storage fixture.
        backend: Fake backend fixture.

    Yields:
        Services: Services container for testing.
    """
    services = Services(test_config, storage=storage, transport=backend.transport())
    yield services
    await services.aclose()


@pytest_asyncio.fixture
async def logged_in(services):
    """Services container with alice logged in."""
    services.session.login("alice", "secret")
    return services

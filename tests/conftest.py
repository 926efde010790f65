"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from tinylink.database.memory import InMemoryLinkStore
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger):
    """Create a fresh in-memory store."""
    return InMemoryLinkStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(store, short_code_generator, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Configuration used by the test app."""
    return Config(
        store_backend="memory",
        base_url="http://testserver",
    )


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_links():
    """Sample (title, url) pairs for testing."""
    return [
        ("Example", "https://example.com/test"),
        ("Repo", "https://github.com/user/repo"),
        ("Question", "https://stackoverflow.com/questions/123456"),
    ]

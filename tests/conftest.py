"""Pytest configuration and fixtures."""

import random

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from shortlinks.database.memory import MemoryLinkStore
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger):
    """Opened in-memory link store."""
    store = MemoryLinkStore(logger=logger)
    await store.open()

    yield store

    await store.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator with a fixed seed."""
    return ShortCodeGenerator(default_length=6, rng=random.Random(1234))


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
    """Test configuration."""
    return Config(
        database_url="memory://",
        base_url="http://testserver",
    )


@pytest.fixture
def app(store, service, config, logger):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]

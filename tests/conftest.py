"""Pytest fixtures for all tests."""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient, ASGITransport

import sleekid
from config import Config, LoggingConfig, ServerConfig
from sleekid import Generator, GeneratorConfig
from sleekid.timestamp import BASE_UNIX_EPOCH
from ui.app import create_app

EPOCH = datetime.fromtimestamp(BASE_UNIX_EPOCH, tz=timezone.utc)


def fixed_random(value):
    """Random source returning the same byte over and over."""
    def source(n):
        return bytes([value]) * n
    return source


@pytest.fixture
def gen_config():
    """Settings used across the codec tests."""
    return GeneratorConfig(checksum_token=30, random_digits_length=10)


@pytest.fixture
def generator(gen_config):
    """Generator with the real clock and random source."""
    return Generator(gen_config)


@pytest.fixture
def pinned_generator(gen_config):
    """Generator frozen at the epoch, every random byte 10 ('a')."""
    return Generator(gen_config, random_source=fixed_random(10), clock=lambda: EPOCH)


@pytest.fixture(autouse=True)
def reset_shared_generator():
    """Keep sleekid.setup() from leaking between tests."""
    sleekid.reset()
    yield
    sleekid.reset()


@pytest.fixture
def app_config():
    """App config with a non-default token."""
    return Config(
        generator=GeneratorConfig(checksum_token=30, random_digits_length=10),
        server=ServerConfig(),
        logging=LoggingConfig(level="ERROR"),
    )


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

"""Test configuration and fixtures."""

import os

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from registry_inspector import RegistryInspector, check_registry_connectivity
from tests.helpers import FakeRegistry


@pytest.fixture
def fake_registry():
    """Fake registry with no repositories."""
    return FakeRegistry()


@pytest_asyncio.fixture
async def registry_server(fake_registry):
    """Serve the fake registry on a local port."""
    server = TestServer(fake_registry.make_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def fake_registry_url(registry_server):
    return f"http://{registry_server.host}:{registry_server.port}"


@pytest.fixture
def inspector(fake_registry_url):
    return RegistryInspector(fake_registry_url)


@pytest_asyncio.fixture
async def registry_url():
    """URL of a live registry for integration tests."""
    url = os.getenv("REGISTRY_URL", "http://localhost:5000")
    if not await check_registry_connectivity(url):
        pytest.skip(f"Registry not available at {url}")
    return url


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless a registry is declared available."""
    skip_integration = pytest.mark.skip(reason="Registry not available")

    for item in items:
        if (
            "integration" in item.keywords
            and os.getenv("REGISTRY_AVAILABLE", "false").lower() != "true"
        ):
            item.add_marker(skip_integration)

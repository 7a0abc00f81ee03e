"""API test fixtures."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from zimra_payroll.api.app import create_app
from zimra_payroll.api.dependencies import get_registry


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()
    get_registry.cache_clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    get_registry.cache_clear()


@pytest_asyncio.fixture
async def client_2026(registry) -> AsyncGenerator[AsyncClient, None]:
    """Client whose registry also holds the 2026 table."""
    app = create_app()
    app.dependency_overrides[get_registry] = lambda: registry
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

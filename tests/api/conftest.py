"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from freefile.api.deps import get_catalog
from freefile.main import app
from freefile.matching.catalog import DEFAULT_CATALOG_PATH, load_offers_from_yaml
from freefile.matching.models import Offer


@pytest_asyncio.fixture
async def api_client() -> AsyncGenerator[AsyncClient, None]:
    """Create API client serving the packaged catalog."""
    offers = load_offers_from_yaml(DEFAULT_CATALOG_PATH)

    async def override_get_catalog() -> tuple[Offer, ...]:
        return offers

    app.dependency_overrides[get_catalog] = override_get_catalog
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()

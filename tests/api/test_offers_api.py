"""Tests for offer catalog endpoints."""

from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_offers_in_catalog_order(api_client: AsyncClient) -> None:
    """Every offer is listed in declaration order."""
    response = await api_client.get("/api/offers")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 8
    assert [item["id"] for item in data["items"]] == [
        "1040now",
        "taxact",
        "freetaxusa",
        "taxslayer",
        "military-1040",
        "online-taxes",
        "ezTaxReturn",
        "file-your-taxes",
    ]


@pytest.mark.asyncio
async def test_get_offer(api_client: AsyncClient) -> None:
    """A single offer is returned by id."""
    response = await api_client.get("/api/offers/taxslayer")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "taxslayer"
    assert Decimal(data["max_agi"]) == Decimal("60000")


@pytest.mark.asyncio
async def test_get_offer_state_restrictions(api_client: AsyncClient) -> None:
    """Excluded states are serialized as a list."""
    response = await api_client.get("/api/offers/file-your-taxes")

    restrictions = response.json()["state_restrictions"]
    assert restrictions["type"] == "exclude"
    assert sorted(restrictions["states"]) == ["CA", "NJ", "NY"]


@pytest.mark.asyncio
async def test_get_unknown_offer_returns_404(api_client: AsyncClient) -> None:
    """Unknown ids are a 404."""
    response = await api_client.get("/api/offers/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Offer not found"

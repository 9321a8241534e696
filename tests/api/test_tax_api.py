"""Tests for tax estimate endpoints."""

from decimal import Decimal

import pytest
from httpx import AsyncClient

TAXPAYER = {
    "first_name": "Jordan",
    "last_name": "Rivera",
    "ssn": "123456789",
    "date_of_birth": "1990-04-12",
    "address": "100 Main St",
    "city": "Austin",
    "state": "TX",
    "zip_code": "78701",
}


@pytest.mark.asyncio
async def test_income_tax_breakdown(api_client: AsyncClient) -> None:
    """Bracket ladder result for a 2024 single filer."""
    response = await api_client.post(
        "/api/tax/income-tax",
        json={"taxable_income": 50000, "filing_status": "single", "tax_year": 2024},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["tax_year"] == 2024
    assert Decimal(data["tax"]) == Decimal("6053")
    assert Decimal(data["marginal_rate"]) == Decimal("0.22")
    assert len(data["brackets"]) == 3
    assert data["brackets"][0]["min"] is not None
    assert data["brackets"][-1]["max"] is not None


@pytest.mark.asyncio
async def test_income_tax_unknown_year_falls_back(api_client: AsyncClient) -> None:
    """Unknown years use the fallback table."""
    response = await api_client.post(
        "/api/tax/income-tax",
        json={"taxable_income": 50000, "filing_status": "single", "tax_year": 2030},
    )

    assert response.status_code == 200
    assert response.json()["tax_year"] == 2024


@pytest.mark.asyncio
async def test_income_tax_rejects_negative_income(api_client: AsyncClient) -> None:
    """Taxable income cannot be negative."""
    response = await api_client.post(
        "/api/tax/income-tax",
        json={"taxable_income": -1, "filing_status": "single"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_return_summary(api_client: AsyncClient) -> None:
    """A W-2 return summarizes to a refund."""
    response = await api_client.post(
        "/api/tax/summary",
        json={
            "tax_year": 2024,
            "filing_status": "single",
            "taxpayer": TAXPAYER,
            "w2_income": [
                {
                    "id": "w2-1",
                    "employer_name": "Acme Corp",
                    "employer_ein": "12-3456789",
                    "wages": "60000",
                    "federal_tax_withheld": "7000",
                }
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["income"]["wages"]) == Decimal("60000")
    assert Decimal(data["taxable_income"]) == Decimal("45400")
    assert Decimal(data["income_tax"]) == Decimal("5216")
    assert Decimal(data["refund"]) == Decimal("1784")
    assert data["deduction_method"] == "standard"
    assert data["is_refund"] is True


@pytest.mark.asyncio
async def test_return_summary_rejects_bad_year(api_client: AsyncClient) -> None:
    """Returns outside the supported years are a validation error."""
    response = await api_client.post(
        "/api/tax/summary",
        json={"tax_year": 2019, "filing_status": "single", "taxpayer": TAXPAYER},
    )

    assert response.status_code == 422

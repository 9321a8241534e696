"""Health check endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from freefile import __version__
from freefile.api.deps import get_catalog
from freefile.matching.models import Offer
from freefile.tax.year_config import supported_tax_years

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    offer_count: int
    tax_years: list[int]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    offers: tuple[Offer, ...] = Depends(get_catalog),
) -> HealthResponse:
    """Report version, catalog size and the tax years with bracket tables."""
    return HealthResponse(
        status="ok",
        version=__version__,
        offer_count=len(offers),
        tax_years=list(supported_tax_years()),
    )

"""Offer catalog endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from freefile.api.deps import get_catalog, get_offer_or_404
from freefile.matching.models import Offer

router = APIRouter(prefix="/api/offers", tags=["offers"])


class OfferListResponse(BaseModel):
    """Offer catalog response."""

    items: list[Offer]
    total: int


@router.get("", response_model=OfferListResponse)
async def list_offers(
    offers: tuple[Offer, ...] = Depends(get_catalog),
) -> OfferListResponse:
    """List every offer in catalog order."""
    return OfferListResponse(items=list(offers), total=len(offers))


@router.get("/{offer_id}", response_model=Offer)
async def get_offer(
    offer_id: str,
    offers: tuple[Offer, ...] = Depends(get_catalog),
) -> Offer:
    """Get offer by ID."""
    return get_offer_or_404(offers, offer_id)

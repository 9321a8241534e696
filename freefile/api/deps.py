"""FastAPI dependency injection for the offer catalog."""

from fastapi import HTTPException, Request, status

from freefile.matching.catalog import get_offer_by_id, load_default_catalog
from freefile.matching.models import Offer


async def get_catalog(request: Request) -> tuple[Offer, ...]:
    """Get the offer catalog loaded at startup.

    Falls back to the cached default catalog when the app was built without
    running its lifespan (for example in tests using ASGITransport).

    Args:
        request: FastAPI request containing app state.

    Returns:
        Offers in catalog order.
    """
    offers = getattr(request.app.state, "offers", None)
    if offers is None:
        offers = load_default_catalog()
        request.app.state.offers = offers
    return offers


def get_offer_or_404(offers: tuple[Offer, ...], offer_id: str) -> Offer:
    """Look up an offer, raising 404 when it is not in the catalog.

    Raises:
        HTTPException: If no offer has the given id.
    """
    offer = get_offer_by_id(offers, offer_id)
    if offer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offer not found",
        )
    return offer

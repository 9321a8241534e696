"""Offer matching endpoint."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from freefile.api.deps import get_catalog
from freefile.matching.models import MatchResult, Offer, UserProfile
from freefile.matching.scoring import score_offers, top_matches

router = APIRouter(prefix="/api", tags=["matching"])


class MatchReasonsResponse(BaseModel):
    """Reasons grouped by outcome, in check order."""

    eligible: list[str]
    warnings: list[str]
    disqualified: list[str]


class MatchResultResponse(BaseModel):
    """One scored offer."""

    offer: Offer
    score: int
    is_eligible: bool
    reasons: MatchReasonsResponse


class MatchResponse(BaseModel):
    """Ranked matches for a profile.

    ``results`` holds every offer (eligible first); ``top`` holds the best
    eligible ones.
    """

    results: list[MatchResultResponse]
    top: list[MatchResultResponse]
    eligible_count: int


def _to_result_response(result: MatchResult) -> MatchResultResponse:
    """Map a match result dataclass to its response model."""
    return MatchResultResponse(
        offer=result.offer,
        score=result.score,
        is_eligible=result.is_eligible,
        reasons=MatchReasonsResponse(
            eligible=result.reasons.eligible,
            warnings=result.reasons.warnings,
            disqualified=result.reasons.disqualified,
        ),
    )


@router.post("/match", response_model=MatchResponse)
async def match_offers(
    profile: UserProfile,
    top: int = Query(default=3, ge=1, le=20),
    offers: tuple[Offer, ...] = Depends(get_catalog),
) -> MatchResponse:
    """Score the catalog against a taxpayer profile."""
    results = score_offers(offers, profile)
    best = top_matches(results, count=top)

    return MatchResponse(
        results=[_to_result_response(result) for result in results],
        top=[_to_result_response(result) for result in best],
        eligible_count=sum(1 for result in results if result.is_eligible),
    )

"""Free File offer matching: catalog, profiles and scoring."""

from freefile.matching.catalog import (
    CatalogLoadError,
    get_offer_by_id,
    load_default_catalog,
    load_offers_from_list,
    load_offers_from_yaml,
)
from freefile.matching.models import (
    TAX_SCHEDULES,
    US_STATES,
    MatchReasons,
    MatchResult,
    Offer,
    OfferFeatures,
    SpecialEligibility,
    StateRestriction,
    SupportedForms,
    UserProfile,
)
from freefile.matching.scoring import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    eligible_matches,
    ineligible_matches,
    score_offer,
    score_offers,
    top_matches,
)

__all__ = [
    # Catalog
    "CatalogLoadError",
    "get_offer_by_id",
    "load_default_catalog",
    "load_offers_from_list",
    "load_offers_from_yaml",
    # Models
    "MatchReasons",
    "MatchResult",
    "Offer",
    "OfferFeatures",
    "SpecialEligibility",
    "StateRestriction",
    "SupportedForms",
    "TAX_SCHEDULES",
    "US_STATES",
    "UserProfile",
    # Scoring
    "DEFAULT_WEIGHTS",
    "ScoringWeights",
    "eligible_matches",
    "ineligible_matches",
    "score_offer",
    "score_offers",
    "top_matches",
]

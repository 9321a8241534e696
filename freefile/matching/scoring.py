"""Offer matching: eligibility gates and additive scoring.

Each offer gets an independent hard eligibility decision and a soft
0-100 score. Every check appends a reason to one of the eligible,
warnings or disqualified lists, in the fixed order the checks run.
All offers are returned (ineligible ones too) with eligible offers first,
each group sorted by descending score.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from freefile.core.logging import get_logger
from freefile.matching import reasons
from freefile.matching.models import MatchReasons, MatchResult, Offer, UserProfile

logger = get_logger(__name__)

SENIOR_AGE = 55
MIN_SCORE = Decimal("0")
MAX_SCORE = Decimal("100")


@dataclass(frozen=True)
class ScoringWeights:
    """Point deltas, one per scoring rule."""

    base: Decimal = Decimal("0")
    agi_headroom_max: Decimal = Decimal("10")
    age_requirements_met: Decimal = Decimal("5")
    military_only_match: Decimal = Decimal("15")
    available_in_state: Decimal = Decimal("5")
    state_return_supported: Decimal = Decimal("10")
    state_return_missing: Decimal = Decimal("-15")
    all_schedules_supported: Decimal = Decimal("10")
    per_missing_schedule: Decimal = Decimal("-5")
    prior_year_supported: Decimal = Decimal("10")
    prior_year_missing: Decimal = Decimal("-10")
    military_features: Decimal = Decimal("10")
    student_features: Decimal = Decimal("8")
    disability_features: Decimal = Decimal("8")
    senior_features: Decimal = Decimal("8")
    spanish_available: Decimal = Decimal("8")
    spanish_missing: Decimal = Decimal("-3")
    live_support_available: Decimal = Decimal("6")
    live_support_missing: Decimal = Decimal("-2")
    mobile_app_available: Decimal = Decimal("6")
    mobile_app_missing: Decimal = Decimal("-2")
    imports_w2: Decimal = Decimal("3")


DEFAULT_WEIGHTS = ScoringWeights()


def agi_headroom_bonus(
    agi: Decimal, max_agi: Decimal, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> Decimal:
    """Bonus for distance below the AGI limit.

    One point per 10% of headroom, capped at ``weights.agi_headroom_max``.
    Non-increasing as AGI approaches the limit; zero at the limit.
    """
    if agi > max_agi:
        return Decimal("0")
    headroom_pct = (max_agi - agi) / max_agi * 100
    return min(headroom_pct / 10, weights.agi_headroom_max)


class _Scorecard:
    """Running score, eligibility and reasons for one offer."""

    def __init__(self, base: Decimal) -> None:
        self.points = base
        self.is_eligible = True
        self.reasons = MatchReasons()

    def eligible(self, message: str, points: Decimal = Decimal("0")) -> None:
        self.reasons.eligible.append(message)
        self.points += points

    def warn(self, message: str, points: Decimal) -> None:
        self.reasons.warnings.append(message)
        self.points += points

    def disqualify(self, message: str) -> None:
        self.reasons.disqualified.append(message)
        self.is_eligible = False

    def final_score(self) -> int:
        clamped = min(MAX_SCORE, max(MIN_SCORE, self.points))
        return int(clamped.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_offer(
    offer: Offer,
    profile: UserProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> MatchResult:
    """Score a single offer against a profile.

    Args:
        offer: Offer to evaluate.
        profile: Taxpayer profile.
        weights: Point table; defaults to `DEFAULT_WEIGHTS`.

    Returns:
        MatchResult with score, eligibility and reasons in check order.
    """
    card = _Scorecard(weights.base)
    age = profile.age

    # AGI limit (hard) with headroom bonus (soft)
    if profile.agi > offer.max_agi:
        card.disqualify(
            reasons.AGI_EXCEEDS_LIMIT.format(
                agi=reasons.format_money(profile.agi),
                limit=reasons.format_money(offer.max_agi),
            )
        )
    else:
        card.eligible(
            reasons.WITHIN_AGI_LIMIT.format(limit=reasons.format_money(offer.max_agi)),
            agi_headroom_bonus(profile.agi, offer.max_agi, weights),
        )

    # Age range (hard)
    if age is not None:
        if offer.min_age is not None and age < offer.min_age:
            card.disqualify(reasons.BELOW_MIN_AGE.format(min_age=offer.min_age, age=age))
        elif offer.max_age is not None and age > offer.max_age:
            card.disqualify(reasons.ABOVE_MAX_AGE.format(max_age=offer.max_age, age=age))
        elif offer.min_age is not None or offer.max_age is not None:
            card.eligible(reasons.MEETS_AGE_REQUIREMENTS, weights.age_requirements_met)

    # Military-only (hard)
    if offer.military_only:
        if profile.is_military:
            card.eligible(reasons.MILITARY_ONLY_QUALIFIES, weights.military_only_match)
        else:
            card.disqualify(reasons.MILITARY_ONLY)

    # State availability (hard)
    restriction = offer.state_restrictions
    listed = restriction is not None and profile.state in restriction.states
    if restriction is not None and (
        (restriction.type == "include" and not listed)
        or (restriction.type == "exclude" and listed)
    ):
        card.disqualify(reasons.NOT_AVAILABLE_IN_STATE.format(state=profile.state))
    else:
        card.eligible(
            reasons.AVAILABLE_IN_STATE.format(state=profile.state),
            weights.available_in_state,
        )

    # State return support
    if profile.needs_state_tax_return:
        if offer.supported_forms.state:
            card.eligible(reasons.SUPPORTS_STATE_RETURNS, weights.state_return_supported)
        else:
            card.warn(reasons.NO_STATE_RETURNS, weights.state_return_missing)

    # Schedule coverage
    if profile.has_schedules:
        missing = profile.has_schedules - offer.supported_forms.schedules
        if missing:
            card.warn(
                reasons.MISSING_SCHEDULES.format(schedules=reasons.format_schedules(missing)),
                weights.per_missing_schedule * len(missing),
            )
        else:
            card.eligible(reasons.SUPPORTS_ALL_SCHEDULES, weights.all_schedules_supported)

    # Prior year returns
    if profile.needs_prior_year_return:
        if offer.features.prior_year_returns:
            card.eligible(reasons.SUPPORTS_PRIOR_YEAR, weights.prior_year_supported)
        else:
            card.warn(reasons.NO_PRIOR_YEAR, weights.prior_year_missing)

    # Special eligibility bonuses
    special = offer.special_eligibility
    if special is not None:
        if profile.is_military and special.military:
            card.eligible(reasons.MILITARY_FRIENDLY, weights.military_features)
        if profile.is_student and special.students:
            card.eligible(reasons.STUDENT_FRIENDLY, weights.student_features)
        if profile.has_disability and special.disabilities:
            card.eligible(reasons.DISABILITY_SUPPORT, weights.disability_features)
        if age is not None and age >= SENIOR_AGE and special.senior_citizens:
            card.eligible(reasons.SENIOR_FEATURES, weights.senior_features)

    # Preferences
    features = offer.features
    if profile.prefer_spanish:
        if features.spanish_language:
            card.eligible(reasons.SPANISH_AVAILABLE, weights.spanish_available)
        else:
            card.warn(reasons.NO_SPANISH, weights.spanish_missing)

    if profile.wants_live_support:
        if features.live_support:
            card.eligible(reasons.LIVE_SUPPORT_AVAILABLE, weights.live_support_available)
        else:
            card.warn(reasons.NO_LIVE_SUPPORT, weights.live_support_missing)

    if profile.wants_mobile_app:
        if features.mobile_app:
            card.eligible(reasons.MOBILE_APP_AVAILABLE, weights.mobile_app_available)
        else:
            card.warn(reasons.NO_MOBILE_APP, weights.mobile_app_missing)

    # Flat feature bonus
    if features.import_w2:
        card.eligible(reasons.IMPORTS_W2, weights.imports_w2)

    return MatchResult(
        offer=offer,
        score=card.final_score(),
        is_eligible=card.is_eligible,
        reasons=card.reasons,
    )


def score_offers(
    offers: Iterable[Offer],
    profile: UserProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[MatchResult]:
    """Score every offer and rank the results.

    Args:
        offers: Offers to evaluate.
        profile: Taxpayer profile.
        weights: Point table; defaults to `DEFAULT_WEIGHTS`.

    Returns:
        All results, eligible first, each group by descending score.
        Ties keep catalog order.

    Example:
        >>> results = score_offers(load_default_catalog(), profile)
        >>> best = top_matches(results, count=1)[0]
        >>> best.is_eligible
        True
    """
    results = [score_offer(offer, profile, weights) for offer in offers]
    results.sort(key=lambda result: (not result.is_eligible, -result.score))

    logger.debug(
        "offers_scored",
        offer_count=len(results),
        eligible_count=sum(1 for result in results if result.is_eligible),
    )
    return results


def top_matches(results: list[MatchResult], count: int = 3) -> list[MatchResult]:
    """First ``count`` eligible results from an already-sorted list."""
    return eligible_matches(results)[:count]


def eligible_matches(results: list[MatchResult]) -> list[MatchResult]:
    """Results whose hard gates all passed."""
    return [result for result in results if result.is_eligible]


def ineligible_matches(results: list[MatchResult]) -> list[MatchResult]:
    """Results shown for transparency even though they are ruled out."""
    return [result for result in results if not result.is_eligible]

"""Models for Free File offers, taxpayer profiles and match results.

Offers and profiles are pydantic models so catalog files and API bodies
are validated at the boundary. Match results are plain dataclasses built
fresh for every scoring call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freefile.tax.year_config import FilingStatus

US_STATES: frozenset[str] = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
        "DC",
    }
)

TAX_SCHEDULES: dict[str, str] = {
    "1": "Schedule 1 - Additional Income",
    "2": "Schedule 2 - Additional Taxes",
    "3": "Schedule 3 - Additional Credits",
    "A": "Schedule A - Itemized Deductions",
    "B": "Schedule B - Interest and Dividends",
    "C": "Schedule C - Business Income/Loss",
    "D": "Schedule D - Capital Gains/Losses",
    "E": "Schedule E - Rental/Royalty Income",
    "EIC": "Schedule EIC - Earned Income Credit",
    "SE": "Schedule SE - Self-Employment Tax",
}


def _normalize_state(value: str) -> str:
    code = value.strip().upper()
    if code not in US_STATES:
        raise ValueError(f"Unknown state code: {value!r}")
    return code


# =============================================================================
# Offer (reference data)
# =============================================================================


class StateRestriction(BaseModel):
    """Include or exclude list of two-letter state codes."""

    model_config = ConfigDict(frozen=True)

    type: Literal["include", "exclude"]
    states: frozenset[str]

    @field_validator("states", mode="before")
    @classmethod
    def normalize_states(cls, v: object) -> frozenset[str]:
        """Upper-case and validate every state code."""
        if isinstance(v, str):
            v = [v]
        return frozenset(_normalize_state(str(code)) for code in v)  # type: ignore[union-attr]


class SupportedForms(BaseModel):
    """Forms an offer can prepare."""

    model_config = ConfigDict(frozen=True)

    federal: tuple[str, ...] = ("1040",)
    state: bool = False
    schedules: frozenset[str] = frozenset()

    @field_validator("schedules", mode="before")
    @classmethod
    def normalize_schedules(cls, v: object) -> frozenset[str]:
        """Store schedule codes upper-cased."""
        return frozenset(str(code).strip().upper() for code in v)  # type: ignore[union-attr]


class OfferFeatures(BaseModel):
    """Product features of an offer."""

    model_config = ConfigDict(frozen=True)

    prior_year_returns: bool = False
    import_w2: bool = False
    live_support: bool = False
    mobile_app: bool = False
    spanish_language: bool = False


class SpecialEligibility(BaseModel):
    """Populations an offer caters to."""

    model_config = ConfigDict(frozen=True)

    students: bool = False
    military: bool = False
    disabilities: bool = False
    senior_citizens: bool = False


class Offer(BaseModel):
    """A Free File partner offer.

    Immutable reference data: loaded once from the catalog and never
    mutated by the matching engine.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    url: str
    logo: str | None = None

    # Eligibility criteria
    max_agi: Decimal = Field(gt=0, description="Maximum Adjusted Gross Income")
    min_age: int | None = Field(default=None, ge=0)
    max_age: int | None = Field(default=None, ge=0)
    state_restrictions: StateRestriction | None = None
    military_only: bool = False

    supported_forms: SupportedForms = Field(default_factory=SupportedForms)
    features: OfferFeatures = Field(default_factory=OfferFeatures)
    special_eligibility: SpecialEligibility | None = None

    # Metadata
    description: str = ""
    highlights: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()


# =============================================================================
# User profile (per request)
# =============================================================================


class UserProfile(BaseModel):
    """Taxpayer answers from the eligibility form."""

    agi: Decimal = Field(ge=0, le=1_000_000, description="Adjusted Gross Income")
    age: int | None = Field(default=None, ge=16, le=120)
    state: str = Field(description="Two-letter state code")

    needs_state_tax_return: bool = True
    filing_status: FilingStatus
    has_schedules: frozenset[str] = frozenset()
    needs_prior_year_return: bool = False

    is_military: bool = False
    is_student: bool = False
    has_disability: bool = False
    prefer_spanish: bool = False

    wants_live_support: bool = False
    wants_mobile_app: bool = False

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str) -> str:
        """Upper-case and validate the state code."""
        return _normalize_state(v)

    @field_validator("has_schedules", mode="before")
    @classmethod
    def normalize_schedules(cls, v: object) -> frozenset[str]:
        """Store schedule codes upper-cased."""
        if v is None:
            return frozenset()
        return frozenset(str(code).strip().upper() for code in v)  # type: ignore[union-attr]


# =============================================================================
# Results
# =============================================================================


@dataclass
class MatchReasons:
    """Human-readable explanations, in check order.

    Attributes:
        eligible: Why the offer fits.
        warnings: Soft mismatches that lowered the score.
        disqualified: Hard-gate failures.
    """

    eligible: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    disqualified: list[str] = field(default_factory=list)


@dataclass
class MatchResult:
    """Score and eligibility of one offer for one profile.

    Attributes:
        offer: The offer that was scored.
        score: Integer score in [0, 100].
        is_eligible: False when any hard gate failed.
        reasons: Explanations grouped by outcome.
    """

    offer: Offer
    score: int
    is_eligible: bool
    reasons: MatchReasons = field(default_factory=MatchReasons)

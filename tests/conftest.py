"""Pytest configuration and shared fixtures for tests."""

from collections.abc import Callable
from typing import Any

import pytest

from freefile.matching.models import Offer, UserProfile
from freefile.tax.models import Form1040


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    merged.update(overrides)
    return merged


@pytest.fixture
def make_offer() -> Callable[..., Offer]:
    """Factory for a fully featured offer with a $79,000 AGI limit.

    Keyword arguments replace top-level fields.

    Returns:
        Callable building an Offer.
    """

    def _make(**overrides: Any) -> Offer:
        base = {
            "id": "test-offer",
            "name": "Test Offer",
            "url": "https://example.com",
            "max_agi": 79000,
            "supported_forms": {
                "federal": ["1040"],
                "state": True,
                "schedules": ["A", "B", "C"],
            },
            "features": {
                "prior_year_returns": True,
                "import_w2": True,
                "live_support": True,
                "mobile_app": True,
                "spanish_language": True,
            },
            "description": "Test offer",
            "highlights": ["Easy to use"],
        }
        return Offer.model_validate(_merge(base, overrides))

    return _make


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    """Factory for a 30-year-old single filer in CA with $50,000 AGI.

    Keyword arguments replace fields.

    Returns:
        Callable building a UserProfile.
    """

    def _make(**overrides: Any) -> UserProfile:
        base = {
            "agi": 50000,
            "age": 30,
            "state": "CA",
            "needs_state_tax_return": True,
            "filing_status": "single",
            "has_schedules": ["A"],
            "needs_prior_year_return": False,
            "is_military": False,
            "is_student": False,
            "has_disability": False,
            "prefer_spanish": False,
            "wants_live_support": False,
            "wants_mobile_app": False,
        }
        return UserProfile.model_validate(_merge(base, overrides))

    return _make


@pytest.fixture
def taxpayer() -> dict[str, Any]:
    """Minimal valid taxpayer identity.

    Returns:
        Mapping accepted by PersonalInfo.
    """
    return {
        "first_name": "Jordan",
        "last_name": "Rivera",
        "ssn": "123-45-6789",
        "date_of_birth": "1990-04-12",
        "address": "100 Main St",
        "city": "Austin",
        "state": "tx",
        "zip_code": "78701",
    }


@pytest.fixture
def make_form(taxpayer: dict[str, Any]) -> Callable[..., Form1040]:
    """Factory for a 2024 single return with no income.

    Returns:
        Callable building a Form1040.
    """

    def _make(**overrides: Any) -> Form1040:
        base = {
            "tax_year": 2024,
            "filing_status": "single",
            "taxpayer": taxpayer,
        }
        return Form1040.model_validate(_merge(base, overrides))

    return _make

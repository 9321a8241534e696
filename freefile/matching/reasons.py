"""Reason message templates shown next to each match.

The wording is part of the public contract: clients and tests match on
exact text. Bump `MESSAGES_VERSION` whenever a template changes.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

MESSAGES_VERSION = "2024.1"

# Eligible
WITHIN_AGI_LIMIT = "Within AGI limit (${limit})"
MEETS_AGE_REQUIREMENTS = "Meets age requirements"
MILITARY_ONLY_QUALIFIES = "Military-only option (you qualify)"
AVAILABLE_IN_STATE = "Available in {state}"
SUPPORTS_STATE_RETURNS = "Supports state returns"
SUPPORTS_ALL_SCHEDULES = "Supports all needed tax schedules"
SUPPORTS_PRIOR_YEAR = "Supports prior year returns"
MILITARY_FRIENDLY = "Military-friendly features"
STUDENT_FRIENDLY = "Student-friendly features"
DISABILITY_SUPPORT = "Disability support features"
SENIOR_FEATURES = "Senior citizen features"
SPANISH_AVAILABLE = "Spanish language available"
LIVE_SUPPORT_AVAILABLE = "Live customer support available"
MOBILE_APP_AVAILABLE = "Mobile app available"
IMPORTS_W2 = "Can import W-2 data"

# Warnings
NO_STATE_RETURNS = "Does not support state returns"
MISSING_SCHEDULES = "May not support: {schedules}"
NO_PRIOR_YEAR = "Does not support prior year returns"
NO_SPANISH = "No Spanish language support"
NO_LIVE_SUPPORT = "No live support"
NO_MOBILE_APP = "No mobile app"

# Disqualified
AGI_EXCEEDS_LIMIT = "AGI of ${agi} exceeds limit of ${limit}"
BELOW_MIN_AGE = "Minimum age requirement is {min_age}, you are {age}"
ABOVE_MAX_AGE = "Maximum age limit is {max_age}, you are {age}"
MILITARY_ONLY = "This option is only available to military members"
NOT_AVAILABLE_IN_STATE = "Not available in {state}"


def format_money(amount: Decimal) -> str:
    """Format a dollar amount with thousands separators.

    Whole amounts drop the cents (``79000`` -> ``79,000``); fractional
    amounts keep their digits (``50000.5`` -> ``50,000.5``).
    """
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount.normalize():,f}"


def format_schedules(schedules: Iterable[str]) -> str:
    """Render schedule codes as ``Schedule A, Schedule C`` in sorted order."""
    return ", ".join(f"Schedule {code}" for code in sorted(schedules))

"""Tax year-specific constants and thresholds.

This module centralizes tax year-specific values like bracket ladders,
standard deductions and wage bases, plus the credit and AMT parameter
tables, to avoid hardcoding values throughout the codebase.

Example:
    >>> from freefile.tax.year_config import get_tax_year_config
    >>> config = get_tax_year_config(2024)
    >>> print(f"SS wage base: {config.ss_wage_base}")
    SS wage base: 168600
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from freefile.core.config import settings
from freefile.core.logging import get_logger

logger = get_logger(__name__)


class FilingStatus(str, Enum):
    """IRS filing status."""

    SINGLE = "single"
    MARRIED_JOINT = "married-joint"
    MARRIED_SEPARATE = "married-separate"
    HEAD_OF_HOUSEHOLD = "head-of-household"
    QUALIFYING_WIDOW = "qualifying-widow"


@dataclass(frozen=True)
class TaxBracket:
    """One rung of a progressive bracket ladder.

    Attributes:
        rate: Marginal rate applied inside the bracket.
        min: Lower bound (exclusive of the income taxed here).
        max: Upper bound, or None for the top bracket.
    """

    rate: Decimal
    min: Decimal
    max: Decimal | None


BRACKET_RATES: tuple[Decimal, ...] = tuple(
    Decimal(rate) for rate in ("0.10", "0.12", "0.22", "0.24", "0.32", "0.35", "0.37")
)


def _ladder(*upper_bounds: str) -> tuple[TaxBracket, ...]:
    """Build a gap-free bracket ladder from the six upper bounds."""
    if len(upper_bounds) != len(BRACKET_RATES) - 1:
        raise ValueError("A bracket ladder needs one upper bound per non-top rate")

    brackets: list[TaxBracket] = []
    lower = Decimal("0")
    for rate, bound in zip(BRACKET_RATES, (*upper_bounds, None)):
        upper = Decimal(bound) if bound is not None else None
        brackets.append(TaxBracket(rate=rate, min=lower, max=upper))
        if upper is not None:
            lower = upper
    return tuple(brackets)


def _by_status(
    single: object,
    married_joint: object,
    married_separate: object,
    head_of_household: object,
    qualifying_widow: object,
) -> Mapping[FilingStatus, object]:
    return MappingProxyType(
        {
            FilingStatus.SINGLE: single,
            FilingStatus.MARRIED_JOINT: married_joint,
            FilingStatus.MARRIED_SEPARATE: married_separate,
            FilingStatus.HEAD_OF_HOUSEHOLD: head_of_household,
            FilingStatus.QUALIFYING_WIDOW: qualifying_widow,
        }
    )


@dataclass(frozen=True)
class TaxYearConfig:
    """Tax year-specific constants and thresholds.

    All monetary values are Decimal for precision in tax calculations.
    This dataclass is frozen and its mappings are read-only views, so a
    config cannot be modified after import.

    Attributes:
        tax_year: The tax year these values apply to.
        brackets: Bracket ladder per filing status.
        standard_deductions: Standard deduction per filing status.
        ss_wage_base: Social Security wage base limit.
        projected: True when the values are estimates, not IRS-published.
    """

    tax_year: int
    brackets: Mapping[FilingStatus, tuple[TaxBracket, ...]]
    standard_deductions: Mapping[FilingStatus, Decimal]

    # Social Security / Medicare
    ss_wage_base: Decimal
    additional_medicare_threshold_single: Decimal = Decimal("200000")
    additional_medicare_threshold_mfj: Decimal = Decimal("250000")
    additional_medicare_rate: Decimal = Decimal("0.009")

    # Self-employment tax (combined employer + employee rates)
    se_ss_rate: Decimal = Decimal("0.124")  # 12.4% (6.2% x 2)
    se_medicare_rate: Decimal = Decimal("0.029")  # 2.9% (1.45% x 2)
    se_net_earnings_factor: Decimal = Decimal("0.9235")  # 92.35% of net SE income

    projected: bool = False

    @property
    def se_tax_deduction_rate(self) -> Decimal:
        """Deductible portion of SE tax (50%)."""
        return Decimal("0.5")

    def additional_medicare_threshold(self, filing_status: FilingStatus) -> Decimal:
        """Additional Medicare threshold; only joint filers get the higher one."""
        if filing_status is FilingStatus.MARRIED_JOINT:
            return self.additional_medicare_threshold_mfj
        return self.additional_medicare_threshold_single


# 2022 Configuration - IRS published values
TAX_YEAR_2022 = TaxYearConfig(
    tax_year=2022,
    brackets=_by_status(
        single=_ladder("10275", "41775", "89075", "170050", "215950", "539900"),
        married_joint=_ladder("20550", "83550", "178150", "340100", "431900", "647850"),
        married_separate=_ladder("10275", "41775", "89075", "170050", "215950", "323925"),
        head_of_household=_ladder("14650", "55900", "89050", "170050", "215950", "539900"),
        qualifying_widow=_ladder("20550", "83550", "178150", "340100", "431900", "647850"),
    ),
    standard_deductions=_by_status(
        single=Decimal("12950"),
        married_joint=Decimal("25900"),
        married_separate=Decimal("12950"),
        head_of_household=Decimal("19400"),
        qualifying_widow=Decimal("25900"),
    ),
    ss_wage_base=Decimal("147000"),
)

# 2023 Configuration - IRS published values
TAX_YEAR_2023 = TaxYearConfig(
    tax_year=2023,
    brackets=_by_status(
        single=_ladder("11000", "44725", "95375", "182100", "231250", "578125"),
        married_joint=_ladder("22000", "89450", "190750", "364200", "462500", "693750"),
        married_separate=_ladder("11000", "44725", "95375", "182100", "231250", "346875"),
        head_of_household=_ladder("15700", "59850", "95350", "182100", "231250", "578100"),
        qualifying_widow=_ladder("22000", "89450", "190750", "364200", "462500", "693750"),
    ),
    standard_deductions=_by_status(
        single=Decimal("13850"),
        married_joint=Decimal("27700"),
        married_separate=Decimal("13850"),
        head_of_household=Decimal("20800"),
        qualifying_widow=Decimal("27700"),
    ),
    ss_wage_base=Decimal("160200"),
)

# 2024 Configuration - IRS published values
TAX_YEAR_2024 = TaxYearConfig(
    tax_year=2024,
    brackets=_by_status(
        single=_ladder("11600", "47150", "100525", "191950", "243725", "609350"),
        married_joint=_ladder("23200", "94300", "201050", "383900", "487450", "731200"),
        married_separate=_ladder("11600", "47150", "100525", "191950", "243725", "365600"),
        head_of_household=_ladder("16550", "63100", "100500", "191950", "243700", "609350"),
        qualifying_widow=_ladder("23200", "94300", "201050", "383900", "487450", "731200"),
    ),
    standard_deductions=_by_status(
        single=Decimal("14600"),
        married_joint=Decimal("29200"),
        married_separate=Decimal("14600"),
        head_of_household=Decimal("21900"),
        qualifying_widow=Decimal("29200"),
    ),
    ss_wage_base=Decimal("168600"),
)

# 2025 Configuration - projected values (update when IRS releases official numbers)
TAX_YEAR_2025 = TaxYearConfig(
    tax_year=2025,
    brackets=_by_status(
        single=_ladder("11925", "48475", "103350", "197300", "250525", "626350"),
        married_joint=_ladder("23850", "96950", "206700", "394600", "501050", "751600"),
        married_separate=_ladder("11925", "48475", "103350", "197300", "250525", "375800"),
        head_of_household=_ladder("17000", "64850", "103350", "197300", "250500", "626350"),
        qualifying_widow=_ladder("23850", "96950", "206700", "394600", "501050", "751600"),
    ),
    standard_deductions=_by_status(
        single=Decimal("15000"),
        married_joint=Decimal("30000"),
        married_separate=Decimal("15000"),
        head_of_household=Decimal("22500"),
        qualifying_widow=Decimal("30000"),
    ),
    ss_wage_base=Decimal("176100"),
    projected=True,
)

# Registry of available tax year configurations
TAX_YEAR_CONFIGS: Mapping[int, TaxYearConfig] = MappingProxyType(
    {
        2022: TAX_YEAR_2022,
        2023: TAX_YEAR_2023,
        2024: TAX_YEAR_2024,
        2025: TAX_YEAR_2025,
    }
)

# Table used when a caller asks for a year we do not carry
FALLBACK_TAX_YEAR = 2024


# =============================================================================
# Credit parameter tables (2024 values, applied to every supported year)
# =============================================================================


@dataclass(frozen=True)
class EicParameters:
    """Earned Income Credit parameters for one qualifying-child count."""

    max_credit: Decimal
    income_limit_single: Decimal
    income_limit_married: Decimal
    phaseout_start_single: Decimal
    phaseout_start_married: Decimal
    phase_in_rate: Decimal
    phaseout_rate: Decimal


# Keyed by qualifying children; 3 means "3 or more"
EIC_PARAMETERS: Mapping[int, EicParameters] = MappingProxyType(
    {
        0: EicParameters(
            max_credit=Decimal("632"),
            income_limit_single=Decimal("18591"),
            income_limit_married=Decimal("25511"),
            phaseout_start_single=Decimal("9800"),
            phaseout_start_married=Decimal("16370"),
            phase_in_rate=Decimal("0.0765"),
            phaseout_rate=Decimal("0.0765"),
        ),
        1: EicParameters(
            max_credit=Decimal("4213"),
            income_limit_single=Decimal("49084"),
            income_limit_married=Decimal("56004"),
            phaseout_start_single=Decimal("24210"),
            phaseout_start_married=Decimal("31130"),
            phase_in_rate=Decimal("0.34"),
            phaseout_rate=Decimal("0.1598"),
        ),
        2: EicParameters(
            max_credit=Decimal("6960"),
            income_limit_single=Decimal("54884"),
            income_limit_married=Decimal("61804"),
            phaseout_start_single=Decimal("24210"),
            phaseout_start_married=Decimal("31130"),
            phase_in_rate=Decimal("0.40"),
            phaseout_rate=Decimal("0.2106"),
        ),
        3: EicParameters(
            max_credit=Decimal("7830"),
            income_limit_single=Decimal("58770"),
            income_limit_married=Decimal("65690"),
            phaseout_start_single=Decimal("24210"),
            phaseout_start_married=Decimal("31130"),
            phase_in_rate=Decimal("0.45"),
            phaseout_rate=Decimal("0.2106"),
        ),
    }
)
EIC_MAX_CHILDREN = 3

# Child Tax Credit / Additional Child Tax Credit
CTC_AMOUNT = Decimal("2000")
CTC_PHASEOUT_SINGLE = Decimal("200000")
CTC_PHASEOUT_MFJ = Decimal("400000")
CTC_PHASEOUT_STEP = Decimal("1000")
CTC_PHASEOUT_REDUCTION = Decimal("50")  # $50 reduction per $1000 (or part) over threshold
ACTC_MAX_PER_CHILD = Decimal("1800")
ACTC_EARNED_INCOME_THRESHOLD = Decimal("2500")
ACTC_EARNED_INCOME_RATE = Decimal("0.15")

# Child and Dependent Care Credit
CHILD_CARE_MAX_EXPENSES_ONE = Decimal("3000")
CHILD_CARE_MAX_EXPENSES_TWO_PLUS = Decimal("6000")
CHILD_CARE_MAX_RATE = Decimal("0.35")
CHILD_CARE_MIN_RATE = Decimal("0.20")
CHILD_CARE_AGI_FLOOR = Decimal("15000")
CHILD_CARE_AGI_STEP = Decimal("2000")
CHILD_CARE_RATE_STEP = Decimal("0.01")

# Education credits (AOTC and LLC share the phase-out band)
AOTC_FULL_EXPENSES = Decimal("2000")
AOTC_PARTIAL_EXPENSES = Decimal("2000")
AOTC_PARTIAL_RATE = Decimal("0.25")
AOTC_MAX_CREDIT = Decimal("2500")
LLC_MAX_EXPENSES = Decimal("10000")
LLC_RATE = Decimal("0.20")
EDUCATION_PHASEOUT_SINGLE = (Decimal("80000"), Decimal("90000"))
EDUCATION_PHASEOUT_MFJ = (Decimal("160000"), Decimal("180000"))


@dataclass(frozen=True)
class AmtParameters:
    """Alternative Minimum Tax parameters for one filing status."""

    exemption: Decimal
    phaseout_threshold: Decimal
    rate_breakpoint: Decimal


AMT_PARAMETERS: Mapping[FilingStatus, AmtParameters] = _by_status(
    single=AmtParameters(Decimal("85700"), Decimal("609350"), Decimal("232600")),
    married_joint=AmtParameters(Decimal("133300"), Decimal("1218700"), Decimal("232600")),
    married_separate=AmtParameters(Decimal("66650"), Decimal("609350"), Decimal("116300")),
    head_of_household=AmtParameters(Decimal("85700"), Decimal("609350"), Decimal("232600")),
    qualifying_widow=AmtParameters(Decimal("133300"), Decimal("1218700"), Decimal("232600")),
)
AMT_SALT_ADDBACK_RATE = Decimal("0.3")
AMT_SALT_ADDBACK_CAP = Decimal("10000")
AMT_EXEMPTION_PHASEOUT_RATE = Decimal("0.25")
AMT_LOW_RATE = Decimal("0.26")
AMT_HIGH_RATE = Decimal("0.28")


# =============================================================================
# Lookup
# =============================================================================


def supported_tax_years() -> list[int]:
    """Tax years with a bracket table, oldest first."""
    return sorted(TAX_YEAR_CONFIGS.keys())


def get_tax_year_config(year: int) -> TaxYearConfig:
    """Get configuration for a specific tax year.

    Args:
        year: The tax year (e.g., 2024).

    Returns:
        TaxYearConfig for the specified year.

    Raises:
        ValueError: If no configuration exists for the requested year.

    Example:
        >>> config = get_tax_year_config(2024)
        >>> print(config.ss_wage_base)
        168600
    """
    if year not in TAX_YEAR_CONFIGS:
        raise ValueError(
            f"No tax configuration for year {year}. Available years: {supported_tax_years()}"
        )
    return TAX_YEAR_CONFIGS[year]


def resolve_tax_year_config(year: int | None = None) -> TaxYearConfig:
    """Get the configuration the tax engine should use for ``year``.

    Unlike `get_tax_year_config`, this never raises. ``None`` means the
    configured default year. A year without a table falls back to
    `FALLBACK_TAX_YEAR` and logs a ``tax_year_fallback`` warning so the
    substitution is visible in operations.

    Args:
        year: Requested tax year, or None.

    Returns:
        TaxYearConfig for the year, or the fallback table.
    """
    if year is None:
        year = settings.default_tax_year

    config = TAX_YEAR_CONFIGS.get(year)
    if config is not None:
        return config

    logger.warning(
        "tax_year_fallback",
        requested_year=year,
        fallback_year=FALLBACK_TAX_YEAR,
        supported_years=supported_tax_years(),
    )
    return TAX_YEAR_CONFIGS[FALLBACK_TAX_YEAR]


def coerce_filing_status(filing_status: FilingStatus | str) -> FilingStatus:
    """Accept either the enum or its string value.

    Raises:
        ValueError: If the string is not a known filing status.
    """
    if isinstance(filing_status, FilingStatus):
        return filing_status
    return FilingStatus(str(filing_status).strip().lower())

"""Tax calculation engine and year-specific configurations."""

from freefile.tax.calculator import (
    IncomeTaxResult,
    SelfEmploymentTaxResult,
    calculate_additional_child_tax_credit,
    calculate_american_opportunity_credit,
    calculate_amt,
    calculate_child_care_credit,
    calculate_child_tax_credit,
    calculate_earned_income_credit,
    calculate_income_tax,
    calculate_income_tax_breakdown,
    calculate_lifetime_learning_credit,
    calculate_self_employment_tax,
    get_standard_deduction,
)
from freefile.tax.year_config import (
    TAX_YEAR_CONFIGS,
    FilingStatus,
    TaxBracket,
    TaxYearConfig,
    get_tax_year_config,
    resolve_tax_year_config,
    supported_tax_years,
)

__all__ = [
    # Calculator
    "IncomeTaxResult",
    "SelfEmploymentTaxResult",
    "calculate_additional_child_tax_credit",
    "calculate_american_opportunity_credit",
    "calculate_amt",
    "calculate_child_care_credit",
    "calculate_child_tax_credit",
    "calculate_earned_income_credit",
    "calculate_income_tax",
    "calculate_income_tax_breakdown",
    "calculate_lifetime_learning_credit",
    "calculate_self_employment_tax",
    "get_standard_deduction",
    # Year configuration
    "FilingStatus",
    "TAX_YEAR_CONFIGS",
    "TaxBracket",
    "TaxYearConfig",
    "get_tax_year_config",
    "resolve_tax_year_config",
    "supported_tax_years",
]

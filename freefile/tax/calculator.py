"""Tax calculation functions for federal income tax estimates.

This module provides pure functions for computing tax-related values:
- Federal income tax using progressive brackets
- Self-employment tax (Social Security + Medicare)
- Credits with phase-outs (EIC, CTC, ACTC, child care, AOTC, LLC)
- Tentative minimum tax (AMT)

Every function is total over its numeric inputs: non-positive amounts
produce 0 and phase-outs floor at 0, so nothing here raises for
out-of-range numbers. All monetary values use Decimal for precision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from freefile.tax.money import (
    ZERO,
    Amount,
    round_cents,
    round_whole_dollars,
    to_decimal,
)
from freefile.tax.year_config import (
    ACTC_EARNED_INCOME_RATE,
    ACTC_EARNED_INCOME_THRESHOLD,
    ACTC_MAX_PER_CHILD,
    AMT_EXEMPTION_PHASEOUT_RATE,
    AMT_HIGH_RATE,
    AMT_LOW_RATE,
    AMT_PARAMETERS,
    AMT_SALT_ADDBACK_CAP,
    AMT_SALT_ADDBACK_RATE,
    AOTC_FULL_EXPENSES,
    AOTC_MAX_CREDIT,
    AOTC_PARTIAL_EXPENSES,
    AOTC_PARTIAL_RATE,
    CHILD_CARE_AGI_FLOOR,
    CHILD_CARE_AGI_STEP,
    CHILD_CARE_MAX_EXPENSES_ONE,
    CHILD_CARE_MAX_EXPENSES_TWO_PLUS,
    CHILD_CARE_MAX_RATE,
    CHILD_CARE_MIN_RATE,
    CHILD_CARE_RATE_STEP,
    CTC_AMOUNT,
    CTC_PHASEOUT_MFJ,
    CTC_PHASEOUT_REDUCTION,
    CTC_PHASEOUT_SINGLE,
    CTC_PHASEOUT_STEP,
    EDUCATION_PHASEOUT_MFJ,
    EDUCATION_PHASEOUT_SINGLE,
    EIC_MAX_CHILDREN,
    EIC_PARAMETERS,
    LLC_MAX_EXPENSES,
    LLC_RATE,
    FilingStatus,
    TaxBracket,
    coerce_filing_status,
    resolve_tax_year_config,
)


# =============================================================================
# Data Structures
# =============================================================================


@dataclass
class BracketAmount:
    """Tax owed inside one bracket.

    Attributes:
        bracket: The bracket the income fell into.
        taxable_in_bracket: Portion of income taxed at this bracket's rate.
        tax_in_bracket: Tax owed on that portion (unrounded).
    """

    bracket: TaxBracket
    taxable_in_bracket: Decimal
    tax_in_bracket: Decimal


@dataclass
class IncomeTaxResult:
    """Result of income tax calculation.

    Attributes:
        tax_year: Tax year whose table was used (after fallback).
        filing_status: Filing status used for the ladder.
        taxable_income: Income the ladder was applied to.
        tax: Total tax rounded to cents.
        bracket_breakdown: Per-bracket amounts, lowest bracket first.
        marginal_rate: Rate of the highest bracket reached.
        effective_rate: Tax divided by taxable income.
    """

    tax_year: int
    filing_status: FilingStatus
    taxable_income: Decimal
    tax: Decimal
    bracket_breakdown: list[BracketAmount] = field(default_factory=list)
    marginal_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    effective_rate: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass(frozen=True)
class SelfEmploymentTaxResult:
    """Result of self-employment tax calculation.

    Attributes:
        se_tax: Total SE tax rounded to cents.
        deductible_amount: Employer-equivalent half, rounded to cents.
        social_security_tax: Social Security portion (capped at the wage base).
        medicare_tax: Medicare portion on all SE earnings.
        additional_medicare_tax: 0.9% portion above the threshold.
    """

    se_tax: Decimal
    deductible_amount: Decimal
    social_security_tax: Decimal = ZERO
    medicare_tax: Decimal = ZERO
    additional_medicare_tax: Decimal = ZERO


# =============================================================================
# Income Tax
# =============================================================================


def calculate_income_tax_breakdown(
    taxable_income: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> IncomeTaxResult:
    """Calculate federal income tax and show how each bracket contributes.

    Walks the ladder in ascending order, taxing
    ``min(income, bracket.max) - bracket.min`` at each rate the income
    reaches, and stops at the first bracket containing the income.

    Args:
        taxable_income: Income after deductions.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; None uses the default, unknown years fall back.

    Returns:
        IncomeTaxResult with total, breakdown and rates.
    """
    status = coerce_filing_status(filing_status)
    config = resolve_tax_year_config(tax_year)
    income = to_decimal(taxable_income)

    result = IncomeTaxResult(
        tax_year=config.tax_year,
        filing_status=status,
        taxable_income=income,
        tax=ZERO,
    )
    if income <= ZERO:
        return result

    total = ZERO
    for bracket in config.brackets[status]:
        if income > bracket.min:
            upper = income if bracket.max is None else min(income, bracket.max)
            taxable_in_bracket = upper - bracket.min
            tax_in_bracket = taxable_in_bracket * bracket.rate
            total += tax_in_bracket
            result.bracket_breakdown.append(
                BracketAmount(
                    bracket=bracket,
                    taxable_in_bracket=taxable_in_bracket,
                    tax_in_bracket=tax_in_bracket,
                )
            )
            result.marginal_rate = bracket.rate

        if bracket.max is None or income <= bracket.max:
            break

    result.tax = round_cents(total)
    result.effective_rate = total / income
    return result


def calculate_income_tax(
    taxable_income: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate federal income tax using progressive brackets.

    Args:
        taxable_income: Income after deductions.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; None uses the default, unknown years fall back.

    Returns:
        Tax rounded to cents; 0 for non-positive income.

    Example:
        >>> calculate_income_tax(50000, "single", 2024)
        Decimal('6053.00')
    """
    return calculate_income_tax_breakdown(taxable_income, filing_status, tax_year).tax


# =============================================================================
# Self-Employment Tax
# =============================================================================


def calculate_self_employment_tax(
    net_self_employment_income: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> SelfEmploymentTaxResult:
    """Calculate self-employment tax (Social Security + Medicare).

    92.35% of net SE income is subject to tax. Social Security (12.4%) stops
    at the year's wage base, Medicare (2.9%) applies to everything, and the
    additional 0.9% Medicare applies above $250,000 for joint filers and
    $200,000 for everyone else.

    Args:
        net_self_employment_income: Schedule C net profit.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; None uses the default, unknown years fall back.

    Returns:
        SelfEmploymentTaxResult; all zero for non-positive income.

    Example:
        >>> calculate_self_employment_tax(50000, "single", 2024).se_tax
        Decimal('7064.78')
    """
    status = coerce_filing_status(filing_status)
    config = resolve_tax_year_config(tax_year)
    net_income = to_decimal(net_self_employment_income)

    if net_income <= ZERO:
        return SelfEmploymentTaxResult(se_tax=ZERO, deductible_amount=ZERO)

    se_income = net_income * config.se_net_earnings_factor

    social_security_tax = min(se_income, config.ss_wage_base) * config.se_ss_rate
    medicare_tax = se_income * config.se_medicare_rate
    threshold = config.additional_medicare_threshold(status)
    additional_medicare_tax = max(ZERO, se_income - threshold) * config.additional_medicare_rate

    total = social_security_tax + medicare_tax + additional_medicare_tax

    return SelfEmploymentTaxResult(
        se_tax=round_cents(total),
        deductible_amount=round_cents(total * config.se_tax_deduction_rate),
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        additional_medicare_tax=additional_medicare_tax,
    )


# =============================================================================
# Earned Income Credit
# =============================================================================


def calculate_earned_income_credit(
    agi: Amount,
    earned_income: Amount,
    qualifying_children: int,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate the Earned Income Credit.

    Children are clamped to [0, 3] (3 means "3 or more"). Joint filers use
    the married income limits and phase-out start; every other status uses
    the single ones.

    Args:
        agi: Adjusted Gross Income.
        earned_income: Wages plus net self-employment earnings.
        qualifying_children: Number of EIC qualifying children.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        Credit rounded to cents.
    """
    status = coerce_filing_status(filing_status)
    resolve_tax_year_config(tax_year)
    agi_amount = to_decimal(agi)
    earned = to_decimal(earned_income)

    if earned <= ZERO:
        return ZERO

    children = min(max(int(qualifying_children), 0), EIC_MAX_CHILDREN)
    params = EIC_PARAMETERS[children]

    if status is FilingStatus.MARRIED_JOINT:
        income_limit = params.income_limit_married
        phaseout_start = params.phaseout_start_married
    else:
        income_limit = params.income_limit_single
        phaseout_start = params.phaseout_start_single

    if agi_amount > income_limit or earned > income_limit:
        return ZERO

    credit = min(earned * params.phase_in_rate, params.max_credit)

    if agi_amount > phaseout_start:
        reduction = (agi_amount - phaseout_start) * params.phaseout_rate
        credit = max(ZERO, credit - reduction)

    return round_cents(credit)


# =============================================================================
# Child Tax Credits
# =============================================================================


def calculate_child_tax_credit(
    qualifying_children: int,
    agi: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate Child Tax Credit with phaseout.

    $2,000 per child, reduced by $50 for each $1,000 (or part thereof) of
    AGI over $400,000 for joint filers or $200,000 otherwise.

    Args:
        qualifying_children: Children under 17.
        agi: Adjusted Gross Income.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        CTC amount after phaseout, never negative.

    Example:
        >>> calculate_child_tax_credit(2, 450000, "married-joint", 2024)
        Decimal('1500')
    """
    status = coerce_filing_status(filing_status)
    resolve_tax_year_config(tax_year)
    agi_amount = to_decimal(agi)
    children = int(qualifying_children)

    if children <= 0:
        return ZERO

    credit = CTC_AMOUNT * children
    threshold = CTC_PHASEOUT_MFJ if status is FilingStatus.MARRIED_JOINT else CTC_PHASEOUT_SINGLE

    if agi_amount > threshold:
        steps = ((agi_amount - threshold) / CTC_PHASEOUT_STEP).to_integral_value(
            rounding=ROUND_CEILING
        )
        credit = max(ZERO, credit - steps * CTC_PHASEOUT_REDUCTION)

    return credit


def calculate_additional_child_tax_credit(
    qualifying_children: int,
    earned_income: Amount,
    child_tax_credit_used: Amount,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate the Additional Child Tax Credit (refundable portion).

    The lesser of $1,800 per child and 15% of earned income over $2,500,
    further capped by the CTC that could not be used against tax.

    Args:
        qualifying_children: Children under 17.
        earned_income: Earned income for the year.
        child_tax_credit_used: CTC left unused after offsetting tax.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        Refundable credit rounded to cents.
    """
    resolve_tax_year_config(tax_year)
    earned = to_decimal(earned_income)
    unused_ctc = to_decimal(child_tax_credit_used)
    children = int(qualifying_children)

    if children <= 0 or unused_ctc <= ZERO:
        return ZERO

    max_refundable = min(
        ACTC_MAX_PER_CHILD * children,
        max(ZERO, earned - ACTC_EARNED_INCOME_THRESHOLD) * ACTC_EARNED_INCOME_RATE,
    )
    return round_cents(min(max_refundable, unused_ctc))


# =============================================================================
# Child and Dependent Care Credit
# =============================================================================


def calculate_child_care_credit(
    qualifying_expenses: Amount,
    qualifying_dependents: int,
    agi: Amount,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate the Child and Dependent Care Credit.

    Expenses are capped at $3,000 for one dependent or $6,000 for two or
    more. The rate starts at 35% and drops one point per full $2,000 of AGI
    above $15,000, bottoming out at 20%.

    Args:
        qualifying_expenses: Care expenses paid.
        qualifying_dependents: Number of qualifying persons.
        agi: Adjusted Gross Income.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        Credit rounded to whole dollars.
    """
    resolve_tax_year_config(tax_year)
    expenses = to_decimal(qualifying_expenses)
    agi_amount = to_decimal(agi)

    if expenses <= ZERO or qualifying_dependents <= 0:
        return ZERO

    max_expenses = (
        CHILD_CARE_MAX_EXPENSES_ONE
        if qualifying_dependents == 1
        else CHILD_CARE_MAX_EXPENSES_TWO_PLUS
    )
    allowable = min(expenses, max_expenses)

    rate = CHILD_CARE_MAX_RATE
    if agi_amount > CHILD_CARE_AGI_FLOOR:
        steps = ((agi_amount - CHILD_CARE_AGI_FLOOR) / CHILD_CARE_AGI_STEP).to_integral_value(
            rounding=ROUND_FLOOR
        )
        rate = max(CHILD_CARE_MIN_RATE, CHILD_CARE_MAX_RATE - steps * CHILD_CARE_RATE_STEP)

    return round_whole_dollars(allowable * rate)


# =============================================================================
# Education Credits
# =============================================================================


def _education_phaseout(credit: Decimal, agi: Decimal, status: FilingStatus) -> Decimal:
    """Scale an education credit down linearly across the phase-out band."""
    start, end = (
        EDUCATION_PHASEOUT_MFJ
        if status is FilingStatus.MARRIED_JOINT
        else EDUCATION_PHASEOUT_SINGLE
    )
    if agi >= end:
        return ZERO
    if agi > start:
        return credit * (1 - (agi - start) / (end - start))
    return credit


def calculate_american_opportunity_credit(
    qualified_expenses: Amount,
    agi: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate the American Opportunity Tax Credit.

    100% of the first $2,000 plus 25% of the next $2,000 (max $2,500),
    phased out between $80,000-$90,000 ($160,000-$180,000 joint).

    Args:
        qualified_expenses: Qualified tuition and related expenses.
        agi: Adjusted Gross Income.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        Credit rounded to whole dollars.

    Example:
        >>> calculate_american_opportunity_credit(4000, 85000, "single", 2024)
        Decimal('1250')
    """
    status = coerce_filing_status(filing_status)
    resolve_tax_year_config(tax_year)
    expenses = to_decimal(qualified_expenses)
    agi_amount = to_decimal(agi)

    if expenses <= ZERO:
        return ZERO

    if expenses <= AOTC_FULL_EXPENSES:
        credit = expenses
    else:
        credit = AOTC_FULL_EXPENSES + min(
            expenses - AOTC_FULL_EXPENSES, AOTC_PARTIAL_EXPENSES
        ) * AOTC_PARTIAL_RATE
    credit = min(credit, AOTC_MAX_CREDIT)

    return round_whole_dollars(_education_phaseout(credit, agi_amount, status))


def calculate_lifetime_learning_credit(
    qualified_expenses: Amount,
    agi: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate the Lifetime Learning Credit.

    20% of up to $10,000 of expenses, with the same phase-out band as the
    American Opportunity Credit.

    Args:
        qualified_expenses: Qualified tuition and related expenses.
        agi: Adjusted Gross Income.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        Credit rounded to whole dollars.
    """
    status = coerce_filing_status(filing_status)
    resolve_tax_year_config(tax_year)
    expenses = to_decimal(qualified_expenses)
    agi_amount = to_decimal(agi)

    if expenses <= ZERO:
        return ZERO

    credit = min(expenses, LLC_MAX_EXPENSES) * LLC_RATE
    return round_whole_dollars(_education_phaseout(credit, agi_amount, status))


# =============================================================================
# Alternative Minimum Tax
# =============================================================================


def calculate_amt(
    taxable_income: Amount,
    itemized_deductions: Amount,
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Calculate the tentative minimum tax.

    This is NOT the AMT owed. The caller must compute regular tax and owes
    ``max(0, tentative_minimum_tax - regular_tax)`` on top of it; see
    `freefile.tax.summary.summarize_return` for that composition.

    AMTI adds back 30% of itemized deductions (capped at $10,000) as an
    approximation of the SALT add-back. The exemption shrinks by 25 cents
    per dollar of AMTI over the status threshold. The remaining base is
    taxed at 26% up to the breakpoint and 28% above it.

    Args:
        taxable_income: Regular taxable income.
        itemized_deductions: Total itemized deductions claimed.
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; unknown years are logged, one table covers all years.

    Returns:
        Tentative minimum tax rounded to whole dollars.
    """
    status = coerce_filing_status(filing_status)
    resolve_tax_year_config(tax_year)
    income = to_decimal(taxable_income)
    itemized = max(ZERO, to_decimal(itemized_deductions))
    params = AMT_PARAMETERS[status]

    amti = income + min(itemized * AMT_SALT_ADDBACK_RATE, AMT_SALT_ADDBACK_CAP)

    exemption = params.exemption
    if amti > params.phaseout_threshold:
        reduction = (amti - params.phaseout_threshold) * AMT_EXEMPTION_PHASEOUT_RATE
        exemption = max(ZERO, exemption - reduction)

    amt_base = max(ZERO, amti - exemption)
    if amt_base <= params.rate_breakpoint:
        tentative = amt_base * AMT_LOW_RATE
    else:
        tentative = (
            params.rate_breakpoint * AMT_LOW_RATE
            + (amt_base - params.rate_breakpoint) * AMT_HIGH_RATE
        )

    return round_whole_dollars(tentative)


# =============================================================================
# Standard Deduction
# =============================================================================


def get_standard_deduction(
    filing_status: FilingStatus | str,
    tax_year: int | None = None,
) -> Decimal:
    """Get the standard deduction for a filing status and year.

    Args:
        filing_status: Filing status enum or its string value.
        tax_year: Tax year; None uses the default, unknown years fall back.

    Returns:
        Standard deduction amount.

    Example:
        >>> get_standard_deduction("single", 2024)
        Decimal('14600')
    """
    status = coerce_filing_status(filing_status)
    return resolve_tax_year_config(tax_year).standard_deductions[status]

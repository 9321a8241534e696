"""Return summary: total income through refund or amount owed.

Composes the calculator functions into the breakdown shown on the review
screen. This is the call site that turns the tentative minimum tax into
AMT owed, since `calculate_amt` deliberately stops short of that.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from freefile.core.logging import get_logger
from freefile.tax.calculator import (
    calculate_amt,
    calculate_income_tax,
    calculate_self_employment_tax,
    get_standard_deduction,
)
from freefile.tax.models import Form1040
from freefile.tax.money import ZERO, round_cents

logger = get_logger(__name__)


@dataclass
class IncomeBreakdown:
    """Total income by source.

    Attributes:
        wages: W-2 box 1 total.
        interest: 1099-INT box 1 total.
        dividends: 1099-DIV ordinary dividends.
        capital_gains: Net 1099-B gain or loss.
        misc_income: 1099-MISC income boxes.
        business_income: Schedule C net profit (or loss).
        rental_income: Schedule E net income (or loss).
        other_income: Unemployment, state refund, alimony and other lines.
        total: Sum of the above.
    """

    wages: Decimal
    interest: Decimal
    dividends: Decimal
    capital_gains: Decimal
    misc_income: Decimal
    business_income: Decimal
    rental_income: Decimal
    other_income: Decimal
    total: Decimal


@dataclass
class TaxSummary:
    """Full calculation breakdown for a return.

    Attributes:
        tax_year: Year of the return.
        income: Income by source.
        adjustments: Total adjustments to income.
        agi: Adjusted Gross Income.
        deduction_method: "standard" or "itemized".
        deduction: Deduction amount applied.
        taxable_income: AGI less deduction, floored at 0.
        income_tax: Regular tax from the bracket ladder.
        tentative_minimum_tax: Tentative AMT (itemizers only, else 0).
        amt: AMT owed on top of regular tax.
        self_employment_tax: Schedule SE tax.
        tax_before_credits: Income tax plus AMT.
        nonrefundable_credits: Credits applied, capped at tax before credits.
        total_tax: Tax after credits plus other taxes.
        total_payments: Withholding, estimates and refundable credits.
        refund: Overpayment, or 0.
        amount_owed: Balance due, or 0.
    """

    tax_year: int
    income: IncomeBreakdown
    adjustments: Decimal
    agi: Decimal
    deduction_method: str
    deduction: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    tentative_minimum_tax: Decimal
    amt: Decimal
    self_employment_tax: Decimal
    tax_before_credits: Decimal
    nonrefundable_credits: Decimal
    total_tax: Decimal
    total_payments: Decimal
    refund: Decimal
    amount_owed: Decimal

    @property
    def is_refund(self) -> bool:
        """True when payments cover the tax."""
        return self.amount_owed == ZERO


def aggregate_income(form: Form1040) -> IncomeBreakdown:
    """Aggregate income from every income collection on the return.

    Social Security benefits are left out: their taxable portion depends on
    a worksheet this estimator does not model.
    """
    wages = sum((w2.wages for w2 in form.w2_income), ZERO)
    interest = sum((doc.interest_income for doc in form.interest_1099_int), ZERO)
    dividends = sum((doc.ordinary_dividends for doc in form.dividends_1099_div), ZERO)
    capital_gains = sum((sale.gain_or_loss for sale in form.capital_gains_1099_b), ZERO)
    misc_income = sum((doc.total_income for doc in form.misc_1099), ZERO)
    business_income = sum((biz.net_profit for biz in form.self_employment_income), ZERO)
    rental_income = sum((prop.net_income for prop in form.rental_income), ZERO)

    other = form.other_income
    other_income = (
        other.unemployment
        + other.state_tax_refund
        + other.alimony
        + sum((item.amount for item in other.other), ZERO)
    )

    total = (
        wages
        + interest
        + dividends
        + capital_gains
        + misc_income
        + business_income
        + rental_income
        + other_income
    )

    return IncomeBreakdown(
        wages=wages,
        interest=interest,
        dividends=dividends,
        capital_gains=capital_gains,
        misc_income=misc_income,
        business_income=business_income,
        rental_income=rental_income,
        other_income=other_income,
        total=total,
    )


def summarize_return(form: Form1040) -> TaxSummary:
    """Compute the review-screen breakdown for a return.

    Flow: total income -> AGI -> deduction -> taxable income -> tax before
    credits -> credits -> total tax -> payments -> refund or amount owed.

    Args:
        form: Validated Form 1040.

    Returns:
        TaxSummary with every intermediate amount.
    """
    income = aggregate_income(form)
    adjustments = form.adjustments.total
    agi = income.total - adjustments

    if form.use_standard_deduction or form.itemized_deductions is None:
        deduction_method = "standard"
        deduction = get_standard_deduction(form.filing_status, form.tax_year)
        itemized_total = ZERO
    else:
        deduction_method = "itemized"
        itemized_total = form.itemized_deductions.total
        deduction = itemized_total

    taxable_income = max(ZERO, agi - deduction)
    income_tax = calculate_income_tax(taxable_income, form.filing_status, form.tax_year)

    # AMT owed is the excess of tentative minimum tax over regular tax
    tentative_minimum_tax = ZERO
    amt = ZERO
    if deduction_method == "itemized":
        tentative_minimum_tax = calculate_amt(
            taxable_income, itemized_total, form.filing_status, form.tax_year
        )
        amt = max(ZERO, tentative_minimum_tax - income_tax)

    se_tax = calculate_self_employment_tax(
        income.business_income, form.filing_status, form.tax_year
    ).se_tax

    tax_before_credits = income_tax + amt
    nonrefundable_credits = min(form.credits.total_nonrefundable, tax_before_credits)

    extra = form.additional_taxes
    other_taxes = (
        se_tax
        + extra.additional_medicare_tax
        + extra.net_investment_income_tax
        + extra.underpayment_penalty
    )
    total_tax = round_cents(tax_before_credits - nonrefundable_credits + other_taxes)

    payments = form.payments
    # Withholding entered on the payments screen wins over the W-2 box 2 total
    federal_withholding = payments.federal_withholding or sum(
        (w2.federal_tax_withheld for w2 in form.w2_income), ZERO
    )
    total_payments = round_cents(
        federal_withholding
        + payments.estimated_payments
        + payments.refund_applied_from_prior_year
        + payments.earned_income_credit
        + payments.additional_child_tax_credit
        + payments.other
        + form.credits.total_refundable
    )

    difference = total_payments - total_tax
    refund = max(ZERO, difference)
    amount_owed = max(ZERO, -difference)

    logger.debug(
        "return_summarized",
        tax_year=form.tax_year,
        filing_status=form.filing_status.value,
        deduction_method=deduction_method,
        amt_applies=amt > ZERO,
    )

    return TaxSummary(
        tax_year=form.tax_year,
        income=income,
        adjustments=adjustments,
        agi=agi,
        deduction_method=deduction_method,
        deduction=deduction,
        taxable_income=taxable_income,
        income_tax=income_tax,
        tentative_minimum_tax=tentative_minimum_tax,
        amt=amt,
        self_employment_tax=se_tax,
        tax_before_credits=tax_before_credits,
        nonrefundable_credits=nonrefundable_credits,
        total_tax=total_tax,
        total_payments=total_payments,
        refund=refund,
        amount_owed=amount_owed,
    )

"""Pydantic models for an individual income tax return (Form 1040).

This module defines validated data models for the return assembled by the
interview flow:
- Taxpayer, spouse and dependents
- Income documents (W-2, 1099-INT/DIV/B/MISC, Schedule C, Schedule E)
- Deductions, adjustments, credits, additional taxes and payments
- Interview progress metadata

All monetary fields use Decimal and are validated non-negative at this
boundary, except 1099-B gain or loss which may be a loss.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from freefile.tax.year_config import FilingStatus

Money = Annotated[Decimal, Field(ge=0, description="Non-negative currency amount")]


def _zero() -> Decimal:
    return Decimal("0")


def validate_ssn(value: str) -> str:
    """Validate and format SSN.

    Args:
        value: SSN string, with or without dashes/spaces.

    Returns:
        Formatted SSN as XXX-XX-XXXX.

    Raises:
        ValueError: If SSN is not exactly 9 digits after cleaning.
    """
    digits = re.sub(r"\D", "", value)

    if len(digits) != 9:
        raise ValueError(f"SSN must be exactly 9 digits, got {len(digits)}")

    return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"


class LineItem(BaseModel):
    """Free-form described amount (other income, other expenses)."""

    description: str
    amount: Money


# =============================================================================
# People
# =============================================================================


class PersonalInfo(BaseModel):
    """Taxpayer or spouse identity and address."""

    first_name: str
    middle_initial: str | None = None
    last_name: str
    ssn: str
    date_of_birth: str
    occupation: str | None = None

    address: str
    apt_unit: str | None = None
    city: str
    state: str = Field(min_length=2, max_length=2)
    zip_code: str

    phone_number: str | None = None
    email: str | None = None

    @field_validator("ssn")
    @classmethod
    def validate_person_ssn(cls, v: str) -> str:
        """Validate and format SSN."""
        return validate_ssn(v)

    @field_validator("state")
    @classmethod
    def upper_state(cls, v: str) -> str:
        """Store state codes upper-cased."""
        return v.upper()


class Dependent(BaseModel):
    """Dependent claimed on the return."""

    id: str
    first_name: str
    middle_initial: str | None = None
    last_name: str
    ssn: str
    date_of_birth: str
    relationship: str
    months_lived_with_you: int = Field(ge=0, le=12)
    qualifies_for_child_tax_credit: bool = False
    qualifies_for_other_dependent_credit: bool = False

    @field_validator("ssn")
    @classmethod
    def validate_dependent_ssn(cls, v: str) -> str:
        """Validate and format SSN."""
        return validate_ssn(v)


# =============================================================================
# Income documents
# =============================================================================


class W2Income(BaseModel):
    """W-2 Wage and Tax Statement."""

    id: str
    employer_name: str
    employer_ein: str
    wages: Money = Field(description="Box 1")
    federal_tax_withheld: Money = Field(default_factory=_zero, description="Box 2")
    social_security_wages: Money = Field(default_factory=_zero, description="Box 3")
    social_security_tax_withheld: Money = Field(default_factory=_zero, description="Box 4")
    medicare_wages: Money = Field(default_factory=_zero, description="Box 5")
    medicare_tax_withheld: Money = Field(default_factory=_zero, description="Box 6")
    state_tax_withheld: Money | None = None
    state_wages: Money | None = None
    state: str | None = None


class Income1099INT(BaseModel):
    """1099-INT interest income."""

    id: str
    payer_name: str
    payer_ein: str | None = None
    interest_income: Money = Field(description="Box 1")
    early_withdrawal_penalty: Money | None = Field(default=None, description="Box 2")
    federal_tax_withheld: Money | None = Field(default=None, description="Box 4")


class Income1099DIV(BaseModel):
    """1099-DIV dividend income."""

    id: str
    payer_name: str
    payer_ein: str | None = None
    ordinary_dividends: Money = Field(description="Box 1a")
    qualified_dividends: Money = Field(default_factory=_zero, description="Box 1b")
    total_capital_gain_distributions: Money | None = Field(default=None, description="Box 2a")
    federal_tax_withheld: Money | None = Field(default=None, description="Box 4")


class Income1099B(BaseModel):
    """1099-B broker sale; gain_or_loss is negative for a loss."""

    id: str
    broker_name: str
    description: str
    date_acquired: str
    date_sold: str
    proceeds: Money
    cost_basis: Money
    gain_or_loss: Decimal
    short_term_or_long_term: Literal["short", "long"]


class Income1099MISC(BaseModel):
    """1099-MISC / 1099-NEC miscellaneous income."""

    id: str
    payer_name: str
    payer_ein: str | None = None
    nonemployee_compensation: Money | None = None
    rents: Money | None = None
    royalties: Money | None = None
    other_income: Money | None = None
    federal_tax_withheld: Money | None = None

    @property
    def total_income(self) -> Decimal:
        """Sum of every income box that was filled in."""
        return sum(
            (
                amount
                for amount in (
                    self.nonemployee_compensation,
                    self.rents,
                    self.royalties,
                    self.other_income,
                )
                if amount is not None
            ),
            Decimal("0"),
        )


class SelfEmploymentIncome(BaseModel):
    """Schedule C business."""

    id: str
    business_name: str | None = None
    business_description: str
    principal_business_code: str | None = None

    gross_receipts: Money = Field(default_factory=_zero)
    returns: Money = Field(default_factory=_zero)
    other_income: Money = Field(default_factory=_zero)

    advertising: Money = Field(default_factory=_zero)
    car_and_truck: Money = Field(default_factory=_zero)
    commissions: Money = Field(default_factory=_zero)
    insurance: Money = Field(default_factory=_zero)
    interest: Money = Field(default_factory=_zero)
    legal: Money = Field(default_factory=_zero)
    office_expense: Money = Field(default_factory=_zero)
    rent: Money = Field(default_factory=_zero)
    repairs: Money = Field(default_factory=_zero)
    supplies: Money = Field(default_factory=_zero)
    taxes: Money = Field(default_factory=_zero)
    travel: Money = Field(default_factory=_zero)
    meals: Money = Field(default_factory=_zero)
    utilities: Money = Field(default_factory=_zero)
    wages: Money = Field(default_factory=_zero)
    other_expenses: list[LineItem] = Field(default_factory=list)

    @property
    def total_expenses(self) -> Decimal:
        """Schedule C Part II total."""
        return (
            self.advertising
            + self.car_and_truck
            + self.commissions
            + self.insurance
            + self.interest
            + self.legal
            + self.office_expense
            + self.rent
            + self.repairs
            + self.supplies
            + self.taxes
            + self.travel
            + self.meals
            + self.utilities
            + self.wages
            + sum((item.amount for item in self.other_expenses), Decimal("0"))
        )

    @property
    def net_profit(self) -> Decimal:
        """Gross income less expenses; negative for a loss."""
        gross_income = self.gross_receipts - self.returns + self.other_income
        return gross_income - self.total_expenses


class RentalIncome(BaseModel):
    """Schedule E rental property."""

    id: str
    property_address: str
    property_type: Literal[
        "single-family", "multi-family", "vacation", "commercial", "land", "other"
    ]
    days_rented: int = Field(ge=0, le=366)
    days_personal_use: int = Field(default=0, ge=0, le=366)

    rents: Money = Field(default_factory=_zero)

    advertising: Money = Field(default_factory=_zero)
    auto: Money = Field(default_factory=_zero)
    cleaning: Money = Field(default_factory=_zero)
    commissions: Money = Field(default_factory=_zero)
    insurance: Money = Field(default_factory=_zero)
    legal: Money = Field(default_factory=_zero)
    management: Money = Field(default_factory=_zero)
    mortgage: Money = Field(default_factory=_zero)
    other_interest: Money = Field(default_factory=_zero)
    repairs: Money = Field(default_factory=_zero)
    supplies: Money = Field(default_factory=_zero)
    taxes: Money = Field(default_factory=_zero)
    utilities: Money = Field(default_factory=_zero)
    depreciation: Money = Field(default_factory=_zero)
    other_expenses: list[LineItem] = Field(default_factory=list)

    @property
    def total_expenses(self) -> Decimal:
        """Schedule E expense total for the property."""
        return (
            self.advertising
            + self.auto
            + self.cleaning
            + self.commissions
            + self.insurance
            + self.legal
            + self.management
            + self.mortgage
            + self.other_interest
            + self.repairs
            + self.supplies
            + self.taxes
            + self.utilities
            + self.depreciation
            + sum((item.amount for item in self.other_expenses), Decimal("0"))
        )

    @property
    def net_income(self) -> Decimal:
        """Rents less expenses; negative for a loss."""
        return self.rents - self.total_expenses


class OtherIncome(BaseModel):
    """Schedule 1 income not reported on an information return."""

    unemployment: Money = Field(default_factory=_zero)
    social_security: Money = Field(default_factory=_zero)
    state_tax_refund: Money = Field(default_factory=_zero)
    alimony: Money = Field(default_factory=_zero)
    other: list[LineItem] = Field(default_factory=list)


# =============================================================================
# Deductions, adjustments, credits, payments
# =============================================================================


SALT_CAP = Decimal("10000")


class ItemizedDeductions(BaseModel):
    """Schedule A itemized deductions."""

    medical_expenses: Money = Field(default_factory=_zero)
    state_income_tax: Money = Field(default_factory=_zero)
    real_estate_tax: Money = Field(default_factory=_zero)
    personal_property_tax: Money = Field(default_factory=_zero)
    mortgage_interest: Money = Field(default_factory=_zero)
    mortgage_points: Money = Field(default_factory=_zero)
    mortgage_insurance: Money = Field(default_factory=_zero)
    cash_contributions: Money = Field(default_factory=_zero)
    non_cash_contributions: Money = Field(default_factory=_zero)
    casualty_losses: Money = Field(default_factory=_zero)
    other_deductions: list[LineItem] = Field(default_factory=list)

    @property
    def state_and_local_taxes(self) -> Decimal:
        """SALT after the $10,000 cap."""
        return min(
            SALT_CAP,
            self.state_income_tax + self.real_estate_tax + self.personal_property_tax,
        )

    @property
    def total(self) -> Decimal:
        """Total itemized deductions with SALT capped."""
        return (
            self.medical_expenses
            + self.state_and_local_taxes
            + self.mortgage_interest
            + self.mortgage_points
            + self.mortgage_insurance
            + self.cash_contributions
            + self.non_cash_contributions
            + self.casualty_losses
            + sum((item.amount for item in self.other_deductions), Decimal("0"))
        )


class AdjustmentsToIncome(BaseModel):
    """Schedule 1 Part II adjustments."""

    educator_expenses: Money = Field(default_factory=_zero)
    business_expenses: Money = Field(default_factory=_zero)
    hsa_deduction: Money = Field(default_factory=_zero)
    moving_expenses: Money = Field(default_factory=_zero)
    self_employment_tax: Money = Field(default_factory=_zero)
    self_employed_retirement: Money = Field(default_factory=_zero)
    self_employed_health_insurance: Money = Field(default_factory=_zero)
    penalty: Money = Field(default_factory=_zero)
    ira_deduction: Money = Field(default_factory=_zero)
    student_loan_interest: Money = Field(default_factory=_zero)
    tuition_and_fees: Money = Field(default_factory=_zero)

    @property
    def total(self) -> Decimal:
        """Sum of all adjustments."""
        return sum((Decimal(value) for value in self.model_dump().values()), Decimal("0"))


class TaxCredits(BaseModel):
    """Credit amounts entered during the interview."""

    child_tax_credit: Money = Field(default_factory=_zero)
    other_dependent_credit: Money = Field(default_factory=_zero)
    child_care_credit: Money = Field(default_factory=_zero)
    education_credits: Money = Field(default_factory=_zero)
    retirement_savings_credit: Money = Field(default_factory=_zero)
    earned_income_credit: Money = Field(default_factory=_zero)
    premium_tax_credit: Money = Field(default_factory=_zero)

    @property
    def total_nonrefundable(self) -> Decimal:
        """Credits that can only reduce tax to zero."""
        return (
            self.child_tax_credit
            + self.other_dependent_credit
            + self.child_care_credit
            + self.education_credits
            + self.retirement_savings_credit
        )

    @property
    def total_refundable(self) -> Decimal:
        """Credits paid out even when they exceed the tax."""
        return self.earned_income_credit + self.premium_tax_credit


class AdditionalTaxes(BaseModel):
    """Schedule 2 additional taxes.

    ``self_employment_tax`` is informational only: the return summary
    recomputes SE tax from Schedule C net profit.
    """

    self_employment_tax: Money = Field(default_factory=_zero)
    additional_medicare_tax: Money = Field(default_factory=_zero)
    net_investment_income_tax: Money = Field(default_factory=_zero)
    underpayment_penalty: Money = Field(default_factory=_zero)


class Payments(BaseModel):
    """Tax payments and refundable credits already claimed."""

    federal_withholding: Money = Field(default_factory=_zero)
    estimated_payments: Money = Field(default_factory=_zero)
    refund_applied_from_prior_year: Money = Field(default_factory=_zero)
    earned_income_credit: Money = Field(default_factory=_zero)
    additional_child_tax_credit: Money = Field(default_factory=_zero)
    other: Money = Field(default_factory=_zero)


class RefundInstructions(BaseModel):
    """Direct deposit details for a refund."""

    routing_number: str = Field(pattern=r"^\d{9}$")
    account_number: str = Field(min_length=4, max_length=17)
    account_type: Literal["checking", "savings"]


class PaymentInstructions(BaseModel):
    """How an amount owed will be paid."""

    payment_date: str | None = None
    check_number: str | None = None


# =============================================================================
# Return
# =============================================================================


class Form1040(BaseModel):
    """Form 1040 main return."""

    tax_year: int = Field(ge=2022, le=2025)
    filing_status: FilingStatus

    taxpayer: PersonalInfo
    spouse: PersonalInfo | None = None
    dependents: list[Dependent] = Field(default_factory=list)

    w2_income: list[W2Income] = Field(default_factory=list)
    interest_1099_int: list[Income1099INT] = Field(default_factory=list)
    dividends_1099_div: list[Income1099DIV] = Field(default_factory=list)
    capital_gains_1099_b: list[Income1099B] = Field(default_factory=list)
    misc_1099: list[Income1099MISC] = Field(default_factory=list)
    self_employment_income: list[SelfEmploymentIncome] = Field(default_factory=list)
    rental_income: list[RentalIncome] = Field(default_factory=list)
    other_income: OtherIncome = Field(default_factory=OtherIncome)

    use_standard_deduction: bool = True
    itemized_deductions: ItemizedDeductions | None = None

    adjustments: AdjustmentsToIncome = Field(default_factory=AdjustmentsToIncome)
    credits: TaxCredits = Field(default_factory=TaxCredits)
    additional_taxes: AdditionalTaxes = Field(default_factory=AdditionalTaxes)
    payments: Payments = Field(default_factory=Payments)

    refund: RefundInstructions | None = None
    payment: PaymentInstructions | None = None


class InterviewProgress(BaseModel):
    """Where the taxpayer is in the interview."""

    current_step: int = Field(default=0, ge=0)
    total_steps: int = Field(default=0, ge=0)
    completed_sections: list[str] = Field(default_factory=list)
    last_saved: datetime | None = None


class TaxReturn(BaseModel):
    """Complete tax return record as stored by the persistence layer."""

    id: str
    form1040: Form1040
    progress: InterviewProgress = Field(default_factory=InterviewProgress)
    created_at: datetime
    updated_at: datetime

"""Tax estimate endpoints."""

from decimal import Decimal

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from freefile.tax.calculator import calculate_income_tax_breakdown
from freefile.tax.models import Form1040
from freefile.tax.summary import summarize_return
from freefile.tax.year_config import FilingStatus

router = APIRouter(prefix="/api/tax", tags=["tax"])


class IncomeTaxRequest(BaseModel):
    """Payload for a bracket-ladder calculation."""

    taxable_income: Decimal = Field(ge=0)
    filing_status: FilingStatus
    tax_year: int | None = None


class BracketAmountResponse(BaseModel):
    """Tax owed inside one bracket."""

    rate: Decimal
    min: Decimal
    max: Decimal | None
    taxable_in_bracket: Decimal
    tax_in_bracket: Decimal


class IncomeTaxResponse(BaseModel):
    """Income tax with per-bracket breakdown."""

    tax_year: int
    filing_status: FilingStatus
    taxable_income: Decimal
    tax: Decimal
    marginal_rate: Decimal
    effective_rate: Decimal
    brackets: list[BracketAmountResponse]


class IncomeBreakdownResponse(BaseModel):
    """Total income by source."""

    model_config = ConfigDict(from_attributes=True)

    wages: Decimal
    interest: Decimal
    dividends: Decimal
    capital_gains: Decimal
    misc_income: Decimal
    business_income: Decimal
    rental_income: Decimal
    other_income: Decimal
    total: Decimal


class TaxSummaryResponse(BaseModel):
    """Review-screen breakdown for a return."""

    model_config = ConfigDict(from_attributes=True)

    tax_year: int
    income: IncomeBreakdownResponse
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
    is_refund: bool


@router.post("/income-tax", response_model=IncomeTaxResponse)
async def income_tax(payload: IncomeTaxRequest) -> IncomeTaxResponse:
    """Apply the bracket ladder for a year and filing status."""
    result = calculate_income_tax_breakdown(
        payload.taxable_income, payload.filing_status, payload.tax_year
    )
    return IncomeTaxResponse(
        tax_year=result.tax_year,
        filing_status=result.filing_status,
        taxable_income=result.taxable_income,
        tax=result.tax,
        marginal_rate=result.marginal_rate,
        effective_rate=result.effective_rate,
        brackets=[
            BracketAmountResponse(
                rate=amount.bracket.rate,
                min=amount.bracket.min,
                max=amount.bracket.max,
                taxable_in_bracket=amount.taxable_in_bracket,
                tax_in_bracket=amount.tax_in_bracket,
            )
            for amount in result.bracket_breakdown
        ],
    )


@router.post("/summary", response_model=TaxSummaryResponse)
async def tax_summary(form: Form1040) -> TaxSummaryResponse:
    """Compute income through refund or amount owed for a Form 1040."""
    return TaxSummaryResponse.model_validate(summarize_return(form))

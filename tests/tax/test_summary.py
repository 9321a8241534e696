"""Tests for the return summary."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from structlog.testing import capture_logs

from freefile.tax.models import Form1040
from freefile.tax.summary import aggregate_income, summarize_return

FormFactory = Callable[..., Form1040]


def _w2(wages: str, withheld: str = "0") -> dict[str, Any]:
    return {
        "id": "w2-1",
        "employer_name": "Acme Corp",
        "employer_ein": "12-3456789",
        "wages": wages,
        "federal_tax_withheld": withheld,
    }


class TestAggregateIncome:
    """Tests for aggregate_income."""

    def test_sums_every_source(self, make_form: FormFactory) -> None:
        """All income collections contribute to the total."""
        form = make_form(
            w2_income=[_w2("40000")],
            interest_1099_int=[{"id": "i1", "payer_name": "Bank", "interest_income": "250"}],
            dividends_1099_div=[
                {"id": "d1", "payer_name": "Fund", "ordinary_dividends": "750"}
            ],
            capital_gains_1099_b=[
                {
                    "id": "b1",
                    "broker_name": "Broker",
                    "description": "100 sh XYZ",
                    "date_acquired": "2023-01-05",
                    "date_sold": "2024-06-01",
                    "proceeds": "4000",
                    "cost_basis": "5000",
                    "gain_or_loss": "-1000",
                    "short_term_or_long_term": "long",
                }
            ],
            misc_1099=[{"id": "m1", "payer_name": "Client", "royalties": "500"}],
            self_employment_income=[
                {
                    "id": "c1",
                    "business_description": "Consulting",
                    "gross_receipts": "12000",
                    "supplies": "2000",
                }
            ],
            rental_income=[
                {
                    "id": "r1",
                    "property_address": "1 Elm St",
                    "property_type": "single-family",
                    "days_rented": 365,
                    "rents": "18000",
                    "mortgage": "9000",
                    "taxes": "3000",
                }
            ],
            other_income={"unemployment": "1500", "social_security": "9000"},
        )

        income = aggregate_income(form)

        assert income.wages == Decimal("40000")
        assert income.capital_gains == Decimal("-1000")
        assert income.business_income == Decimal("10000")
        assert income.rental_income == Decimal("6000")
        assert income.other_income == Decimal("1500")
        assert income.total == Decimal("58000")

    def test_social_security_excluded(self, make_form: FormFactory) -> None:
        """Social Security benefits are not counted as income."""
        form = make_form(other_income={"social_security": "20000"})

        assert aggregate_income(form).total == Decimal("0")


class TestSummarizeReturn:
    """Tests for summarize_return."""

    def test_wage_earner_refund(self, make_form: FormFactory) -> None:
        """Standard deduction, bracket tax and a refund."""
        summary = summarize_return(make_form(w2_income=[_w2("60000", "7000")]))

        assert summary.agi == Decimal("60000")
        assert summary.deduction_method == "standard"
        assert summary.deduction == Decimal("14600")
        assert summary.taxable_income == Decimal("45400")
        assert summary.income_tax == Decimal("5216.00")
        assert summary.total_tax == Decimal("5216.00")
        assert summary.total_payments == Decimal("7000.00")
        assert summary.refund == Decimal("1784.00")
        assert summary.amount_owed == Decimal("0")
        assert summary.is_refund is True

    def test_amount_owed(self, make_form: FormFactory) -> None:
        """Underwithholding leaves a balance due."""
        summary = summarize_return(make_form(w2_income=[_w2("60000", "1000")]))

        assert summary.amount_owed == Decimal("4216.00")
        assert summary.refund == Decimal("0")
        assert summary.is_refund is False

    def test_adjustments_reduce_agi(self, make_form: FormFactory) -> None:
        """Adjustments come off total income."""
        summary = summarize_return(
            make_form(
                w2_income=[_w2("60000")],
                adjustments={"student_loan_interest": "2500", "ira_deduction": "3000"},
            )
        )

        assert summary.adjustments == Decimal("5500")
        assert summary.agi == Decimal("54500")

    def test_deduction_follows_year_and_status(self, make_form: FormFactory) -> None:
        """The standard deduction uses the return's year and status."""
        summary = summarize_return(
            make_form(tax_year=2023, filing_status="married-joint", w2_income=[_w2("60000")])
        )

        assert summary.deduction == Decimal("27700")
        assert summary.tax_year == 2023

    def test_taxable_income_never_negative(self, make_form: FormFactory) -> None:
        """Deduction larger than AGI floors taxable income at zero."""
        summary = summarize_return(make_form(w2_income=[_w2("5000")]))

        assert summary.taxable_income == Decimal("0")
        assert summary.income_tax == Decimal("0")

    def test_itemized_with_salt_cap_and_amt(self, make_form: FormFactory) -> None:
        """Itemizers get SALT capped and a tentative minimum tax comparison."""
        summary = summarize_return(
            make_form(
                w2_income=[_w2("300000")],
                use_standard_deduction=False,
                itemized_deductions={"state_income_tax": "15000", "mortgage_interest": "35000"},
            )
        )

        assert summary.deduction_method == "itemized"
        assert summary.deduction == Decimal("45000")
        assert summary.taxable_income == Decimal("255000")
        assert summary.income_tax == Decimal("59624.75")
        assert summary.tentative_minimum_tax == Decimal("46618")
        assert summary.amt == Decimal("0")
        assert summary.tax_before_credits == summary.income_tax

    def test_standard_flag_wins_over_itemized_values(self, make_form: FormFactory) -> None:
        """Itemized values are ignored when the standard deduction is chosen."""
        summary = summarize_return(
            make_form(
                w2_income=[_w2("60000")],
                use_standard_deduction=True,
                itemized_deductions={"mortgage_interest": "30000"},
            )
        )

        assert summary.deduction_method == "standard"
        assert summary.tentative_minimum_tax == Decimal("0")

    def test_self_employment_tax_added(self, make_form: FormFactory) -> None:
        """Schedule C profit adds SE tax on top of income tax."""
        summary = summarize_return(
            make_form(
                self_employment_income=[
                    {
                        "id": "c1",
                        "business_description": "Design",
                        "gross_receipts": "50000",
                    }
                ]
            )
        )

        assert summary.income_tax == Decimal("4016.00")
        assert summary.self_employment_tax == Decimal("7064.78")
        assert summary.total_tax == Decimal("11080.78")

    def test_credits_capped_at_tax(self, make_form: FormFactory) -> None:
        """Nonrefundable credits cannot push tax below zero."""
        summary = summarize_return(
            make_form(
                w2_income=[_w2("60000", "7000")],
                credits={"child_tax_credit": "8000"},
            )
        )

        assert summary.nonrefundable_credits == Decimal("5216.00")
        assert summary.total_tax == Decimal("0.00")
        assert summary.refund == Decimal("7000.00")

    def test_refundable_credits_count_as_payments(self, make_form: FormFactory) -> None:
        """EIC and ACTC entered as payments increase the refund."""
        summary = summarize_return(
            make_form(
                w2_income=[_w2("20000", "500")],
                payments={
                    "federal_withholding": "500",
                    "earned_income_credit": "1200",
                    "additional_child_tax_credit": "1700",
                },
            )
        )

        assert summary.total_payments == Decimal("3400.00")

    def test_credit_screen_refundable_credits_count_as_payments(
        self, make_form: FormFactory
    ) -> None:
        """EIC and premium tax credit from the credits screen reach the refund."""
        summary = summarize_return(
            make_form(credits={"earned_income_credit": "3000", "premium_tax_credit": "500"})
        )

        assert summary.total_payments == Decimal("3500.00")
        assert summary.nonrefundable_credits == Decimal("0")
        assert summary.refund == Decimal("3500.00")

    def test_entered_self_employment_tax_is_ignored(self, make_form: FormFactory) -> None:
        """SE tax comes from Schedule C, not the additional taxes screen."""
        summary = summarize_return(
            make_form(additional_taxes={"self_employment_tax": "2500"})
        )

        assert summary.self_employment_tax == Decimal("0")
        assert summary.total_tax == Decimal("0")

    def test_logs_summary_event(self, make_form: FormFactory) -> None:
        """A debug event records the deduction method."""
        with capture_logs() as logs:
            summarize_return(make_form(w2_income=[_w2("60000")]))

        events = [log for log in logs if log["event"] == "return_summarized"]
        assert events[0]["deduction_method"] == "standard"
        assert events[0]["amt_applies"] is False

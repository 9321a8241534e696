"""Tests for Form 1040 models."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest
from pydantic import ValidationError

from freefile.tax.models import (
    AdjustmentsToIncome,
    Form1040,
    Income1099MISC,
    ItemizedDeductions,
    PersonalInfo,
    RefundInstructions,
    TaxCredits,
    validate_ssn,
)
from freefile.tax.year_config import FilingStatus


class TestSsnValidation:
    """Tests for validate_ssn."""

    @pytest.mark.parametrize("raw", ["123456789", "123-45-6789", "123 45 6789"])
    def test_formats(self, raw: str) -> None:
        """Digits are reformatted with dashes."""
        assert validate_ssn(raw) == "123-45-6789"

    def test_wrong_length(self) -> None:
        """Eight digits are rejected."""
        with pytest.raises(ValueError, match="9 digits"):
            validate_ssn("12345678")


class TestPersonalInfo:
    """Tests for PersonalInfo."""

    def test_normalizes_fields(self, taxpayer: dict[str, Any]) -> None:
        """SSN is formatted and state upper-cased."""
        person = PersonalInfo.model_validate({**taxpayer, "ssn": "987654321"})

        assert person.ssn == "987-65-4321"
        assert person.state == "TX"

    def test_invalid_ssn(self, taxpayer: dict[str, Any]) -> None:
        """Bad SSNs fail validation."""
        with pytest.raises(ValidationError):
            PersonalInfo.model_validate({**taxpayer, "ssn": "12-34"})


class TestDerivedTotals:
    """Tests for computed properties."""

    def test_salt_cap(self) -> None:
        """State and local taxes are capped at $10,000."""
        itemized = ItemizedDeductions(
            state_income_tax=Decimal("8000"),
            real_estate_tax=Decimal("6000"),
            mortgage_interest=Decimal("12000"),
            other_deductions=[{"description": "Gambling losses", "amount": "500"}],
        )

        assert itemized.state_and_local_taxes == Decimal("10000")
        assert itemized.total == Decimal("22500")

    def test_misc_total_skips_blank_boxes(self) -> None:
        """Only filled boxes count."""
        doc = Income1099MISC(
            id="m1", payer_name="Client", rents=Decimal("1200"), other_income=Decimal("300")
        )

        assert doc.total_income == Decimal("1500")

    def test_adjustments_total(self) -> None:
        """Every adjustment line is summed."""
        adjustments = AdjustmentsToIncome(
            educator_expenses=Decimal("300"), hsa_deduction=Decimal("4150")
        )

        assert adjustments.total == Decimal("4450")

    def test_nonrefundable_credits_exclude_refundable(self) -> None:
        """EIC and premium tax credit are not nonrefundable."""
        credits = TaxCredits(
            child_tax_credit=Decimal("2000"),
            earned_income_credit=Decimal("600"),
            premium_tax_credit=Decimal("900"),
        )

        assert credits.total_nonrefundable == Decimal("2000")
        assert credits.total_refundable == Decimal("1500")


class TestForm1040:
    """Tests for Form1040 validation."""

    def test_defaults(self, make_form: Callable[..., Form1040]) -> None:
        """A minimal return defaults to the standard deduction."""
        form = make_form()

        assert form.filing_status is FilingStatus.SINGLE
        assert form.use_standard_deduction is True
        assert form.w2_income == []
        assert form.payments.federal_withholding == Decimal("0")

    @pytest.mark.parametrize("year", [2021, 2026])
    def test_unsupported_year_rejected(
        self, make_form: Callable[..., Form1040], year: int
    ) -> None:
        """Returns are limited to years with bracket tables."""
        with pytest.raises(ValidationError):
            make_form(tax_year=year)

    def test_negative_money_rejected(self, make_form: Callable[..., Form1040]) -> None:
        """Currency fields are non-negative at the boundary."""
        with pytest.raises(ValidationError):
            make_form(payments={"estimated_payments": "-5"})

    def test_capital_loss_allowed(self, make_form: Callable[..., Form1040]) -> None:
        """1099-B gain or loss may be negative."""
        form = make_form(
            capital_gains_1099_b=[
                {
                    "id": "b1",
                    "broker_name": "Broker",
                    "description": "XYZ",
                    "date_acquired": "2023-01-01",
                    "date_sold": "2024-01-02",
                    "proceeds": "100",
                    "cost_basis": "300",
                    "gain_or_loss": "-200",
                    "short_term_or_long_term": "long",
                }
            ]
        )

        assert form.capital_gains_1099_b[0].gain_or_loss == Decimal("-200")

    def test_refund_routing_number(self) -> None:
        """Routing numbers are nine digits."""
        with pytest.raises(ValidationError):
            RefundInstructions(routing_number="12345", account_number="00001234", account_type="checking")

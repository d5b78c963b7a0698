"""Tests for configuration models and enumerations."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from takehome.config.defaults import VAT_PRESETS, default_input, default_mortgage, default_sip
from takehome.config.schema import (
    Band,
    CalculationInput,
    MortgageInput,
    Period,
    Region,
    StudentLoanPlan,
)
from takehome.utils.exceptions import ConfigError


class TestRegion:
    def test_parse_aliases(self) -> None:
        assert Region.parse("SCT") is Region.SCOTLAND
        assert Region.parse("EWNI") is Region.REST_OF_UK
        assert Region.parse("rUK") is Region.REST_OF_UK
        assert Region.parse(Region.SCOTLAND) is Region.SCOTLAND

    def test_parse_unknown(self) -> None:
        with pytest.raises(ConfigError, match="mars"):
            Region.parse("mars")


class TestStudentLoanPlan:
    def test_parse_aliases(self) -> None:
        assert StudentLoanPlan.parse("pgl") is StudentLoanPlan.POSTGRADUATE
        assert StudentLoanPlan.parse("Plan 2") is StudentLoanPlan.PLAN2
        assert StudentLoanPlan.parse("none") is StudentLoanPlan.NONE

    def test_parse_unknown(self) -> None:
        with pytest.raises(ConfigError, match="plan3"):
            StudentLoanPlan.parse("plan3")


class TestPeriod:
    def test_divisors(self) -> None:
        assert Period.YEAR.divisor == 1
        assert Period.MONTH.divisor == 12
        assert Period.WEEK.divisor == 52
        assert Period.DAY.divisor == 260


class TestCalculationInput:
    def test_defaults(self) -> None:
        calc_input = default_input()
        assert calc_input.gross_salary == 52_000
        assert calc_input.tax_year == "2024-25"

    def test_calculator_defaults_valid(self) -> None:
        assert default_mortgage().deposit_amount == 30_000
        assert default_sip().years == 15
        assert VAT_PRESETS["standard"] == 20.0

    def test_region_aliases_accepted(self) -> None:
        assert CalculationInput(gross_salary=1, region="Scotland").region is Region.SCOTLAND
        assert CalculationInput(gross_salary=1, region="EWNI").region is Region.REST_OF_UK

    def test_plan_aliases_accepted(self) -> None:
        calc_input = CalculationInput(gross_salary=1, student_loan_plan="Plan 4")
        assert calc_input.student_loan_plan is StudentLoanPlan.PLAN4

    def test_postgraduate_plan_folds_onto_flag(self) -> None:
        calc_input = CalculationInput(gross_salary=1, student_loan_plan="pgl")
        assert calc_input.student_loan_plan is StudentLoanPlan.NONE
        assert calc_input.postgraduate_loan is True

    def test_postgraduate_plan_overrides_move(self) -> None:
        calc_input = CalculationInput(
            gross_salary=1, student_loan_plan="postgraduate", plan_threshold=20_000
        )
        assert calc_input.plan_threshold is None
        assert calc_input.postgraduate_threshold == 20_000

    def test_postgraduate_plan_conflicting_overrides(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput(
                gross_salary=1,
                student_loan_plan="postgraduate",
                plan_rate_pct=5,
                postgraduate_rate_pct=6,
            )

    def test_unknown_region_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput(gross_salary=1, region="mars")

    def test_negative_salary_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput(gross_salary=-1)

    def test_pension_over_100_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput(gross_salary=30_000, employee_pension_pct=101)

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput(gross_salary=float("nan"))

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput(gross_salary=1, bonus=5)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        calc_input = default_input()
        with pytest.raises(ValidationError):
            calc_input.gross_salary = 10  # type: ignore[misc]


class TestBand:
    def test_width_and_ends_at_gross_exclusive(self) -> None:
        with pytest.raises(ValidationError):
            Band(name="bad", rate=0.2, width=100, ends_at_gross=200)

    def test_unbounded(self) -> None:
        assert Band(name="top", rate=0.45).is_unbounded


class TestMortgageInput:
    def test_default_deposit_pct(self) -> None:
        assert MortgageInput(price=200_000, annual_rate_pct=5).deposit_amount == 20_000

    def test_deposit_and_pct_exclusive(self) -> None:
        with pytest.raises(ValidationError):
            MortgageInput(price=200_000, deposit=1, deposit_pct=5, annual_rate_pct=5)

    def test_deposit_above_price(self) -> None:
        with pytest.raises(ValidationError):
            MortgageInput(price=200_000, deposit=250_000, annual_rate_pct=5)

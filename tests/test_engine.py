"""Tests for the take-home pay engine."""

from __future__ import annotations

import numpy as np
import pytest

from takehome.config.schema import CalculationInput, Period, Region, StudentLoanPlan, TaxParameters
from takehome.core.engine import compute_annual, income_tax_model
from takehome.core.periods import to_period
from takehome.taxes.rest_of_uk import RestOfUKTaxModel
from takehome.taxes.scotland import ScottishTaxModel
from takehome.utils.exceptions import ConfigError, UnknownTaxYearError

FIELDS = [
    "gross",
    "income_tax",
    "national_insurance",
    "student_loan",
    "employee_pension",
    "employer_pension",
    "net",
]


@pytest.fixture
def scenario() -> CalculationInput:
    return CalculationInput(
        gross_salary=52_000,
        region=Region.REST_OF_UK,
        employee_pension_pct=5,
        student_loan_plan=StudentLoanPlan.PLAN2,
        postgraduate_loan=False,
    )


class TestEndToEnd:
    def test_rest_of_uk_plan2(self, scenario: CalculationInput, params: TaxParameters) -> None:
        result = compute_annual(scenario, params)
        annual = result.annual
        assert annual.employee_pension == pytest.approx(2_600.00)
        assert result.adjusted_net_income == pytest.approx(49_400.00)
        # (49,400 - 12,570) * 20%
        assert annual.income_tax == pytest.approx(7_366.00)
        # NI and student loan are charged on gross pay
        assert annual.national_insurance == pytest.approx(3_050.60)
        assert annual.student_loan == pytest.approx(2_223.45)
        assert annual.net == pytest.approx(36_759.95)

    def test_net_identity(self, scenario: CalculationInput, params: TaxParameters) -> None:
        a = compute_annual(scenario, params).annual
        assert a.net == pytest.approx(
            a.gross - a.income_tax - a.national_insurance - a.employee_pension - a.student_loan,
            abs=0.005,
        )

    def test_scotland(self, params: TaxParameters) -> None:
        calc_input = CalculationInput(
            gross_salary=52_000, region="scotland", employee_pension_pct=5
        )
        result = compute_annual(calc_input, params)
        assert result.annual.income_tax == pytest.approx(8_776.52)
        assert result.annual.student_loan == 0.0

    def test_employer_pension_not_deducted(self, params: TaxParameters) -> None:
        without = compute_annual(CalculationInput(gross_salary=40_000), params)
        with_employer = compute_annual(
            CalculationInput(gross_salary=40_000, employer_pension_pct=3), params
        )
        assert with_employer.annual.employer_pension == pytest.approx(1_200.00)
        assert with_employer.annual.net == without.annual.net

    def test_loads_table_from_input_year(self) -> None:
        calc_input = CalculationInput(
            gross_salary=52_000, student_loan_plan="plan2", tax_year="2025-26"
        )
        result = compute_annual(calc_input)
        assert result.tax_year == "2025-26"
        assert result.annual.student_loan == pytest.approx(2_117.70)

    def test_idempotent(self, scenario: CalculationInput, params: TaxParameters) -> None:
        assert compute_annual(scenario, params).annual == compute_annual(scenario, params).annual

    def test_band_detail(self, scenario: CalculationInput, params: TaxParameters) -> None:
        result = compute_annual(scenario, params)
        assert result.personal_allowance == 12_570
        assert result.taxable_income == pytest.approx(36_830.00)
        assert [s.name for s in result.income_tax_bands] == ["basic"]
        assert [s.name for s in result.national_insurance_bands] == ["main", "additional"]


class TestEdgeCases:
    def test_zero_salary(self, params: TaxParameters) -> None:
        a = compute_annual(CalculationInput(gross_salary=0), params).annual
        assert a.income_tax == a.national_insurance == a.student_loan == a.net == 0.0

    def test_postgraduate_loan_charged_once(self, params: TaxParameters) -> None:
        both = CalculationInput(
            gross_salary=31_000, student_loan_plan="postgraduate", postgraduate_loan=True
        )
        flag_only = CalculationInput(gross_salary=31_000, postgraduate_loan=True)
        # (31,000 - 21,000) * 6%
        assert compute_annual(both, params).annual.student_loan == pytest.approx(600.00)
        assert compute_annual(flag_only, params).annual.student_loan == pytest.approx(600.00)

    def test_below_every_threshold(self, params: TaxParameters) -> None:
        calc_input = CalculationInput(
            gross_salary=11_000, student_loan_plan="plan1", postgraduate_loan=True
        )
        a = compute_annual(calc_input, params).annual
        assert a.income_tax == a.national_insurance == a.student_loan == 0.0
        assert a.net == 11_000

    def test_full_pension(self, params: TaxParameters) -> None:
        a = compute_annual(
            CalculationInput(gross_salary=50_000, employee_pension_pct=100), params
        ).annual
        assert a.employee_pension == 50_000
        assert a.income_tax == 0.0
        # NI is still due on gross pay
        assert a.national_insurance == pytest.approx(2_994.40)

    def test_unknown_region_fails_fast(self, params: TaxParameters) -> None:
        bad = CalculationInput.model_construct(gross_salary=30_000.0, region="mars")
        with pytest.raises(ConfigError, match="mars"):
            compute_annual(bad, params)

    def test_unknown_tax_year(self) -> None:
        with pytest.raises(UnknownTaxYearError, match="1999-00"):
            compute_annual(CalculationInput(gross_salary=30_000, tax_year="1999-00"))


class TestPeriods:
    def test_period_values(self, scenario: CalculationInput, params: TaxParameters) -> None:
        result = compute_annual(scenario, params)
        assert result.for_period("year") == result.annual
        assert result.for_period(Period.WEEK).gross == pytest.approx(1_000.00)
        assert result.for_period("day").gross == pytest.approx(200.00)

    def test_to_period(self) -> None:
        assert to_period(52_000, "week") == 1_000
        assert to_period(52_000, Period.DAY) == 200

    @pytest.mark.parametrize("gross", [0, 18_500, 52_000, 113_000, 260_000])
    def test_monthly_round_trip(self, gross: float, params: TaxParameters) -> None:
        calc_input = CalculationInput(
            gross_salary=gross,
            employee_pension_pct=5,
            employer_pension_pct=3,
            student_loan_plan="plan1",
            postgraduate_loan=True,
        )
        result = compute_annual(calc_input, params)
        annual = result.annual.as_dict()
        monthly = result.for_period("month").as_dict()
        for name in FIELDS:
            assert annual[name] == pytest.approx(monthly[name] * 12, abs=0.01)

    def test_effective_rate(self, scenario: CalculationInput, params: TaxParameters) -> None:
        result = compute_annual(scenario, params)
        assert result.effective_rate == pytest.approx(1 - 36_759.95 / 52_000)
        assert compute_annual(CalculationInput(gross_salary=0), params).effective_rate == 0.0


class TestMonotonicity:
    @pytest.mark.parametrize("region", ["rest_of_uk", "scotland"])
    def test_net_pay_non_decreasing(self, region: str, params: TaxParameters) -> None:
        nets = [
            compute_annual(
                CalculationInput(
                    gross_salary=float(g),
                    region=region,
                    employee_pension_pct=5,
                    student_loan_plan="plan2",
                ),
                params,
            ).annual.net
            for g in range(0, 200_001, 500)
        ]
        assert np.all(np.diff(nets) >= 0)


class TestIncomeTaxModelFactory:
    def test_region_dispatch(self, params: TaxParameters) -> None:
        assert isinstance(income_tax_model(Region.REST_OF_UK, params), RestOfUKTaxModel)
        assert isinstance(income_tax_model("SCT", params), ScottishTaxModel)

    def test_unknown_region(self, params: TaxParameters) -> None:
        with pytest.raises(ConfigError, match="atlantis"):
            income_tax_model("atlantis", params)

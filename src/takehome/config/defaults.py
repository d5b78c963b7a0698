"""Default configuration values for takehome."""

from __future__ import annotations

from takehome.config.schema import (
    DEFAULT_TAX_YEAR,
    CalculationInput,
    MortgageInput,
    Region,
    SIPInput,
    StudentLoanPlan,
)

# UK VAT rates by name (percent)
VAT_PRESETS: dict[str, float] = {
    "standard": 20.0,
    "reduced": 5.0,
    "zero": 0.0,
}


def default_input() -> CalculationInput:
    """Salary calculation with the values the calculator opens on."""
    return CalculationInput(
        gross_salary=52_000,
        region=Region.REST_OF_UK,
        employee_pension_pct=5.0,
        employer_pension_pct=3.0,
        student_loan_plan=StudentLoanPlan.NONE,
        tax_year=DEFAULT_TAX_YEAR,
    )


def default_mortgage() -> MortgageInput:
    """A typical repayment mortgage."""
    return MortgageInput(
        price=300_000,
        deposit_pct=10.0,
        annual_rate_pct=4.5,
        term_years=25,
    )


def default_sip() -> SIPInput:
    """A typical monthly investment plan."""
    return SIPInput(
        monthly_contribution=300,
        years=15,
        annual_return_pct=10.0,
        inflation_pct=4.0,
    )

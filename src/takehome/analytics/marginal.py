"""Marginal and effective deduction rates, and salary sweeps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from takehome.config.schema import CalculationInput, StudentLoanPlan, TaxParameters
from takehome.core.engine import compute_annual, income_tax_model
from takehome.core.rounding import round_money_vectorized
from takehome.taxes.national_insurance import employee_national_insurance_vectorized
from takehome.taxes.parameters import load_tax_parameters
from takehome.taxes.student_loan import resolve_plan_terms, student_loan_repayment_vectorized


@dataclass(frozen=True)
class MarginalRates:
    """Share of the next pound of gross pay taken by each deduction."""

    income_tax: float
    national_insurance: float
    student_loan: float
    pension: float
    total: float
    effective: float


@dataclass(frozen=True)
class NetPayCurve:
    """Deductions and take-home pay across a grid of gross salaries."""

    gross: NDArray[np.floating[Any]]
    income_tax: NDArray[np.floating[Any]]
    national_insurance: NDArray[np.floating[Any]]
    student_loan: NDArray[np.floating[Any]]
    employee_pension: NDArray[np.floating[Any]]
    net: NDArray[np.floating[Any]]


def marginal_rate_breakdown(
    calc_input: CalculationInput,
    parameters: TaxParameters | None = None,
    delta: float = 1.0,
) -> MarginalRates:
    """Marginal rates by finite difference over ``delta`` pounds of gross pay.

    Inside the allowance taper this picks up the 60% effective income tax
    rate that the headline bands do not show.
    """
    if delta <= 0:
        raise ValueError("delta must be positive")
    if parameters is None:
        parameters = load_tax_parameters(calc_input.tax_year)

    base = compute_annual(calc_input, parameters).annual
    bumped_input = calc_input.model_copy(update={"gross_salary": calc_input.gross_salary + delta})
    bumped = compute_annual(bumped_input, parameters).annual

    def rate(before: float, after: float) -> float:
        return (after - before) / delta

    income_tax = rate(base.income_tax, bumped.income_tax)
    ni = rate(base.national_insurance, bumped.national_insurance)
    student_loan = rate(base.student_loan, bumped.student_loan)
    pension = rate(base.employee_pension, bumped.employee_pension)
    return MarginalRates(
        income_tax=income_tax,
        national_insurance=ni,
        student_loan=student_loan,
        pension=pension,
        total=income_tax + ni + student_loan + pension,
        effective=(base.total_deductions / base.gross) if base.gross > 0 else 0.0,
    )


def net_pay_curve(
    salaries: NDArray[np.floating[Any]] | list[float],
    calc_input: CalculationInput,
    parameters: TaxParameters | None = None,
) -> NetPayCurve:
    """Vectorized take-home pay for each salary, other settings from ``calc_input``.

    Each figure matches what ``compute_annual`` gives for that salary; the
    whole grid is computed at once.
    """
    if parameters is None:
        parameters = load_tax_parameters(calc_input.tax_year)

    gross = np.asarray(salaries, dtype=float)
    pension = round_money_vectorized(gross * calc_input.employee_pension_pct / 100)
    adjusted_net = np.maximum(gross - pension, 0.0)

    income_tax = income_tax_model(calc_input.region, parameters).income_tax_vectorized(
        adjusted_net
    )
    ni = employee_national_insurance_vectorized(gross, parameters)

    terms = []
    plan_terms = resolve_plan_terms(
        calc_input.student_loan_plan,
        parameters,
        calc_input.plan_threshold,
        calc_input.plan_rate_pct,
    )
    if plan_terms is not None:
        terms.append(plan_terms)
    if calc_input.postgraduate_loan:
        pg_terms = resolve_plan_terms(
            StudentLoanPlan.POSTGRADUATE,
            parameters,
            calc_input.postgraduate_threshold,
            calc_input.postgraduate_rate_pct,
        )
        if pg_terms is not None:
            terms.append(pg_terms)
    student_loan = student_loan_repayment_vectorized(gross, terms)

    net = round_money_vectorized(gross - income_tax - ni - pension - student_loan)
    return NetPayCurve(
        gross=gross,
        income_tax=income_tax,
        national_insurance=ni,
        student_loan=student_loan,
        employee_pension=pension,
        net=net,
    )

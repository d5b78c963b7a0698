"""Student loan repayments (undergraduate plans and postgraduate loan)."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from takehome.config.schema import LoanPlanTerms, StudentLoanPlan, TaxParameters
from takehome.core.rounding import round_money, round_money_vectorized
from takehome.utils.exceptions import ConfigError


def resolve_plan_terms(
    plan: StudentLoanPlan | str,
    parameters: TaxParameters,
    threshold: float | None = None,
    rate_pct: float | None = None,
) -> LoanPlanTerms | None:
    """Repayment terms for a plan with optional overrides; ``None`` for no plan.

    Raises:
        ConfigError: If the plan key is unknown or missing from the year's table.
    """
    plan = StudentLoanPlan.parse(plan)
    if plan is StudentLoanPlan.NONE:
        return None
    terms = parameters.plan_terms(plan)
    if threshold is None and rate_pct is None:
        return terms
    return terms.model_copy(
        update={
            "threshold": terms.threshold if threshold is None else threshold,
            "rate_pct": terms.rate_pct if rate_pct is None else rate_pct,
        }
    )


def _excess_repayment(annual_gross: float, terms: LoanPlanTerms | None) -> float:
    if terms is None:
        return 0.0
    return max(0.0, annual_gross - terms.threshold) * terms.rate_pct / 100


def student_loan_repayment(
    annual_gross: float,
    plan: StudentLoanPlan | str,
    parameters: TaxParameters,
    *,
    postgraduate: bool = False,
    plan_threshold: float | None = None,
    plan_rate_pct: float | None = None,
    postgraduate_threshold: float | None = None,
    postgraduate_rate_pct: float | None = None,
) -> float:
    """Annual student loan repayment.

    The undergraduate plan and the postgraduate loan are independent; when
    both apply their repayments are added.

    Args:
        annual_gross: Annual earnings.
        plan: Undergraduate plan, or ``"none"``.
        parameters: Year table supplying default thresholds and rates.
        postgraduate: Whether a postgraduate loan is also being repaid.
        plan_threshold: Override for the plan threshold.
        plan_rate_pct: Override for the plan rate (percent).
        postgraduate_threshold: Override for the postgraduate threshold.
        postgraduate_rate_pct: Override for the postgraduate rate (percent).

    Returns:
        Repayment rounded to pennies, never negative.

    Raises:
        ConfigError: If the plan is unknown or absent from the year's table,
            or names the postgraduate loan while ``postgraduate`` is also set.
    """
    if postgraduate and StudentLoanPlan.parse(plan) is StudentLoanPlan.POSTGRADUATE:
        raise ConfigError("The postgraduate loan is selected both as plan and as postgraduate")
    total = _excess_repayment(
        annual_gross,
        resolve_plan_terms(plan, parameters, plan_threshold, plan_rate_pct),
    )
    if postgraduate:
        total += _excess_repayment(
            annual_gross,
            resolve_plan_terms(
                StudentLoanPlan.POSTGRADUATE,
                parameters,
                postgraduate_threshold,
                postgraduate_rate_pct,
            ),
        )
    return round_money(max(0.0, total))


def student_loan_repayment_vectorized(
    annual_gross: NDArray[np.floating[Any]],
    plan_terms: list[LoanPlanTerms],
) -> NDArray[np.floating[Any]]:
    """Vectorized repayment summed over already-resolved plan terms."""
    gross = np.asarray(annual_gross, dtype=float)
    total = np.zeros_like(gross)
    for terms in plan_terms:
        total += np.maximum(gross - terms.threshold, 0.0) * terms.rate_pct / 100
    return round_money_vectorized(np.maximum(total, 0.0))

"""Personal allowance with the high-income taper."""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from takehome.config.schema import PersonalAllowanceRules, TaxParameters


def personal_allowance(
    adjusted_net_income: float,
    parameters: TaxParameters | PersonalAllowanceRules,
) -> float:
    """Effective personal allowance for an adjusted net income.

    The allowance falls by £1 for every £2 of income above the taper start,
    the reduction rounded down to whole pounds, and is zero from the
    taper-exhausted threshold.

    Args:
        adjusted_net_income: Gross pay less pre-tax pension contributions.
        parameters: Year table or just its allowance rules.

    Returns:
        Allowance between 0 and the full amount.
    """
    rules = (
        parameters.personal_allowance if isinstance(parameters, TaxParameters) else parameters
    )
    if adjusted_net_income <= rules.taper_start:
        return float(rules.amount)
    if adjusted_net_income >= rules.taper_exhausted:
        return 0.0
    reduction = math.floor((adjusted_net_income - rules.taper_start) / 2)
    return float(max(0.0, rules.amount - reduction))


def personal_allowance_vectorized(
    adjusted_net_income: NDArray[np.floating[Any]],
    parameters: TaxParameters,
) -> NDArray[np.floating[Any]]:
    """Vectorized personal allowance across an array of incomes."""
    rules = parameters.personal_allowance
    income = np.asarray(adjusted_net_income, dtype=float)
    reduction = np.floor(np.maximum(income - rules.taper_start, 0.0) / 2)
    allowance = np.maximum(rules.amount - reduction, 0.0)
    result: NDArray[np.floating[Any]] = np.where(
        income >= rules.taper_exhausted, 0.0, allowance
    )
    return result

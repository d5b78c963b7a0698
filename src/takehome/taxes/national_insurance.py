"""Employee Class 1 National Insurance."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from takehome.config.schema import NationalInsuranceRules, TaxParameters
from takehome.core.rounding import round_money, round_money_vectorized
from takehome.taxes.bands import BandSlice


def _rules(parameters: TaxParameters | NationalInsuranceRules) -> NationalInsuranceRules:
    if isinstance(parameters, TaxParameters):
        return parameters.national_insurance
    return parameters


def national_insurance_slices(
    annual_gross: float,
    parameters: TaxParameters | NationalInsuranceRules,
) -> tuple[BandSlice, BandSlice]:
    """Earnings and contributions in the main and additional bands (unrounded)."""
    ni = _rules(parameters)
    main = max(0.0, min(annual_gross, ni.upper_earnings_limit) - ni.primary_threshold)
    additional = max(0.0, annual_gross - ni.upper_earnings_limit)
    return (
        BandSlice(name="main", rate=ni.main_rate, amount=main, tax=main * ni.main_rate),
        BandSlice(
            name="additional",
            rate=ni.additional_rate,
            amount=additional,
            tax=additional * ni.additional_rate,
        ),
    )


def employee_national_insurance(
    annual_gross: float,
    parameters: TaxParameters | NationalInsuranceRules,
) -> float:
    """Annual employee NI: main rate between the primary threshold and the
    upper earnings limit, additional rate above it.

    Args:
        annual_gross: Annual earnings.
        parameters: Year table or just its NI rules.

    Returns:
        Contribution rounded to pennies; zero at or below the primary threshold.
    """
    main, additional = national_insurance_slices(annual_gross, parameters)
    return round_money(main.tax + additional.tax)


def employee_national_insurance_vectorized(
    annual_gross: NDArray[np.floating[Any]],
    parameters: TaxParameters | NationalInsuranceRules,
) -> NDArray[np.floating[Any]]:
    """Vectorized employee NI across an array of earnings."""
    ni = _rules(parameters)
    gross = np.asarray(annual_gross, dtype=float)
    main = np.maximum(np.minimum(gross, ni.upper_earnings_limit) - ni.primary_threshold, 0.0)
    additional = np.maximum(gross - ni.upper_earnings_limit, 0.0)
    return round_money_vectorized(main * ni.main_rate + additional * ni.additional_rate)

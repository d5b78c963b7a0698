"""Take-home pay engine: pension, income tax, NI and student loan."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from takehome import __version__
from takehome.config.schema import CalculationInput, Period, Region, TaxParameters
from takehome.core.periods import PayBreakdown, all_periods
from takehome.core.rounding import round_money
from takehome.taxes.bands import BandSlice
from takehome.taxes.base import BandedIncomeTaxModel
from takehome.taxes.national_insurance import (
    employee_national_insurance,
    national_insurance_slices,
)
from takehome.taxes.parameters import load_tax_parameters
from takehome.taxes.rest_of_uk import RestOfUKTaxModel
from takehome.taxes.scotland import ScottishTaxModel
from takehome.taxes.student_loan import student_loan_repayment
from takehome.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

_TAX_MODELS: dict[Region, type[BandedIncomeTaxModel]] = {
    Region.REST_OF_UK: RestOfUKTaxModel,
    Region.SCOTLAND: ScottishTaxModel,
}


@dataclass(frozen=True)
class CalculationResult:
    """Output of a take-home pay calculation."""

    calc_input: CalculationInput
    tax_year: str
    annual: PayBreakdown
    periods: dict[Period, PayBreakdown]
    adjusted_net_income: float
    personal_allowance: float
    taxable_income: float
    income_tax_bands: tuple[BandSlice, ...] = field(default=(), repr=False)
    national_insurance_bands: tuple[BandSlice, ...] = field(default=(), repr=False)
    engine_version: str = ""

    def for_period(self, period: Period | str) -> PayBreakdown:
        """Breakdown for a display period (``year``, ``month``, ``week``, ``day``)."""
        return self.periods[Period(period)]

    @property
    def effective_rate(self) -> float:
        """Share of gross pay that does not reach take-home, 0 for zero gross."""
        if self.annual.gross <= 0:
            return 0.0
        return 1.0 - self.annual.net / self.annual.gross


def income_tax_model(region: Region | str, parameters: TaxParameters) -> BandedIncomeTaxModel:
    """Build the income tax model for a region.

    Raises:
        ConfigError: If the region is unknown.
    """
    region = Region.parse(region)
    try:
        model_cls = _TAX_MODELS[region]
    except KeyError:
        raise ConfigError(f"No income tax model for region {region.value!r}") from None
    return model_cls(parameters)


def compute_annual(
    calc_input: CalculationInput,
    parameters: TaxParameters | None = None,
) -> CalculationResult:
    """Compute annual and per-period take-home pay.

    Employee pension is deducted before income tax; National Insurance and
    student loan are charged on gross pay.

    Args:
        calc_input: Salary, region, pension and loan settings.
        parameters: Tax table to use. Loaded from ``calc_input.tax_year`` if omitted.

    Returns:
        CalculationResult with annual totals, per-period breakdowns and band detail.

    Raises:
        ConfigError: If the region, plan or tax year is not configured.
    """
    if parameters is None:
        parameters = load_tax_parameters(calc_input.tax_year)

    gross = calc_input.gross_salary
    employee_pension = round_money(gross * calc_input.employee_pension_pct / 100)
    employer_pension = round_money(gross * calc_input.employer_pension_pct / 100)
    adjusted_net = max(0.0, gross - employee_pension)

    tax = income_tax_model(calc_input.region, parameters).breakdown(adjusted_net)
    ni = employee_national_insurance(gross, parameters)
    student_loan = student_loan_repayment(
        gross,
        calc_input.student_loan_plan,
        parameters,
        postgraduate=calc_input.postgraduate_loan,
        plan_threshold=calc_input.plan_threshold,
        plan_rate_pct=calc_input.plan_rate_pct,
        postgraduate_threshold=calc_input.postgraduate_threshold,
        postgraduate_rate_pct=calc_input.postgraduate_rate_pct,
    )
    net = round_money(gross - tax.total_tax - ni - employee_pension - student_loan)

    annual = PayBreakdown(
        gross=gross,
        income_tax=tax.total_tax,
        national_insurance=ni,
        student_loan=student_loan,
        employee_pension=employee_pension,
        employer_pension=employer_pension,
        net=net,
    )
    logger.debug(
        "compute_annual %s %s gross=%.2f tax=%.2f ni=%.2f sl=%.2f net=%.2f",
        parameters.tax_year,
        calc_input.region.value,
        gross,
        tax.total_tax,
        ni,
        student_loan,
        net,
    )

    return CalculationResult(
        calc_input=calc_input,
        tax_year=parameters.tax_year,
        annual=annual,
        periods=all_periods(annual),
        adjusted_net_income=adjusted_net,
        personal_allowance=tax.personal_allowance,
        taxable_income=tax.taxable_income,
        income_tax_bands=tax.slices,
        national_insurance_bands=national_insurance_slices(gross, parameters),
        engine_version=__version__,
    )

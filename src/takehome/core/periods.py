"""Annual to per-period pay conversion."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from takehome.config.schema import Period


@dataclass(frozen=True, slots=True)
class PayBreakdown:
    """Pay and deductions over one period.

    Attributes:
        gross: Gross pay.
        income_tax: Income tax.
        national_insurance: Employee National Insurance.
        student_loan: Student loan repayment (undergraduate plus postgraduate).
        employee_pension: Employee pension contribution.
        employer_pension: Employer pension contribution (not deducted).
        net: Take-home pay.
    """

    gross: float
    income_tax: float
    national_insurance: float
    student_loan: float
    employee_pension: float
    employer_pension: float
    net: float

    @property
    def total_deductions(self) -> float:
        return self.income_tax + self.national_insurance + self.student_loan + self.employee_pension

    def scaled(self, divisor: float) -> PayBreakdown:
        """Every figure divided by ``divisor``."""
        return PayBreakdown(**{k: v / divisor for k, v in asdict(self).items()})

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def to_period(annual_value: float, period: Period | str) -> float:
    """Convert an annual amount to the given display period."""
    return annual_value / Period(period).divisor


def per_period(annual: PayBreakdown, period: Period | str) -> PayBreakdown:
    """Annual breakdown converted to a display period.

    Per-period values are left unrounded so that multiplying back recovers the
    annual figures.
    """
    return annual.scaled(Period(period).divisor)


def all_periods(annual: PayBreakdown) -> dict[Period, PayBreakdown]:
    """Breakdowns for every supported period."""
    return {period: per_period(annual, period) for period in Period}

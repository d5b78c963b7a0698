"""Systematic investment plan (SIP) projection."""

from __future__ import annotations

from dataclasses import dataclass

from takehome.config.schema import SIPInput
from takehome.core.rounding import round_money


@dataclass(frozen=True)
class SIPYear:
    """Position at the end of one year."""

    year: int
    invested_in_year: float
    invested_total: float
    end_balance: float
    gains: float


@dataclass(frozen=True)
class SIPProjection:
    """Outcome of a SIP projection."""

    future_value: float
    total_invested: float
    gains: float
    real_future_value: float
    years: tuple[SIPYear, ...]


def project_sip(sip: SIPInput) -> SIPProjection:
    """Project a monthly investment plan.

    The lump sum is invested at the start and compounds for the full term.
    Each month the balance grows at ``annual_return / 12`` and the
    contribution is added at month end. After every full year the monthly
    contribution is raised by ``step_up_pct``. The real future value
    discounts by annual inflation over the term.
    """
    monthly_rate = sip.annual_return_pct / 100 / 12
    balance = sip.lump_sum
    invested = sip.lump_sum
    contribution = sip.monthly_contribution
    rows: list[SIPYear] = []

    for year in range(1, sip.years + 1):
        invested_in_year = 0.0
        for _ in range(12):
            balance = balance * (1 + monthly_rate) + contribution
            invested_in_year += contribution
        invested += invested_in_year
        rows.append(
            SIPYear(
                year=year,
                invested_in_year=round_money(invested_in_year),
                invested_total=round_money(invested),
                end_balance=round_money(balance),
                gains=round_money(balance - invested),
            )
        )
        contribution *= 1 + sip.step_up_pct / 100

    future_value = round_money(balance)
    total_invested = round_money(invested)
    inflation = sip.inflation_pct / 100
    real = future_value / (1 + inflation) ** sip.years if inflation > 0 else future_value
    return SIPProjection(
        future_value=future_value,
        total_invested=total_invested,
        gains=round_money(future_value - total_invested),
        real_future_value=round_money(real),
        years=tuple(rows),
    )

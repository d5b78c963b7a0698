"""EMI loan amortization and mortgage summary."""

from __future__ import annotations

from dataclasses import dataclass

from takehome.config.schema import LoanInput, MortgageInput, TaxParameters
from takehome.core.rounding import round_money
from takehome.taxes.parameters import load_tax_parameters
from takehome.taxes.stamp_duty import stamp_duty


@dataclass(frozen=True)
class AmortizationRow:
    """One monthly instalment."""

    month: int
    payment: float
    interest: float
    principal: float
    balance: float


@dataclass(frozen=True)
class LoanSummary:
    """Totals for a fixed-rate amortizing loan."""

    monthly_payment: float
    total_interest: float
    total_repaid: float
    schedule: tuple[AmortizationRow, ...]


@dataclass(frozen=True)
class MortgageSummary:
    """Purchase costs for a mortgage-financed home."""

    price: float
    deposit: float
    loan: float
    loan_to_value_pct: float
    monthly_payment: float
    total_interest: float
    total_repaid: float
    stamp_duty: float
    full_cost: float
    schedule: tuple[AmortizationRow, ...]


def emi_payment(principal: float, annual_rate_pct: float, months: int) -> float:
    """Equated monthly instalment for a fixed-rate loan (unrounded).

    ``P * r * (1 + r)^n / ((1 + r)^n - 1)`` with ``r`` the monthly rate;
    a zero rate repays ``P / n`` each month.
    """
    if months < 1:
        raise ValueError("months must be at least 1")
    r = annual_rate_pct / 100 / 12
    if r == 0:
        return principal / months
    growth = (1 + r) ** months
    return principal * r * growth / (growth - 1)


def amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    months: int,
) -> list[AmortizationRow]:
    """Month-by-month schedule with interest, principal and closing balance.

    Figures are rounded to pennies each month; the last instalment absorbs
    the accumulated rounding so the balance closes at exactly zero.
    """
    payment = round_money(emi_payment(principal, annual_rate_pct, months))
    r = annual_rate_pct / 100 / 12
    balance = round_money(principal)
    rows: list[AmortizationRow] = []
    for month in range(1, months + 1):
        interest = round_money(balance * r)
        if month == months:
            repaid = balance
        else:
            repaid = min(balance, round_money(payment - interest))
        balance = round_money(balance - repaid)
        rows.append(
            AmortizationRow(
                month=month,
                payment=round_money(interest + repaid),
                interest=interest,
                principal=round_money(repaid),
                balance=balance,
            )
        )
    return rows


def loan_summary(loan: LoanInput) -> LoanSummary:
    """Monthly payment, interest and schedule for a loan."""
    schedule = amortization_schedule(loan.principal, loan.annual_rate_pct, loan.term_months)
    total_interest = round_money(sum(row.interest for row in schedule))
    return LoanSummary(
        monthly_payment=round_money(
            emi_payment(loan.principal, loan.annual_rate_pct, loan.term_months)
        ),
        total_interest=total_interest,
        total_repaid=round_money(loan.principal + total_interest),
        schedule=tuple(schedule),
    )


def mortgage_summary(
    mortgage: MortgageInput,
    parameters: TaxParameters | None = None,
) -> MortgageSummary:
    """Deposit, loan-to-value, repayments and stamp duty for a purchase.

    Args:
        mortgage: Price, deposit, rate and term.
        parameters: Tax table for SDLT; loaded from ``mortgage.tax_year`` if omitted.

    Returns:
        MortgageSummary; ``full_cost`` is price plus stamp duty plus total interest.
    """
    if parameters is None:
        parameters = load_tax_parameters(mortgage.tax_year)

    deposit = round_money(mortgage.deposit_amount)
    loan_amount = round_money(mortgage.price - deposit)
    summary = loan_summary(
        LoanInput(
            principal=loan_amount,
            annual_rate_pct=mortgage.annual_rate_pct,
            term_months=mortgage.term_years * 12,
        )
    )
    sdlt = stamp_duty(mortgage.price, parameters, mortgage.first_time_buyer).total_tax
    return MortgageSummary(
        price=mortgage.price,
        deposit=deposit,
        loan=loan_amount,
        loan_to_value_pct=loan_amount / mortgage.price * 100,
        monthly_payment=summary.monthly_payment,
        total_interest=summary.total_interest,
        total_repaid=summary.total_repaid,
        stamp_duty=sdlt,
        full_cost=round_money(mortgage.price + sdlt + summary.total_interest),
        schedule=summary.schedule,
    )

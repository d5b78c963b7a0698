"""CLI entry point for takehome."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click
import numpy as np
from pydantic import ValidationError

from takehome.analytics.marginal import marginal_rate_breakdown, net_pay_curve
from takehome.calculators.age import age_breakdown, today_in
from takehome.calculators.loans import loan_summary, mortgage_summary
from takehome.calculators.sip import project_sip
from takehome.calculators.vat import vat_breakdown
from takehome.config.defaults import VAT_PRESETS, default_input
from takehome.config.schema import (
    AgeInput,
    CalculationInput,
    LoanInput,
    MortgageInput,
    Period,
    Region,
    SIPInput,
    StudentLoanPlan,
    VATInput,
)
from takehome.core.engine import compute_annual
from takehome.io.serialize import (
    dump_breakdown_csv,
    dump_curve_csv,
    dump_result,
    dump_schedule_csv,
    load_input,
)
from takehome.taxes.parameters import available_tax_years
from takehome.utils.exceptions import TakehomeError

F = TypeVar("F", bound=Callable[..., Any])


def money(value: float) -> str:
    """Format as £X,XXX.XX."""
    return f"£{value:,.2f}"


def _long_date(day: date) -> str:
    return f"{day.day} {day:%B %Y}"


def _report_errors(func: F) -> F:
    """Turn configuration and validation errors into clean CLI failures."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ValidationError as exc:
            raise click.UsageError(str(exc)) from exc
        except TakehomeError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper  # type: ignore[return-value]


def _salary_options(func: F) -> F:
    """Options shared by ``salary`` and ``sweep``."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, path_type=Path),
            default=None,
            help="Path to JSON input file. Uses defaults if not provided.",
        ),
        click.option(
            "--region",
            type=click.Choice([r.value for r in Region]),
            default=None,
            help="Income tax region.",
        ),
        click.option("--pension", type=float, default=None, help="Employee pension %."),
        click.option("--employer-pension", type=float, default=None, help="Employer pension %."),
        click.option(
            "--plan",
            type=click.Choice(
                [p.value for p in StudentLoanPlan if p is not StudentLoanPlan.POSTGRADUATE]
            ),
            default=None,
            help="Undergraduate student loan plan.",
        ),
        click.option("--postgraduate", is_flag=True, help="Also repay a postgraduate loan."),
        click.option("--tax-year", default=None, help="Tax year table, e.g. 2024-25."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_input(
    config_path: Path | None,
    gross: float | None,
    region: str | None,
    pension: float | None,
    employer_pension: float | None,
    plan: str | None,
    postgraduate: bool,
    tax_year: str | None,
) -> CalculationInput:
    base = load_input(config_path.read_text()) if config_path is not None else default_input()

    # CLI overrides
    overrides: dict[str, Any] = {
        "gross_salary": gross,
        "region": region,
        "employee_pension_pct": pension,
        "employer_pension_pct": employer_pension,
        "student_loan_plan": plan,
        "postgraduate_loan": postgraduate or None,
        "tax_year": tax_year,
    }
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CalculationInput.model_validate(data)


@click.group()
@click.version_option(package_name="takehome")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """UK take-home pay and personal finance calculators."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("gross", type=float, required=False)
@_salary_options
@click.option(
    "--period",
    type=click.Choice([p.value for p in Period]),
    default=Period.MONTH.value,
    show_default=True,
    help="Display period.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write results JSON.",
)
@click.option("--csv", "as_csv", is_flag=True, help="Print the per-period breakdown as CSV.")
@_report_errors
def salary(
    gross: float | None,
    config_path: Path | None,
    region: str | None,
    pension: float | None,
    employer_pension: float | None,
    plan: str | None,
    postgraduate: bool,
    tax_year: str | None,
    period: str,
    output_path: Path | None,
    as_csv: bool,
) -> None:
    """Take-home pay for an annual GROSS salary."""
    calc_input = _build_input(
        config_path, gross, region, pension, employer_pension, plan, postgraduate, tax_year
    )
    result = compute_annual(calc_input)

    if as_csv:
        click.echo(dump_breakdown_csv(result), nl=False)
    else:
        per = result.for_period(period)
        annual = result.annual
        click.echo(
            f"Tax year {result.tax_year}, {calc_input.region.value}, "
            f"plan {calc_input.student_loan_plan.value}"
        )
        click.echo(f"{'':<20}{'Per ' + period:>16}{'Per year':>16}")
        rows = [
            ("Gross pay", per.gross, annual.gross),
            ("Income tax", -per.income_tax, -annual.income_tax),
            ("NI (employee)", -per.national_insurance, -annual.national_insurance),
            ("Student loan", -per.student_loan, -annual.student_loan),
            ("Pension (employee)", -per.employee_pension, -annual.employee_pension),
            ("Employer pension", per.employer_pension, annual.employer_pension),
            ("Take-home", per.net, annual.net),
        ]
        for label, per_value, annual_value in rows:
            click.echo(f"{label:<20}{money(per_value):>16}{money(annual_value):>16}")
        rates = marginal_rate_breakdown(calc_input)
        click.echo(f"\nEffective deduction rate: {result.effective_rate:.1%}")
        click.echo(f"Marginal deduction rate: {rates.total:.1%}")

    if output_path is not None:
        output_path.write_text(dump_result(result))
        click.echo(f"\nResults written to {output_path}")


@cli.command()
def years() -> None:
    """List tax years with a bundled parameter table."""
    for year in available_tax_years():
        click.echo(year)


@cli.command()
@click.option("--start", type=float, default=10_000, show_default=True)
@click.option("--stop", type=float, default=150_000, show_default=True)
@click.option("--step", type=float, default=5_000, show_default=True)
@_salary_options
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write CSV. Prints to stdout if not provided.",
)
@_report_errors
def sweep(
    start: float,
    stop: float,
    step: float,
    config_path: Path | None,
    region: str | None,
    pension: float | None,
    employer_pension: float | None,
    plan: str | None,
    postgraduate: bool,
    tax_year: str | None,
    output_path: Path | None,
) -> None:
    """Take-home pay across a range of gross salaries, as CSV."""
    if step <= 0 or stop < start or start < 0:
        raise click.UsageError("need 0 <= start <= stop and step > 0")
    calc_input = _build_input(
        config_path, None, region, pension, employer_pension, plan, postgraduate, tax_year
    )
    salaries = np.arange(start, stop + step / 2, step)
    csv_text = dump_curve_csv(net_pay_curve(salaries, calc_input))
    if output_path is not None:
        output_path.write_text(csv_text)
        click.echo(f"{len(salaries)} rows written to {output_path}")
    else:
        click.echo(csv_text, nl=False)


@cli.command()
@click.option("--principal", type=float, required=True, help="Loan amount.")
@click.option("--rate", type=float, required=True, help="Annual interest rate %.")
@click.option("--months", type=int, required=True, help="Term in months.")
@click.option(
    "--schedule",
    "schedule_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write the amortization schedule CSV.",
)
@_report_errors
def emi(principal: float, rate: float, months: int, schedule_path: Path | None) -> None:
    """Equated monthly instalment for a fixed-rate loan."""
    summary = loan_summary(LoanInput(principal=principal, annual_rate_pct=rate, term_months=months))
    click.echo(f"Monthly payment: {money(summary.monthly_payment)}")
    click.echo(f"Total interest:  {money(summary.total_interest)}")
    click.echo(f"Total repaid:    {money(summary.total_repaid)}")
    if schedule_path is not None:
        schedule_path.write_text(dump_schedule_csv(summary.schedule))
        click.echo(f"\nSchedule written to {schedule_path}")


@cli.command()
@click.option("--price", type=float, required=True, help="Purchase price.")
@click.option("--deposit", type=float, default=None, help="Deposit amount.")
@click.option("--deposit-pct", type=float, default=None, help="Deposit % (default 10).")
@click.option("--rate", type=float, required=True, help="Annual interest rate %.")
@click.option("--years", "term_years", type=int, default=25, show_default=True)
@click.option("--first-time-buyer", is_flag=True, help="Apply first-time buyer SDLT relief.")
@click.option("--tax-year", default=None, help="Tax year table for SDLT.")
@_report_errors
def mortgage(
    price: float,
    deposit: float | None,
    deposit_pct: float | None,
    rate: float,
    term_years: int,
    first_time_buyer: bool,
    tax_year: str | None,
) -> None:
    """Deposit, repayments and stamp duty for a home purchase."""
    data: dict[str, Any] = {
        "price": price,
        "deposit": deposit,
        "deposit_pct": deposit_pct,
        "annual_rate_pct": rate,
        "term_years": term_years,
        "first_time_buyer": first_time_buyer,
    }
    if tax_year is not None:
        data["tax_year"] = tax_year
    summary = mortgage_summary(MortgageInput.model_validate(data))
    click.echo(f"Deposit:         {money(summary.deposit)}")
    click.echo(f"Mortgage:        {money(summary.loan)}")
    click.echo(f"LTV:             {summary.loan_to_value_pct:.1f}%")
    click.echo(f"Monthly payment: {money(summary.monthly_payment)}")
    click.echo(f"Total interest:  {money(summary.total_interest)}")
    click.echo(f"Stamp duty:      {money(summary.stamp_duty)}")
    click.echo(f"Total repaid:    {money(summary.total_repaid)}")
    click.echo(f"Full cost:       {money(summary.full_cost)}")


@cli.command()
@click.option("--monthly", type=float, required=True, help="Monthly contribution.")
@click.option("--years", "n_years", type=int, required=True, help="Investment term in years.")
@click.option("--rate", type=float, required=True, help="Expected annual return %.")
@click.option("--inflation", type=float, default=0.0, show_default=True, help="Annual inflation %.")
@click.option("--lump-sum", type=float, default=0.0, show_default=True)
@click.option("--step-up", type=float, default=0.0, show_default=True, help="Yearly step-up %.")
@_report_errors
def sip(
    monthly: float,
    n_years: int,
    rate: float,
    inflation: float,
    lump_sum: float,
    step_up: float,
) -> None:
    """Project a monthly investment plan."""
    projection = project_sip(
        SIPInput(
            monthly_contribution=monthly,
            years=n_years,
            annual_return_pct=rate,
            inflation_pct=inflation,
            lump_sum=lump_sum,
            step_up_pct=step_up,
        )
    )
    click.echo(f"{'Year':>4}{'Invested':>16}{'Total invested':>18}{'Balance':>16}{'Gains':>16}")
    for row in projection.years:
        click.echo(
            f"{row.year:>4}{money(row.invested_in_year):>16}{money(row.invested_total):>18}"
            f"{money(row.end_balance):>16}{money(row.gains):>16}"
        )
    click.echo(f"\nFuture value:      {money(projection.future_value)}")
    click.echo(f"Total invested:    {money(projection.total_invested)}")
    click.echo(f"Gains:             {money(projection.gains)}")
    click.echo(f"Real future value: {money(projection.real_future_value)}")


@cli.command()
@click.argument("amount", type=float)
@click.option("--rate", type=float, default=None, help="VAT rate % (overrides --preset).")
@click.option(
    "--preset",
    type=click.Choice(sorted(VAT_PRESETS)),
    default="standard",
    show_default=True,
)
@click.option("--inclusive", is_flag=True, help="AMOUNT already includes VAT; extract it.")
@click.option("--quantity", type=int, default=1, show_default=True)
@_report_errors
def vat(amount: float, rate: float | None, preset: str, inclusive: bool, quantity: int) -> None:
    """Add VAT to, or remove it from, AMOUNT."""
    breakdown = vat_breakdown(
        VATInput(
            amount=amount,
            rate_pct=VAT_PRESETS[preset] if rate is None else rate,
            mode="inclusive" if inclusive else "exclusive",
            quantity=quantity,
        )
    )
    click.echo(f"Net:   {money(breakdown.net)}")
    click.echo(f"VAT:   {money(breakdown.vat)}")
    click.echo(f"Gross: {money(breakdown.gross)}")
    click.echo(f"Rate:  {breakdown.rate_pct:.2f}% ({breakdown.mode})")


@cli.command()
@click.argument("date_of_birth", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date to measure age on (default: today).",
)
@click.option(
    "--tz", "time_zone", default="Europe/London", show_default=True, help="Time zone for today."
)
@_report_errors
def age(date_of_birth: datetime, as_of: datetime | None, time_zone: str) -> None:
    """Exact age, next birthday and zodiac sign for DATE_OF_BIRTH (YYYY-MM-DD)."""
    age_input = AgeInput(
        date_of_birth=date_of_birth.date(),
        as_of=as_of.date() if as_of is not None else None,
        time_zone=time_zone,
    )
    if age_input.as_of is None:
        age_input = AgeInput.model_validate(
            {**age_input.model_dump(), "as_of": today_in(time_zone)}
        )
    result = age_breakdown(age_input)
    days_word = "day" if result.days_to_next_birthday == 1 else "days"
    click.echo(f"Age:           {result.years} years, {result.months} months, {result.days} days")
    click.echo(
        f"Next birthday: {_long_date(result.next_birthday)} "
        f"({result.days_to_next_birthday} {days_word} to go)"
    )
    click.echo(f"Weeks old:     {result.total_weeks:,}")
    click.echo(f"Days old:      {result.total_days:,}")
    click.echo(f"Hours old:     {result.total_hours:,}")
    click.echo(f"Zodiac sign:   {result.zodiac}")


if __name__ == "__main__":
    cli()

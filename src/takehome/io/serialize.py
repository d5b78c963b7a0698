"""Serialization for inputs, results, schedules and salary sweeps."""

from __future__ import annotations

import csv
import hashlib
import io
import json
from typing import Any

from takehome.analytics.marginal import NetPayCurve
from takehome.calculators.loans import AmortizationRow
from takehome.config.schema import CalculationInput, Period
from takehome.core.engine import CalculationResult

_BREAKDOWN_FIELDS: list[str] = [
    "gross",
    "income_tax",
    "national_insurance",
    "student_loan",
    "employee_pension",
    "employer_pension",
    "net",
]


def compute_input_hash(calc_input: CalculationInput) -> str:
    """Compute a deterministic SHA-256 hash of a calculation input.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical input always produces the same hash.
    """
    canonical = json.dumps(calc_input.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_input(calc_input: CalculationInput) -> str:
    """Serialize a calculation input to a JSON string."""
    return json.dumps(calc_input.model_dump(mode="json"), indent=2)


def load_input(json_str: str) -> CalculationInput:
    """Deserialize a calculation input from a JSON string."""
    data: dict[str, Any] = json.loads(json_str)
    return CalculationInput.model_validate(data)


def dump_result(result: CalculationResult) -> str:
    """Serialize a calculation result to JSON.

    Includes the input, annual and per-period figures, and the income tax
    band slices.
    """
    data = {
        "tax_year": result.tax_year,
        "engine_version": result.engine_version,
        "input_hash": compute_input_hash(result.calc_input),
        "input": result.calc_input.model_dump(mode="json"),
        "adjusted_net_income": result.adjusted_net_income,
        "personal_allowance": result.personal_allowance,
        "taxable_income": result.taxable_income,
        "effective_rate": result.effective_rate,
        "annual": result.annual.as_dict(),
        "periods": {period.value: b.as_dict() for period, b in result.periods.items()},
        "income_tax_bands": [
            {"name": s.name, "rate": s.rate, "amount": s.amount, "tax": s.tax}
            for s in result.income_tax_bands
        ],
    }
    return json.dumps(data, indent=2)


def dump_breakdown_csv(result: CalculationResult) -> str:
    """Export the per-period breakdown as CSV.

    Returns:
        CSV string with a Period column followed by one column per figure.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["period", *_BREAKDOWN_FIELDS])
    for period in Period:
        values = result.for_period(period).as_dict()
        writer.writerow([period.value, *(f"{values[name]:.2f}" for name in _BREAKDOWN_FIELDS)])
    return output.getvalue()


def dump_schedule_csv(schedule: list[AmortizationRow] | tuple[AmortizationRow, ...]) -> str:
    """Export an amortization schedule as CSV."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["month", "payment", "interest", "principal", "balance"])
    for row in schedule:
        writer.writerow(
            [
                row.month,
                f"{row.payment:.2f}",
                f"{row.interest:.2f}",
                f"{row.principal:.2f}",
                f"{row.balance:.2f}",
            ]
        )
    return output.getvalue()


def dump_curve_csv(curve: NetPayCurve) -> str:
    """Export a salary sweep as CSV, one row per gross salary."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(
        ["gross", "income_tax", "national_insurance", "student_loan", "employee_pension", "net"]
    )
    for i in range(len(curve.gross)):
        writer.writerow(
            [
                f"{curve.gross[i]:.2f}",
                f"{curve.income_tax[i]:.2f}",
                f"{curve.national_insurance[i]:.2f}",
                f"{curve.student_loan[i]:.2f}",
                f"{curve.employee_pension[i]:.2f}",
                f"{curve.net[i]:.2f}",
            ]
        )
    return output.getvalue()

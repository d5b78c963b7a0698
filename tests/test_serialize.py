"""Tests for serialization."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import pytest

from takehome.calculators.loans import amortization_schedule
from takehome.config.defaults import default_input
from takehome.config.schema import CalculationInput, TaxParameters
from takehome.core.engine import compute_annual
from takehome.io.serialize import (
    compute_input_hash,
    dump_breakdown_csv,
    dump_input,
    dump_result,
    dump_schedule_csv,
    load_input,
)

GOLDEN_DIR = Path(__file__).parent / "golden"


class TestInputSerialization:
    def test_round_trip(self) -> None:
        calc_input = CalculationInput(
            gross_salary=45_000, region="scotland", student_loan_plan="plan4"
        )
        assert load_input(dump_input(calc_input)) == calc_input

    def test_hash_deterministic(self) -> None:
        assert compute_input_hash(default_input()) == compute_input_hash(default_input())

    def test_hash_changes(self) -> None:
        changed = default_input().model_copy(update={"gross_salary": 52_001})
        assert compute_input_hash(default_input()) != compute_input_hash(changed)


class TestResultSerialization:
    def test_dump_result(self, params: TaxParameters) -> None:
        result = compute_annual(default_input(), params)
        data = json.loads(dump_result(result))
        assert data["tax_year"] == "2024-25"
        assert data["input_hash"] == compute_input_hash(default_input())
        assert set(data["periods"]) == {"year", "month", "week", "day"}
        assert data["annual"]["net"] == result.annual.net
        assert data["income_tax_bands"][0]["name"] == "basic"

    def test_breakdown_csv(self, params: TaxParameters) -> None:
        text = dump_breakdown_csv(compute_annual(default_input(), params))
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[0][0] == "period"
        assert [r[0] for r in rows[1:]] == ["year", "month", "week", "day"]
        assert float(rows[2][1]) == pytest.approx(52_000 / 12, abs=0.005)

    def test_schedule_csv(self) -> None:
        text = dump_schedule_csv(amortization_schedule(1_200, 0.0, 12))
        lines = text.strip().splitlines()
        assert lines[0].split(",") == ["month", "payment", "interest", "principal", "balance"]
        assert len(lines) == 13
        assert lines[-1].endswith(",0.00")


class TestGolden:
    def test_scottish_plan4(self, params: TaxParameters) -> None:
        calc_input = load_input((GOLDEN_DIR / "scottish_plan4.json").read_text())
        annual = compute_annual(calc_input, params).annual
        assert annual.employee_pension == pytest.approx(1_800.00)
        assert annual.income_tax == pytest.approx(6_269.33)
        assert annual.national_insurance == pytest.approx(2_594.40)
        assert annual.student_loan == pytest.approx(1_560.60)
        assert annual.net == pytest.approx(32_775.67)

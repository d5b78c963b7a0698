"""Tests for band apportionment and the regional income tax models."""

from __future__ import annotations

import numpy as np
import pytest

from takehome.config.schema import Band, TaxParameters
from takehome.taxes.bands import (
    ResolvedBand,
    apportion_to_bands,
    apportion_to_bands_vectorized,
    resolve_bands,
)
from takehome.taxes.rest_of_uk import RestOfUKTaxModel
from takehome.taxes.scotland import ScottishTaxModel


class TestApportionToBands:
    def test_zero_amount(self) -> None:
        bands = [ResolvedBand("low", 0.1, 100.0), ResolvedBand("high", 0.2, float("inf"))]
        result = apportion_to_bands(0, bands)
        assert result.total_tax == 0.0
        assert result.slices == ()

    def test_negative_amount_is_zero(self) -> None:
        bands = [ResolvedBand("flat", 0.1, float("inf"))]
        assert apportion_to_bands(-50, bands).total_tax == 0.0

    def test_walks_bands_in_order(self) -> None:
        bands = [
            ResolvedBand("a", 0.10, 100.0),
            ResolvedBand("b", 0.20, 200.0),
            ResolvedBand("c", 0.50, float("inf")),
        ]
        result = apportion_to_bands(450, bands)
        assert result.amounts == (100.0, 200.0, 150.0)
        assert result.total_tax == pytest.approx(10 + 40 + 75)

    def test_stops_when_exhausted(self) -> None:
        bands = [ResolvedBand("a", 0.10, 100.0), ResolvedBand("b", 0.20, float("inf"))]
        result = apportion_to_bands(60, bands)
        assert len(result.slices) == 1
        assert result.total_tax == pytest.approx(6.0)

    def test_rounds_total_once(self) -> None:
        # Each band's tax is half a penny; rounding per band would give 0.02
        bands = [ResolvedBand("a", 0.005, 1.0), ResolvedBand("b", 0.005, float("inf"))]
        assert apportion_to_bands(2, bands).total_tax == 0.01

    def test_raw_and_resolved_tables_agree(self, params: TaxParameters) -> None:
        raw = params.scotland_bands
        for amount in (0.0, 10_000.0, 47_430.0, 150_000.0):
            assert (
                apportion_to_bands(amount, raw).total_tax
                == apportion_to_bands(amount, resolve_bands(raw)).total_tax
            )

    def test_vectorized_matches_scalar(self) -> None:
        bands = [ResolvedBand("a", 0.10, 100.0), ResolvedBand("b", 0.25, float("inf"))]
        amounts = np.array([0.0, 50.0, 100.0, 333.33])
        widths = np.tile([b.width for b in bands], (len(amounts), 1))
        result = apportion_to_bands_vectorized(amounts, widths, [b.rate for b in bands])
        expected = [apportion_to_bands(x, bands).total_tax for x in amounts]
        np.testing.assert_allclose(result, expected)


class TestResolveBands:
    def test_ends_at_gross_width_depends_on_allowance(self, params: TaxParameters) -> None:
        full = resolve_bands(params.rest_of_uk_bands, 12_570)
        none = resolve_bands(params.rest_of_uk_bands, 0)
        assert full[1].width == 125_140 - 12_570 - 37_700
        assert none[1].width == 125_140 - 37_700

    def test_ends_at_gross_clamped(self) -> None:
        bands = [
            Band(name="a", rate=0.2, width=100),
            Band(name="b", rate=0.4, ends_at_gross=50),
            Band(name="c", rate=0.45),
        ]
        assert resolve_bands(bands, 10)[1].width == 0.0


class TestRestOfUK:
    @pytest.fixture
    def model(self, params: TaxParameters) -> RestOfUKTaxModel:
        return RestOfUKTaxModel(params)

    def test_band_sum_identity(self, model: RestOfUKTaxModel, params: TaxParameters) -> None:
        """At zero allowance the bounded bands end exactly at £125,140."""
        basic = params.rest_of_uk_bands[0].width
        assert basic is not None
        assert basic + model.higher_band_width(0.0) + 0.0 == 125_140
        assert basic + model.higher_band_width(12_570) + 12_570 == 125_140

    def test_below_allowance(self, model: RestOfUKTaxModel) -> None:
        assert model.income_tax(12_000) == 0.0

    def test_30k(self, model: RestOfUKTaxModel) -> None:
        # (30,000 - 12,570) * 20%
        assert model.income_tax(30_000) == pytest.approx(3_486.00)

    def test_60k(self, model: RestOfUKTaxModel) -> None:
        # 37,700 * 20% + (60,000 - 50,270) * 40%
        assert model.income_tax(60_000) == pytest.approx(11_432.00)

    def test_110k_taper(self, model: RestOfUKTaxModel) -> None:
        # allowance 7,570; taxable 102,430; 7,540 + 64,730 * 40%
        assert model.income_tax(110_000) == pytest.approx(33_432.00)

    def test_150k_additional_rate(self, model: RestOfUKTaxModel) -> None:
        # 7,540 + 87,440 * 40% + 24,860 * 45%
        assert model.income_tax(150_000) == pytest.approx(53_703.00)

    def test_breakdown(self, model: RestOfUKTaxModel) -> None:
        b = model.breakdown(60_000)
        assert b.personal_allowance == 12_570
        assert b.taxable_income == 47_430
        assert [s.name for s in b.slices] == ["basic", "higher"]
        assert sum(s.tax for s in b.slices) == pytest.approx(b.total_tax)

    def test_marginal_rate(self, model: RestOfUKTaxModel) -> None:
        assert model.marginal_rate(10_000) == 0.0
        assert model.marginal_rate(30_000) == 0.20
        assert model.marginal_rate(60_000) == 0.40
        assert model.marginal_rate(200_000) == 0.45

    def test_vectorized_matches_scalar(self, model: RestOfUKTaxModel) -> None:
        incomes = np.array([0.0, 30_000.0, 60_000.0, 110_000.0, 124_000.0, 150_000.0])
        expected = [model.income_tax(x) for x in incomes]
        np.testing.assert_allclose(model.income_tax_vectorized(incomes), expected, atol=0.01)


class TestScotland:
    @pytest.fixture
    def model(self, params: TaxParameters) -> ScottishTaxModel:
        return ScottishTaxModel(params)

    def test_30k(self, model: ScottishTaxModel) -> None:
        # 2,306 * 19% + 11,685 * 20% + 3,439 * 21%
        assert model.income_tax(30_000) == pytest.approx(3_497.33)

    def test_60k(self, model: ScottishTaxModel) -> None:
        # starter + basic + 17,100 * 21% + 16,339 * 42%
        assert model.income_tax(60_000) == pytest.approx(13_228.52)

    def test_150k_top_rate(self, model: ScottishTaxModel) -> None:
        assert model.income_tax(150_000) == pytest.approx(60_057.95)

    def test_bands_close_at_taper_exhausted(self, params: TaxParameters) -> None:
        widths = [b.width for b in params.scotland_bands[:-1]]
        assert sum(w for w in widths if w is not None) + 12_570 == 125_140

    def test_vectorized_matches_scalar(self, model: ScottishTaxModel) -> None:
        incomes = np.array([5_000.0, 30_000.0, 60_000.0, 115_000.0, 150_000.0])
        expected = [model.income_tax(x) for x in incomes]
        np.testing.assert_allclose(model.income_tax_vectorized(incomes), expected, atol=0.01)

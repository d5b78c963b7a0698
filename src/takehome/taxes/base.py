"""Base protocol and shared band logic for income tax models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from numpy.typing import NDArray

from takehome.config.schema import Band, Region, TaxParameters
from takehome.taxes.allowance import personal_allowance, personal_allowance_vectorized
from takehome.taxes.bands import (
    BandSlice,
    apportion_to_bands,
    apportion_to_bands_vectorized,
    resolve_bands,
)


@dataclass(frozen=True)
class IncomeTaxBreakdown:
    """Income tax for one adjusted net income."""

    adjusted_net_income: float
    personal_allowance: float
    taxable_income: float
    total_tax: float
    slices: tuple[BandSlice, ...]


class IncomeTaxModel(Protocol):
    """Protocol for regional income tax computation."""

    region: Region

    def breakdown(self, adjusted_net_income: float) -> IncomeTaxBreakdown:
        """Allowance, taxable income and per-band tax."""
        ...

    def income_tax(self, adjusted_net_income: float) -> float:
        """Total income tax, rounded to pennies."""
        ...

    def income_tax_vectorized(
        self,
        adjusted_net_income: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Vectorized income tax across an array of incomes."""
        ...

    def marginal_rate(self, adjusted_net_income: float) -> float:
        """Marginal income tax rate at the given income."""
        ...


class BandedIncomeTaxModel:
    """Income tax as allowance resolution followed by band apportionment.

    Subclasses choose the band table; the algorithm is shared.
    """

    region: Region = Region.REST_OF_UK

    def __init__(self, parameters: TaxParameters) -> None:
        self._parameters = parameters
        self._bands: tuple[Band, ...] = parameters.bands_for(self.region)

    @property
    def parameters(self) -> TaxParameters:
        return self._parameters

    @property
    def bands(self) -> tuple[Band, ...]:
        return self._bands

    def breakdown(self, adjusted_net_income: float) -> IncomeTaxBreakdown:
        income = max(0.0, adjusted_net_income)
        allowance = personal_allowance(income, self._parameters)
        taxable = max(0.0, income - allowance)
        result = apportion_to_bands(taxable, resolve_bands(self._bands, allowance))
        return IncomeTaxBreakdown(
            adjusted_net_income=income,
            personal_allowance=allowance,
            taxable_income=taxable,
            total_tax=result.total_tax,
            slices=result.slices,
        )

    def income_tax(self, adjusted_net_income: float) -> float:
        return self.breakdown(adjusted_net_income).total_tax

    def income_tax_vectorized(
        self,
        adjusted_net_income: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        income = np.maximum(np.asarray(adjusted_net_income, dtype=float), 0.0)
        allowance = personal_allowance_vectorized(income, self._parameters)
        taxable = np.maximum(income - allowance, 0.0)

        widths = np.empty((income.shape[0], len(self._bands)))
        consumed = np.zeros_like(income)
        for i, band in enumerate(self._bands):
            if band.width is not None:
                widths[:, i] = band.width
            elif band.ends_at_gross is not None:
                widths[:, i] = np.maximum(band.ends_at_gross - allowance - consumed, 0.0)
            else:
                widths[:, i] = np.inf
            consumed = consumed + widths[:, i]
        return apportion_to_bands_vectorized(taxable, widths, [b.rate for b in self._bands])

    def marginal_rate(self, adjusted_net_income: float) -> float:
        """Headline band rate at the given income.

        Inside the taper zone the effective marginal rate is higher than the
        band rate; use ``takehome.analytics.marginal`` for that.
        """
        allowance = personal_allowance(max(0.0, adjusted_net_income), self._parameters)
        taxable = max(0.0, adjusted_net_income - allowance)
        if taxable <= 0:
            return 0.0
        floor = 0.0
        for band in resolve_bands(self._bands, allowance):
            if taxable <= floor + band.width or math.isinf(band.width):
                return band.rate
            floor += band.width
        return self._bands[-1].rate

"""Apportion a taxable amount across ordered marginal-rate bands."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from takehome.config.schema import Band
from takehome.core.rounding import round_money, round_money_vectorized


@dataclass(frozen=True)
class ResolvedBand:
    """A band with its taxable width fixed (``math.inf`` for the last band)."""

    name: str
    rate: float
    width: float


@dataclass(frozen=True)
class BandSlice:
    """The part of a taxable amount that fell into one band."""

    name: str
    rate: float
    amount: float
    tax: float


@dataclass(frozen=True)
class BandApportionment:
    """Result of apportioning an amount across bands."""

    total_tax: float
    slices: tuple[BandSlice, ...]

    @property
    def amounts(self) -> tuple[float, ...]:
        return tuple(s.amount for s in self.slices)


def resolve_bands(bands: Sequence[Band], personal_allowance: float = 0.0) -> list[ResolvedBand]:
    """Turn a band table into fixed widths for a given personal allowance.

    A band sized by ``ends_at_gross`` takes whatever width is left between the
    preceding bands and the point where gross income reaches that threshold,
    clamped at zero.
    """
    resolved: list[ResolvedBand] = []
    consumed = 0.0
    for band in bands:
        if band.width is not None:
            width = float(band.width)
        elif band.ends_at_gross is not None:
            width = max(0.0, band.ends_at_gross - personal_allowance - consumed)
        else:
            width = math.inf
        resolved.append(ResolvedBand(name=band.name, rate=band.rate, width=width))
        consumed += width
    return resolved


def apportion_to_bands(
    taxable_amount: float,
    bands: Sequence[ResolvedBand] | Sequence[Band],
) -> BandApportionment:
    """Split a taxable amount across ordered bands and total the tax.

    Bands are consumed lowest first; the walk stops once nothing is left.
    The total is rounded to pennies once, at the end. Bands given as raw
    table entries are resolved with a zero allowance.

    Args:
        taxable_amount: Amount to apportion (negative values count as zero).
        bands: Ordered bands, the last normally unbounded.

    Returns:
        BandApportionment with the rounded total and unrounded per-band slices.
    """
    resolved = _ensure_resolved(bands)
    remaining = max(0.0, taxable_amount)
    total = 0.0
    slices: list[BandSlice] = []
    for band in resolved:
        if remaining <= 0:
            break
        amount = min(remaining, band.width)
        tax = amount * band.rate
        slices.append(BandSlice(name=band.name, rate=band.rate, amount=amount, tax=tax))
        total += tax
        remaining -= amount
    return BandApportionment(total_tax=round_money(total), slices=tuple(slices))


def apportion_to_bands_vectorized(
    taxable_amounts: NDArray[np.floating[Any]],
    band_widths: NDArray[np.floating[Any]],
    rates: Sequence[float],
) -> NDArray[np.floating[Any]]:
    """Vectorized band apportionment.

    Args:
        taxable_amounts: (n,) amounts to apportion.
        band_widths: (n, n_bands) width of each band per amount, so that
            allowance-dependent widths can differ row by row.
        rates: (n_bands,) marginal rate of each band.

    Returns:
        (n,) total tax per amount, rounded to pennies.
    """
    remaining = np.maximum(np.asarray(taxable_amounts, dtype=float), 0.0)
    tax = np.zeros_like(remaining)
    for i, rate in enumerate(rates):
        in_band = np.minimum(remaining, band_widths[:, i])
        tax += in_band * rate
        remaining = remaining - in_band
    return round_money_vectorized(tax)


def _ensure_resolved(bands: Sequence[ResolvedBand] | Sequence[Band]) -> list[ResolvedBand]:
    if all(isinstance(b, ResolvedBand) for b in bands):
        return list(bands)  # type: ignore[arg-type]
    return resolve_bands(bands)  # type: ignore[arg-type]

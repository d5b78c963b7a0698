"""Money rounding helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import numpy as np
from numpy.typing import NDArray

_PENNY = Decimal("0.01")


def round_money(value: float) -> float:
    """Round to 2 decimal places, halves away from zero.

    Goes through the shortest decimal repr of the float so that values such
    as ``2.675`` round to ``2.68`` rather than following the binary
    representation.
    """
    rounded = Decimal(repr(float(value))).quantize(_PENNY, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0  # normalise -0.0


_round_money_elementwise = np.vectorize(round_money, otypes=[float])


def round_money_vectorized(values: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Elementwise ``round_money`` over an array; results match the scalar form exactly."""
    result: NDArray[np.floating[Any]] = _round_money_elementwise(
        np.asarray(values, dtype=float)
    )
    return result

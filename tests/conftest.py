"""Shared test fixtures."""

from __future__ import annotations

import pytest

from takehome.config.schema import TaxParameters
from takehome.taxes.parameters import load_tax_parameters


@pytest.fixture
def params() -> TaxParameters:
    """2024-25 tax table."""
    return load_tax_parameters("2024-25")


@pytest.fixture
def params_2025() -> TaxParameters:
    """2025-26 tax table."""
    return load_tax_parameters("2025-26")

"""Per-year tax parameter tables."""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from pydantic import ValidationError

from takehome.config.schema import DEFAULT_TAX_YEAR, TaxParameters
from takehome.io.yaml_loader import list_package_yaml, load_package_yaml
from takehome.utils.exceptions import ConfigError, UnknownTaxYearError

logger = logging.getLogger(__name__)

TABLES_DIR = "taxes/tables"
_TABLE_NAME = re.compile(r"^uk_(\d{4})_(\d{2})$")


def _table_file(tax_year: str) -> str:
    return f"uk_{tax_year.replace('-', '_')}.yaml"


def available_tax_years() -> list[str]:
    """Tax years with a bundled parameter table, oldest first."""
    years = []
    for path in list_package_yaml(TABLES_DIR, "uk_*.yaml"):
        match = _TABLE_NAME.match(path.stem)
        if match:
            years.append(f"{match.group(1)}-{match.group(2)}")
    return years


@lru_cache(maxsize=None)
def load_tax_parameters(tax_year: str = DEFAULT_TAX_YEAR) -> TaxParameters:
    """Load and validate the parameter table for a tax year.

    Tables are cached per process; the returned model is frozen and safe to
    share between callers.

    Args:
        tax_year: Year label such as ``"2024-25"``.

    Returns:
        Validated TaxParameters.

    Raises:
        UnknownTaxYearError: If no table exists for ``tax_year``.
        ConfigError: If the table fails validation.
    """
    years = available_tax_years()
    if tax_year not in years:
        raise UnknownTaxYearError(tax_year, years)

    data = load_package_yaml(f"{TABLES_DIR}/{_table_file(tax_year)}")
    try:
        params = TaxParameters.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid tax table for {tax_year}: {exc}") from exc
    if params.tax_year != tax_year:
        raise ConfigError(
            f"Tax table {_table_file(tax_year)} declares tax_year {params.tax_year!r}"
        )
    logger.debug("Loaded tax parameters for %s", tax_year)
    return params

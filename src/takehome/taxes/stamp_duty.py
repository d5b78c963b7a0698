"""Residential Stamp Duty Land Tax."""

from __future__ import annotations

from takehome.config.schema import TaxParameters
from takehome.taxes.bands import BandApportionment, apportion_to_bands
from takehome.utils.exceptions import ConfigError


def stamp_duty(
    price: float,
    parameters: TaxParameters,
    first_time_buyer: bool = False,
) -> BandApportionment:
    """SDLT on a residential purchase.

    First-time buyer bands apply only up to the relief ceiling; above it the
    standard bands apply to the whole price.

    Raises:
        ConfigError: If the year's table has no stamp duty section.
    """
    rules = parameters.stamp_duty
    if rules is None:
        raise ConfigError(f"No stamp duty bands in the {parameters.tax_year} table")
    bands = rules.standard
    if first_time_buyer and rules.first_time_buyer and price <= rules.first_time_buyer_max_price:
        bands = rules.first_time_buyer
    return apportion_to_bands(price, bands)

"""Scottish income tax."""

from __future__ import annotations

from takehome.config.schema import Region
from takehome.taxes.base import BandedIncomeTaxModel


class ScottishTaxModel(BandedIncomeTaxModel):
    """Six bands from starter to top rate, all bounded bands with literal widths."""

    region = Region.SCOTLAND

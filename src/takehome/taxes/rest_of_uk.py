"""Income tax for England, Wales and Northern Ireland."""

from __future__ import annotations

from takehome.config.schema import Region, TaxParameters
from takehome.taxes.base import BandedIncomeTaxModel


class RestOfUKTaxModel(BandedIncomeTaxModel):
    """Basic, higher and additional rate bands.

    The additional rate threshold is set on gross income, so the higher band
    widens by whatever allowance the taper has removed.
    """

    region = Region.REST_OF_UK

    def higher_band_width(self, personal_allowance: float) -> float:
        """Taxable width of the higher rate band for a given allowance."""
        params: TaxParameters = self.parameters
        basic = self.bands[0].width or 0.0
        ceiling = self.bands[1].ends_at_gross or params.personal_allowance.taper_exhausted
        return max(0.0, ceiling - personal_allowance - basic)

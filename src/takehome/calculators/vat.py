"""Add or remove VAT."""

from __future__ import annotations

from dataclasses import dataclass

from takehome.config.schema import VATInput


@dataclass(frozen=True)
class VATBreakdown:
    net: float
    vat: float
    gross: float
    rate_pct: float
    mode: str


def vat_breakdown(vat_input: VATInput) -> VATBreakdown:
    """Split an amount (times quantity) into net, VAT and gross.

    In ``exclusive`` mode the amount is net and VAT is added; in
    ``inclusive`` mode the amount is gross and VAT is extracted.
    """
    base = vat_input.amount * vat_input.quantity
    rate = vat_input.rate_pct / 100
    if vat_input.mode == "exclusive":
        net = base
        vat = net * rate
        gross = net + vat
    else:
        gross = base
        net = gross / (1 + rate) if rate else gross
        vat = gross - net
    return VATBreakdown(net=net, vat=vat, gross=gross, rate_pct=vat_input.rate_pct, mode=vat_input.mode)

"""Custom exceptions for takehome."""

from __future__ import annotations


class TakehomeError(Exception):
    """Base exception for takehome."""


class ConfigError(TakehomeError):
    """Invalid parameter configuration (unknown region, plan, or band table)."""


class UnknownTaxYearError(ConfigError):
    """No parameter table exists for the requested tax year."""

    def __init__(self, tax_year: str, available: list[str]) -> None:
        self.tax_year = tax_year
        self.available = available
        super().__init__(
            f"Unknown tax year {tax_year!r}; available: {', '.join(available) or 'none'}"
        )

"""Pydantic v2 configuration models for takehome."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from takehome.utils.exceptions import ConfigError

DEFAULT_TAX_YEAR = "2024-25"


class Region(str, Enum):
    """Income tax region."""

    REST_OF_UK = "rest_of_uk"
    SCOTLAND = "scotland"

    @classmethod
    def parse(cls, key: str | Region) -> Region:
        """Resolve a region key, accepting the short codes used by payroll forms.

        Raises:
            ConfigError: If the key does not name a known region.
        """
        if isinstance(key, Region):
            return key
        normalized = _REGION_ALIASES.get(str(key).strip().lower(), str(key).strip().lower())
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(r.value for r in cls)
            raise ConfigError(f"Unknown region {key!r}; expected one of: {choices}") from None


_REGION_ALIASES: dict[str, str] = {
    "ruk": "rest_of_uk",
    "ewni": "rest_of_uk",
    "england": "rest_of_uk",
    "wales": "rest_of_uk",
    "northern_ireland": "rest_of_uk",
    "sct": "scotland",
}


class StudentLoanPlan(str, Enum):
    """Undergraduate student loan plan selector (or ``none``)."""

    NONE = "none"
    PLAN1 = "plan1"
    PLAN2 = "plan2"
    PLAN4 = "plan4"
    PLAN5 = "plan5"
    POSTGRADUATE = "postgraduate"

    @classmethod
    def parse(cls, key: str | StudentLoanPlan) -> StudentLoanPlan:
        """Resolve a plan key such as ``"plan2"`` or ``"pgl"``.

        Raises:
            ConfigError: If the key does not name a known plan.
        """
        if isinstance(key, StudentLoanPlan):
            return key
        raw = str(key).strip().lower().replace(" ", "").replace("_", "")
        normalized = _PLAN_ALIASES.get(raw, raw)
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ConfigError(
                f"Unknown student loan plan {key!r}; expected one of: {choices}"
            ) from None


_PLAN_ALIASES: dict[str, str] = {
    "pgl": "postgraduate",
    "postgrad": "postgraduate",
    "pg": "postgraduate",
}


class Period(str, Enum):
    """Display period for per-period pay figures."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"

    @property
    def divisor(self) -> int:
        """Number of periods per tax year (working days for ``DAY``)."""
        return _PERIOD_DIVISORS[self]


_PERIOD_DIVISORS: dict[Period, int] = {
    Period.YEAR: 1,
    Period.MONTH: 12,
    Period.WEEK: 52,
    Period.DAY: 260,
}


# --- Tax parameter tables (loaded from YAML) ---


class Band(BaseModel):
    """A marginal-rate band.

    Exactly one of ``width`` or ``ends_at_gross`` sizes a bounded band.
    ``ends_at_gross`` means the band stops where *gross* income reaches that
    threshold, so its taxable width depends on the personal allowance.
    The final band of a table leaves both unset and is unbounded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    rate: float = Field(ge=0, le=1)
    width: float | None = Field(default=None, gt=0)
    ends_at_gross: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _validate_sizing(self) -> Band:
        if self.width is not None and self.ends_at_gross is not None:
            raise ValueError(f"band {self.name!r} sets both width and ends_at_gross")
        return self

    @property
    def is_unbounded(self) -> bool:
        return self.width is None and self.ends_at_gross is None


def _check_band_table(bands: tuple[Band, ...], label: str) -> None:
    if not bands:
        raise ValueError(f"{label} must contain at least one band")
    if not bands[-1].is_unbounded:
        raise ValueError(f"last band of {label} must be unbounded")
    for band in bands[:-1]:
        if band.is_unbounded:
            raise ValueError(f"band {band.name!r} in {label} is unbounded but not last")


class PersonalAllowanceRules(BaseModel):
    """Personal allowance and its high-income taper."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float = Field(ge=0)
    taper_start: float = Field(ge=0)
    taper_exhausted: float = Field(ge=0)

    @model_validator(mode="after")
    def _validate_taper(self) -> PersonalAllowanceRules:
        if self.taper_exhausted <= self.taper_start:
            raise ValueError("taper_exhausted must be greater than taper_start")
        return self


class NationalInsuranceRules(BaseModel):
    """Employee Class 1 National Insurance (annualised)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary_threshold: float = Field(ge=0)
    upper_earnings_limit: float = Field(ge=0)
    main_rate: float = Field(ge=0, le=1)
    additional_rate: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _validate_limits(self) -> NationalInsuranceRules:
        if self.upper_earnings_limit < self.primary_threshold:
            raise ValueError("upper_earnings_limit must not be below primary_threshold")
        return self


class LoanPlanTerms(BaseModel):
    """Repayment threshold and rate for one student loan plan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold: float = Field(ge=0)
    rate_pct: float = Field(ge=0, le=100)


class StampDutyRules(BaseModel):
    """Residential Stamp Duty Land Tax bands."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    standard: tuple[Band, ...]
    first_time_buyer: tuple[Band, ...] = ()
    first_time_buyer_max_price: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def _validate_bands(self) -> StampDutyRules:
        _check_band_table(self.standard, "stamp_duty.standard")
        if self.first_time_buyer:
            _check_band_table(self.first_time_buyer, "stamp_duty.first_time_buyer")
        for band in (*self.standard, *self.first_time_buyer):
            if band.ends_at_gross is not None:
                raise ValueError(f"stamp duty band {band.name!r} must use a literal width")
        return self


class TaxParameters(BaseModel):
    """All constants for one tax year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: str
    personal_allowance: PersonalAllowanceRules
    national_insurance: NationalInsuranceRules
    rest_of_uk_bands: tuple[Band, ...]
    scotland_bands: tuple[Band, ...]
    student_loans: Mapping[StudentLoanPlan, LoanPlanTerms]
    stamp_duty: StampDutyRules | None = None

    @field_validator("student_loans", mode="after")
    @classmethod
    def _freeze_student_loans(
        cls, value: Mapping[StudentLoanPlan, LoanPlanTerms]
    ) -> Mapping[StudentLoanPlan, LoanPlanTerms]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _validate_tables(self) -> TaxParameters:
        allowance = self.personal_allowance
        for label, bands in (
            ("rest_of_uk_bands", self.rest_of_uk_bands),
            ("scotland_bands", self.scotland_bands),
        ):
            _check_band_table(bands, label)
            bounded = bands[:-1]
            # Fully literal tables must close exactly where the allowance runs out
            if bounded and all(b.width is not None for b in bounded):
                total = sum(b.width for b in bounded if b.width is not None)
                if abs(total + allowance.amount - allowance.taper_exhausted) > 1e-6:
                    raise ValueError(
                        f"{label} widths plus personal allowance sum to "
                        f"{total + allowance.amount:,.2f}, expected "
                        f"{allowance.taper_exhausted:,.2f}"
                    )
        if StudentLoanPlan.NONE in self.student_loans:
            raise ValueError("student_loans must not define terms for 'none'")
        return self

    def bands_for(self, region: Region) -> tuple[Band, ...]:
        """Income tax band table for a region."""
        if region is Region.SCOTLAND:
            return self.scotland_bands
        if region is Region.REST_OF_UK:
            return self.rest_of_uk_bands
        raise ConfigError(f"Unknown region {region!r}")

    def plan_terms(self, plan: StudentLoanPlan) -> LoanPlanTerms:
        """Look up the repayment terms for a plan.

        Raises:
            ConfigError: If the plan has no terms in this year's table.
        """
        try:
            return self.student_loans[plan]
        except KeyError:
            raise ConfigError(
                f"Student loan plan {getattr(plan, 'value', plan)!r} has no terms "
                f"in the {self.tax_year} table"
            ) from None


# --- Calculation inputs ---


class CalculationInput(BaseModel):
    """One salary calculation request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(ge=0, allow_inf_nan=False, description="Annual gross salary")
    region: Region = Region.REST_OF_UK
    employee_pension_pct: float = Field(default=0.0, ge=0, le=100)
    employer_pension_pct: float = Field(
        default=0.0,
        ge=0,
        le=100,
        description="Employer contribution; reported only, never deducted",
    )
    student_loan_plan: StudentLoanPlan = StudentLoanPlan.NONE
    plan_threshold: float | None = Field(
        default=None, ge=0, description="Override for the plan's repayment threshold"
    )
    plan_rate_pct: float | None = Field(
        default=None, ge=0, le=100, description="Override for the plan's repayment rate"
    )
    postgraduate_loan: bool = False
    postgraduate_threshold: float | None = Field(default=None, ge=0)
    postgraduate_rate_pct: float | None = Field(default=None, ge=0, le=100)
    tax_year: str = DEFAULT_TAX_YEAR

    @model_validator(mode="before")
    @classmethod
    def _fold_postgraduate_plan(cls, data: Any) -> Any:
        """Move a postgraduate ``student_loan_plan`` onto ``postgraduate_loan``.

        The postgraduate loan is repaid at most once; its terms come from
        the postgraduate overrides, falling back to the plan overrides.
        """
        if not isinstance(data, dict) or data.get("student_loan_plan") is None:
            return data
        try:
            plan = StudentLoanPlan.parse(data["student_loan_plan"])
        except ConfigError:
            return data
        if plan is not StudentLoanPlan.POSTGRADUATE:
            return data

        folded = dict(data)
        folded["student_loan_plan"] = StudentLoanPlan.NONE
        folded["postgraduate_loan"] = True
        for plan_key, pg_key in (
            ("plan_threshold", "postgraduate_threshold"),
            ("plan_rate_pct", "postgraduate_rate_pct"),
        ):
            override = folded.pop(plan_key, None)
            if override is None:
                continue
            if folded.get(pg_key) is not None and folded[pg_key] != override:
                raise ValueError(
                    f"{plan_key} and {pg_key} disagree for the postgraduate loan"
                )
            folded[pg_key] = override
        return folded

    @field_validator("region", mode="before")
    @classmethod
    def _normalize_region(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _REGION_ALIASES.get(value.strip().lower(), value.strip().lower())
        return value

    @field_validator("student_loan_plan", mode="before")
    @classmethod
    def _normalize_plan(cls, value: Any) -> Any:
        if isinstance(value, str):
            raw = value.strip().lower().replace(" ", "").replace("_", "")
            return _PLAN_ALIASES.get(raw, raw)
        return value


class LoanInput(BaseModel):
    """Fixed-rate amortizing loan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(ge=0, allow_inf_nan=False)
    annual_rate_pct: float = Field(ge=0, le=100)
    term_months: int = Field(ge=1, le=600)


class MortgageInput(BaseModel):
    """Residential purchase financed by a repayment mortgage."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    price: float = Field(gt=0, allow_inf_nan=False)
    deposit: float | None = Field(default=None, ge=0, description="Deposit amount")
    deposit_pct: float | None = Field(default=None, ge=0, le=100)
    annual_rate_pct: float = Field(ge=0, le=100)
    term_years: int = Field(default=25, ge=1, le=40)
    first_time_buyer: bool = False
    tax_year: str = DEFAULT_TAX_YEAR

    @model_validator(mode="after")
    def _validate_deposit(self) -> MortgageInput:
        if self.deposit is not None and self.deposit_pct is not None:
            raise ValueError("set deposit or deposit_pct, not both")
        if self.deposit is not None and self.deposit > self.price:
            raise ValueError("deposit must not exceed price")
        return self

    @property
    def deposit_amount(self) -> float:
        if self.deposit is not None:
            return self.deposit
        pct = 10.0 if self.deposit_pct is None else self.deposit_pct
        return self.price * pct / 100


class SIPInput(BaseModel):
    """Monthly systematic investment plan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_contribution: float = Field(ge=0, allow_inf_nan=False)
    years: int = Field(ge=1, le=60)
    annual_return_pct: float = Field(ge=0, le=100)
    inflation_pct: float = Field(default=0.0, ge=0, le=100)
    lump_sum: float = Field(default=0.0, ge=0)
    step_up_pct: float = Field(
        default=0.0, ge=0, le=100, description="Yearly increase of the monthly contribution"
    )


class VATInput(BaseModel):
    """VAT add/remove request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float = Field(ge=0, allow_inf_nan=False)
    rate_pct: float = Field(default=20.0, ge=0, le=100)
    mode: Literal["exclusive", "inclusive"] = Field(
        default="exclusive",
        description="'exclusive' adds VAT to a net amount, 'inclusive' extracts it",
    )
    quantity: int = Field(default=1, ge=1)


class AgeInput(BaseModel):
    """Exact age request; ``as_of`` defaults to today in ``time_zone``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    date_of_birth: date
    as_of: date | None = None
    time_zone: str = "Europe/London"

    @field_validator("time_zone")
    @classmethod
    def _validate_time_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown time zone {value!r}") from None
        return value

    @model_validator(mode="after")
    def _validate_order(self) -> AgeInput:
        if self.as_of is not None and self.date_of_birth > self.as_of:
            raise ValueError("date_of_birth must not be after as_of")
        return self

"""Exact age, next birthday and zodiac sign."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from takehome.config.schema import AgeInput

# (last month-day of the sign, sign) from 1 January; later dates are Capricorn
_ZODIAC_ENDS: tuple[tuple[int, str], ...] = (
    (119, "Capricorn"),
    (218, "Aquarius"),
    (320, "Pisces"),
    (419, "Aries"),
    (520, "Taurus"),
    (620, "Gemini"),
    (722, "Cancer"),
    (822, "Leo"),
    (922, "Virgo"),
    (1022, "Libra"),
    (1121, "Scorpio"),
    (1221, "Sagittarius"),
)


@dataclass(frozen=True)
class AgeBreakdown:
    """Age on the as-of date."""

    as_of: date
    years: int
    months: int
    days: int
    total_days: int
    total_weeks: int
    total_hours: int
    next_birthday: date
    days_to_next_birthday: int
    zodiac: str


def _add_months(start: date, months: int) -> date:
    """``start`` moved by whole months, the day clamped to the month's length."""
    year, month_index = divmod(start.month - 1 + months, 12)
    year += start.year
    month = month_index + 1
    return date(year, month, min(start.day, calendar.monthrange(year, month)[1]))


def _birthday_in(year: int, date_of_birth: date) -> date:
    # 29 February falls back to 28 February in common years
    last_day = calendar.monthrange(year, date_of_birth.month)[1]
    return date(year, date_of_birth.month, min(date_of_birth.day, last_day))


def exact_age(date_of_birth: date, as_of: date) -> tuple[int, int, int]:
    """Completed years, months and days from ``date_of_birth`` to ``as_of``.

    Months are counted while the monthly anniversary (clamped to month end)
    has been reached; the remaining days are counted from that anniversary.
    """
    if date_of_birth > as_of:
        raise ValueError("date_of_birth must not be after as_of")
    months = (as_of.year - date_of_birth.year) * 12 + as_of.month - date_of_birth.month
    if _add_months(date_of_birth, months) > as_of:
        months -= 1
    days = (as_of - _add_months(date_of_birth, months)).days
    years, months = divmod(months, 12)
    return years, months, days


def next_birthday(date_of_birth: date, as_of: date) -> date:
    """The next birthday on or after ``as_of``."""
    year = as_of.year
    if (as_of.month, as_of.day) > (date_of_birth.month, date_of_birth.day):
        year += 1
    return _birthday_in(year, date_of_birth)


def zodiac_sign(day: date) -> str:
    """Western zodiac sign for a birth date."""
    month_day = day.month * 100 + day.day
    for last, sign in _ZODIAC_ENDS:
        if month_day <= last:
            return sign
    return "Capricorn"


def today_in(time_zone: str) -> date:
    """Current calendar date in an IANA time zone."""
    return datetime.now(ZoneInfo(time_zone)).date()


def age_breakdown(age_input: AgeInput) -> AgeBreakdown:
    """Exact age, elapsed totals, next birthday and zodiac sign.

    Raises:
        ValueError: If the date of birth is after the as-of date.
    """
    dob = age_input.date_of_birth
    as_of = age_input.as_of if age_input.as_of is not None else today_in(age_input.time_zone)
    years, months, days = exact_age(dob, as_of)
    total_days = (as_of - dob).days
    upcoming = next_birthday(dob, as_of)
    return AgeBreakdown(
        as_of=as_of,
        years=years,
        months=months,
        days=days,
        total_days=total_days,
        total_weeks=total_days // 7,
        total_hours=total_days * 24,
        next_birthday=upcoming,
        days_to_next_birthday=(upcoming - as_of).days,
        zodiac=zodiac_sign(dob),
    )

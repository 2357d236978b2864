"""
String projections of a birth date.

Each projection accepts a single format token. The token letters follow the
widely used PHP ``date()`` convention so that values stored by other systems
line up with ours. Month and weekday names are fixed English tables and never
depend on the process locale.
"""

import calendar
from collections.abc import Callable
from datetime import date
from enum import Enum

from idcard_inspector.exceptions import InvalidFormatError


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class YearFormat(str, Enum):
    """Year format tokens."""

    FULL = "Y"  # 1949
    SHORT = "y"  # 49
    LEAP = "L"  # 1 if leap year, else 0
    ISO_WEEK_YEAR = "o"  # ISO 8601 week-numbering year


class MonthFormat(str, Enum):
    """Month format tokens."""

    NUMERIC = "n"  # 1 - 12
    PADDED = "m"  # 01 - 12
    SHORT_NAME = "M"  # Jan
    FULL_NAME = "F"  # January
    DAYS_IN_MONTH = "t"  # 28 - 31


class DayFormat(str, Enum):
    """Day format tokens."""

    NUMERIC = "j"  # 1 - 31
    PADDED = "d"  # 01 - 31
    ORDINAL_SUFFIX = "S"  # st, nd, rd, th
    ISO_WEEKDAY = "N"  # 1 (Monday) - 7 (Sunday)
    WEEKDAY = "w"  # 0 (Sunday) - 6 (Saturday)
    SHORT_WEEKDAY_NAME = "D"  # Mon
    FULL_WEEKDAY_NAME = "l"  # Monday
    DAY_OF_YEAR = "z"  # 0 - 365


def ordinal_suffix(day: int) -> str:
    """English ordinal suffix for a day of the month."""
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


_YEAR_FORMATTERS: dict[YearFormat, Callable[[date], str]] = {
    YearFormat.FULL: lambda d: f"{d.year:04d}",
    YearFormat.SHORT: lambda d: f"{d.year % 100:02d}",
    YearFormat.LEAP: lambda d: "1" if calendar.isleap(d.year) else "0",
    YearFormat.ISO_WEEK_YEAR: lambda d: str(d.isocalendar()[0]),
}

_MONTH_FORMATTERS: dict[MonthFormat, Callable[[date], str]] = {
    MonthFormat.NUMERIC: lambda d: str(d.month),
    MonthFormat.PADDED: lambda d: f"{d.month:02d}",
    MonthFormat.SHORT_NAME: lambda d: MONTH_NAMES[d.month - 1][:3],
    MonthFormat.FULL_NAME: lambda d: MONTH_NAMES[d.month - 1],
    MonthFormat.DAYS_IN_MONTH: lambda d: str(calendar.monthrange(d.year, d.month)[1]),
}

_DAY_FORMATTERS: dict[DayFormat, Callable[[date], str]] = {
    DayFormat.NUMERIC: lambda d: str(d.day),
    DayFormat.PADDED: lambda d: f"{d.day:02d}",
    DayFormat.ORDINAL_SUFFIX: lambda d: ordinal_suffix(d.day),
    DayFormat.ISO_WEEKDAY: lambda d: str(d.isoweekday()),
    DayFormat.WEEKDAY: lambda d: str(d.isoweekday() % 7),
    DayFormat.SHORT_WEEKDAY_NAME: lambda d: WEEKDAY_NAMES[d.weekday()][:3],
    DayFormat.FULL_WEEKDAY_NAME: lambda d: WEEKDAY_NAMES[d.weekday()],
    DayFormat.DAY_OF_YEAR: lambda d: str(d.timetuple().tm_yday - 1),
}


def _resolve(token: str, token_type: type[Enum], label: str) -> Enum:
    try:
        return token_type(token)
    except ValueError:
        allowed = tuple(member.value for member in token_type)
        raise InvalidFormatError(
            f"Unsupported {label} format {token!r}. Allowed values: {', '.join(allowed)}",
            allowed=allowed,
        ) from None


def format_year(birth_date: date, token: str = YearFormat.FULL) -> str:
    """Format the year of ``birth_date``.

    Raises:
        InvalidFormatError: If ``token`` is not a YearFormat value.

    Examples:
        >>> format_year(date(1949, 12, 31), "y")
        '49'
        >>> format_year(date(2000, 2, 29), "L")
        '1'
    """
    return _YEAR_FORMATTERS[_resolve(token, YearFormat, "year")](birth_date)


def format_month(birth_date: date, token: str = MonthFormat.PADDED) -> str:
    """Format the month of ``birth_date``.

    Raises:
        InvalidFormatError: If ``token`` is not a MonthFormat value.
    """
    return _MONTH_FORMATTERS[_resolve(token, MonthFormat, "month")](birth_date)


def format_day(birth_date: date, token: str = DayFormat.PADDED) -> str:
    """Format the day of ``birth_date``.

    Raises:
        InvalidFormatError: If ``token`` is not a DayFormat value.
    """
    return _DAY_FORMATTERS[_resolve(token, DayFormat, "day")](birth_date)

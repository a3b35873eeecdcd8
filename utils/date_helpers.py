"""Calendar arithmetic over ``YYYY-MM-DD`` strings.

Dates travel through the whole core as zero-padded strings so that plain
string comparison is chronological comparison. Functions here convert to
``datetime.date`` only for the arithmetic itself and hand strings back.
Nothing reads the clock except ``today_str()``.
"""
import calendar
import re
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta

from utils.constants import DATE_FORMAT, MONTH_FORMAT
from utils.errors import InvalidDateError

# ── Display date format options ───────────────────────────────────────────────

DATE_FORMAT_OPTIONS = ["DD.MM.YYYY", "MM/DD/YYYY", "YYYY-MM-DD"]

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_MONTH_PATTERN = re.compile(r"\d{4}-\d{2}")


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def is_date_str(value) -> bool:
    """True for a zero-padded ``YYYY-MM-DD`` string naming a real calendar day."""
    return parse_date(value) is not None


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not isinstance(date_str, str) or not _DATE_PATTERN.fullmatch(date_str):
        return None
    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError:
        return None


def require_date(date_str: str) -> date:
    """Like ``parse_date`` but raises ``InvalidDateError`` instead of returning None."""
    d = parse_date(date_str)
    if d is None:
        raise InvalidDateError(f"Invalid date: {date_str!r} (expected YYYY-MM-DD)")
    return d


def format_date(d: date) -> str:
    return d.isoformat()


def parse_month(month_str: str) -> date | None:
    """Return the first day of the given YYYY-MM month string."""
    if not isinstance(month_str, str) or not _MONTH_PATTERN.fullmatch(month_str):
        return None
    try:
        return datetime.strptime(month_str, MONTH_FORMAT).date()
    except ValueError:
        return None


# ── Offsetting ────────────────────────────────────────────────────────────────

def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def shift_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end.

    Results past the supported calendar saturate at ``date.max`` / ``date.min``.
    """
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    if year > MAXYEAR:
        return date.max
    if year < MINYEAR:
        return date.min
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def add_months(date_str: str, n: int) -> str:
    """``2025-01-31`` + 1 month is ``2025-02-28``; never rolls into the next month."""
    return format_date(shift_months(require_date(date_str), n))


def add_days(date_str: str, n: int) -> str:
    return format_date(require_date(date_str) + timedelta(days=n))


def subtract_days(date_str: str, n: int) -> str:
    return add_days(date_str, -n)


# ── Comparison ────────────────────────────────────────────────────────────────

def compare_date_strings(a: str, b: str) -> int:
    """Return -1, 0 or 1. Relies on the fixed-width format, so no parsing."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def difference_in_days(from_str: str, to_str: str) -> int:
    """Whole days from ``from_str`` to ``to_str`` (negative when ``to`` is earlier)."""
    return (require_date(to_str) - require_date(from_str)).days


def within_days(date_str: str, days_ahead: int, from_str: str) -> bool:
    diff = difference_in_days(from_str, date_str)
    return 0 <= diff <= days_ahead


# ── Range boundaries ──────────────────────────────────────────────────────────

def month_key(date_str: str) -> str:
    return date_str[:7]


def start_of_month(date_str: str) -> str:
    return format_date(require_date(date_str).replace(day=1))


def end_of_month(date_str: str) -> str:
    d = require_date(date_str)
    last_day = calendar.monthrange(d.year, d.month)[1]
    return format_date(d.replace(day=last_day))


def start_of_year(date_str: str) -> str:
    return format_date(require_date(date_str).replace(month=1, day=1))


def end_of_year(date_str: str) -> str:
    return format_date(require_date(date_str).replace(month=12, day=31))


# ── Display ───────────────────────────────────────────────────────────────────

def friendly_month(month_str: str) -> str:
    """Convert YYYY-MM to e.g. 'Feb 2026'."""
    d = parse_month(month_str)
    if d is None:
        return month_str
    return d.strftime("%b %Y")


def format_date_by_pattern(date_str: str, fmt_key: str) -> str:
    """Rearrange a YYYY-MM-DD storage string into the user-facing pattern.

    Works on the string parts directly; unknown patterns fall back to ISO.
    """
    year, month, day = date_str.split("-")
    if fmt_key == "DD.MM.YYYY":
        return f"{day}.{month}.{year}"
    if fmt_key == "MM/DD/YYYY":
        return f"{month}/{day}/{year}"
    return f"{year}-{month}-{day}"

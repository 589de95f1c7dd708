import datetime
import re

from django.core.exceptions import ValidationError
from django.utils import timezone

FISCAL_YEAR_RE = re.compile(r"^(\d{4})-(\d{4})$")


def get_fiscal_year(day=None):
    """Indian fiscal year label for a date, e.g. 2024-04-01 -> "2024-2025".

    The year runs April 1 to March 31. Defaults to today in the active time zone.
    """
    day = day or timezone.localdate()
    if isinstance(day, datetime.datetime):
        day = timezone.localtime(day).date() if timezone.is_aware(day) else day.date()
    if day.month >= 4:
        return f"{day.year}-{day.year + 1}"
    return f"{day.year - 1}-{day.year}"


def get_fiscal_year_dates(fiscal_year):
    """Return (April 1, March 31) dates bounding a "YYYY-YYYY" fiscal year"""
    match = FISCAL_YEAR_RE.match(fiscal_year or "")
    if not match:
        raise ValidationError(f"Malformed fiscal year {fiscal_year!r}, expected YYYY-YYYY")
    start_year, end_year = int(match.group(1)), int(match.group(2))
    if end_year != start_year + 1:
        raise ValidationError(f"Fiscal year {fiscal_year!r} must span consecutive years")
    return datetime.date(start_year, 4, 1), datetime.date(end_year, 3, 31)


def resolve_period(fiscal_year=None, start_date=None, end_date=None):
    """
    Pick the reporting window.
    An explicit start/end range wins, otherwise the fiscal year
    (current one when not given) is used.
    Returns (label, start_date, end_date).
    """
    if start_date or end_date:
        if not (start_date and end_date):
            raise ValidationError("Both start_date and end_date are required for a date range.")
        start_date, end_date = parse_date(start_date), parse_date(end_date)
        if start_date > end_date:
            raise ValidationError("start_date must not be after end_date.")
        return f"Custom Range: {start_date} to {end_date}", start_date, end_date

    fiscal_year = fiscal_year or get_fiscal_year()
    start, end = get_fiscal_year_dates(fiscal_year)
    return fiscal_year, start, end


def parse_date(value):
    """Accept a date, a datetime or an ISO "YYYY-MM-DD" string"""
    if isinstance(value, datetime.datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"Malformed date {value!r}, expected YYYY-MM-DD")

"""Date parsing and date range utilities."""

from datetime import date, datetime, time, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

RANGE_PRESETS = ("7d", "30d", "90d", "this-month", "all", "custom")

EPOCH = datetime(1970, 1, 1)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form the store keeps."""
    return datetime.now(UTC).replace(tzinfo=None)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and a few
    relative ones ("today", "yesterday", "last month", "this month",
    "this year").

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = utcnow().date()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "last week": today - timedelta(days=7),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this month": today.replace(day=1),
        "this year": today.replace(month=1, day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def get_range_bounds(
    preset: str,
    custom_start: date | None = None,
    custom_end: date | None = None,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Get inclusive creation-time bounds for a named range preset.

    Args:
        preset: One of 7d, 30d, 90d, this-month, all, custom
        custom_start: First day of a custom range
        custom_end: Last day of a custom range
        now: Reference time (defaults to current UTC time)

    Returns:
        Tuple of (start, end) datetimes

    Raises:
        ValueError: If the preset is unknown or a custom range is incomplete
    """
    preset = preset.strip().lower()
    if now is None:
        now = utcnow()

    if preset == "custom":
        if custom_start is None or custom_end is None:
            raise ValueError("Custom range requires both a start and an end day")
        first, last = sorted((custom_start, custom_end))
        return (start_of_day(first), end_of_day(last))

    if preset == "all":
        return (EPOCH, now)

    end = end_of_day(now.date())
    if preset == "7d":
        return (now - timedelta(days=7), end)
    elif preset == "30d":
        return (now - timedelta(days=30), end)
    elif preset == "90d":
        return (now - timedelta(days=90), end)
    elif preset == "this-month":
        return (start_of_day(now.date().replace(day=1)), end)

    raise ValueError(
        f"Unknown range: '{preset}'. Supported ranges: {', '.join(RANGE_PRESETS)}"
    )


def format_timestamp(ts: datetime | None, short: bool = False) -> str:
    """Format a stored timestamp for display; missing values render as a dash."""
    if ts is None:
        return "—"
    return ts.strftime("%b %d, %Y") if short else ts.strftime("%Y-%m-%d %H:%M")

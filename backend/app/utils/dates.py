"""Calendar helpers shared by analytics and the dashboard."""

from datetime import date, datetime, time, timedelta, timezone

# Independent of the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_start(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """First day of the month ``months`` after (or before) ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def start_of_day(day: date, tz: timezone = timezone.utc) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: timezone = timezone.utc) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


def month_bounds(day: date, tz: timezone = timezone.utc) -> tuple[datetime, datetime]:
    """Inclusive datetime bounds of the calendar month containing ``day``."""
    first = month_start(day)
    last = add_months(first, 1) - timedelta(days=1)
    return start_of_day(first, tz), end_of_day(last, tz)


def month_label(day: date) -> str:
    """``Jan 2026``."""
    return f"{MONTH_ABBR[day.month - 1]} {day.year}"


def day_label(day: date) -> str:
    """``Jan 5, 2026``."""
    return f"{MONTH_ABBR[day.month - 1]} {day.day}, {day.year}"

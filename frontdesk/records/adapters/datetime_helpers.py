import datetime as dt
from zoneinfo import ZoneInfo

from loguru import logger

# Date patterns offered on the settings screen, mapped to strftime.
DATE_PATTERNS: dict[str, str] = {
    "MM/dd/yyyy": "%m/%d/%Y",
    "dd/MM/yyyy": "%d/%m/%Y",
    "yyyy-MM-dd": "%Y-%m-%d",
}

TWELVE_HOUR = "12-hour"
TWENTY_FOUR_HOUR = "24-hour"


def format_date(date: dt.date, pattern: str = "MM/dd/yyyy") -> str:
    """Render ``date(2026, 3, 22)`` as ``03/22/2026`` (or per ``pattern``)."""
    return date.strftime(DATE_PATTERNS.get(pattern, DATE_PATTERNS["MM/dd/yyyy"]))


def format_time(time: dt.time, time_format: str = TWELVE_HOUR) -> str:
    """Render ``time(14, 30)`` as ``2:30 PM`` or ``14:30``.

    The 12-hour form has no leading zero on the hour (``3:30 PM``
    not ``03:30 PM``).
    """
    if time_format == TWENTY_FOUR_HOUR:
        return time.strftime("%H:%M")
    hour = time.hour % 12 or 12
    period = "AM" if time.hour < 12 else "PM"
    return f"{hour}:{time.strftime('%M')} {period}"


def format_timestamp(
    moment: dt.datetime, pattern: str = "MM/dd/yyyy", time_format: str = TWELVE_HOUR
) -> str:
    return f"{format_date(moment.date(), pattern)} {format_time(moment.time(), time_format)}"


def resolve_timezone(name: str) -> dt.tzinfo:
    """Resolve a timezone name, falling back to UTC if invalid."""
    try:
        return ZoneInfo(name)
    except Exception:
        logger.warning("Invalid clinic timezone '{}'; defaulting to UTC", name)
        return dt.timezone.utc

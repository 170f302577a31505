"""Wall-clock time parsing and formatting for happy-hour schedules.

Times are carried as datetimes anchored to today's date because the document
store has no time-only type; consumers only read the hour and minute.
"""

import logging
import re
from datetime import date, datetime, time
from typing import Any, Optional

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"([0-1]?[0-9]|2[0-3]):[0-5][0-9]")


def normalize_time(value: Any, today: Optional[date] = None) -> Optional[datetime]:
    """Parse an ``H:MM`` / ``HH:MM`` 24-hour string into a time-of-day, or None.

    Never raises: empty, non-string, malformed or out-of-range input yields None.
    """
    if not value or not isinstance(value, str):
        logger.debug("No time string in %r", value)
        return None
    if not _HHMM.fullmatch(value):
        logger.debug("Rejected time string %r", value)
        return None
    hours, minutes = (int(part) for part in value.split(":"))
    try:
        return datetime.combine(today or date.today(), time(hours, minutes))
    except (ValueError, OverflowError):
        logger.warning("Could not anchor time %r to a date", value, exc_info=True)
        return None


def time_to_hhmm(value: Optional[datetime]) -> str:
    """Editing form of a time-of-day (``17:05``); empty when absent."""
    if value is None:
        return ""
    return value.strftime("%H:%M")


def format_time(value: Optional[datetime]) -> str:
    """Display form of a time-of-day (``5:05 PM``); empty when absent."""
    if value is None:
        return ""
    return value.strftime("%I:%M %p").lstrip("0")


def format_time_range(start: Optional[datetime], end: Optional[datetime]) -> str:
    start_text, end_text = format_time(start), format_time(end)
    if not start_text and not end_text:
        return ""
    return f"{start_text} - {end_text}".strip()

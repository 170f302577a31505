import logging
from typing import Any, Iterable

from happyhour.domain import WeekDay

logger = logging.getLogger(__name__)


def map_weekday(token: Any) -> WeekDay | None:
    """Case-insensitive lookup of an English weekday name; None if unrecognized."""
    try:
        return WeekDay[token.upper()]
    except (KeyError, AttributeError, TypeError):
        logger.debug("Dropping unrecognized weekday token %r", token)
        return None


def map_weekdays(tokens: Iterable[Any] | None) -> list[WeekDay]:
    """Keep the tokens that name a weekday, in input order. Duplicates are kept."""
    days: list[WeekDay] = []
    for token in tokens or []:
        day = map_weekday(token)
        if day is not None:
            days.append(day)
    return days

"""Raw records as produced by source adapters."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

logger = logging.getLogger(__name__)

ALL_DAY_START = time(9, 0)
ALL_DAY_END = time(17, 0)


class SourceKind(Enum):
    """Kind of external system a record came from."""

    CALENDAR = "calendar"
    TASK_CARD = "task_card"


@dataclass(frozen=True)
class CalendarRecord:
    """A calendar event as returned by a calendar strategy.

    start and end are raw timestamp strings: an ISO date for all-day entries,
    an ISO datetime otherwise.
    """

    id: str
    title: str
    description: str | None
    start: str | None
    end: str | None
    calendar_name: str = ""
    category: str | None = None

    @property
    def all_day(self) -> bool:
        return bool(self.start) and ":" not in self.start


@dataclass(frozen=True)
class CardRecord:
    """A task-tracker card as returned by a card strategy."""

    id: str
    title: str
    description: str | None
    due: str | None
    board_name: str
    list_name: str | None = None
    closed: bool = False
    category: str | None = None


RawRecord = CalendarRecord | CardRecord


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime string, returning None if malformed."""
    if not value or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable timestamp: {value!r}")
        return None


def parse_day(value: str | None, at: time) -> datetime | None:
    """Parse a date-only string and place it at the given time of day."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return datetime.combine(parsed.date(), at, tzinfo=parsed.tzinfo)


def to_date(value: datetime | date | None) -> date | None:
    """Reduce a datetime to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value

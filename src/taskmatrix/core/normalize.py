"""Record normalization - maps raw source records onto one task schema.

Pure functions - no I/O.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from .records import (
    ALL_DAY_END,
    ALL_DAY_START,
    CalendarRecord,
    CardRecord,
    RawRecord,
    SourceKind,
    parse_day,
    parse_timestamp,
    to_date,
)
from .tags import find_tag
from .urgency import infer_urgency

CALENDAR_SOURCE = "Calendar"
CARD_SOURCE = "Trello"
CALENDAR_STATUS = "Scheduled"
CARD_STATUS = "Open"

DEFAULT_IMPORTANCE = 5
DEFAULT_ENJOYMENT = 5
DEFAULT_CARD_HOURS = 2.0


@dataclass(frozen=True)
class NormalizedTask:
    """A task in the canonical schema shared by all sources."""

    source: str
    title: str
    urgency: int | None
    importance: int | None
    enjoyment: int | None
    duration_hours: float | None
    due_or_end: datetime | None
    status: str
    project_context: str
    description: str
    category: str | None = None


def matches_keywords(record: CalendarRecord, keyword_filter: Iterable[str]) -> bool:
    """Case-sensitive substring match of any keyword in title or description."""
    texts = (record.title or "", record.description or "")
    return any(keyword and keyword in text for keyword in keyword_filter for text in texts)


def event_bounds(record: CalendarRecord) -> tuple[datetime | None, datetime | None]:
    """Start/end datetimes; all-day entries span 09:00 to 17:00."""
    if record.all_day:
        return parse_day(record.start, ALL_DAY_START), parse_day(record.end or record.start, ALL_DAY_END)
    return parse_timestamp(record.start), parse_timestamp(record.end)


def event_hours(start: datetime | None, end: datetime | None) -> float | None:
    """Wall-clock duration in hours, or None when it cannot be computed."""
    if start is None or end is None:
        return None
    try:
        return (end - start).total_seconds() / 3600
    except TypeError:
        # naive/aware mismatch
        return None


def normalize_calendar(
    record: CalendarRecord,
    keyword_filter: Iterable[str],
) -> NormalizedTask | None:
    """Normalize a calendar event; None if it is neither tagged nor keyword-matched."""
    tag = find_tag(record.description, record.title)
    if not tag.has_tag and not matches_keywords(record, keyword_filter):
        return None

    start, end = event_bounds(record)
    duration = float(tag.duration) if tag.duration is not None else event_hours(start, end)
    calendar_name = record.calendar_name

    return NormalizedTask(
        source=calendar_name or CALENDAR_SOURCE,
        title=record.title,
        urgency=tag.urgency,
        importance=tag.importance,
        enjoyment=tag.enjoyment,
        duration_hours=duration,
        due_or_end=end,
        status=CALENDAR_STATUS,
        project_context=f"{calendar_name} Calendar" if calendar_name else CALENDAR_SOURCE,
        description=record.description or "",
        category=record.category,
    )


def normalize_card(record: CardRecord, today: date) -> NormalizedTask | None:
    """Normalize a card, inferring urgency from its due date when untagged."""
    tag = find_tag(record.description, record.title)
    due = parse_timestamp(record.due)

    urgency = tag.urgency
    if urgency is None:
        urgency = infer_urgency(to_date(due), today)

    if not tag.has_tag and urgency is None:
        return None

    return NormalizedTask(
        source=CARD_SOURCE,
        title=record.title,
        urgency=urgency,
        importance=tag.importance if tag.importance is not None else DEFAULT_IMPORTANCE,
        enjoyment=tag.enjoyment if tag.enjoyment is not None else DEFAULT_ENJOYMENT,
        duration_hours=float(tag.duration) if tag.duration is not None else DEFAULT_CARD_HOURS,
        due_or_end=due,
        status=record.list_name or CARD_STATUS,
        project_context=record.board_name,
        description=record.description or "",
        category=record.category,
    )


def normalize(
    raw: RawRecord,
    kind: SourceKind,
    keyword_filter: Iterable[str],
    today: date,
) -> NormalizedTask | None:
    """Normalize one raw record of the given kind. None means the record is dropped."""
    if kind is SourceKind.CALENDAR:
        if not isinstance(raw, CalendarRecord):
            raise TypeError(f"Expected CalendarRecord, got {type(raw).__name__}")
        return normalize_calendar(raw, keyword_filter)

    if not isinstance(raw, CardRecord):
        raise TypeError(f"Expected CardRecord, got {type(raw).__name__}")
    return normalize_card(raw, today)


def normalize_all(
    records: Iterable[RawRecord],
    kind: SourceKind,
    keyword_filter: Iterable[str],
    today: date,
) -> list[NormalizedTask]:
    """Normalize a batch, keeping input order and dropping filtered records."""
    keywords = tuple(keyword_filter)
    tasks = []
    for raw in records:
        task = normalize(raw, kind, keywords, today)
        if task is not None:
            tasks.append(task)
    return tasks

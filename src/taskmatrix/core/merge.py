"""Merging and Eisenhower classification - no I/O dependencies."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .normalize import NormalizedTask

SCORE_MIN = 0
SCORE_MAX = 10
MIN_DURATION_HOURS = 0.1
HIGH_THRESHOLD = 5


class Quadrant(Enum):
    """Eisenhower quadrant, in display order."""

    DO_FIRST = "Do First"  # Urgent + Important
    SCHEDULE = "Schedule"  # Important, not urgent
    DELEGATE = "Delegate"  # Urgent, not important
    ELIMINATE = "Eliminate"  # Neither


class EnjoymentBucket(Enum):
    """Enjoyment level bucket."""

    HIGH = "High"  # 7-10
    MEDIUM = "Medium"  # 4-6
    LOW = "Low"  # 0-3


@dataclass(frozen=True)
class MergedTask:
    """A validated task with its derived classifications."""

    source: str
    title: str
    urgency: int
    importance: int
    enjoyment: int
    duration_hours: float
    due_or_end: datetime | None
    status: str
    project_context: str
    description: str
    category: str | None
    quadrant: Quadrant
    enjoyment_bucket: EnjoymentBucket


def clamp(value: int, low: int = SCORE_MIN, high: int = SCORE_MAX) -> int:
    return max(low, min(high, value))


def classify_quadrant(urgency: int, importance: int) -> Quadrant:
    """
    Eisenhower quadrant from urgency and importance (>= 5 counts as high).

    Do First: Urgent + Important
    Schedule: Not Urgent + Important
    Delegate: Urgent + Not Important
    Eliminate: Not Urgent + Not Important
    """
    urgent = urgency >= HIGH_THRESHOLD
    important = importance >= HIGH_THRESHOLD

    if urgent and important:
        return Quadrant.DO_FIRST
    elif not urgent and important:
        return Quadrant.SCHEDULE
    elif urgent and not important:
        return Quadrant.DELEGATE
    else:
        return Quadrant.ELIMINATE


def classify_enjoyment(enjoyment: int) -> EnjoymentBucket:
    if enjoyment >= 7:
        return EnjoymentBucket.HIGH
    if enjoyment >= 4:
        return EnjoymentBucket.MEDIUM
    return EnjoymentBucket.LOW


def is_complete(task: NormalizedTask) -> bool:
    """True when all four numeric fields resolved to a value."""
    return None not in (task.urgency, task.importance, task.enjoyment, task.duration_hours)


def to_merged(task: NormalizedTask) -> MergedTask:
    """Clamp a complete task into range and attach its classifications."""
    urgency = clamp(task.urgency)
    importance = clamp(task.importance)
    enjoyment = clamp(task.enjoyment)

    return MergedTask(
        source=task.source,
        title=task.title,
        urgency=urgency,
        importance=importance,
        enjoyment=enjoyment,
        duration_hours=max(MIN_DURATION_HOURS, task.duration_hours),
        due_or_end=task.due_or_end,
        status=task.status,
        project_context=task.project_context,
        description=task.description,
        category=task.category,
        quadrant=classify_quadrant(urgency, importance),
        enjoyment_bucket=classify_enjoyment(enjoyment),
    )


def merge(tables: Iterable[Iterable[NormalizedTask]]) -> list[MergedTask]:
    """
    Union normalized tables into one merged table.

    Order within each table is preserved. Rows missing any numeric field are
    dropped. Pure function - no I/O.
    """
    return [to_merged(task) for table in tables for task in table if is_complete(task)]

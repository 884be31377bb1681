"""Functional core - pure business logic with no I/O."""

from .tags import Tag, parse_tag, find_tag
from .urgency import infer_urgency
from .records import CalendarRecord, CardRecord, RawRecord, SourceKind
from .normalize import NormalizedTask, normalize, normalize_all
from .merge import (
    EnjoymentBucket,
    MergedTask,
    Quadrant,
    classify_enjoyment,
    classify_quadrant,
    merge,
)
from .summary import NO_DATA, Summary, summarize

__all__ = [
    # Tags
    "Tag",
    "parse_tag",
    "find_tag",
    "infer_urgency",
    # Records
    "CalendarRecord",
    "CardRecord",
    "RawRecord",
    "SourceKind",
    # Normalization
    "NormalizedTask",
    "normalize",
    "normalize_all",
    # Merge
    "MergedTask",
    "Quadrant",
    "EnjoymentBucket",
    "classify_quadrant",
    "classify_enjoyment",
    "merge",
    # Summary
    "Summary",
    "NO_DATA",
    "summarize",
]

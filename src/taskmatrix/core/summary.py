"""Summary statistics over the merged task table."""

from dataclasses import dataclass, field
from statistics import fmean

from .merge import MergedTask, Quadrant


@dataclass(frozen=True)
class OverallStats:
    count: int
    total_hours: float
    avg_urgency: float
    avg_importance: float
    avg_enjoyment: float


@dataclass(frozen=True)
class QuadrantStats:
    quadrant: Quadrant
    count: int
    avg_duration: float
    total_duration: float
    avg_enjoyment: float


@dataclass(frozen=True)
class SourceStats:
    source: str
    count: int
    avg_urgency: float
    avg_importance: float


@dataclass(frozen=True)
class Summary:
    """Grouped statistics. overall is None when there was no data."""

    overall: OverallStats | None
    by_quadrant: list[QuadrantStats] = field(default_factory=list)
    by_source: list[SourceStats] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.overall is None


NO_DATA = Summary(overall=None)


def _mean(values: list[float]) -> float:
    return round(fmean(values), 1)


def summarize(tasks: list[MergedTask]) -> Summary:
    """
    Compute overall, per-quadrant and per-source statistics.

    Quadrants and sources without tasks are omitted. Pure function - no I/O.
    """
    if not tasks:
        return NO_DATA

    overall = OverallStats(
        count=len(tasks),
        total_hours=round(sum(t.duration_hours for t in tasks), 1),
        avg_urgency=_mean([t.urgency for t in tasks]),
        avg_importance=_mean([t.importance for t in tasks]),
        avg_enjoyment=_mean([t.enjoyment for t in tasks]),
    )

    by_quadrant = []
    for quadrant in Quadrant:
        group = [t for t in tasks if t.quadrant is quadrant]
        if not group:
            continue
        durations = [t.duration_hours for t in group]
        by_quadrant.append(
            QuadrantStats(
                quadrant=quadrant,
                count=len(group),
                avg_duration=_mean(durations),
                total_duration=round(sum(durations), 1),
                avg_enjoyment=_mean([t.enjoyment for t in group]),
            )
        )

    by_source = []
    for source in sorted({t.source for t in tasks}):
        group = [t for t in tasks if t.source == source]
        by_source.append(
            SourceStats(
                source=source,
                count=len(group),
                avg_urgency=_mean([t.urgency for t in group]),
                avg_importance=_mean([t.importance for t in group]),
            )
        )

    return Summary(overall=overall, by_quadrant=by_quadrant, by_source=by_source)

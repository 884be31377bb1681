"""Tests for summary statistics."""

from taskmatrix.core.merge import EnjoymentBucket, MergedTask, Quadrant, classify_enjoyment, classify_quadrant
from taskmatrix.core.summary import NO_DATA, summarize


def make_merged(source="Trello", urgency=5, importance=5, enjoyment=5, duration=1.0):
    return MergedTask(
        source=source,
        title="Task",
        urgency=urgency,
        importance=importance,
        enjoyment=enjoyment,
        duration_hours=duration,
        due_or_end=None,
        status="Open",
        project_context="Board",
        description="",
        category=None,
        quadrant=classify_quadrant(urgency, importance),
        enjoyment_bucket=classify_enjoyment(enjoyment),
    )


class TestSummarize:
    def test_no_data(self):
        summary = summarize([])
        assert summary is NO_DATA
        assert summary.is_empty
        assert summary.by_quadrant == []
        assert summary.by_source == []

    def test_overall(self):
        tasks = [
            make_merged(urgency=8, importance=9, enjoyment=6, duration=2.0),
            make_merged(urgency=2, importance=8, enjoyment=3, duration=1.5),
            make_merged(urgency=5, importance=2, enjoyment=9, duration=0.5),
        ]
        overall = summarize(tasks).overall

        assert overall.count == 3
        assert overall.total_hours == 4.0
        assert overall.avg_urgency == 5.0
        assert overall.avg_importance == 6.3
        assert overall.avg_enjoyment == 6.0

    def test_by_quadrant_omits_empty_groups(self):
        tasks = [
            make_merged(urgency=2, importance=8, duration=3.0, enjoyment=8),
            make_merged(urgency=8, importance=9, duration=1.0, enjoyment=4),
            make_merged(urgency=9, importance=9, duration=2.0, enjoyment=5),
        ]
        rows = summarize(tasks).by_quadrant

        assert [r.quadrant for r in rows] == [Quadrant.DO_FIRST, Quadrant.SCHEDULE]
        do_first = rows[0]
        assert do_first.count == 2
        assert do_first.avg_duration == 1.5
        assert do_first.total_duration == 3.0
        assert do_first.avg_enjoyment == 4.5

    def test_by_source(self):
        tasks = [
            make_merged(source="Trello", urgency=10, importance=5),
            make_merged(source="Admin", urgency=4, importance=7),
            make_merged(source="Trello", urgency=7, importance=6),
        ]
        rows = summarize(tasks).by_source

        assert [r.source for r in rows] == ["Admin", "Trello"]
        trello = rows[1]
        assert trello.count == 2
        assert trello.avg_urgency == 8.5
        assert trello.avg_importance == 5.5

    def test_counts_add_up(self):
        tasks = [make_merged(urgency=u, importance=10 - u) for u in range(11)]
        summary = summarize(tasks)
        assert sum(r.count for r in summary.by_quadrant) == summary.overall.count
        assert sum(r.count for r in summary.by_source) == summary.overall.count

    def test_single_task(self):
        task = make_merged(enjoyment=9)
        assert task.enjoyment_bucket is EnjoymentBucket.HIGH
        assert summarize([task]).overall.avg_enjoyment == 9.0

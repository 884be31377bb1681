"""Tests for merging and Eisenhower classification."""

import pytest

from taskmatrix.core.merge import (
    EnjoymentBucket,
    Quadrant,
    classify_enjoyment,
    classify_quadrant,
    merge,
)
from taskmatrix.core.normalize import NormalizedTask


def make_task(title="Task", urgency=5, importance=5, enjoyment=5, duration=1.0, source="Trello"):
    return NormalizedTask(
        source=source,
        title=title,
        urgency=urgency,
        importance=importance,
        enjoyment=enjoyment,
        duration_hours=duration,
        due_or_end=None,
        status="Open",
        project_context="Board",
        description="",
    )


class TestClassifyQuadrant:
    @pytest.mark.parametrize(
        "urgency,importance,expected",
        [
            (8, 9, Quadrant.DO_FIRST),
            (2, 8, Quadrant.SCHEDULE),
            (8, 2, Quadrant.DELEGATE),
            (2, 2, Quadrant.ELIMINATE),
            (5, 5, Quadrant.DO_FIRST),
            (4, 5, Quadrant.SCHEDULE),
            (5, 4, Quadrant.DELEGATE),
            (4, 4, Quadrant.ELIMINATE),
        ],
    )
    def test_quadrants(self, urgency, importance, expected):
        assert classify_quadrant(urgency, importance) is expected


class TestClassifyEnjoyment:
    @pytest.mark.parametrize(
        "enjoyment,expected",
        [
            (10, EnjoymentBucket.HIGH),
            (7, EnjoymentBucket.HIGH),
            (6, EnjoymentBucket.MEDIUM),
            (4, EnjoymentBucket.MEDIUM),
            (3, EnjoymentBucket.LOW),
            (0, EnjoymentBucket.LOW),
        ],
    )
    def test_buckets(self, enjoyment, expected):
        assert classify_enjoyment(enjoyment) is expected


class TestMerge:
    def test_unions_tables_in_order(self):
        calendar = [make_task("a"), make_task("b")]
        cards = [make_task("c")]
        assert [t.title for t in merge([calendar, cards])] == ["a", "b", "c"]

    def test_drops_incomplete_rows(self):
        tables = [
            [
                make_task("no urgency", urgency=None),
                make_task("no importance", importance=None),
                make_task("no enjoyment", enjoyment=None),
                make_task("no duration", duration=None),
                make_task("complete"),
            ]
        ]
        merged = merge(tables)
        assert [t.title for t in merged] == ["complete"]

    def test_clamps_scores(self):
        (task,) = merge([[make_task(urgency=12, importance=-3, enjoyment=11)]])
        assert task.urgency == 10
        assert task.importance == 0
        assert task.enjoyment == 10
        assert task.quadrant is Quadrant.DELEGATE
        assert task.enjoyment_bucket is EnjoymentBucket.HIGH

    def test_zero_duration_floor(self):
        (task,) = merge([[make_task(duration=0.0)]])
        assert task.duration_hours == 0.1

    def test_negative_duration_floor(self):
        (task,) = merge([[make_task(duration=-2.0)]])
        assert task.duration_hours == 0.1

    def test_classifies(self):
        (task,) = merge([[make_task(urgency=8, importance=9, enjoyment=6)]])
        assert task.quadrant is Quadrant.DO_FIRST
        assert task.enjoyment_bucket is EnjoymentBucket.MEDIUM

    def test_all_scores_in_range(self):
        tables = [[make_task(urgency=u, importance=20 - u, enjoyment=u - 5) for u in range(-3, 25)]]
        for task in merge(tables):
            assert 0 <= task.urgency <= 10
            assert 0 <= task.importance <= 10
            assert 0 <= task.enjoyment <= 10
            assert task.duration_hours >= 0.1

    def test_empty(self):
        assert merge([]) == []
        assert merge([[], []]) == []

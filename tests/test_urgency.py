"""Tests for due-date urgency inference."""

from datetime import date, timedelta

import pytest

from taskmatrix.core.urgency import infer_urgency


@pytest.fixture
def today():
    return date(2025, 9, 3)


class TestInferUrgency:
    def test_no_due_date(self, today):
        assert infer_urgency(None, today) is None

    @pytest.mark.parametrize(
        "days,expected",
        [
            (-5, 10),
            (0, 10),
            (1, 9),
            (2, 7),
            (3, 7),
            (4, 5),
            (7, 5),
            (8, 3),
            (14, 3),
            (15, 1),
            (90, 1),
        ],
    )
    def test_buckets(self, today, days, expected):
        assert infer_urgency(today + timedelta(days=days), today) == expected

    def test_monotonically_non_increasing(self, today):
        values = [infer_urgency(today + timedelta(days=d), today) for d in range(-10, 40)]
        assert all(a >= b for a, b in zip(values, values[1:]))

"""Tests for tag parsing."""

import pytest

from taskmatrix.core.tags import Tag, find_tag, parse_tag


class TestParseTag:
    def test_parses_tag_in_text(self):
        tag = parse_tag("Plan review #U7I8E6D2h")
        assert tag == Tag(urgency=7, importance=8, enjoyment=6, duration=2, has_tag=True)

    def test_multi_digit_values(self):
        tag = parse_tag("#U12I0E10D24h")
        assert (tag.urgency, tag.importance, tag.enjoyment, tag.duration) == (12, 0, 10, 24)
        assert tag.has_tag is True

    def test_first_match_wins(self):
        tag = parse_tag("#U1I2E3D4h then #U9I9E9D9h")
        assert tag.urgency == 1
        assert tag.duration == 4

    @pytest.mark.parametrize(
        "text",
        [
            None,
            "",
            "Weekly team standup",
            "#u7i8e6d2h",
            "#U7I8E6D2H",
            "#U7I8E6D2",
            "U7I8E6D2h",
            "#U7 I8 E6 D2h",
            "#UxI8E6D2h",
        ],
    )
    def test_no_tag(self, text):
        tag = parse_tag(text)
        assert tag.has_tag is False
        assert tag.urgency is None
        assert tag.importance is None
        assert tag.enjoyment is None
        assert tag.duration is None

    def test_no_range_validation(self):
        tag = parse_tag("#U99I15E0D0h")
        assert tag.urgency == 99
        assert tag.importance == 15


class TestFindTag:
    def test_prefers_first_tagged_text(self):
        tag = find_tag("desc #U1I1E1D1h", "title #U9I9E9D9h")
        assert tag.urgency == 1

    def test_falls_back_to_later_text(self):
        tag = find_tag("", "Admin Review #U8I7E4D1h")
        assert tag.has_tag is True
        assert tag.urgency == 8

    def test_none_tagged(self):
        assert find_tag(None, "Lunch").has_tag is False

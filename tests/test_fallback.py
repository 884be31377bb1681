"""Tests for fallback acquisition."""

from unittest.mock import MagicMock

from taskmatrix.core.records import CardRecord
from taskmatrix.fallback import acquire
from taskmatrix.ports import AcquisitionError


def make_records(n, prefix="card"):
    return [CardRecord(id=f"{prefix}{i}", title=f"{prefix} {i}", description="", due=None, board_name="B") for i in range(n)]


def make_strategy(name, records=None, error=None):
    strategy = MagicMock()
    strategy.name = name
    if error is not None:
        strategy.fetch.side_effect = error
    else:
        strategy.fetch.return_value = records or []
    return strategy


class TestAcquire:
    def test_first_success_wins(self):
        a = make_strategy("a", error=AcquisitionError("no credentials"))
        b = make_strategy("b", records=make_records(3, "b"))
        c = make_strategy("c", records=make_records(5, "c"))

        result = acquire("trello", [a, b, c])

        assert len(result.records) == 3
        assert result.strategy == "b"
        assert not result.exhausted
        c.fetch.assert_not_called()

    def test_empty_result_falls_through(self):
        a = make_strategy("a", records=[])
        b = make_strategy("b", records=make_records(2))

        result = acquire("trello", [a, b])

        assert result.strategy == "b"
        assert [x.strategy for x in result.attempts] == ["a", "b"]
        assert result.attempts[0].succeeded is False
        assert result.attempts[0].error is None
        assert result.attempts[1].succeeded is True

    def test_unexpected_exception_falls_through(self):
        a = make_strategy("a", error=RuntimeError("boom"))
        b = make_strategy("b", records=make_records(1))

        result = acquire("calendar", [a, b])

        assert result.strategy == "b"
        assert result.attempts[0].error == "boom"

    def test_exception_without_message(self):
        a = make_strategy("a", error=KeyError())
        result = acquire("calendar", [a])
        assert result.attempts[0].error == "KeyError"

    def test_all_fail(self):
        a = make_strategy("a", error=AcquisitionError("missing file"))
        b = make_strategy("b", records=[])

        result = acquire("calendar", [a, b])

        assert result.records == []
        assert result.strategy is None
        assert result.exhausted
        assert len(result.attempts) == 2

    def test_no_strategies(self):
        result = acquire("calendar", [])
        assert result.records == []
        assert result.exhausted
        assert result.attempts == []

    def test_records_come_from_single_strategy(self):
        a = make_strategy("a", records=make_records(2, "a"))
        b = make_strategy("b", records=make_records(2, "b"))

        result = acquire("trello", [a, b])

        assert all(r.id.startswith("a") for r in result.records)
        b.fetch.assert_not_called()

    def test_logs_failures(self, caplog):
        a = make_strategy("a", error=AcquisitionError("token expired"))
        with caplog.at_level("WARNING", logger="taskmatrix.fallback"):
            acquire("Work calendar", [a])
        assert "token expired" in caplog.text
        assert "exhausted" in caplog.text

"""Mock adapters - deterministic sample data for demos and dry runs."""

from datetime import date, datetime, time, timedelta

from taskmatrix.core.records import CalendarRecord, CardRecord

MOCK_EVENTS = [
    # title, description, day offset, start hour, end hour
    ("Project Planning #U7I8E6D2h", "Strategic planning session #U7I8E6D2h", -2, 9, 11),
    ("Team Meeting", "Weekly standup meeting", -2, 14, 15),
    ("Research Task #U4I9E8D3h", "Literature review #U4I9E8D3h", -1, 10, 13),
    ("Admin Review #U8I7E4D1h", "Weekly admin tasks #U8I7E4D1h", 0, 11, 12),
    ("Client Call #U6I5E7D2h", "Client check-in #U6I5E7D2h", 1, 15, 17),
]

MOCK_CARDS = [
    # title, description, due day offset, list
    ("Submit expense report", "", 0, "To Do"),
    ("Write methods section", "#U5I9E6D8h", 6, "Doing"),
    ("Order field supplies", "", 10, "To Do"),
    ("Tidy shared drive", "#U2I2E3D1h", None, "Backlog"),
]


class MockCalendarAdapter:
    """Implements RecordSource with fixed sample events around today."""

    name = "mock-calendar"

    def __init__(self, today: date, calendar_name: str = "Mock", category: str | None = None):
        self.today = today
        self.calendar_name = calendar_name
        self.category = category

    def fetch(self) -> list[CalendarRecord]:
        records = []
        for index, (title, description, offset, start_hour, end_hour) in enumerate(MOCK_EVENTS, start=1):
            day = self.today + timedelta(days=offset)
            records.append(
                CalendarRecord(
                    id=f"mock{index}",
                    title=title,
                    description=description,
                    start=datetime.combine(day, time(start_hour)).isoformat(),
                    end=datetime.combine(day, time(end_hour)).isoformat(),
                    calendar_name=self.calendar_name,
                    category=self.category,
                )
            )
        return records


class MockTrelloAdapter:
    """Implements RecordSource with fixed sample cards around today."""

    name = "mock-trello"

    def __init__(self, today: date, board_name: str = "Mock Board", category: str | None = None):
        self.today = today
        self.board_name = board_name
        self.category = category

    def fetch(self) -> list[CardRecord]:
        return [
            CardRecord(
                id=f"mockcard{index}",
                title=title,
                description=description,
                due=(self.today + timedelta(days=offset)).isoformat() if offset is not None else None,
                board_name=self.board_name,
                list_name=list_name,
                category=self.category,
            )
            for index, (title, description, offset, list_name) in enumerate(MOCK_CARDS, start=1)
        ]

"""Adapters - I/O implementations of ports."""

from .google_calendar import GoogleCalendarAdapter
from .trello_api import TrelloAdapter
from .csv_files import CalendarCsvAdapter, ManualCalendarAdapter, ManualTrelloAdapter
from .mock_data import MockCalendarAdapter, MockTrelloAdapter

__all__ = [
    "GoogleCalendarAdapter",
    "TrelloAdapter",
    "CalendarCsvAdapter",
    "ManualCalendarAdapter",
    "ManualTrelloAdapter",
    "MockCalendarAdapter",
    "MockTrelloAdapter",
]

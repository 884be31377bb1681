"""Local CSV file adapters - calendar exports and manual templates."""

import csv
import logging
from datetime import date, datetime, timedelta
from pathlib import Path

from taskmatrix.config import CalendarRef
from taskmatrix.core.records import CalendarRecord, CardRecord, parse_timestamp
from taskmatrix.ports import AcquisitionError

logger = logging.getLogger(__name__)

EXPORT_DATE_FORMATS = ["%m/%d/%Y", "%Y-%m-%d"]
EXPORT_TIME_FORMATS = ["%I:%M %p", "%I:%M:%S %p", "%H:%M", "%H:%M:%S"]
MANUAL_TIMESTAMP_FORMATS = ["%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S"]

MANUAL_CALENDAR_FIELDS = [
    "calendar_name",
    "summary",
    "description",
    "start_date",
    "start_time",
    "end_date",
    "end_time",
]
MANUAL_TRELLO_FIELDS = ["board_name", "card_name", "description", "due_date", "list_name", "closed"]

TEMPLATE_EVENTS = [
    ("Admin", "Project Planning #U7I8E6D2h", "Strategic planning session #U7I8E6D2h", 0, "09:00", "11:00"),
    ("Admin", "Team Meeting", "Weekly team standup", 0, "14:00", "15:00"),
    ("Marine", "Research Review #U4I9E8D3h", "Literature review and analysis #U4I9E8D3h", 1, "10:00", "13:00"),
    ("Marine", "Data Analysis #U6I7E9D4h", "Statistical analysis of survey data #U6I7E9D4h", 2, "13:00", "17:00"),
    ("Admin", "Admin Tasks #U8I7E4D1h", "Weekly administrative tasks #U8I7E4D1h", 3, "11:00", "12:00"),
]

TEMPLATE_CARDS = [
    ("MarSci Projects", "Draft grant report", "Annual summary #U6I9E4D6h", 5, "Doing"),
    ("MarSci Projects", "Clean sensor data", "", 2, "To Do"),
    ("Meg & Si Todo", "Book boat service", "#U3I4E2D1h", None, "To Do"),
]


def _read_rows(path: Path) -> list[dict]:
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return list(reader)


def _join_export_timestamp(day: str | None, clock: str | None) -> str | None:
    """Combine export date/time columns into an ISO string.

    Values that do not parse are passed through unchanged so the normalizer
    records a null timestamp instead of this adapter dropping the row.
    """
    day = (day or "").strip()
    clock = (clock or "").strip()
    if not day:
        return None

    for date_format in EXPORT_DATE_FORMATS:
        try:
            parsed_day = datetime.strptime(day, date_format).date()
            break
        except ValueError:
            continue
    else:
        return f"{day} {clock}".strip()

    if not clock:
        return parsed_day.isoformat()

    for time_format in EXPORT_TIME_FORMATS:
        try:
            parsed_time = datetime.strptime(clock, time_format).time()
            return datetime.combine(parsed_day, parsed_time).isoformat()
        except ValueError:
            continue
    return f"{day} {clock}"


def _join_manual_timestamp(day: str | None, clock: str | None) -> str | None:
    day = (day or "").strip()
    clock = (clock or "").strip()
    if not day:
        return None
    if not clock:
        return day

    for timestamp_format in MANUAL_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(f"{day} {clock}", timestamp_format).isoformat()
        except ValueError:
            continue
    return f"{day}T{clock}"


class CalendarCsvAdapter:
    """
    Reads calendars exported from Google Calendar as CSV.

    Implements RecordSource. One file per calendar, named
    ``<calendar name>_calendar.csv`` (lowercased) in data_dir, with columns
    Subject, Start Date, Start Time, End Date, End Time, Description.
    """

    name = "csv-export"

    def __init__(
        self,
        data_dir: Path | str,
        calendars: list[CalendarRef],
        today: date,
        category: str | None = None,
        days_back: int = 30,
        days_forward: int = 7,
    ):
        self.data_dir = Path(data_dir).expanduser()
        self.calendars = calendars
        self.today = today
        self.category = category
        self.days_back = days_back
        self.days_forward = days_forward

    def path_for(self, calendar: CalendarRef) -> Path:
        return self.data_dir / f"{calendar.name.lower()}_calendar.csv"

    def _in_window(self, start: str | None) -> bool:
        """Rows whose start cannot be parsed are kept."""
        parsed = parse_timestamp(start)
        if parsed is None:
            return True
        earliest = self.today - timedelta(days=self.days_back)
        latest = self.today + timedelta(days=self.days_forward)
        return earliest <= parsed.date() <= latest

    def fetch(self) -> list[CalendarRecord]:
        records = []
        found = False
        for calendar in self.calendars:
            path = self.path_for(calendar)
            if not path.exists():
                logger.debug(f"No CSV export for {calendar.name} at {path}")
                continue
            found = True

            rows = _read_rows(path)
            for index, row in enumerate(rows, start=1):
                start = _join_export_timestamp(row.get("Start Date"), row.get("Start Time"))
                if not self._in_window(start):
                    continue
                records.append(
                    CalendarRecord(
                        id=f"{calendar.name.lower()}_{index}",
                        title=row.get("Subject") or "",
                        description=row.get("Description") or "",
                        start=start,
                        end=_join_export_timestamp(row.get("End Date"), row.get("End Time")),
                        calendar_name=calendar.name,
                        category=self.category,
                    )
                )
            logger.info(f"{calendar.name}: read {len(rows)} rows from {path.name}")

        if not found:
            expected = ", ".join(str(self.path_for(c)) for c in self.calendars)
            raise AcquisitionError(f"No calendar CSV files found. Expected: {expected}")
        return records


class ManualCalendarAdapter:
    """
    Reads the hand-maintained calendar template.

    Implements RecordSource. Rows are restricted to calendar_names when given.
    """

    name = "manual-template"

    def __init__(
        self,
        path: Path | str,
        calendar_names: list[str] | None = None,
        category: str | None = None,
    ):
        self.path = Path(path).expanduser()
        self.calendar_names = calendar_names
        self.category = category

    def fetch(self) -> list[CalendarRecord]:
        if not self.path.exists():
            raise AcquisitionError(f"Template file not found: {self.path} - run 'taskmatrix template'")

        records = []
        for index, row in enumerate(_read_rows(self.path), start=1):
            calendar_name = (row.get("calendar_name") or "").strip()
            if self.calendar_names is not None and calendar_name not in self.calendar_names:
                continue
            records.append(
                CalendarRecord(
                    id=f"manual_{index}",
                    title=row.get("summary") or "",
                    description=row.get("description") or "",
                    start=_join_manual_timestamp(row.get("start_date"), row.get("start_time")),
                    end=_join_manual_timestamp(row.get("end_date"), row.get("end_time")),
                    calendar_name=calendar_name,
                    category=self.category,
                )
            )
        return records


class ManualTrelloAdapter:
    """
    Reads hand-maintained Trello cards.

    Implements RecordSource. Rows are restricted to board_names when given.
    """

    name = "manual-trello"

    def __init__(
        self,
        path: Path | str,
        board_names: list[str] | None = None,
        category: str | None = None,
        include_closed: bool = False,
    ):
        self.path = Path(path).expanduser()
        self.board_names = board_names
        self.category = category
        self.include_closed = include_closed

    def fetch(self) -> list[CardRecord]:
        if not self.path.exists():
            raise AcquisitionError(f"Manual Trello file not found: {self.path}")

        records = []
        for index, row in enumerate(_read_rows(self.path), start=1):
            board_name = (row.get("board_name") or "").strip()
            if self.board_names is not None and board_name not in self.board_names:
                continue
            closed = (row.get("closed") or "").strip().lower() in ("true", "1", "yes")
            if closed and not self.include_closed:
                continue
            records.append(
                CardRecord(
                    id=f"manual_card_{index}",
                    title=row.get("card_name") or "",
                    description=row.get("description") or "",
                    due=(row.get("due_date") or "").strip() or None,
                    board_name=board_name,
                    list_name=(row.get("list_name") or "").strip() or None,
                    closed=closed,
                    category=self.category,
                )
            )
        return records


def write_manual_template(path: Path | str, today: date) -> Path:
    """Write a sample manual calendar file, dated from today."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=MANUAL_CALENDAR_FIELDS)
        writer.writeheader()
        for calendar_name, summary, description, offset, start, end in TEMPLATE_EVENTS:
            day = (today + timedelta(days=offset)).isoformat()
            writer.writerow(
                {
                    "calendar_name": calendar_name,
                    "summary": summary,
                    "description": description,
                    "start_date": day,
                    "start_time": start,
                    "end_date": day,
                    "end_time": end,
                }
            )
    return path


def write_manual_trello_template(path: Path | str, today: date) -> Path:
    """Write a sample manual Trello file, with due dates relative to today."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=MANUAL_TRELLO_FIELDS)
        writer.writeheader()
        for board_name, card_name, description, offset, list_name in TEMPLATE_CARDS:
            due = (today + timedelta(days=offset)).isoformat() if offset is not None else ""
            writer.writerow(
                {
                    "board_name": board_name,
                    "card_name": card_name,
                    "description": description,
                    "due_date": due,
                    "list_name": list_name,
                    "closed": "false",
                }
            )
    return path

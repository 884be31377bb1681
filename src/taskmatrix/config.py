"""Configuration management for taskmatrix."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TASKMATRIX_HOME = Path(os.environ.get("TASKMATRIX_HOME", Path.home() / "taskmatrix"))
CONFIG_FILE = TASKMATRIX_HOME / "config" / "taskmatrix.conf"
DATA_DIR = TASKMATRIX_HOME / "data"
SECRETS_DIR = TASKMATRIX_HOME / ".secrets"

DEFAULT_KEYWORDS = [
    "Admin",
    "admin",
    "Marine",
    "marine",
    "management",
    "planning",
    "review",
    "research",
]


@dataclass
class CalendarRef:
    """A Google calendar to read, with its display name."""

    id: str
    name: str


@dataclass
class Category:
    """A Work/Home grouping of calendars and Trello boards."""

    name: str | None
    calendars: list[CalendarRef] = field(default_factory=list)
    boards: list[str] | None = None


@dataclass
class Config:
    """taskmatrix configuration."""

    work_calendars: list[CalendarRef] = field(default_factory=list)
    home_calendars: list[CalendarRef] = field(default_factory=list)
    work_boards: list[str] = field(default_factory=list)
    home_boards: list[str] = field(default_factory=list)
    include_closed: bool = False
    days_back: int = 30
    days_forward: int = 7
    keyword_filter: list[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    calendar_strategies: list[str] = field(
        default_factory=lambda: ["service_account", "cached_token", "api_key", "csv", "manual"]
    )
    trello_strategies: list[str] = field(default_factory=lambda: ["api", "manual"])
    timezone: str = "UTC"
    # Google Calendar
    google_service_account_file: str = str(SECRETS_DIR / "google-service-account.json")
    google_token_file: str = str(SECRETS_DIR / "google-token.json")
    google_client_secret_file: str = ""
    google_api_key: str = ""
    # Trello
    trello_api_key: str = ""
    trello_token: str = ""
    # Files
    data_dir: str = str(DATA_DIR)
    manual_calendar_file: str = str(DATA_DIR / "manual_calendar_data.csv")
    manual_trello_file: str = str(DATA_DIR / "manual_trello_data.csv")
    export_dir: str = str(DATA_DIR)
    request_timeout: int = 30

    def categories(self) -> list[Category]:
        """Configured Work/Home categories, or one uncategorised default."""
        categories = []
        if self.work_calendars or self.work_boards:
            categories.append(Category("Work", list(self.work_calendars), list(self.work_boards)))
        if self.home_calendars or self.home_boards:
            categories.append(Category("Home", list(self.home_calendars), list(self.home_boards)))

        if not categories:
            logger.warning("No calendars or boards configured - using primary calendar and all boards")
            categories.append(Category(None, [CalendarRef("primary", "Primary")], None))
        return categories


def _parse_calendars(value: str) -> list[CalendarRef]:
    """Parse calendars as JSON [{"id": ..., "name": ...}] or "id:name,id:name"."""
    calendars = []
    if value.startswith("["):
        try:
            for item in json.loads(value):
                calendars.append(CalendarRef(id=item["id"], name=item.get("name") or item["id"]))
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Failed to parse calendars JSON: {e}")
        return calendars

    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        # Calendar ids contain '@' but never ':', so split on the last colon
        if ":" in entry:
            cal_id, name = entry.rsplit(":", 1)
            calendars.append(CalendarRef(cal_id.strip(), name.strip()))
        else:
            calendars.append(CalendarRef(entry, entry))
    return calendars


def _parse_list(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}")
        return default


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from taskmatrix.conf."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "work_calendars":
                config.work_calendars = _parse_calendars(value)
            case "home_calendars":
                config.home_calendars = _parse_calendars(value)
            case "work_boards":
                config.work_boards = _parse_list(value)
            case "home_boards":
                config.home_boards = _parse_list(value)
            case "include_closed":
                config.include_closed = _parse_bool(value)
            case "days_back":
                config.days_back = _parse_int(key, value, config.days_back)
            case "days_forward":
                config.days_forward = _parse_int(key, value, config.days_forward)
            case "keyword_filter":
                config.keyword_filter = _parse_list(value)
            case "calendar_strategies":
                config.calendar_strategies = _parse_list(value)
            case "trello_strategies":
                config.trello_strategies = _parse_list(value)
            case "timezone":
                config.timezone = value
            case "google_service_account_file":
                config.google_service_account_file = value
            case "google_token_file":
                config.google_token_file = value
            case "google_client_secret_file":
                config.google_client_secret_file = value
            case "google_api_key":
                config.google_api_key = value
            case "trello_api_key":
                config.trello_api_key = value
            case "trello_token":
                config.trello_token = value
            case "data_dir":
                config.data_dir = value
            case "manual_calendar_file":
                config.manual_calendar_file = value
            case "manual_trello_file":
                config.manual_trello_file = value
            case "export_dir":
                config.export_dir = value
            case "request_timeout":
                config.request_timeout = _parse_int(key, value, config.request_timeout)
            case _:
                logger.warning(f"Unknown config key: {key}")

    return config

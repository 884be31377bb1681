"""Google Calendar API adapter."""

import logging
from datetime import date, datetime, time, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from taskmatrix.config import CalendarRef
from taskmatrix.core.records import CalendarRecord
from taskmatrix.ports import AcquisitionError, AuthenticationError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
MAX_RESULTS = 500

SERVICE_ACCOUNT = "service_account"
CACHED_TOKEN = "cached_token"
API_KEY = "api_key"
AUTH_MODES = (SERVICE_ACCOUNT, CACHED_TOKEN, API_KEY)


class GoogleCalendarAdapter:
    """
    Fetches events from one or more Google calendars via the API.

    Implements RecordSource. The auth mode selects how credentials are
    obtained: a service account key, a cached OAuth token, or an API key
    (public calendars only).
    """

    def __init__(
        self,
        calendars: list[CalendarRef],
        auth: str,
        today: date,
        category: str | None = None,
        days_back: int = 30,
        days_forward: int = 7,
        service_account_file: str = "",
        token_file: str = "",
        api_key: str = "",
        timeout: int = 30,
        timezone: str = "UTC",
    ):
        if auth not in AUTH_MODES:
            raise ValueError(f"Unknown Google auth mode: {auth}")
        self.calendars = calendars
        self.auth = auth
        self.today = today
        self.category = category
        self.days_back = days_back
        self.days_forward = days_forward
        self.service_account_file = service_account_file
        self.token_file = token_file
        self.api_key = api_key
        self.timeout = timeout
        self.timezone = timezone
        self.name = f"google-{auth.replace('_', '-')}"

    def _get_credentials(self):
        """Load credentials for the configured auth mode."""
        if self.auth == SERVICE_ACCOUNT:
            from google.oauth2 import service_account

            key_path = Path(self.service_account_file).expanduser()
            if not self.service_account_file or not key_path.exists():
                raise AuthenticationError(f"Service account file not found: {key_path}")
            return service_account.Credentials.from_service_account_file(str(key_path), scopes=SCOPES)

        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        token_path = Path(self.token_file).expanduser()
        if not self.token_file or not token_path.exists():
            raise AuthenticationError(f"No cached token at {token_path} - run 'taskmatrix auth'")

        creds = Credentials.from_authorized_user_file(str(token_path), SCOPES)
        if creds.expired and creds.refresh_token:
            creds.refresh(Request())
            token_path.write_text(creds.to_json())
            token_path.chmod(0o600)
        return creds

    def _build_service(self):
        """Build a Google Calendar API service."""
        import httplib2
        from google_auth_httplib2 import AuthorizedHttp
        from googleapiclient.discovery import build

        http = httplib2.Http(timeout=self.timeout)
        if self.auth == API_KEY:
            if not self.api_key:
                raise AuthenticationError("No Google API key configured")
            return build("calendar", "v3", developerKey=self.api_key, http=http, cache_discovery=False)

        creds = self._get_credentials()
        return build(
            "calendar",
            "v3",
            http=AuthorizedHttp(creds, http=http),
            cache_discovery=False,
        )

    def _time_window(self) -> tuple[str, str]:
        tz = ZoneInfo(self.timezone)
        start = datetime.combine(self.today - timedelta(days=self.days_back), time.min, tzinfo=tz)
        end = datetime.combine(self.today + timedelta(days=self.days_forward), time.max, tzinfo=tz)
        return start.isoformat(), end.isoformat()

    def fetch(self) -> list[CalendarRecord]:
        """Fetch events from every configured calendar."""
        if not self.calendars:
            raise AcquisitionError("No calendars configured")

        service = self._build_service()
        time_min, time_max = self._time_window()

        records = []
        for calendar in self.calendars:
            items = self._list_events(service, calendar.id, time_min, time_max)
            logger.info(f"{calendar.name}: {len(items)} events via {self.name}")
            records.extend(self._to_record(item, calendar) for item in items)
        return records

    def _list_events(self, service, calendar_id: str, time_min: str, time_max: str) -> list[dict]:
        items = []
        page_token = None
        while True:
            result = (
                service.events()
                .list(
                    calendarId=calendar_id,
                    timeMin=time_min,
                    timeMax=time_max,
                    singleEvents=True,
                    orderBy="startTime",
                    maxResults=MAX_RESULTS,
                    timeZone=self.timezone,
                    pageToken=page_token,
                )
                .execute()
            )
            items.extend(result.get("items", []))
            page_token = result.get("nextPageToken")
            if not page_token:
                return items

    def _to_record(self, item: dict, calendar: CalendarRef) -> CalendarRecord:
        start_raw = item.get("start", {})
        end_raw = item.get("end", {})

        if "date" in start_raw:
            # All-day: the API end date is exclusive, keep the last covered day
            start = start_raw["date"]
            end = end_raw.get("date")
            if end:
                try:
                    end = max(start, (date.fromisoformat(end) - timedelta(days=1)).isoformat())
                except ValueError:
                    pass
        else:
            start = start_raw.get("dateTime")
            end = end_raw.get("dateTime")

        return CalendarRecord(
            id=item.get("id", ""),
            title=item.get("summary", ""),
            description=item.get("description", ""),
            start=start,
            end=end,
            calendar_name=calendar.name,
            category=self.category,
        )


def authenticate(client_secret_file: str, token_file: str) -> bool:
    """Run the OAuth installed-app flow and cache the token. Returns True on success."""
    from google_auth_oauthlib.flow import InstalledAppFlow

    if not client_secret_file:
        logger.error("No client secret file configured")
        return False

    secret_path = Path(client_secret_file).expanduser()
    if not secret_path.exists():
        logger.error(f"Client secret file not found: {secret_path}")
        return False

    flow = InstalledAppFlow.from_client_secrets_file(str(secret_path), SCOPES)
    creds = flow.run_local_server(port=0)

    token_path = Path(token_file).expanduser()
    token_path.parent.mkdir(parents=True, exist_ok=True)
    token_path.write_text(creds.to_json())
    token_path.chmod(0o600)
    return True

"""Trello API adapter - HTTP client for card fetching."""

import logging

import requests

from taskmatrix.core.records import CardRecord
from taskmatrix.ports import AcquisitionError, AuthenticationError

logger = logging.getLogger(__name__)

API_BASE = "https://api.trello.com/1"
BOARD_FIELDS = "id,name,closed,url"
LIST_FIELDS = "id,name"
CARD_FIELDS = "id,name,desc,due,closed,dateLastActivity,url,idList"


class TrelloAdapter:
    """
    Trello REST API adapter.

    Implements RecordSource. Reads cards from the named boards (all boards
    when board_names is None). No business logic - just I/O.
    """

    name = "trello-api"

    def __init__(
        self,
        api_key: str,
        token: str,
        board_names: list[str] | None = None,
        category: str | None = None,
        include_closed: bool = False,
        timeout: int = 30,
    ):
        self.api_key = api_key
        self.token = token
        self.board_names = board_names
        self.category = category
        self.include_closed = include_closed
        self.timeout = timeout

    def _api_request(self, session: requests.Session, endpoint: str, **params) -> list[dict]:
        """Make authenticated API request."""
        if not self.api_key or not self.token:
            raise AuthenticationError("Trello credentials not configured (trello_api_key, trello_token)")

        resp = session.get(
            f"{API_BASE}{endpoint}",
            params={"key": self.api_key, "token": self.token, **params},
            timeout=self.timeout,
        )
        if resp.status_code in (401, 403):
            raise AuthenticationError(f"Trello rejected credentials: {resp.text[:200]}")
        resp.raise_for_status()
        return resp.json()

    def _get_boards(self, session: requests.Session) -> list[dict]:
        boards = self._api_request(session, "/members/me/boards", fields=BOARD_FIELDS)
        if self.board_names is not None:
            boards = [b for b in boards if b["name"] in self.board_names]
        return boards

    def _get_list_names(self, session: requests.Session, board_id: str) -> dict[str, str]:
        """Map list id to list name; empty if the lists cannot be read."""
        try:
            lists = self._api_request(session, f"/boards/{board_id}/lists", fields=LIST_FIELDS)
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch lists for board {board_id}: {e}")
            return {}
        return {item["id"]: item["name"] for item in lists}

    def _get_board_cards(self, session: requests.Session, board_id: str) -> list[dict]:
        return self._api_request(session, f"/boards/{board_id}/cards", fields=CARD_FIELDS)

    def _to_records(self, board: dict, cards: list[dict], list_names: dict[str, str]) -> list[CardRecord]:
        records = []
        for card in cards:
            closed = bool(card.get("closed", False))
            if closed and not self.include_closed:
                continue
            records.append(
                CardRecord(
                    id=card["id"],
                    title=card.get("name", ""),
                    description=card.get("desc", ""),
                    due=card.get("due"),
                    board_name=board["name"],
                    list_name=list_names.get(card.get("idList", "")),
                    closed=closed,
                    category=self.category,
                )
            )
        return records

    def fetch(self) -> list[CardRecord]:
        """Fetch open cards (and closed ones if configured) from matching boards."""
        records = []
        with requests.Session() as session:
            boards = self._get_boards(session)
            if not boards:
                wanted = ", ".join(self.board_names or [])
                raise AcquisitionError(f"No Trello boards found matching: {wanted or '(any)'}")

            for board in boards:
                list_names = self._get_list_names(session, board["id"])
                cards = self._get_board_cards(session, board["id"])
                board_records = self._to_records(board, cards, list_names)
                logger.info(f"{board['name']}: {len(board_records)} cards")
                records.extend(board_records)

        return records

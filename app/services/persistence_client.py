# app/services/persistence_client.py
import logging
from datetime import datetime, timezone

import httpx

from app.models.ticket import LineItem
from app.schemas.ticket import Notice

logger = logging.getLogger(__name__)

SAVE_PATH = "/save-ticket"
UNKNOWN_NAME = "Unknown"

NOTHING_TO_SAVE = "No items to save!"
INVALID_DATA = "Failed to save: Invalid data."
SAVE_FAILED = "Failed to save ticket. Check console for details."
SAVE_OK = "Ticket saved to manifest.json!"


def iso_timestamp(now: datetime | None = None) -> str:
    """
    ISO-8601 UTC timestamp with millisecond precision, e.g.
    2024-01-01T00:00:00.000Z
    """
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_submission(
    lines: list[LineItem],
    now: datetime | None = None,
) -> list[dict]:
    """
    Map ticket lines to the wire payload.

    One timestamp is shared by every line. A missing name becomes
    "Unknown" and a missing quantity becomes 0 instead of being omitted.
    """
    timestamp = iso_timestamp(now)
    return [
        {
            "name": line.name or UNKNOWN_NAME,
            "timestamp": timestamp,
            "quantity": line.quantity or 0,
        }
        for line in lines
    ]


def is_valid_submission(payload: list[dict]) -> bool:
    if not payload:
        return False
    return all(entry["name"] and entry["quantity"] is not None for entry in payload)


class TicketPersistenceClient:
    """
    Sends the current ticket to the backend's ticket log.

    Never mutates the ticket; clearing is a separate action.
    Transport failures are reported as notices, never raised.
    """

    def __init__(
        self,
        server_url: str,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _post(self, payload: list[dict]) -> httpx.Response:
        url = f"{self.server_url}{SAVE_PATH}"
        if self._client is not None:
            return self._client.post(url, json=payload, timeout=self.timeout)
        with httpx.Client(timeout=self.timeout) as client:
            return client.post(url, json=payload)

    def submit(self, lines: list[LineItem]) -> Notice:
        """
        Save the ticket lines.

        Returns:
          - "nothing to save" notice for an empty ticket (no request)
          - "invalid data" notice if any mapped entry is incomplete (no request)
          - failure notice on transport error or non-2xx response
          - confirmation notice on success
        """
        if not lines:
            return Notice(level="error", message=NOTHING_TO_SAVE)

        payload = build_submission(lines)
        logger.debug("Ticket data to send: %s", payload)

        if not is_valid_submission(payload):
            logger.error("Invalid ticket data: %s", payload)
            return Notice(level="error", message=INVALID_DATA)

        try:
            response = self._post(payload)
        except httpx.HTTPError as e:
            logger.error("Error saving ticket: %s", e)
            return Notice(level="error", message=SAVE_FAILED)

        logger.debug("Save response status: %s", response.status_code)
        if not response.is_success:
            logger.error(
                "Server error saving ticket: %s %s",
                response.status_code,
                response.text,
            )
            return Notice(level="error", message=SAVE_FAILED)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Unreadable save response %r: %s", response.text, e)
            return Notice(level="error", message=SAVE_FAILED)

        logger.info("Server response: %s", data)
        return Notice(level="info", message=SAVE_OK)

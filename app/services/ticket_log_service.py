# app/services/ticket_log_service.py
import logging
import math
import threading
from typing import Any

from app.core.errors import TicketValidationError
from app.repositories.manifest_repo import ManifestRepository

logger = logging.getLogger(__name__)


def _is_numeric(value: Any) -> bool:
    """
    True for numbers and numeric strings ("2", " 1.5 ").

    Booleans, blank strings, NaN and infinity are not quantities.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        if not value.strip():
            return False
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def is_valid_entry(entry: Any) -> bool:
    """
    A saved line needs a non-empty string name and timestamp and a
    present, numeric quantity.
    """
    return (
        isinstance(entry, dict)
        and _non_empty_str(entry.get("name"))
        and _non_empty_str(entry.get("timestamp"))
        and entry.get("quantity") is not None
        and _is_numeric(entry["quantity"])
    )


class TicketLogService:
    """
    Business logic for POST /save-ticket.

    Responsibilities:
      - reject payloads that are not a non-empty list
      - drop (and log) malformed entries; reject if none remain
      - append only the valid entries to the manifest

    Saves are serialized by a process-wide lock so two requests in the
    same process cannot overwrite each other's append. Separate processes
    sharing one manifest file are not coordinated.
    """

    _write_lock = threading.Lock()

    def __init__(self, manifest_repo: ManifestRepository):
        self.manifest_repo = manifest_repo

    def validate(self, payload: Any) -> list[dict]:
        """
        Return the valid entries of a submission.

        Raises:
            TicketValidationError: if the payload is not a non-empty list
            or no entry survives filtering.
        """
        if not isinstance(payload, list) or not payload:
            raise TicketValidationError("Invalid or empty ticket data array received")

        valid = [entry for entry in payload if is_valid_entry(entry)]
        if len(valid) != len(payload):
            dropped = [entry for entry in payload if not is_valid_entry(entry)]
            logger.warning("Filtered out invalid items: %s", dropped)
            if not valid:
                raise TicketValidationError("No valid ticket items received")
        return valid

    def save(self, payload: Any) -> int:
        """
        Validate a submission and append its valid entries to the manifest.

        Returns the number of appended entries. Storage errors other
        than a missing or corrupt manifest propagate to the caller.
        """
        valid = self.validate(payload)

        with self._write_lock:
            manifest = self.manifest_repo.append(valid)

        logger.info(
            "Saved %d ticket lines to %s (%d total)",
            len(valid),
            self.manifest_repo.path.name,
            len(manifest),
        )
        return len(valid)

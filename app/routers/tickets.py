# app/routers/tickets.py
import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import TicketValidationError
from app.repositories.manifest_repo import ManifestRepository
from app.schemas.ticket import SaveTicketError, SaveTicketResponse
from app.services.ticket_log_service import TicketLogService

router = APIRouter(tags=["Tickets"])

logger = logging.getLogger(__name__)


def get_ticket_log_service() -> TicketLogService:
    """
    FastAPI dependency that builds the ticket log service for the
    configured manifest file.
    """
    return TicketLogService(ManifestRepository(get_settings().MANIFEST_PATH))


def _error(status_code: int, details: str | None = None) -> JSONResponse:
    body = SaveTicketError(details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@router.post(
    "/save-ticket",
    response_model=SaveTicketResponse,
    responses={
        400: {"model": SaveTicketError},
        500: {"model": SaveTicketError},
    },
)
async def save_ticket(
    request: Request,
    service: TicketLogService = Depends(get_ticket_log_service),
):
    """
    Append a submitted ticket to manifest.json.

    Body: JSON array of {name, timestamp, quantity}.

    - 400 if the body is not a non-empty array or holds no valid entry
    - 500 on unexpected storage failure
    """
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw else None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Error saving ticket: malformed JSON body: %s", e)
        return _error(status.HTTP_400_BAD_REQUEST, f"Malformed JSON body: {e}")

    logger.debug("Raw received body: %s", payload)

    try:
        await run_in_threadpool(service.save, payload)
    except TicketValidationError as e:
        logger.error("Error saving ticket: %s", e)
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except OSError:
        logger.exception("Error saving ticket: storage failure")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR)

    return SaveTicketResponse()

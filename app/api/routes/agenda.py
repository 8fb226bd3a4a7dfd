import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query, Request

from app.core.config import get_settings
from app.schemas.agenda import (
    AgendaCommandRequest,
    AgendaCommandResponse,
    AgendaItemsResponse,
    AgendaParseResponse,
)
from app.services.agenda_models import QueryPeriod
from app.services.agenda_service import AgendaService

router = APIRouter(prefix="/agenda", tags=["agenda"])
logger = logging.getLogger(__name__)


@router.post("/parse", response_model=AgendaParseResponse)
def parse_agenda_command(payload: AgendaCommandRequest, request: Request) -> AgendaParseResponse:
    service = AgendaService(get_settings())
    try:
        response = service.parse(payload)
    except HTTPException as exc:
        logger.warning(
            "Agenda parse rejected path=%s status_code=%s detail=%s",
            str(request.url.path),
            exc.status_code,
            exc.detail,
        )
        raise

    logger.info(
        "Agenda command parsed path=%s intent=%s origin=%s",
        str(request.url.path),
        response.intent.value,
        payload.origin.value,
    )
    return response


@router.post("/commands", response_model=AgendaCommandResponse)
def submit_agenda_command(payload: AgendaCommandRequest, request: Request) -> AgendaCommandResponse:
    service = AgendaService(get_settings())
    try:
        response = service.submit(payload)
    except HTTPException as exc:
        logger.warning(
            "Agenda command rejected path=%s status_code=%s detail=%s",
            str(request.url.path),
            exc.status_code,
            exc.detail,
        )
        raise
    except Exception:
        logger.exception("Agenda command failed path=%s", str(request.url.path))
        raise

    logger.info(
        "Agenda command processed path=%s intent=%s stored_record_id=%s items=%s",
        str(request.url.path),
        response.intent.value,
        response.stored_record_id,
        len(response.items),
    )
    return response


@router.get("/items", response_model=AgendaItemsResponse)
def list_agenda_items(
    owner_id: str | None = None,
    period: QueryPeriod = QueryPeriod.today,
    client_now_iso: datetime | None = None,
    client_tz_offset_minutes: int | None = Query(default=None, ge=-840, le=720),
) -> AgendaItemsResponse:
    service = AgendaService(get_settings())
    return service.list_items(
        owner_id=owner_id,
        period=period,
        client_now_iso=client_now_iso,
        client_tz_offset_minutes=client_tz_offset_minutes,
    )

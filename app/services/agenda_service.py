import logging
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime, timedelta
from typing import Any

from fastapi import HTTPException, status

from app.core.config import Settings
from app.schemas.agenda import (
    AgendaCommandRequest,
    AgendaCommandResponse,
    AgendaIntent,
    AgendaItemRecord,
    AgendaItemsResponse,
    AgendaParseResponse,
    ParsedEventPayload,
    QueryIntentPayload,
)
from app.services.agenda_dates import resolve_reference_date
from app.services.agenda_lexicon import WEEK
from app.services.agenda_models import (
    EventCategory,
    EventKind,
    EventOrigin,
    ParsedEvent,
    QueryIntent,
    QueryPeriod,
    Weekday,
)
from app.services.agenda_parser import format_for_display, format_success_message, parse_message
from app.services.agenda_store import (
    AgendaStore,
    build_agenda_item_record,
    build_execution_record,
    create_agenda_store,
)

logger = logging.getLogger(__name__)


class AgendaService:
    def __init__(
        self,
        settings: Settings,
        store: AgendaStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or create_agenda_store(
            store_name=settings.agenda_store,
            mongodb_uri=settings.mongodb_uri,
            mongodb_db_name=settings.mongodb_db_name,
            mongodb_items_collection_name=settings.mongodb_agenda_items_collection,
            mongodb_executions_collection_name=settings.mongodb_agenda_executions_collection,
            mongodb_connect_timeout_ms=settings.mongodb_connect_timeout_ms,
        )
        self._clock = clock or (lambda: datetime.now(UTC))

    def parse(self, request: AgendaCommandRequest) -> AgendaParseResponse:
        message = self._require_message(request.message)
        instant, tz_offset = self._resolve_reference(request.client_now_iso, request.client_tz_offset_minutes)
        result = parse_message(
            message,
            origin=request.origin,
            reference_instant=instant,
            tz_offset_minutes=tz_offset,
        )

        if isinstance(result, QueryIntent):
            return AgendaParseResponse(
                intent=AgendaIntent.query,
                query=self._build_query_payload(result.period, resolve_reference_date(instant, tz_offset)),
            )
        return AgendaParseResponse(
            intent=AgendaIntent.create,
            event=self._to_payload(result),
            display_text=format_for_display(result),
        )

    def submit(self, request: AgendaCommandRequest) -> AgendaCommandResponse:
        message = self._require_message(request.message)
        instant, tz_offset = self._resolve_reference(request.client_now_iso, request.client_tz_offset_minutes)
        reference_date = resolve_reference_date(instant, tz_offset)
        result = parse_message(
            message,
            origin=request.origin,
            reference_instant=instant,
            tz_offset_minutes=tz_offset,
        )

        if isinstance(result, QueryIntent):
            items = self._collect_items(request.owner_id, result.period, reference_date)
            return AgendaCommandResponse(
                intent=AgendaIntent.query,
                query=self._build_query_payload(result.period, reference_date),
                items=items,
            )

        record = build_agenda_item_record(
            result,
            owner_id=request.owner_id,
            notify_minutes_before=self.settings.notify_minutes_before,
        )
        stored_record_id = self._save(self.store.save_item, record)

        execution_record_id = None
        if not result.recurring and result.date == reference_date.isoformat():
            execution_record_id = self._save(
                self.store.save_execution,
                build_execution_record(
                    agenda_item_id=stored_record_id,
                    event=result,
                    owner_id=request.owner_id,
                ),
            )

        logger.info(
            "Agenda item stored id=%s kind=%s recurring=%s origin=%s",
            stored_record_id,
            result.kind.value,
            result.recurring,
            result.origin.value,
        )
        return AgendaCommandResponse(
            intent=AgendaIntent.create,
            event=self._to_payload(result),
            stored_record_id=stored_record_id,
            execution_record_id=execution_record_id,
            message=format_success_message(result),
        )

    def list_items(
        self,
        *,
        owner_id: str | None,
        period: QueryPeriod,
        client_now_iso: datetime | None = None,
        client_tz_offset_minutes: int | None = None,
    ) -> AgendaItemsResponse:
        instant, tz_offset = self._resolve_reference(client_now_iso, client_tz_offset_minutes)
        reference_date = resolve_reference_date(instant, tz_offset)
        query = self._build_query_payload(period, reference_date)
        return AgendaItemsResponse(
            period=period,
            start_date=query.start_date,
            end_date=query.end_date,
            items=self._collect_items(owner_id, period, reference_date),
        )

    def _require_message(self, message: str) -> str:
        cleaned = message.strip()
        if not cleaned:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Message is required.",
            )
        return cleaned

    def _resolve_reference(
        self,
        client_now_iso: datetime | None,
        client_tz_offset_minutes: int | None,
    ) -> tuple[datetime, int]:
        instant = client_now_iso or self._clock()
        tz_offset = (
            client_tz_offset_minutes
            if client_tz_offset_minutes is not None
            else self.settings.default_tz_offset_minutes
        )
        return instant, tz_offset

    def _save(self, save: Callable[[Mapping[str, Any]], str], record: Mapping[str, Any]) -> str:
        try:
            return save(record)
        except Exception as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Unable to persist agenda item.",
            ) from exc

    def _collect_items(
        self,
        owner_id: str | None,
        period: QueryPeriod,
        reference_date: date,
    ) -> list[AgendaItemRecord]:
        try:
            raw_items = self.store.list_items(owner_id)
        except Exception as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Unable to query agenda storage.",
            ) from exc

        items: list[AgendaItemRecord] = []
        for day in _period_days(period, reference_date):
            weekday = WEEK[day.weekday()]
            for record in raw_items:
                if not record.get("active", True):
                    continue
                if not _occurs_on(record, day, weekday):
                    continue
                items.append(self._map_record(record, occurs_on=day))
        items.sort(key=lambda item: (item.occurs_on or "", item.start_time))
        return items

    def _map_record(self, record: Mapping[str, Any], *, occurs_on: date) -> AgendaItemRecord:
        return AgendaItemRecord(
            id=str(record.get("_id", "")),
            owner_id=record.get("owner_id"),
            title=str(record.get("title") or ""),
            kind=EventKind(str(record.get("kind", EventKind.agenda.value))),
            date=record.get("date"),
            start_time=str(record.get("start_time", "")),
            end_time=str(record.get("end_time", "")),
            recurring=bool(record.get("recurring", False)),
            weekdays=[Weekday(day) for day in record.get("weekdays") or []],
            origin=EventOrigin(str(record.get("origin", EventOrigin.chat.value))),
            category=EventCategory(str(record.get("category", EventCategory.personal.value))),
            active=bool(record.get("active", True)),
            notify_minutes_before=record.get("notify_minutes_before"),
            occurs_on=occurs_on.isoformat(),
        )

    def _build_query_payload(self, period: QueryPeriod, reference_date: date) -> QueryIntentPayload:
        days = _period_days(period, reference_date)
        return QueryIntentPayload(
            period=period,
            start_date=days[0].isoformat(),
            end_date=days[-1].isoformat(),
        )

    def _to_payload(self, event: ParsedEvent) -> ParsedEventPayload:
        return ParsedEventPayload.model_validate(event.to_dict())


def _period_days(period: QueryPeriod, reference_date: date) -> list[date]:
    if period == QueryPeriod.tomorrow:
        return [reference_date + timedelta(days=1)]
    if period == QueryPeriod.week:
        return [reference_date + timedelta(days=offset) for offset in range(7)]
    return [reference_date]


def _occurs_on(record: Mapping[str, Any], day: date, weekday: Weekday) -> bool:
    if record.get("recurring"):
        return weekday.value in (record.get("weekdays") or [])
    return record.get("date") == day.isoformat()

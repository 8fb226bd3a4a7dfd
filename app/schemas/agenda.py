from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from app.services.agenda_models import (
    EventCategory,
    EventKind,
    EventOrigin,
    QueryPeriod,
    Weekday,
)


class AgendaIntent(StrEnum):
    create = "create"
    query = "query"


class AgendaCommandRequest(BaseModel):
    message: str = ""
    origin: EventOrigin = EventOrigin.chat
    owner_id: str | None = None
    client_now_iso: datetime | None = None
    client_tz_offset_minutes: int | None = Field(default=None, ge=-840, le=720)


class ParsedEventPayload(BaseModel):
    kind: EventKind
    title: str
    date: str | None = None
    start_time: str
    end_time: str
    recurring: bool
    weekdays: list[Weekday] = Field(default_factory=list)
    origin: EventOrigin
    category: EventCategory


class QueryIntentPayload(BaseModel):
    period: QueryPeriod
    start_date: str
    end_date: str


class AgendaParseResponse(BaseModel):
    intent: AgendaIntent
    event: ParsedEventPayload | None = None
    query: QueryIntentPayload | None = None
    display_text: str | None = None


class AgendaItemRecord(BaseModel):
    id: str
    owner_id: str | None = None
    title: str
    kind: EventKind
    date: str | None = None
    start_time: str
    end_time: str
    recurring: bool
    weekdays: list[Weekday] = Field(default_factory=list)
    origin: EventOrigin
    category: EventCategory
    active: bool = True
    notify_minutes_before: int | None = None
    occurs_on: str | None = None


class AgendaItemsResponse(BaseModel):
    period: QueryPeriod
    start_date: str
    end_date: str
    items: list[AgendaItemRecord]


class AgendaCommandResponse(BaseModel):
    intent: AgendaIntent
    event: ParsedEventPayload | None = None
    stored_record_id: str | None = None
    execution_record_id: str | None = None
    message: str | None = None
    query: QueryIntentPayload | None = None
    items: list[AgendaItemRecord] = Field(default_factory=list)

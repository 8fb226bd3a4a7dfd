"""Turn Portuguese agenda utterances into structured scheduling records.

The pipeline is synchronous and side-effect free: normalization, time, date
and weekday extraction, intent classification, title and category inference,
then assembly with defaults. Every extractor fails soft to ``None`` and the
assembler replaces each gap with a documented default, so any string input
yields a complete record.
"""

from __future__ import annotations

from datetime import date, datetime
import logging

from app.services import agenda_intent
from app.services.agenda_dates import (
    extract_date_from_reference,
    next_weekday_date,
    resolve_reference_date,
    today_reference_instant,
)
from app.services.agenda_lexicon import (
    DEFAULT_START_TIME,
    FEMININE_KINDS,
    KIND_LABELS,
    MONTH_NAMES,
    WEEK,
    WEEKDAY_LABELS,
    WEEKDAY_LONG_NAMES,
    WORKWEEK,
)
from app.services.agenda_models import EventOrigin, ParsedEvent, QueryIntent
from app.services.agenda_time import add_hours, extract_end_time, extract_start_time
from app.services.agenda_title import extract_title
from app.services.agenda_weekdays import extract_weekdays, sort_weekdays

logger = logging.getLogger(__name__)

_ORIGIN_ALIASES = {
    "voz": EventOrigin.voice,
    "texto": EventOrigin.chat,
}


def parse_message(
    text: str,
    origin: EventOrigin | str = EventOrigin.chat,
    reference_instant: datetime | None = None,
    tz_offset_minutes: int | None = None,
) -> ParsedEvent | QueryIntent:
    message = text or ""
    if agenda_intent.is_query(message):
        intent = QueryIntent(period=agenda_intent.query_period(message))
        logger.debug("Parsed agenda message as query period=%s", intent.period.value)
        return intent
    return parse_command(
        message,
        origin=origin,
        reference_instant=reference_instant,
        tz_offset_minutes=tz_offset_minutes,
    )


def parse_command(
    text: str,
    origin: EventOrigin | str = EventOrigin.chat,
    reference_instant: datetime | None = None,
    tz_offset_minutes: int | None = None,
) -> ParsedEvent:
    message = text or ""
    # The only clock read; extractors below get the resolved date explicitly.
    instant = reference_instant or today_reference_instant()
    reference_date = resolve_reference_date(instant, tz_offset_minutes)

    kind, recurring = agenda_intent.classify(message)
    start_time = extract_start_time(message) or DEFAULT_START_TIME
    end_time = extract_end_time(message) or add_hours(start_time, 1)
    detected_weekdays = extract_weekdays(message)

    if recurring:
        weekdays = sort_weekdays(detected_weekdays) or WORKWEEK
        event_date = None
    else:
        weekdays = ()
        event_date = _resolve_one_off_date(message, reference_date, detected_weekdays)

    event = ParsedEvent(
        kind=kind,
        title=extract_title(message),
        date=event_date,
        start_time=start_time,
        end_time=end_time,
        recurring=recurring,
        weekdays=weekdays,
        origin=_coerce_origin(origin),
        category=agenda_intent.infer_category(message),
    )
    logger.debug(
        "Parsed agenda command kind=%s recurring=%s date=%s start=%s end=%s",
        event.kind.value,
        event.recurring,
        event.date,
        event.start_time,
        event.end_time,
    )
    return event


def is_creation_command(text: str) -> bool:
    return agenda_intent.is_creation_command(text or "")


def is_query_command(text: str) -> bool:
    return agenda_intent.is_query(text or "")


def format_for_display(event: ParsedEvent) -> str:
    return (
        f"📌 {KIND_LABELS[event.kind]}: {event.title}\n"
        f"📅 {_describe_when(event)}\n"
        f"⏰ {event.start_time} – {event.end_time}"
    )


def format_success_message(event: ParsedEvent) -> str:
    added = "adicionada" if event.kind in FEMININE_KINDS else "adicionado"
    return (
        f"✅ {KIND_LABELS[event.kind]} {added} com sucesso!\n\n"
        f"📅 {_describe_when(event)}\n"
        f"⏰ {event.start_time}–{event.end_time}\n"
        f"📌 {event.title}"
    )


def format_long_date(value: date) -> str:
    weekday = WEEKDAY_LONG_NAMES[WEEK[value.weekday()]]
    return f"{weekday}, {value.day} de {MONTH_NAMES[value.month - 1]}"


def _describe_when(event: ParsedEvent) -> str:
    if event.recurring and event.weekdays:
        return ", ".join(WEEKDAY_LABELS[day] for day in event.weekdays)
    if not event.date:
        return ""
    return format_long_date(date.fromisoformat(event.date))


def _resolve_one_off_date(message, reference_date, detected_weekdays) -> str:
    parsed = extract_date_from_reference(message, reference_date)
    if parsed is None and len(detected_weekdays) == 1:
        (weekday,) = detected_weekdays
        parsed = next_weekday_date(reference_date, weekday)
    return (parsed or reference_date).isoformat()


def _coerce_origin(origin: EventOrigin | str) -> EventOrigin:
    if isinstance(origin, EventOrigin):
        return origin
    cleaned = str(origin).strip().lower()
    if cleaned in _ORIGIN_ALIASES:
        return _ORIGIN_ALIASES[cleaned]
    try:
        return EventOrigin(cleaned)
    except ValueError:
        return EventOrigin.chat

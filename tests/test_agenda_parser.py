from datetime import UTC, datetime

import pytest

from app.services.agenda_lexicon import WORKWEEK
from app.services.agenda_models import (
    EventCategory,
    EventKind,
    EventOrigin,
    ParsedEvent,
    QueryIntent,
    QueryPeriod,
    Weekday,
)
from app.services.agenda_parser import (
    format_for_display,
    format_success_message,
    is_creation_command,
    is_query_command,
    parse_command,
    parse_message,
)

# Friday 2026-02-13, midday in Brazil.
REFERENCE_INSTANT = datetime(2026, 2, 13, 15, 0, tzinfo=UTC)


def _parse(text: str, **kwargs) -> ParsedEvent:
    kwargs.setdefault("reference_instant", REFERENCE_INSTANT)
    kwargs.setdefault("tz_offset_minutes", 180)
    return parse_command(text, **kwargs)


def test_parse_reminder_for_tomorrow() -> None:
    event = _parse("lembra de pagar a conta às 14h amanhã", origin=EventOrigin.voice)

    assert event == ParsedEvent(
        kind=EventKind.reminder,
        title="Pagar a conta",
        date="2026-02-14",
        start_time="14:00",
        end_time="15:00",
        recurring=False,
        weekdays=(),
        origin=EventOrigin.voice,
        category=EventCategory.personal,
    )


def test_parse_workweek_routine_with_end_time() -> None:
    event = _parse("toda segunda a sexta reunião às 9h até as 10h")

    assert event.kind == EventKind.routine
    assert event.title == "Reunião"
    assert event.start_time == "09:00"
    assert event.end_time == "10:00"
    assert event.recurring is True
    assert event.weekdays == WORKWEEK
    assert event.date is None
    assert event.category == EventCategory.work


def test_parse_listed_weekdays_become_recurring_routine() -> None:
    event = _parse("academia segunda, quarta e sexta às 7 da manhã")

    assert event.kind == EventKind.routine
    assert event.title == "Academia"
    assert event.category == EventCategory.health
    assert event.recurring is True
    assert event.weekdays == (Weekday.mon, Weekday.wed, Weekday.fri)
    assert event.start_time == "07:00"
    assert event.end_time == "08:00"


def test_parse_empty_message_uses_defaults() -> None:
    event = _parse("")

    assert event.kind == EventKind.agenda
    assert event.title == "Lembrete"
    assert event.date == "2026-02-13"
    assert event.start_time == "09:00"
    assert event.end_time == "10:00"
    assert event.recurring is False
    assert event.weekdays == ()
    assert event.origin == EventOrigin.chat
    assert event.category == EventCategory.personal


def test_routine_without_weekdays_defaults_to_workweek() -> None:
    event = _parse("criar rotina de leitura às 21h")

    assert event.kind == EventKind.routine
    assert event.title == "Leitura"
    assert event.weekdays == WORKWEEK
    assert event.start_time == "21:00"
    assert event.end_time == "22:00"


def test_default_end_time_wraps_past_midnight() -> None:
    event = _parse("festa às 23h hoje")

    assert event.date == "2026-02-13"
    assert event.start_time == "23:00"
    assert event.end_time == "00:00"


def test_single_weekday_resolves_to_next_occurrence() -> None:
    event = _parse("dentista segunda às 10h")

    assert event.recurring is False
    assert event.weekdays == ()
    assert event.date == "2026-02-16"
    assert event.category == EventCategory.health


def test_explicit_date_wins_over_weekday_name() -> None:
    event = _parse("dentista segunda dia 20 às 10h")

    assert event.date == "2026-02-20"


def test_reference_date_follows_client_offset() -> None:
    late_evening_in_brazil = datetime(2026, 2, 14, 1, 30, tzinfo=UTC)

    assert _parse("reunião hoje", reference_instant=late_evening_in_brazil).date == "2026-02-13"
    assert (
        _parse("reunião hoje", reference_instant=late_evening_in_brazil, tz_offset_minutes=0).date
        == "2026-02-14"
    )


@pytest.mark.parametrize(
    ("origin", "expected"),
    [("voice", EventOrigin.voice), ("voz", EventOrigin.voice), ("manual", EventOrigin.manual), ("fax", EventOrigin.chat)],
)
def test_origin_strings_are_coerced(origin: str, expected: EventOrigin) -> None:
    assert _parse("academia às 7h", origin=origin).origin == expected


@pytest.mark.parametrize(
    "text",
    ["???", "99:99", "dia 99", "às 24h", "e meia", "\n\t", "até", "segunda a", "🙂 amanhã"],
)
def test_parse_command_always_returns_complete_event(text: str) -> None:
    event = _parse(text)

    assert event.title
    assert len(event.start_time) == 5
    assert len(event.end_time) == 5
    assert event.recurring or event.date is not None
    assert not event.recurring or event.weekdays


def test_parse_message_returns_query_intent() -> None:
    result = parse_message("o que eu tenho hoje", reference_instant=REFERENCE_INSTANT)

    assert result == QueryIntent(period=QueryPeriod.today)
    assert result.to_dict() == {"period": "today"}


def test_parse_message_returns_event_for_commands() -> None:
    result = parse_message("lembra de pagar a conta às 14h amanhã", reference_instant=REFERENCE_INSTANT)

    assert isinstance(result, ParsedEvent)
    assert result.to_dict()["date"] == "2026-02-14"


def test_entry_point_predicates() -> None:
    assert is_creation_command("lembra de pagar a conta")
    assert not is_creation_command("o que eu tenho hoje")
    assert is_query_command("o que eu tenho hoje")
    assert not is_query_command("lembra de pagar a conta")


def test_format_for_display_one_off_event() -> None:
    event = _parse("lembra de pagar a conta às 14h amanhã")

    assert format_for_display(event) == (
        "📌 Lembrete: Pagar a conta\n📅 sábado, 14 de fevereiro\n⏰ 14:00 – 15:00"
    )


def test_format_for_display_recurring_event_lists_weekdays() -> None:
    event = _parse("toda segunda a sexta reunião às 9h até as 10h")

    assert format_for_display(event) == (
        "📌 Rotina: Reunião\n📅 Segunda, Terça, Quarta, Quinta, Sexta\n⏰ 09:00 – 10:00"
    )


def test_format_success_message_uses_kind_gender() -> None:
    routine = _parse("toda segunda a sexta reunião às 9h até as 10h")
    reminder = _parse("lembra de pagar a conta às 14h amanhã")

    assert format_success_message(routine) == (
        "✅ Rotina adicionada com sucesso!\n\n"
        "📅 Segunda, Terça, Quarta, Quinta, Sexta\n"
        "⏰ 09:00–10:00\n"
        "📌 Reunião"
    )
    assert format_success_message(reminder).startswith("✅ Lembrete adicionado com sucesso!")


def test_routine_command_mentioning_tomorrow_is_not_a_query() -> None:
    result = parse_message(
        "adiciona na minha rotina amanhã yoga às 7h",
        reference_instant=REFERENCE_INSTANT,
    )

    assert isinstance(result, ParsedEvent)
    assert result.kind == EventKind.routine
    assert result.title == "Yoga"
    assert result.start_time == "07:00"


def test_number_words_and_codes_are_not_read_as_times() -> None:
    assert _parse("comprar as duas camisas amanhã").start_time == "09:00"
    assert _parse("reunião na sala b12 amanhã").start_time == "09:00"

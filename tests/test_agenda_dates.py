from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from app.services.agenda_dates import (
    extract_date,
    mentions_date,
    next_weekday_date,
    resolve_reference_date,
)
from app.services.agenda_models import Weekday

# 2026-02-13 is a Friday; 15:00 UTC is midday in Brazil.
REFERENCE_INSTANT = datetime(2026, 2, 13, 15, 0, tzinfo=UTC)


@pytest.mark.parametrize("tz_offset_minutes", [180, 0, -60, -540, 300, None])
def test_hoje_returns_the_caller_reference_date(tz_offset_minutes: int | None) -> None:
    expected = resolve_reference_date(REFERENCE_INSTANT, tz_offset_minutes)

    assert extract_date("o dentista é hoje", REFERENCE_INSTANT, tz_offset_minutes) == expected.isoformat()


def test_reference_date_uses_client_offset_not_utc_date() -> None:
    late_evening_in_brazil = datetime(2026, 2, 14, 1, 30, tzinfo=UTC)

    assert resolve_reference_date(late_evening_in_brazil) == date(2026, 2, 13)
    assert resolve_reference_date(late_evening_in_brazil, 180) == date(2026, 2, 13)
    assert resolve_reference_date(late_evening_in_brazil, 0) == date(2026, 2, 14)


def test_reference_date_accepts_naive_and_non_utc_instants() -> None:
    naive = datetime(2026, 2, 14, 1, 30)
    sao_paulo = datetime(2026, 2, 13, 22, 30, tzinfo=timezone(timedelta(hours=-3)))

    assert resolve_reference_date(naive, 180) == date(2026, 2, 13)
    assert resolve_reference_date(sao_paulo, 180) == date(2026, 2, 13)


@pytest.mark.parametrize(
    ("instant", "expected"),
    [
        (datetime(2026, 2, 13, 15, 0, tzinfo=UTC), "2026-02-14"),
        (datetime(2026, 1, 31, 15, 0, tzinfo=UTC), "2026-02-01"),
        (datetime(2026, 12, 31, 15, 0, tzinfo=UTC), "2027-01-01"),
        (datetime(2028, 2, 28, 15, 0, tzinfo=UTC), "2028-02-29"),
    ],
)
def test_amanha_rolls_over_month_and_year(instant: datetime, expected: str) -> None:
    assert extract_date("pagar a conta amanhã", instant, 180) == expected


def test_depois_de_amanha_is_two_days_ahead() -> None:
    assert extract_date("viagem depois de amanhã", REFERENCE_INSTANT, 180) == "2026-02-15"


def test_da_manha_is_not_tomorrow() -> None:
    assert extract_date("academia de manhã", REFERENCE_INSTANT, 180) is None


@pytest.mark.parametrize(
    ("text", "instant", "expected"),
    [
        ("dentista dia 20", REFERENCE_INSTANT, "2026-02-20"),
        ("dentista dia 13", REFERENCE_INSTANT, "2026-02-13"),
        ("dentista dia 10", REFERENCE_INSTANT, "2026-03-10"),
        ("aluguel no dia 30", REFERENCE_INSTANT, "2026-03-30"),
        ("boleto dia 5", datetime(2026, 12, 20, 15, 0, tzinfo=UTC), "2027-01-05"),
        ("boleto dia 30", datetime(2026, 1, 31, 15, 0, tzinfo=UTC), "2026-02-28"),
    ],
)
def test_day_of_month_rolls_forward_when_passed(text: str, instant: datetime, expected: str) -> None:
    assert extract_date(text, instant, 180) == expected


@pytest.mark.parametrize("text", ["reunião às 10h", "dia 99", "bom dia 8h", "15/03", ""])
def test_extract_date_returns_none_for_unrecognized_phrasing(text: str) -> None:
    assert extract_date(text, REFERENCE_INSTANT, 180) is None


def test_mentions_date() -> None:
    assert mentions_date("amanhã às 10h")
    assert mentions_date("no dia 15")
    assert not mentions_date("às 10h")


def test_next_weekday_date_includes_today() -> None:
    friday = date(2026, 2, 13)

    assert next_weekday_date(friday, Weekday.fri) == friday
    assert next_weekday_date(friday, Weekday.mon) == date(2026, 2, 16)
    assert next_weekday_date(friday, Weekday.thu) == date(2026, 2, 19)

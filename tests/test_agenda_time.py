import pytest

from app.services.agenda_time import add_hours, extract_end_time, extract_start_time


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("almoço ao meio-dia", "12:00"),
        ("festa à meia-noite", "00:00"),
        ("academia cinco e meia da tarde", "17:30"),
        ("acordar sete e meia", "07:30"),
        ("jantar vinte e uma e meia", "21:30"),
        ("pagar a conta às 14h", "14:00"),
        ("reunião as 14:30", "14:30"),
        ("reunião às 9 horas", "09:00"),
        ("ligar 14 horas", "14:00"),
        ("treino 19h30", "19:30"),
        ("buscar as crianças duas da tarde", "14:00"),
        ("remédio três da manhã", "03:00"),
        ("filme oito da noite", "20:00"),
        ("cinema às 7 da noite", "19:00"),
        ("academia às 7 da manhã", "07:00"),
        ("estudar 20:15", "20:15"),
        ("show das 19h às 22h", "19:00"),
        ("plantão de 9 a 10", "09:00"),
        ("buscar o bolo às duas da tarde", "14:00"),
        ("ligar às três horas", "03:00"),
    ],
)
def test_extract_start_time(text: str, expected: str) -> None:
    assert extract_start_time(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "comprar pão",
        "reunião às 25h",
        "dentista dia 15",
        "comprar as duas camisas amanhã",
        "reunião na sala b12 amanhã",
        "tomar remédio 2x amanhã",
        "",
    ],
)
def test_extract_start_time_returns_none_without_valid_time(text: str) -> None:
    assert extract_start_time(text) is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("show das 19h às 22h", "22:00"),
        ("plantão de 9 a 10", "10:00"),
        ("estudar até 23h", "23:00"),
        ("reunião às 9h até as 10h", "10:00"),
        ("trabalho até às 18:30", "18:30"),
        ("aula das 2 às 4 da tarde", "16:00"),
        ("festa até as onze da noite", "23:00"),
    ],
)
def test_extract_end_time(text: str, expected: str) -> None:
    assert extract_end_time(text) == expected


def test_extract_end_time_returns_none_without_range_or_limit() -> None:
    assert extract_end_time("reunião às 9h") is None
    assert extract_end_time("até amanhã") is None


def test_add_hours_wraps_past_midnight() -> None:
    assert add_hours("09:00", 1) == "10:00"
    assert add_hours("23:30", 1) == "00:30"

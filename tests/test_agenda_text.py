import re

import pytest

from app.services.agenda_text import PatternRule, capitalize_first, first_match, normalize_text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Terça", "terca"),
        ("  Reunião   às 9h ", "reuniao as 9h"),
        ("AMANHÃ", "amanha"),
        ("sábado\tcedo", "sabado cedo"),
        ("", ""),
    ],
)
def test_normalize_text_lowercases_and_strips_accents(raw: str, expected: str) -> None:
    assert normalize_text(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Terça-feira às 14h", "MEIA-NOITE", "já é meio‑dia", "ção ÇÃO", "", "  "],
)
def test_normalize_text_is_idempotent(raw: str) -> None:
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_normalize_text_matches_accented_and_plain_spellings() -> None:
    assert normalize_text("terça") == normalize_text("terca")


def test_first_match_returns_first_accepted_rule() -> None:
    rules = (
        PatternRule(re.compile(r"(\d+)"), lambda match: None if int(match.group(1)) > 23 else match.group(1)),
        PatternRule(re.compile(r"x"), lambda _match: "fallback"),
    )

    assert first_match(rules, "x 12") == "12"
    assert first_match(rules, "x 99") == "fallback"
    assert first_match(rules, "nothing") is None


def test_capitalize_first_keeps_rest_of_text() -> None:
    assert capitalize_first("reunião com João") == "Reunião com João"
    assert capitalize_first("") == ""

from __future__ import annotations

import re
from typing import NamedTuple

from app.services.agenda_dates import mentions_date
from app.services.agenda_lexicon import CATEGORY_KEYWORDS
from app.services.agenda_models import EventCategory, EventKind, QueryPeriod
from app.services.agenda_text import normalize_text
from app.services.agenda_time import extract_start_time
from app.services.agenda_weekdays import (
    EVERY_DAY_PATTERN,
    EVERY_WEEKDAY_PATTERN,
    WEEKDAY_RANGE_PATTERN,
    extract_weekdays,
)

_ROUTINE_KEYWORD_PATTERN = re.compile(r"\brotinas?\b")
_REMINDER_KEYWORD_PATTERN = re.compile(r"\blembr(?:etes?|ar|a|e)\b")
_EVENT_KEYWORD_PATTERN = re.compile(r"\b(?:evento|reuniao|compromisso|call|meeting)\b")

_QUESTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bo\s+que\s+(?:eu\s+)?tenho\b"),
    re.compile(r"\bquais\s+(?:sao\s+)?(?:os\s+|as\s+)?(?:meus?|minhas?)\b"),
    re.compile(r"\bmostr(?:a|e|ar)\s+(?:a\s+|as\s+|os\s+)?(?:minha|minhas|meu|meus)\b"),
    re.compile(r"\bmostr(?:a|e|ar)\s+(?:a\s+)?agenda\b"),
)

# Noun phrases such as "minha rotina amanhã" also appear inside commands.
_AGENDA_NOUN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bminha\s+agenda\s+(?:de\s+|para\s+)?(?:hoje|amanha)\b"),
    re.compile(r"\bagenda\s+de\s+(?:hoje|amanha)\b"),
    re.compile(r"\b(?:minha\s+)?agenda\s+(?:da|desta)\s+semana\b"),
    re.compile(r"\b(?:minhas?\s+rotinas?|rotinas)\s+(?:de\s+)?(?:hoje|amanha)\b"),
    re.compile(r"\b(?:meus?\s+lembretes?|lembretes)\s+(?:de\s+)?(?:hoje|amanha)\b"),
)

_COMMAND_VERB_PATTERN = re.compile(
    r"\b(?:adicion(?:a|ar|e)|cri(?:a|ar|e)|coloc(?:a|ar|e)|agend(?:ar|e)|marc(?:a|ar|e))\b",
)

_CREATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\blembr(?:a|e|ar|ete)\b"),
    re.compile(r"\bagend(?:a|ar|e)\b"),
    re.compile(r"\bmarc(?:a|ar|e)\b"),
    re.compile(r"\bcri(?:a|ar|e)\s+(?:uma\s+)?rotina\b"),
    re.compile(r"\badicion(?:a|ar|e)\s+(?:na\s+|a\s+)?(?:minha\s+)?rotina\b"),
    re.compile(r"\bcoloc(?:a|ar|e)\s+(?:na\s+|a\s+)?(?:minha\s+)?(?:rotina|agenda)\b"),
    re.compile(r"\brotina\s+(?:de|para)\b"),
    EVERY_WEEKDAY_PATTERN,
    EVERY_DAY_PATTERN,
    WEEKDAY_RANGE_PATTERN,
)

_TOMORROW_PATTERN = re.compile(r"\bamanha\b")
_WEEK_PATTERN = re.compile(r"\bsemana\b")
_WORD_PATTERN = re.compile(r"[a-z0-9]+")


class Classification(NamedTuple):
    kind: EventKind
    is_recurring: bool


def is_recurring(text: str) -> bool:
    normalized = normalize_text(text)
    if _ROUTINE_KEYWORD_PATTERN.search(normalized):
        return True
    if EVERY_DAY_PATTERN.search(normalized):
        return True
    if WEEKDAY_RANGE_PATTERN.search(normalized):
        return True
    if EVERY_WEEKDAY_PATTERN.search(normalized):
        return True
    # A single bare weekday ("segunda") stays a one-off item.
    return len(extract_weekdays(normalized)) > 1


def classify(text: str) -> Classification:
    normalized = normalize_text(text)
    recurring = is_recurring(normalized)

    if _ROUTINE_KEYWORD_PATTERN.search(normalized):
        return Classification(EventKind.routine, recurring)
    if _REMINDER_KEYWORD_PATTERN.search(normalized):
        return Classification(EventKind.reminder, recurring)
    if recurring:
        return Classification(EventKind.routine, recurring)
    if _EVENT_KEYWORD_PATTERN.search(normalized):
        return Classification(EventKind.event, recurring)
    return Classification(EventKind.agenda, recurring)


def is_query(text: str) -> bool:
    normalized = normalize_text(text)
    if any(pattern.search(normalized) for pattern in _QUESTION_PATTERNS):
        return True
    if _COMMAND_VERB_PATTERN.search(normalized):
        return False
    return any(pattern.search(normalized) for pattern in _AGENDA_NOUN_PATTERNS)


def query_period(text: str) -> QueryPeriod:
    normalized = normalize_text(text)
    if _TOMORROW_PATTERN.search(normalized):
        return QueryPeriod.tomorrow
    if _WEEK_PATTERN.search(normalized):
        return QueryPeriod.week
    return QueryPeriod.today


def is_creation_command(text: str) -> bool:
    if is_query(text):
        return False

    normalized = normalize_text(text)
    if any(pattern.search(normalized) for pattern in _CREATION_PATTERNS):
        return True
    return extract_start_time(normalized) is not None and mentions_date(normalized)


def infer_category(text: str) -> EventCategory:
    tokens = set(_WORD_PATTERN.findall(normalize_text(text)))
    for category, keywords in CATEGORY_KEYWORDS:
        if tokens & keywords:
            return category
    return EventCategory.personal

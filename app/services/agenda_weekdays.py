from __future__ import annotations

from collections.abc import Iterable
import re

from app.services.agenda_lexicon import FULL_WEEKDAY_NAMES, WEEK, WEEKDAY_NAMES
from app.services.agenda_models import Weekday
from app.services.agenda_text import alternation, normalize_text

_FULL_DAY = alternation(FULL_WEEKDAY_NAMES)
_RANGE_DAY = alternation((*FULL_WEEKDAY_NAMES, "seg", "sex"))

EVERY_DAY_PATTERN = re.compile(r"\btod[oa]s?\s+(?:os\s+)?dias?\b")
WEEKDAY_RANGE_PATTERN = re.compile(
    rf"\b(?P<first>{_RANGE_DAY})(?:-feira)?\s+(?:a|ate)\s+(?P<last>{_RANGE_DAY})(?:-feira)?\b",
)
EVERY_WEEKDAY_PATTERN = re.compile(rf"\btod[oa]s?\s+(?:as\s+)?(?:{_FULL_DAY})s?\b")
_SINGLE_DAY_PATTERN = re.compile(rf"\b(?P<day>{_FULL_DAY})s?(?:-feiras?)?\b")


def extract_weekdays(text: str) -> frozenset[Weekday]:
    normalized = normalize_text(text)

    if EVERY_DAY_PATTERN.search(normalized):
        return frozenset(WEEK)

    days: set[Weekday] = set()
    for match in WEEKDAY_RANGE_PATTERN.finditer(normalized):
        days.update(
            _expand_range(
                WEEKDAY_NAMES[match.group("first")],
                WEEKDAY_NAMES[match.group("last")],
            ),
        )
    # Range endpoints are already expanded; list the days named outside ranges.
    remainder = WEEKDAY_RANGE_PATTERN.sub(" ", normalized)
    for match in _SINGLE_DAY_PATTERN.finditer(remainder):
        days.add(WEEKDAY_NAMES[match.group("day")])
    return frozenset(days)


def sort_weekdays(days: Iterable[Weekday]) -> tuple[Weekday, ...]:
    unique = set(days)
    return tuple(day for day in WEEK if day in unique)


def _expand_range(first: Weekday, last: Weekday) -> list[Weekday]:
    start = first.position
    span = (last.position - start) % 7
    return [WEEK[(start + offset) % 7] for offset in range(span + 1)]

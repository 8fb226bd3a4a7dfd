from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class EventKind(StrEnum):
    routine = "routine"
    agenda = "agenda"
    reminder = "reminder"
    event = "event"


class EventOrigin(StrEnum):
    chat = "chat"
    voice = "voice"
    manual = "manual"


class EventCategory(StrEnum):
    work = "work"
    study = "study"
    personal = "personal"
    health = "health"


class Weekday(StrEnum):
    mon = "mon"
    tue = "tue"
    wed = "wed"
    thu = "thu"
    fri = "fri"
    sat = "sat"
    sun = "sun"

    @property
    def position(self) -> int:
        """Position in the week, Monday = 0 (same as ``date.weekday()``)."""
        return list(Weekday).index(self)


class QueryPeriod(StrEnum):
    today = "today"
    tomorrow = "tomorrow"
    week = "week"


@dataclass(frozen=True)
class ParsedEvent:
    kind: EventKind
    title: str
    date: str | None
    start_time: str
    end_time: str
    recurring: bool
    weekdays: tuple[Weekday, ...]
    origin: EventOrigin
    category: EventCategory

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "recurring": self.recurring,
            "weekdays": [day.value for day in self.weekdays],
            "origin": self.origin.value,
            "category": self.category.value,
        }


@dataclass(frozen=True)
class QueryIntent:
    period: QueryPeriod

    def to_dict(self) -> dict[str, Any]:
        return {"period": self.period.value}

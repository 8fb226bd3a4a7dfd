from __future__ import annotations

from calendar import monthrange
from datetime import UTC, date, datetime, timedelta
import re

from app.services.agenda_lexicon import DEFAULT_TZ_OFFSET_MINUTES
from app.services.agenda_models import Weekday
from app.services.agenda_text import PatternRule, first_match, normalize_text

_TODAY_PATTERN = re.compile(r"\bhoje\b")
_DAY_AFTER_TOMORROW_PATTERN = re.compile(r"\bdepois\s*de\s*amanha\b")
_TOMORROW_PATTERN = re.compile(r"\bamanha\b")
_DAY_OF_MONTH_PATTERN = re.compile(r"\bdia\s*(\d{1,2})\b(?!\s*(?:h\b|hs\b|horas?\b|:))")


def resolve_reference_date(
    reference_instant: datetime,
    tz_offset_minutes: int | None = None,
) -> date:
    """Return the caller's local calendar date for ``reference_instant``.

    ``tz_offset_minutes`` follows the JavaScript ``Date.getTimezoneOffset()``
    convention: minutes to add to local time to obtain UTC, so Brazil (UTC-3)
    is ``180``. When omitted, Brazil is assumed.
    """
    offset = DEFAULT_TZ_OFFSET_MINUTES if tz_offset_minutes is None else tz_offset_minutes
    if reference_instant.tzinfo is None:
        instant = reference_instant.replace(tzinfo=UTC)
    else:
        instant = reference_instant.astimezone(UTC)
    return (instant - timedelta(minutes=offset)).date()


def extract_date(
    text: str,
    reference_instant: datetime,
    tz_offset_minutes: int | None = None,
) -> str | None:
    reference_date = resolve_reference_date(reference_instant, tz_offset_minutes)
    parsed = extract_date_from_reference(text, reference_date)
    return parsed.isoformat() if parsed else None


def extract_date_from_reference(text: str, reference_date: date) -> date | None:
    rules: tuple[PatternRule[date], ...] = (
        PatternRule(_TODAY_PATTERN, lambda _match: reference_date),
        PatternRule(
            _DAY_AFTER_TOMORROW_PATTERN,
            lambda _match: reference_date + timedelta(days=2),
        ),
        PatternRule(_TOMORROW_PATTERN, lambda _match: reference_date + timedelta(days=1)),
        PatternRule(
            _DAY_OF_MONTH_PATTERN,
            lambda match: _resolve_day_of_month(int(match.group(1)), reference_date),
        ),
    )
    return first_match(rules, normalize_text(text))


def mentions_date(text: str) -> bool:
    normalized = normalize_text(text)
    if _TODAY_PATTERN.search(normalized) or _TOMORROW_PATTERN.search(normalized):
        return True
    match = _DAY_OF_MONTH_PATTERN.search(normalized)
    return bool(match and 1 <= int(match.group(1)) <= 31)


def next_weekday_date(reference_date: date, weekday: Weekday) -> date:
    days_ahead = (weekday.position - reference_date.weekday()) % 7
    return reference_date + timedelta(days=days_ahead)


def _resolve_day_of_month(day: int, reference_date: date) -> date | None:
    if not 1 <= day <= 31:
        return None

    if day <= _days_in_month(reference_date.year, reference_date.month):
        candidate = date(reference_date.year, reference_date.month, day)
        if candidate >= reference_date:
            return candidate

    next_month = _first_of_next_month(reference_date)
    clamped_day = min(day, _days_in_month(next_month.year, next_month.month))
    return next_month.replace(day=clamped_day)


def _first_of_next_month(base_date: date) -> date:
    if base_date.month == 12:
        return date(base_date.year + 1, 1, 1)
    return date(base_date.year, base_date.month + 1, 1)


def _days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def today_reference_instant() -> datetime:
    return datetime.now(UTC)

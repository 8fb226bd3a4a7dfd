from __future__ import annotations

import re

from app.services.agenda_lexicon import AFTERNOON_PERIODS, HOUR_WORDS
from app.services.agenda_text import PatternRule, alternation, first_match, normalize_text

_WORDS = alternation(HOUR_WORDS)
_HOUR = rf"(?P<hour>\d{{1,2}}(?!\d)|(?:{_WORDS})\b)"
_DIGIT_HOUR = r"(?P<hour>\d{1,2})"
_MINUTE = r"(?:(?::|h)(?P<minute>[0-5]\d))?(?![\d/])"
_UNIT = r"(?:\s*(?:h|hs|hrs?|horas?)\b)"
_PERIOD = r"(?:\s*(?:(?:da|de|a)\s+)?(?P<period>manha|tarde|noite)\b)?"
_RANGE_BOUND = r"\d{1,2}(?:(?::|h)[0-5]\d)?\s*(?:h|horas?)?"
# Number words only count as hours when a unit or a day period follows.
_WORD_HOUR = (
    rf"(?P<hour>{_WORDS})\b"
    r"(?=\s*(?:h|hs|hrs?|horas?|(?:(?:da|de|a)\s+)?(?:manha|tarde|noite))\b)"
)


def _format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _resolve_hour(token: str) -> int | None:
    cleaned = token.strip()
    if cleaned.isdigit():
        return int(cleaned)
    return HOUR_WORDS.get(cleaned)


def _build_time(
    *,
    hour_token: str,
    minute_token: str | None = None,
    period_token: str | None = None,
) -> str | None:
    hour = _resolve_hour(hour_token)
    if hour is None:
        return None
    minute = int(minute_token) if minute_token else 0
    if not 0 <= minute <= 59:
        return None
    if period_token in AFTERNOON_PERIODS and hour < 12:
        hour += 12
    if not 0 <= hour <= 23:
        return None
    return _format_time(hour, minute)


def _from_match(match: re.Match[str]) -> str | None:
    groups = match.groupdict()
    return _build_time(
        hour_token=groups["hour"],
        minute_token=groups.get("minute"),
        period_token=groups.get("period"),
    )


def _half_past(match: re.Match[str]) -> str | None:
    return _build_time(
        hour_token=match.group("hour"),
        minute_token="30",
        period_token=match.group("period"),
    )


def _fixed(value: str):
    return lambda _match: value


_START_RULES: tuple[PatternRule[str], ...] = (
    PatternRule(re.compile(r"\bmeio[\s-]?dia\b"), _fixed("12:00")),
    PatternRule(re.compile(r"\bmeia[\s-]?noite\b"), _fixed("00:00")),
    PatternRule(re.compile(rf"\b{_HOUR}\s+e\s+meia\b{_PERIOD}"), _half_past),
    PatternRule(
        re.compile(
            rf"\b(?:das?|de)\s*{_DIGIT_HOUR}{_MINUTE}\s*(?:h|horas?)?\s*"
            rf"(?:as|a|ate)\s*{_RANGE_BOUND}{_PERIOD}",
        ),
        _from_match,
    ),
    PatternRule(re.compile(rf"\bas\s*{_DIGIT_HOUR}{_MINUTE}{_UNIT}?{_PERIOD}"), _from_match),
    PatternRule(re.compile(rf"\bas\s+{_WORD_HOUR}{_UNIT}?{_PERIOD}"), _from_match),
    PatternRule(re.compile(rf"\b{_DIGIT_HOUR}{_MINUTE}{_UNIT}{_PERIOD}"), _from_match),
    PatternRule(
        re.compile(rf"\b(?P<hour>{_WORDS})\s+(?:(?:da|de|a)\s+)?(?P<period>manha|tarde|noite)\b"),
        _from_match,
    ),
    PatternRule(
        re.compile(rf"(?<!dia )(?<![\d:/])\b{_DIGIT_HOUR}{_MINUTE}(?:\s*h)?(?!\w){_PERIOD}"),
        _from_match,
    ),
)

_END_RULES: tuple[PatternRule[str], ...] = (
    PatternRule(
        re.compile(
            rf"\b(?:das?|de)\s*{_RANGE_BOUND}\s*(?:as|a|ate)\s*"
            rf"{_DIGIT_HOUR}{_MINUTE}{_UNIT}?{_PERIOD}",
        ),
        _from_match,
    ),
    PatternRule(
        re.compile(rf"\bate\s*(?:as\s*|a\s+)?{_DIGIT_HOUR}{_MINUTE}{_UNIT}?{_PERIOD}"),
        _from_match,
    ),
    PatternRule(
        re.compile(rf"\bate\s+(?:as\s+|a\s+)?{_WORD_HOUR}{_UNIT}?{_PERIOD}"),
        _from_match,
    ),
)


def extract_start_time(text: str) -> str | None:
    return first_match(_START_RULES, normalize_text(text))


def extract_end_time(text: str) -> str | None:
    return first_match(_END_RULES, normalize_text(text))


def add_hours(value: str, hours: int) -> str:
    raw_hour, raw_minute = value.split(":", maxsplit=1)
    return _format_time((int(raw_hour) + hours) % 24, int(raw_minute))

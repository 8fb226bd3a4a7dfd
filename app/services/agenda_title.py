from __future__ import annotations

import re

from app.services.agenda_lexicon import DEFAULT_TITLE, HOUR_WORDS
from app.services.agenda_text import alternation, capitalize_first

# Patterns run on the caller's original text so the title keeps its accents.
_FLAGS = re.IGNORECASE

_DAY = r"(?:segunda|ter[cç]a|quarta|quinta|sexta|s[aá]bado|domingo)(?:s)?(?:-feiras?)?"
_WORDS = alternation(HOUR_WORDS).replace("tres", "tr[eê]s")
_PERIOD = r"(?:\s+(?:(?:da|de|à|a)\s+)?(?:manh[ãa]|tarde|noite)\b)?"
_CLOCK = r"\d{1,2}(?:[:h][0-5]\d)?"
_UNIT = r"(?:\s*(?:horas?|hrs?|hs|h)\b)?"
_WORD_HOUR = (
    rf"(?:{_WORDS})\b"
    r"(?=\s*(?:horas?|hrs?|hs|h|(?:(?:da|de|à|a)\s+)?(?:manh[ãa]|tarde|noite))\b)"
)

_COMMAND_PREFIXES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?:me\s+)?lembr(?:ar|a|e)(?:-me)?\s+(?:de\s+|que\s+)?", _FLAGS),
    re.compile(r"^lembretes?\s*[:\-]?\s*", _FLAGS),
    re.compile(
        r"^adicion(?:ar|a|e)\s+(?:na\s+|à\s+|a\s+)?(?:minha\s+)?rotina\s+",
        _FLAGS,
    ),
    re.compile(r"^cri(?:ar|a|e)\s+(?:uma\s+)?rotina\s+(?:di[aá]ria\s+)?", _FLAGS),
    re.compile(r"^agend(?:ar|a|e)\s+", _FLAGS),
    re.compile(r"^marc(?:ar|a|e)\s+", _FLAGS),
    re.compile(
        r"^coloc(?:ar|a|e)\s+(?:na\s+|à\s+|a\s+)?(?:minha\s+)?(?:rotina|agenda)\s+",
        _FLAGS,
    ),
)

_RECURRENCE_PREFIXES: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"^tod[ao]s?\s+(?:as\s+)?{_DAY}(?:\s*(?:a|e|,|at[ée])\s*{_DAY})*\s*",
        _FLAGS,
    ),
    re.compile(rf"^(?:de\s+)?{_DAY}\s+(?:a|at[ée])\s+{_DAY}\s*", _FLAGS),
    re.compile(r"^tod[oa]s?\s+(?:os\s+)?dias?\s*", _FLAGS),
)

_TIME_EXPRESSIONS: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b(?:das?|de)\s*{_CLOCK}{_UNIT}\s*(?:[àa]s?|at[ée])\s*{_CLOCK}{_UNIT}{_PERIOD}",
        _FLAGS,
    ),
    re.compile(
        rf"\bat[ée]\s*(?:[àa]s?\s+)?(?:{_CLOCK}|{_WORD_HOUR}){_UNIT}{_PERIOD}",
        _FLAGS,
    ),
    re.compile(rf"(?:\b[àa]s\s+)?\b(?:\d{{1,2}}|{_WORDS})\s+e\s+meia\b{_PERIOD}", _FLAGS),
    re.compile(rf"\b[àa]s\s*(?:{_CLOCK}|{_WORD_HOUR}){_UNIT}{_PERIOD}", _FLAGS),
    re.compile(rf"\b{_CLOCK}\s*(?:horas?|hrs?|hs|h)\b{_PERIOD}", _FLAGS),
    re.compile(rf"\b\d{{1,2}}:[0-5]\d\b{_PERIOD}", _FLAGS),
    re.compile(
        rf"\b(?:{_WORDS}|\d{{1,2}})\s+(?:(?:da|de|à|a)\s+)?(?:manh[ãa]|tarde|noite)\b",
        _FLAGS,
    ),
    re.compile(r"\b(?:(?:ao|à|a)\s+)?meio[\s-]?dia\b", _FLAGS),
    re.compile(r"\b(?:(?:à|a)\s+)?meia[\s-]?noite\b", _FLAGS),
)

_DATE_EXPRESSIONS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bdepois\s+de\s+amanh[ãa]\b", _FLAGS),
    re.compile(r"\bamanh[ãa]\b", _FLAGS),
    re.compile(r"\bhoje\b", _FLAGS),
    re.compile(r"\b(?:n?o\s+)?dia\s*\d{1,2}\b(?!\s*(?:h\b|:))", _FLAGS),
    re.compile(r"\btod[oa]s?\s+(?:os\s+)?dias?\b", _FLAGS),
    re.compile(r"\bseg\s+a\s+sex\b", _FLAGS),
    re.compile(rf"\b(?:tod[oa]s?\s+(?:as\s+|os\s+)?)?(?:n[ao]s?\s+)?{_DAY}\b", _FLAGS),
)

_LEADING_CONNECTOR = re.compile(
    r"^(?:e|de|do|da|das|dos|no|na|nos|nas|em|às|as|até|ate|que|para|pra)\b\s*",
    _FLAGS,
)
_TRAILING_CONNECTOR = re.compile(
    r"\s*\b(?:e|a|à|às|as|de|do|da|das|dos|no|na|nos|nas|em|até|ate|para|pra|com)$",
    _FLAGS,
)
_EDGE_PUNCTUATION = re.compile(r"^[\s,;:.\-–]+|[\s,;:.\-–]+$")


def extract_title(text: str) -> str:
    cleaned = text.strip()

    for pattern in _COMMAND_PREFIXES:
        cleaned = pattern.sub("", cleaned, count=1)
    for pattern in _RECURRENCE_PREFIXES:
        cleaned = pattern.sub("", cleaned, count=1)
    cleaned = cleaned.strip()

    # Time before dates: "até" and "às" would otherwise be left behind.
    for pattern in _TIME_EXPRESSIONS:
        cleaned = pattern.sub(" ", cleaned)
    for pattern in _DATE_EXPRESSIONS:
        cleaned = pattern.sub(" ", cleaned)

    cleaned = _tidy(cleaned)
    return capitalize_first(cleaned) or DEFAULT_TITLE


def _tidy(text: str) -> str:
    cleaned = re.sub(r"\s+", " ", text)
    cleaned = re.sub(r"\s+([,;:.])", r"\1", cleaned)
    cleaned = re.sub(r"([,;])(?:\s*[,;])+", r"\1", cleaned)

    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = _EDGE_PUNCTUATION.sub("", cleaned)
        cleaned = _LEADING_CONNECTOR.sub("", cleaned)
        cleaned = _TRAILING_CONNECTOR.sub("", cleaned)
    return cleaned.strip()

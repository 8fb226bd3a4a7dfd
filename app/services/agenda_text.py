from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import re
from typing import Generic, TypeVar
import unicodedata

T = TypeVar("T")


@dataclass(frozen=True)
class PatternRule(Generic[T]):
    """A compiled pattern plus the function that turns its match into a value.

    The builder may return ``None`` to reject a match (for example an hour
    outside 0..23); the next rule is then tried.
    """

    pattern: re.Pattern[str]
    build: Callable[[re.Match[str]], T | None]


def first_match(rules: Iterable[PatternRule[T]], text: str) -> T | None:
    for rule in rules:
        match = rule.pattern.search(text)
        if not match:
            continue
        value = rule.build(match)
        if value is not None:
            return value
    return None


def normalize_text(text: str) -> str:
    lowered = text.lower().strip()
    decomposed = unicodedata.normalize("NFD", lowered)
    without_accents = "".join(
        char for char in decomposed if unicodedata.category(char) != "Mn"
    )
    return re.sub(r"\s+", " ", without_accents)


def capitalize_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def alternation(words: Iterable[str]) -> str:
    # Longest first so "vinte e uma" wins over "vinte".
    ordered = sorted(set(words), key=len, reverse=True)
    return "|".join(re.escape(word) for word in ordered)

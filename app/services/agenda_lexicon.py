from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from app.services.agenda_models import EventCategory, EventKind, Weekday

# Keys are normalized (lowercase, no accents).
HOUR_WORDS: Mapping[str, int] = MappingProxyType(
    {
        "uma": 1,
        "um": 1,
        "duas": 2,
        "dois": 2,
        "tres": 3,
        "quatro": 4,
        "cinco": 5,
        "seis": 6,
        "sete": 7,
        "oito": 8,
        "nove": 9,
        "dez": 10,
        "onze": 11,
        "doze": 12,
        "treze": 13,
        "quatorze": 14,
        "catorze": 14,
        "quinze": 15,
        "dezesseis": 16,
        "dezessete": 17,
        "dezoito": 18,
        "dezenove": 19,
        "vinte": 20,
        "vinte e uma": 21,
        "vinte e um": 21,
        "vinte e duas": 22,
        "vinte e dois": 22,
        "vinte e tres": 23,
    },
)

AFTERNOON_PERIODS = frozenset({"tarde", "noite"})

WEEK: tuple[Weekday, ...] = tuple(Weekday)
WORKWEEK: tuple[Weekday, ...] = WEEK[:5]

WEEKDAY_NAMES: Mapping[str, Weekday] = MappingProxyType(
    {
        "segunda": Weekday.mon,
        "seg": Weekday.mon,
        "terca": Weekday.tue,
        "quarta": Weekday.wed,
        "quinta": Weekday.thu,
        "sexta": Weekday.fri,
        "sex": Weekday.fri,
        "sabado": Weekday.sat,
        "domingo": Weekday.sun,
    },
)

# Abbreviations are only trusted inside ranges ("seg a sex").
FULL_WEEKDAY_NAMES: tuple[str, ...] = (
    "segunda",
    "terca",
    "quarta",
    "quinta",
    "sexta",
    "sabado",
    "domingo",
)

WEEKDAY_LABELS: Mapping[Weekday, str] = MappingProxyType(
    {
        Weekday.mon: "Segunda",
        Weekday.tue: "Terça",
        Weekday.wed: "Quarta",
        Weekday.thu: "Quinta",
        Weekday.fri: "Sexta",
        Weekday.sat: "Sábado",
        Weekday.sun: "Domingo",
    },
)

WEEKDAY_LONG_NAMES: Mapping[Weekday, str] = MappingProxyType(
    {
        Weekday.mon: "segunda-feira",
        Weekday.tue: "terça-feira",
        Weekday.wed: "quarta-feira",
        Weekday.thu: "quinta-feira",
        Weekday.fri: "sexta-feira",
        Weekday.sat: "sábado",
        Weekday.sun: "domingo",
    },
)

MONTH_NAMES: tuple[str, ...] = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

KIND_LABELS: Mapping[EventKind, str] = MappingProxyType(
    {
        EventKind.routine: "Rotina",
        EventKind.agenda: "Agenda",
        EventKind.reminder: "Lembrete",
        EventKind.event: "Evento",
    },
)

FEMININE_KINDS = frozenset({EventKind.routine, EventKind.agenda})

# Evaluated in order; the first bag with a hit decides the category.
CATEGORY_KEYWORDS: tuple[tuple[EventCategory, frozenset[str]], ...] = (
    (
        EventCategory.work,
        frozenset(
            {
                "trabalho",
                "reuniao",
                "call",
                "meeting",
                "projeto",
                "cliente",
                "clientes",
                "empresa",
                "office",
                "escritorio",
            },
        ),
    ),
    (
        EventCategory.study,
        frozenset(
            {
                "estudo",
                "estudos",
                "estudar",
                "aula",
                "aulas",
                "prova",
                "curso",
                "ler",
                "livro",
                "aprender",
            },
        ),
    ),
    (
        EventCategory.health,
        frozenset(
            {
                "academia",
                "exercicio",
                "exercicios",
                "treino",
                "treinar",
                "correr",
                "caminhada",
                "yoga",
                "saude",
                "medico",
                "medica",
                "consulta",
                "dentista",
            },
        ),
    ),
)

DEFAULT_TITLE = "Lembrete"
DEFAULT_START_TIME = "09:00"
DEFAULT_TZ_OFFSET_MINUTES = 180

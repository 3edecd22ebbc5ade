"""Lookup tables for the coded fields of the assessment roll.

Tables are constant data shared by every projection. Unknown codes never
raise; each table declares how it falls back:

- "label": `Code {code}`
- "blank": empty string (optional annex codes)
- "passthrough": the code itself (street types inside addresses)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .accessor import as_text

FALLBACK_LABEL = "label"
FALLBACK_BLANK = "blank"
FALLBACK_PASSTHROUGH = "passthrough"

NATURAL_PERSON = "1"
NO_SPECIAL_CONDITION = "1"


@dataclass(frozen=True)
class CodeTable:
    name: str
    labels: Mapping[str, str]
    fallback: str = FALLBACK_LABEL
    case_insensitive: bool = False

    def lookup(self, code: Any) -> str:
        key = as_text(code).strip()
        if not key:
            return ""
        if self.case_insensitive:
            key = key.upper()
        label = self.labels.get(key)
        if label is not None:
            return label
        if self.fallback == FALLBACK_BLANK:
            return ""
        if self.fallback == FALLBACK_PASSTHROUGH:
            return as_text(code).strip()
        return f"Code {as_text(code).strip()}"


def _table(name: str, labels: Dict[str, str], **kwargs: Any) -> CodeTable:
    return CodeTable(name=name, labels=MappingProxyType(dict(labels)), **kwargs)


STREET_TYPES = _table(
    "street_type",
    {
        "AL": "Allée",
        "AR": "Ancienne route",
        "AV": "Avenue",
        "BD": "Boulevard",
        "BO": "Boulevard",
        "CH": "Chemin",
        "CR": "Carré",
        "CT": "Cour",
        "IMP": "Impasse",
        "PAS": "Passage",
        "PL": "Place",
        "PROM": "Promenade",
        "RG": "Rang",
        "RTE": "Route",
        "RU": "Rue",
        "SQ": "Square",
        "TR": "Terrasse",
    },
    fallback=FALLBACK_PASSTHROUGH,
    case_insensitive=True,
)

# RL0201Hx
OWNER_STATUS = _table(
    "owner_status",
    {
        "1": "Personne physique",
        "2": "Personne morale",
        "3": "Gouvernement",
    },
)

# RL0201U. Code 1 is the ordinary inscription; see has_special_condition().
REGISTRATION_CONDITION = _table(
    "registration_condition",
    {
        "1": "Aucune condition particulière",
        "2": "Copropriété indivise",
        "3": "Emphytéose",
        "4": "Propriété superficiaire",
        "5": "Usufruit",
    },
)

# RLZU2001Fx, municipal annex code. Municipalities publish no common labels,
# so only the raw code is shown.
CONSTRUCTION_TYPE = _table("construction_type", {}, fallback=FALLBACK_BLANK)

# RLZU3005A, predominant usage
ZONING = _table(
    "zoning",
    {
        "R": "Résidentiel",
        "C": "Commercial",
        "I": "Industriel",
        "A": "Agricole",
    },
)

# RL0504Ex
EXEMPTION_TYPE = _table(
    "exemption_type",
    {
        "T": "Terrain",
        "B": "Bâtiment",
        "I": "Immeuble",
    },
)

# RL0309A
PHYSICAL_LINK = _table(
    "physical_link",
    {
        "1": "Détaché",
        "2": "Jumelé",
        "3": "En rangée",
        "4": "Intégré",
    },
    fallback=FALLBACK_BLANK,
)

TABLES: Mapping[str, CodeTable] = MappingProxyType(
    {
        t.name: t
        for t in (
            STREET_TYPES,
            OWNER_STATUS,
            REGISTRATION_CONDITION,
            CONSTRUCTION_TYPE,
            ZONING,
            EXEMPTION_TYPE,
            PHYSICAL_LINK,
        )
    }
)


def table(name: str) -> CodeTable:
    # Unknown table names are programming errors and raise KeyError.
    return TABLES[name]


def translate(table_name: str, code: Any) -> str:
    return table(table_name).lookup(code)


def is_natural_person(status_code: Any) -> bool:
    return as_text(status_code).strip() == NATURAL_PERSON


def has_special_condition(condition_code: Any) -> bool:
    code = as_text(condition_code).strip()
    return bool(code) and code != NO_SPECIAL_CONDITION

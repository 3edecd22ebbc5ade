"""fr-CA display formatting for roll values.

Every function here is total: bad input comes back as "" (or, for dates and
plain numbers, as the sanitized raw text) instead of raising.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Any, Mapping, Optional

from .accessor import as_text

GROUP_SEPARATOR = "\u00a0"
DECIMAL_SEPARATOR = ","
CURRENCY_SYMBOL = "$"
AREA_UNIT = "m²"
LENGTH_UNIT = "m"

UNAVAILABLE = "non disponible"

_SPACES_RE = re.compile(r"[\s\u00a0\u202f]+")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$")
_DMY_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_LOCALE_MARKS = str.maketrans({",": GROUP_SEPARATOR, ".": DECIMAL_SEPARATOR})


def sanitize_display(value: Any) -> str:
    if value is None:
        return ""
    text = value if isinstance(value, str) else as_text(value)
    text = text.strip()
    if text.casefold() == UNAVAILABLE:
        return ""
    return text


def parse_number(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    else:
        text = _SPACES_RE.sub("", sanitize_display(raw))
        if not text:
            return None
        if text.count(",") == 1 and "." not in text:
            text = text.replace(",", ".")
        else:
            text = text.replace(",", "")
        try:
            value = float(text)
        except ValueError:
            return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return value


def _localize(formatted: str) -> str:
    return formatted.translate(_LOCALE_MARKS)


def _decimal_text(value: float, max_fraction_digits: int = 3) -> str:
    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return _localize(text)


def currency(raw: Any) -> str:
    value = parse_number(raw)
    if value is None or value == 0:
        return ""
    return f"{_localize(f'{value:,.2f}')}{GROUP_SEPARATOR}{CURRENCY_SYMBOL}"


def number(raw: Any) -> str:
    value = parse_number(raw)
    if value is None:
        return sanitize_display(raw)
    return _decimal_text(value)


def _measure(raw: Any, unit: str) -> str:
    value = parse_number(raw)
    if value is None or value == 0:
        return ""
    return f"{_decimal_text(value)} {unit}"


def area(raw: Any) -> str:
    return _measure(raw, AREA_UNIT)


def frontage(raw: Any) -> str:
    return _measure(raw, LENGTH_UNIT)


def _parse_date(text: str) -> Optional[dt.date]:
    m = _ISO_DATE_RE.match(text)
    if m:
        year, month, day = (int(g) for g in m.groups())
    else:
        m = _DMY_DATE_RE.match(text)
        if not m:
            return None
        day, month, year = (int(g) for g in m.groups())
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


# strftime("%Y") does not pad years below 1000 on glibc.
def _dmy(value: dt.date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def date(raw: Any) -> str:
    """Render a roll date as dd/mm/yyyy.

    Accepts ISO dates (with or without a time part), dates already in
    dd/mm/yyyy, `date`/`datetime` objects and Mongo extended JSON
    (`{"$date": ...}`). Anything unparsable is returned as sanitized text.
    """

    if isinstance(raw, Mapping):
        raw = raw.get("$date")
    if isinstance(raw, (dt.date, dt.datetime)):
        return _dmy(raw)
    text = sanitize_display(raw)
    if not text:
        return ""
    parsed = _parse_date(text)
    if parsed is None:
        return text
    return _dmy(parsed)

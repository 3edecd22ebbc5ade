from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .codes import translate
from .formatting import sanitize_display
from .settings import get_settings

CANADA = {"CANADA", "CA", "CAN"}


@dataclass(frozen=True)
class AddressLines:
    full_address: str = ""
    address_line1: str = ""
    address_line2: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _join(*parts: Any, sep: str = " ") -> str:
    cleaned = [sanitize_display(p) for p in parts]
    return sep.join(p for p in cleaned if p)


def _street_line(civic_number: Any, street_type_code: Any, street_name: Any) -> str:
    return _join(civic_number, translate("street_type", street_type_code), street_name)


def _province(province: Optional[str]) -> str:
    return sanitize_display(province) or get_settings().province


def _assemble(line1: str, line2: str) -> AddressLines:
    return AddressLines(
        full_address=_join(line1, line2, sep=", "),
        address_line1=line1,
        address_line2=line2,
    )


def compose(
    civic_number: Any,
    street_type_code: Any,
    street_name: Any,
    municipality: Any,
    postal_code: Any,
    province: Optional[str] = None,
) -> AddressLines:
    """Canada Post style address for an assessment unit.

    The municipality is taken as given by the caller. With no civic, street
    or postal fragment the result is empty.
    """

    line1 = _street_line(civic_number, street_type_code, street_name)
    postal = sanitize_display(postal_code)
    if not line1 and not postal:
        return AddressLines()
    line2 = _join(municipality, _province(province), postal)
    return _assemble(line1, line2)


def compose_mailing(
    civic_number: Any = "",
    street_type_code: Any = "",
    street_name: Any = "",
    municipality: Any = "",
    postal_code: Any = "",
    province: Any = "",
    *,
    unstructured: Any = "",
    apartment: Any = "",
    po_box: Any = "",
    country: Any = "",
) -> AddressLines:
    """Best-effort owner mailing address from whatever fragments exist."""

    street = _street_line(civic_number, street_type_code, street_name)
    if not street:
        street = sanitize_display(unstructured)
    apt = sanitize_display(apartment)
    if apt:
        street = _join(street, f"app. {apt}", sep=", ")
    box = sanitize_display(po_box)
    if box:
        street = _join(street, f"C.P. {box}", sep=", ")

    locality = _join(municipality, postal_code)
    line2 = ""
    if locality:
        line2 = _join(municipality, _province(province), postal_code)
    elif sanitize_display(province):
        line2 = sanitize_display(province)

    ctry = sanitize_display(country)
    if ctry and ctry.upper() not in CANADA:
        line2 = _join(line2, ctry, sep=", ")

    return _assemble(street, line2)


def format_street_suggestion(street_name: Any) -> str:
    """`"HYMUS (boulevard)"` -> `"Boulevard HYMUS"`; other names unchanged."""

    text = sanitize_display(street_name)
    if "(" not in text or ")" not in text:
        return text
    name, _, rest = text.partition("(")
    street_type = rest.replace(")", "").strip()
    full_type = translate("street_type", street_type)
    return _join(full_type[:1].upper() + full_type[1:].lower(), name)


def lot_number(*parts: Any) -> str:
    return _join(*parts, sep="-")

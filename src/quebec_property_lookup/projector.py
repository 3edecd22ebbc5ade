"""Raw roll record -> NormalizedProperty.

Each field group is extracted on its own; a malformed group is logged and
left empty without blocking the others. The assembled payload goes through
`sanitize_display` as a last step, so no string in the result is ever None
or the "Non disponible" placeholder.
"""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from . import formatting as fmt
from .accessor import as_list, as_text, get
from .address import compose, lot_number
from .codes import translate
from .owners import OwnerBatch, normalize
from .schema import (
    BuildingRow,
    DwellingRow,
    FiscalDistributionRow,
    LandRow,
    NormalizedProperty,
)
from .settings import get_settings

logger = logging.getLogger(__name__)

Formatter = Callable[[Any], str]
FieldSpecs = Dict[str, Tuple[str, Formatter]]

UNIT = "RLUEx"
ANNEX_UNIT = "RENSEIGNEMENTS_ANNEXABLES_UNITE"
ANNEX_GLOBAL = "RENSEIGNEMENTS_ANNEXABLES_GLOBAL"

text = fmt.sanitize_display

ADDRESS_FIELDS: FieldSpecs = {
    "rl0101Ax": ("RL0101Ax", text),  # civic number
    "rl0101Bx": ("RL0101Bx", text),
    "rl0101Cx": ("RL0101Cx", text),
    "rl0101Dx": ("RL0101Dx", text),
    "rl0101Ex": ("RL0101Ex", text),  # street type code
    "rl0101Fx": ("RL0101Fx", text),
    "rl0101Gx": ("RL0101Gx", text),  # street name
    "rl0101Hx": ("RL0101Hx", text),
    "rl0101Ix": ("RL0101Ix", text),
    "rl0101Jx": ("RL0101Jx", text),
    "postal_code": ("POSTALCODE", text),
}

CADASTRE_FIELDS: FieldSpecs = {
    f"rl0104{s}": (f"RL0104{s}", text) for s in "ABCDEFGH"
}

UNIT_ID_FIELDS: FieldSpecs = {
    "rl0105A": ("RL0105A", text),
    "rl0106A": ("RL0106A", text),  # matricule
    "rl0107A": ("RL0107A", text),
}

FIRST_OWNER_FIELDS: FieldSpecs = {
    "rl0201Ax": ("RL0201Ax", text),
    "rl0201Bx": ("RL0201Bx", text),
    "rl0201Cx": ("RL0201Cx", text),
    "rl0201Dx": ("RL0201Dx", text),
    "rl0201Ex": ("RL0201Ex", text),
    "rl0201Fx": ("RL0201Fx", text),
    "rl0201Gx": ("RL0201Gx", fmt.date),
    "rl0201Hx": ("RL0201Hx", text),
    "rl0201Ix": ("RL0201Ix", text),
    "rl0201Kx": ("RL0201Kx", text),
    "rl0201Mx": ("RL0201Mx", text),
    "rl0201Qx": ("RL0201Qx", text),
    "rl0201Rx": ("RL0201Rx", text),
}

LAND_FIELDS: FieldSpecs = {
    "rl0301A": ("RL0301A", fmt.frontage),
    "rl0302A": ("RL0302A", fmt.area),
    "rl0303A": ("RL0303A", text),
    "rl0304A": ("RL0304A", fmt.area),
    "rl0305A": ("RL0305A", fmt.area),
    "rl0314A": ("RL0314A", fmt.area),
    "rl0315A": ("RL0315A", fmt.area),
    "rl0316A": ("RL0316A", fmt.area),
    "rl0320A": ("RL0320A", fmt.area),
}

BUILDING_FIELDS: FieldSpecs = {
    "rl0306A": ("RL0306A", text),
    "rl0307A": ("RL0307A", text),
    "rl0307B": ("RL0307B", text),
    "rl0308A": ("RL0308A", fmt.area),
    "rl0309A": ("RL0309A", text),
    "rl0310A": ("RL0310A", text),
    "rl0311A": ("RL0311A", text),
    "rl0312A": ("RL0312A", text),
    "rl0313A": ("RL0313A", text),
    "rl0317A": ("RL0317A", fmt.area),
    "rl0318A": ("RL0318A", text),
    "rl0319A": ("RL0319A", text),
}

VALUE_FIELDS: FieldSpecs = {
    "rl0401A": ("RL0401A", fmt.date),
    "rl0402A": ("RL0402A", fmt.number),
    "rl0403A": ("RL0403A", fmt.number),
    "rl0404A": ("RL0404A", fmt.number),
    "rl0405A": ("RL0405A", fmt.number),
    "land_value": ("RL0402A", fmt.currency),
    "building_value": ("RL0403A", fmt.currency),
    "total_value": ("RL0404A", fmt.currency),
    "previous_total_value": ("RL0405A", fmt.currency),
}

FISCAL_FIELDS: FieldSpecs = {
    "rl0501A": ("RL0501A", text),
    "rl0502A": ("RL0502A", text),
    "rl0503A": ("RL0503A", text),
    "rl0508A": ("RL0508A", text),
}

SIGNATORY_FIELDS: FieldSpecs = {
    "rl0601A": ("RL0601A", text),
    "rl0601B": ("RL0601B", text),
    "rl0602A": ("RL0602A", text),
    "rl0603A": ("RL0603A", text),
    "rl0604A": ("RL0604A", fmt.date),
    "rl0605A": ("RL0605A", text),
}

GLOBAL_ANNEX_FIELDS: FieldSpecs = {
    "rlzg0001": ("RLZG0001", text),
    "rlzg0002": ("RLZG0002", fmt.date),
}

UNIT_ANNEX_FIELDS: FieldSpecs = {
    "rlzu3005A": ("RLZU3005A", text),
    "rlzu3005B": ("RLZU3005B", text),
    "rlzu3005C": ("RLZU3005C", text),
    "rlzu3006B": ("RLZU3006B", text),
    "rlzu3007x": ("RLZU3007x", text),
    "rlzu3101": ("RLZU3101", fmt.date),
    "rlzu3102": ("RLZU3102", fmt.date),
    "rlzu3103": ("RLZU3103", fmt.date),
    "rlzu3104": ("RLZU3104", fmt.currency),
    "rlzu4001": ("RLZU4001", fmt.currency),
    "rlzu4002": ("RLZU4002", fmt.currency),
}


def _section(record: Any, *path: str) -> Mapping[str, Any]:
    value = get(record, path, None)
    return value if isinstance(value, Mapping) else {}


def _first(record: Any, *path: str) -> Mapping[str, Any]:
    for entry in as_list(get(record, path, None)):
        if isinstance(entry, Mapping):
            return entry
    return {}


def _entries(record: Any, *path: str) -> List[Mapping[str, Any]]:
    return [e for e in as_list(get(record, path, None)) if isinstance(e, Mapping)]


def _extract(section: Mapping[str, Any], specs: FieldSpecs) -> Dict[str, Any]:
    return {attr: fn(get(section, (key,))) for attr, (key, fn) in specs.items()}


def _record_id(record: Any) -> str:
    raw = get(record, ("_id",), None)
    if isinstance(raw, Mapping):
        return as_text(raw.get("$oid"))
    return as_text(raw)


def _general(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": _record_id(record),
        "version": text(get(record, ("VERSION",))),
        "code_municipalite": text(get(record, ("RLM01A",))),
        "annee_role": text(get(record, ("RLM02A",))),
    }


def _address(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    rl0101x = _first(record, UNIT, "RL0101", "RL0101x")
    out = _extract(rl0101x, ADDRESS_FIELDS)
    out["street_type_label"] = translate("street_type", out["rl0101Ex"])
    lines = compose(
        out["rl0101Ax"],
        out["rl0101Ex"],
        out["rl0101Gx"],
        ctx["municipality"],
        out["postal_code"],
    )
    out.update(lines.to_dict())
    return out


def _identification(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    unit = _section(record, UNIT)
    cadastre = _section(record, UNIT, "RL0104")
    out = {"rl0103Ax": text(get(_first(record, UNIT, "RL0103", "RL0103x"), ("RL0103Ax",)))}
    out.update(_extract(cadastre, CADASTRE_FIELDS))
    out["lot_number"] = lot_number(out["rl0104A"], out["rl0104B"], out["rl0104C"], out["rl0104D"])
    out.update(_extract(unit, UNIT_ID_FIELDS))
    return out


def _owner(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    batch: OwnerBatch = ctx["owners"]
    out = _extract(_first(record, UNIT, "RL0201", "RL0201x"), FIRST_OWNER_FIELDS)
    first = batch.owners[0] if batch.owners else None
    out.update(
        {
            "rl0201U": batch.condition_code,
            "owner_name": first.full_name if first else "",
            "owner_status_label": first.status_label if first else "",
            "owners": list(batch.owners),
            "has_multiple_owners": batch.has_multiple_owners,
            "has_two_owners": batch.has_two_owners,
            "condition_inscription": batch.condition_code,
            "condition_inscription_label": batch.condition_label,
            "has_special_condition": batch.has_special_condition,
        }
    )
    return out


def _characteristics(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    unit = _section(record, UNIT)
    out = _extract(unit, LAND_FIELDS)
    out.update(_extract(unit, BUILDING_FIELDS))
    out["physical_link_label"] = translate("physical_link", out["rl0309A"])
    return out


def _valuation(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    return _extract(_section(record, UNIT), VALUE_FIELDS)


def fiscal_rows(entries: Iterable[Mapping[str, Any]]) -> List[FiscalDistributionRow]:
    rows = []
    for index, item in enumerate(entries):
        type_code = text(get(item, ("RL0504Ex",)))
        rows.append(
            FiscalDistributionRow(
                id=index,
                tariff_code=text(get(item, ("RL0504Ax",))),
                tariff_number=text(get(item, ("RL0504Bx",))),
                usage_code=text(get(item, ("RL0504Cx",))),
                value=fmt.currency(get(item, ("RL0504Dx",))),
                type_code=type_code,
                type_label=translate("exemption_type", type_code),
                percentage=text(get(item, ("RL0504Fx",))),
            )
        )
    return rows


def _fiscal(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    out = _extract(_section(record, UNIT), FISCAL_FIELDS)
    out["rl0504_details"] = fiscal_rows(_entries(record, UNIT, "RL0504", "RL0504x"))
    return out


def _signatories(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    # Normally at document level; some exports nest them in RLUEx.
    out = _extract(record, SIGNATORY_FIELDS)
    nested = _extract(_section(record, UNIT), SIGNATORY_FIELDS)
    return {k: v or nested[k] for k, v in out.items()}


def _annexes(record: Mapping[str, Any], ctx: Dict[str, Any]) -> Dict[str, Any]:
    annex = _section(record, UNIT, ANNEX_UNIT)
    out = _extract(_section(record, ANNEX_GLOBAL), GLOBAL_ANNEX_FIELDS)
    out.update(_extract(annex, UNIT_ANNEX_FIELDS))
    out["usage_label"] = translate("zoning", out["rlzu3005A"])
    out["rlzu1007_details"] = [
        DwellingRow(
            dwelling_number=text(get(e, ("RLZU1007Ax",))),
            dwelling_area=fmt.area(get(e, ("RLZU1007Bx",))),
        )
        for e in _entries(annex, "RLZU1007", "RLZU1007x")
    ]
    out["rlzu1008_details"] = [
        LandRow(
            number=text(get(e, ("RLZU1008Ax",))),
            frontage=fmt.frontage(get(e, ("RLZU1008Bx",))),
            area=fmt.area(get(e, ("RLZU1008Cx",))),
            shape=text(get(e, ("RLZU1008Dx",))),
        )
        for e in _entries(annex, "RLZU1008", "RLZU1008x")
    ]
    out["rlzu2001_details"] = [
        BuildingRow(
            building_number=text(get(e, ("RLZU2001Ax",))),
            replacement_cost=fmt.currency(get(e, ("RLZU2001Bx",))),
            building_class=text(get(e, ("RLZU2001Ex",))),
            construction_type=text(get(e, ("RLZU2001Fx",))),
            construction_type_label=translate("construction_type", get(e, ("RLZU2001Fx",))),
        )
        for e in _entries(annex, "RLZU2001", "RLZU2001x")
    ]
    return out


GROUPS = (
    ("general", _general),
    ("address", _address),
    ("identification", _identification),
    ("owner", _owner),
    ("characteristics", _characteristics),
    ("valuation", _valuation),
    ("fiscal", _fiscal),
    ("signatories", _signatories),
    ("annexes", _annexes),
)


def sanitize_tree(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, str):
        return fmt.sanitize_display(value)
    if isinstance(value, list):
        return [sanitize_tree(v) for v in value]
    if isinstance(value, dict):
        return {k: sanitize_tree(v) for k, v in value.items()}
    if is_dataclass(value) and not isinstance(value, type):
        return replace(value, **{f.name: sanitize_tree(getattr(value, f.name)) for f in fields(value)})
    return value


def _project(record: Any, selected_municipality: Optional[str]) -> NormalizedProperty:
    settings = get_settings()
    if not isinstance(record, Mapping):
        record = {}
    rl0201 = _section(record, UNIT, "RL0201")
    ctx = {
        "municipality": text(selected_municipality) or settings.default_municipality,
        "owners": normalize(rl0201.get("RL0201x"), rl0201.get("RL0201U")),
    }

    known = {f.name for f in fields(NormalizedProperty)}
    data: Dict[str, Any] = {}
    for name, extract in GROUPS:
        try:
            group = extract(record, ctx)
        except Exception as e:
            if settings.strict:
                raise
            logger.warning("%s fields skipped: %s", name, e)
            continue
        data.update({k: v for k, v in group.items() if k in known})

    return NormalizedProperty(**sanitize_tree(data))


def project(record: Any, selected_municipality: Optional[str] = None) -> NormalizedProperty:
    """Project one raw roll record into a NormalizedProperty.

    `selected_municipality` is the municipality chosen for the search and is
    authoritative for the composed address. Never raises on bad data unless
    strict mode is enabled (QPL_STRICT=1).
    """

    try:
        return _project(record, selected_municipality)
    except Exception:
        if get_settings().strict:
            raise
        logger.exception("projection failed; returning empty property")
        return NormalizedProperty()


def project_many(records: Iterable[Any], selected_municipality: Optional[str] = None) -> List[NormalizedProperty]:
    return [project(r, selected_municipality) for r in records]

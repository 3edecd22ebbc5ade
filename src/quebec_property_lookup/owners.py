from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .accessor import as_list, get
from .address import compose_mailing
from .codes import has_special_condition, is_natural_person, translate
from .formatting import date, sanitize_display
from .schema import Owner, OwnerAddress

logger = logging.getLogger(__name__)

# OwnerAddress attribute -> RL0201x key
ADDRESS_FIELDS = {
    "unstructured": "RL0201Cx",
    "civic_number": "RL0201Ix",
    "civic_fraction": "RL0201Jx",
    "street_type_code": "RL0201Kx",
    "link_code": "RL0201Lx",
    "street_name": "RL0201Mx",
    "cardinal_point": "RL0201Nx",
    "apartment": "RL0201Ox",
    "apartment_fraction": "RL0201Px",
    "municipality": "RL0201Dx",
    "postal_code": "RL0201Ex",
    "province": "RL0201Qx",
    "country": "RL0201Rx",
    "po_box": "RL0201Sx",
    "postal_station": "RL0201Tx",
    "complement": "RL0201Fx",
}


@dataclass(frozen=True)
class OwnerBatch:
    owners: List[Owner] = field(default_factory=list)
    has_multiple_owners: bool = False
    has_two_owners: bool = False
    condition_code: str = ""
    condition_label: str = ""
    has_special_condition: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _text(entry: Mapping[str, Any], key: str) -> str:
    return sanitize_display(get(entry, (key,)))


def display_name(status_code: str, first_name: str, last_name: str) -> str:
    # Companies and public bodies are listed under their legal name only.
    if is_natural_person(status_code) and first_name and last_name:
        return f"{first_name} {last_name}"
    return last_name


def owner_address(entry: Mapping[str, Any]) -> OwnerAddress:
    return OwnerAddress(**{attr: _text(entry, key) for attr, key in ADDRESS_FIELDS.items()})


def build_owner(entry: Mapping[str, Any], index: int) -> Owner:
    last_name = _text(entry, "RL0201Ax")
    first_name = _text(entry, "RL0201Bx")
    status_code = _text(entry, "RL0201Hx")
    registration_date = _text(entry, "RL0201Gx")
    addr = owner_address(entry)
    mailing = compose_mailing(
        addr.civic_number,
        addr.street_type_code,
        addr.street_name,
        addr.municipality,
        addr.postal_code,
        addr.province,
        unstructured=addr.unstructured,
        apartment=addr.apartment,
        po_box=addr.po_box,
        country=addr.country,
    )
    return Owner(
        id=f"owner_{index + 1}",
        last_name=last_name,
        first_name=first_name,
        full_name=display_name(status_code, first_name, last_name),
        status_code=status_code,
        status_label=translate("owner_status", status_code),
        registration_date=registration_date,
        registration_date_formatted=date(registration_date),
        address=addr,
        formatted_address=mailing.full_address,
    )


def _collect(raw_owner_field: Any) -> List[Owner]:
    owners: List[Owner] = []
    for index, entry in enumerate(as_list(raw_owner_field)):
        if entry is None:
            continue
        if not isinstance(entry, Mapping):
            logger.warning("skipping owner entry %d: expected object, got %s", index, type(entry).__name__)
            continue
        try:
            owners.append(build_owner(entry, index))
        except Exception as e:
            logger.warning("dropping owner entry %d: %s", index, e)
    return owners


def normalize(raw_owner_field: Any, registration_condition_code: Optional[Any] = "") -> OwnerBatch:
    """Normalize RL0201x (absent, one object, or a list) into ordered owners.

    Document order is kept: it is the legal co-ownership order.
    """

    condition_code = sanitize_display(registration_condition_code)
    condition_label = translate("registration_condition", condition_code)
    special = has_special_condition(condition_code)
    try:
        owners = _collect(raw_owner_field)
    except Exception as e:
        logger.warning("owner normalization failed: %s", e)
        owners = []
    return OwnerBatch(
        owners=owners,
        has_multiple_owners=len(owners) > 1,
        has_two_owners=len(owners) == 2,
        condition_code=condition_code,
        condition_label=condition_label,
        has_special_condition=special,
    )

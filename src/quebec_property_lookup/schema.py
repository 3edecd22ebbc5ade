from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class OwnerAddress:
    unstructured: str = ""  # RL0201Cx
    civic_number: str = ""  # RL0201Ix
    civic_fraction: str = ""  # RL0201Jx
    street_type_code: str = ""  # RL0201Kx
    link_code: str = ""  # RL0201Lx
    street_name: str = ""  # RL0201Mx
    cardinal_point: str = ""  # RL0201Nx
    apartment: str = ""  # RL0201Ox
    apartment_fraction: str = ""  # RL0201Px
    municipality: str = ""  # RL0201Dx
    postal_code: str = ""  # RL0201Ex
    province: str = ""  # RL0201Qx
    country: str = ""  # RL0201Rx
    po_box: str = ""  # RL0201Sx
    postal_station: str = ""  # RL0201Tx
    complement: str = ""  # RL0201Fx

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Owner:
    id: str = ""
    last_name: str = ""
    first_name: str = ""
    full_name: str = ""
    status_code: str = ""
    status_label: str = ""
    registration_date: str = ""
    registration_date_formatted: str = ""
    address: OwnerAddress = field(default_factory=OwnerAddress)
    formatted_address: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FiscalDistributionRow:
    """One RL0504x entry (value breakdown by tax usage)."""

    id: int = 0
    tariff_code: str = ""  # RL0504Ax
    tariff_number: str = ""  # RL0504Bx
    usage_code: str = ""  # RL0504Cx
    value: str = ""  # RL0504Dx
    type_code: str = ""  # RL0504Ex
    type_label: str = ""
    percentage: str = ""  # RL0504Fx


@dataclass(frozen=True)
class DwellingRow:
    dwelling_number: str = ""  # RLZU1007Ax
    dwelling_area: str = ""  # RLZU1007Bx


@dataclass(frozen=True)
class LandRow:
    number: str = ""  # RLZU1008Ax
    frontage: str = ""  # RLZU1008Bx
    area: str = ""  # RLZU1008Cx
    shape: str = ""  # RLZU1008Dx


@dataclass(frozen=True)
class BuildingRow:
    building_number: str = ""  # RLZU2001Ax
    replacement_cost: str = ""  # RLZU2001Bx
    building_class: str = ""  # RLZU2001Ex
    construction_type: str = ""  # RLZU2001Fx
    construction_type_label: str = ""


@dataclass(frozen=True)
class NormalizedProperty:
    """Display-ready projection of one roll record.

    Attributes named after roll codes (`rl0404A`, `rlzu3005A`, ...) keep the
    external field name so downstream consumers can map them directly.
    Every string is either formatted text or "".
    """

    # general
    id: str = ""
    version: str = ""
    code_municipalite: str = ""  # RLM01A
    annee_role: str = ""  # RLM02A

    # canonical address
    full_address: str = ""
    address_line1: str = ""
    address_line2: str = ""

    # section 1: identification (RL0101x)
    rl0101Ax: str = ""
    rl0101Bx: str = ""
    rl0101Cx: str = ""
    rl0101Dx: str = ""
    rl0101Ex: str = ""
    rl0101Fx: str = ""
    rl0101Gx: str = ""
    rl0101Hx: str = ""
    rl0101Ix: str = ""
    rl0101Jx: str = ""
    postal_code: str = ""
    street_type_label: str = ""

    rl0103Ax: str = ""

    # cadastre (RL0104)
    rl0104A: str = ""
    rl0104B: str = ""
    rl0104C: str = ""
    rl0104D: str = ""
    rl0104E: str = ""
    rl0104F: str = ""
    rl0104G: str = ""
    rl0104H: str = ""
    lot_number: str = ""

    rl0105A: str = ""
    rl0106A: str = ""
    rl0107A: str = ""

    # section 2: first owner (RL0201x)
    rl0201Ax: str = ""
    rl0201Bx: str = ""
    rl0201Cx: str = ""
    rl0201Dx: str = ""
    rl0201Ex: str = ""
    rl0201Fx: str = ""
    rl0201Gx: str = ""
    rl0201Hx: str = ""
    rl0201Ix: str = ""
    rl0201Kx: str = ""
    rl0201Mx: str = ""
    rl0201Qx: str = ""
    rl0201Rx: str = ""
    rl0201U: str = ""

    owner_name: str = ""
    owner_status_label: str = ""
    owners: List[Owner] = field(default_factory=list)
    has_multiple_owners: bool = False
    has_two_owners: bool = False
    condition_inscription: str = ""
    condition_inscription_label: str = ""
    has_special_condition: bool = False

    # section 3: land
    rl0301A: str = ""
    rl0302A: str = ""
    rl0303A: str = ""
    rl0304A: str = ""
    rl0305A: str = ""
    rl0314A: str = ""
    rl0315A: str = ""
    rl0316A: str = ""
    rl0320A: str = ""

    # section 3: building
    rl0306A: str = ""
    rl0307A: str = ""
    rl0307B: str = ""
    rl0308A: str = ""
    rl0309A: str = ""
    rl0310A: str = ""
    rl0311A: str = ""
    rl0312A: str = ""
    rl0313A: str = ""
    rl0317A: str = ""
    rl0318A: str = ""
    rl0319A: str = ""
    physical_link_label: str = ""

    # section 4: values
    rl0401A: str = ""
    rl0402A: str = ""
    rl0403A: str = ""
    rl0404A: str = ""
    rl0405A: str = ""
    land_value: str = ""
    building_value: str = ""
    total_value: str = ""
    previous_total_value: str = ""

    # section 5: fiscal distribution
    rl0501A: str = ""
    rl0502A: str = ""
    rl0503A: str = ""
    rl0508A: str = ""
    rl0504_details: List[FiscalDistributionRow] = field(default_factory=list)

    # section 6: roll signatory
    rl0601A: str = ""
    rl0601B: str = ""
    rl0602A: str = ""
    rl0603A: str = ""
    rl0604A: str = ""
    rl0605A: str = ""

    # annexes
    rlzg0001: str = ""
    rlzg0002: str = ""
    rlzu1007_details: List[DwellingRow] = field(default_factory=list)
    rlzu1008_details: List[LandRow] = field(default_factory=list)
    rlzu2001_details: List[BuildingRow] = field(default_factory=list)
    rlzu3005A: str = ""
    rlzu3005B: str = ""
    rlzu3005C: str = ""
    rlzu3006B: str = ""
    rlzu3007x: str = ""
    usage_label: str = ""
    rlzu3101: str = ""
    rlzu3102: str = ""
    rlzu3103: str = ""
    rlzu3104: str = ""
    rlzu4001: str = ""
    rlzu4002: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

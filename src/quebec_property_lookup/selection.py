from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .schema import NormalizedProperty


class PropertySelection(BaseModel):
    """Minimal subset of a NormalizedProperty handed to a workflow engine.

    Every field is a plain selection from the projection; nothing is
    recomputed here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    full_address: str = Field(default="", alias="fullAddress")
    owner_name: str = Field(default="", alias="ownerName")
    assessed_value: str = Field(default="", alias="assessedValue")
    postal_code: str = Field(default="", alias="postalCode")
    matricule: str = ""

    @classmethod
    def from_property(cls, prop: NormalizedProperty) -> "PropertySelection":
        return cls(
            id=prop.id,
            full_address=prop.full_address,
            owner_name=prop.rl0201Ax,
            assessed_value=prop.rl0404A,
            postal_code=prop.postal_code,
            matricule=prop.rl0106A,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


def selection_json(prop: NormalizedProperty) -> str:
    return PropertySelection.from_property(prop).to_json()

"""Normalization of Quebec municipal assessment roll records."""

from .projector import project, project_many
from .schema import NormalizedProperty, Owner, OwnerAddress
from .selection import PropertySelection, selection_json

__all__ = [
    "NormalizedProperty",
    "Owner",
    "OwnerAddress",
    "PropertySelection",
    "project",
    "project_many",
    "selection_json",
]

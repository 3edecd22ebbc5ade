from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

FieldPath = Tuple[str, ...]
PathLike = Union[str, Sequence[str]]


def to_path(path: PathLike) -> FieldPath:
    """Accept `("RLUEx", "RL0101")`, `["RLUEx", "RL0101"]` or `"RLUEx.RL0101"`."""

    if isinstance(path, str):
        return tuple(seg for seg in path.split(".") if seg)
    return tuple(str(seg) for seg in path)


def _resolve(record: Any, path: FieldPath) -> Tuple[bool, Any]:
    if record is None:
        return False, None
    current = record
    for segment in path:
        if not isinstance(current, Mapping):
            return False, None
        if segment not in current:
            return False, None
        current = current[segment]
        if current is None:
            return False, None
    return True, current


def get(record: Any, path: PathLike, default: Any = "") -> Any:
    """Read a nested value; any missing or null step yields `default`.

    An empty string at the leaf counts as present.
    """

    found, value = _resolve(record, to_path(path))
    if not found:
        return default
    return value


def get_array(record: Any, path: PathLike, default: Optional[List[Any]] = None) -> List[Any]:
    found, value = _resolve(record, to_path(path))
    if found and isinstance(value, (list, tuple)):
        return list(value)
    return [] if default is None else default


def as_list(value: Any) -> List[Any]:
    """Object-or-array coercion for sections whose cardinality varies."""

    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Mapping):
        return [value]
    return []


def as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (int, Decimal)):
        return str(value)
    return ""

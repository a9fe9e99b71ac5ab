"""
Document Helpers
Field-path access and value normalisation shared by the document stores
"""
import json
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple


def normalize_value(value: Any) -> Any:
    """Reduce enums and sets to plain JSON values; other values pass through"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value


def resolve_path(document: Dict[str, Any], field: str, default: Any = None) -> Any:
    """Read a dotted field path ("salary.amount") from a nested document"""
    current: Any = document
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def unique_key(document: Dict[str, Any], fields: Sequence[str]) -> str:
    """Stable string key for the values of ``fields`` in ``document``"""
    values = [normalize_value(resolve_path(document, field)) for field in fields]
    return json.dumps(values, sort_keys=True, default=str)


_MISSING = object()


def first_mismatch(
    document: Dict[str, Any],
    expected: Sequence[Tuple[str, Any]]
) -> Optional[str]:
    """First field in ``expected`` whose stored value differs, None when all hold"""
    for field, value in expected:
        if resolve_path(document, field, _MISSING) != normalize_value(value):
            return field
    return None

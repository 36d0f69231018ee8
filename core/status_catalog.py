"""
Status catalog lookup.

The catalog itself (code -> StatusItem) belongs to the caller and is passed in
as a read-only mapping; this module only resolves stored leave types against it.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from core.constants import CATALOG_CODE_PREFIX, LEGACY_LEAVE_CODES

DEFAULT_LEAVE_LABEL = "Leave"


@dataclass(frozen=True)
class StatusItem:
    code: int
    description: str
    year: int
    class_name: str = ""
    entitlement: float = 0
    category: str = "info"


def build_catalog(items: Iterable[StatusItem]) -> Mapping[int, StatusItem]:
    """Index status items by code in a read-only mapping."""
    return MappingProxyType({item.code: item for item in items})


def leave_type_code(leave_type: Optional[str]) -> Optional[int]:
    """
    Resolve a stored leave type to its catalog code.

    'code-15' -> 15, legacy 'vacation' -> 15; anything else -> None.
    """
    if not leave_type:
        return None
    if leave_type.startswith(CATALOG_CODE_PREFIX):
        try:
            return int(leave_type[len(CATALOG_CODE_PREFIX):])
        except ValueError:
            return None
    return LEGACY_LEAVE_CODES.get(leave_type)


def get_status_label(leave_type: Optional[str], catalog: Mapping[int, StatusItem]) -> str:
    code = leave_type_code(leave_type)
    if not code:
        return DEFAULT_LEAVE_LABEL
    item = catalog.get(code)
    if item is None:
        return f"Unknown ({code})"
    return item.description

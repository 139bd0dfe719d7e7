from __future__ import annotations

from typing import Iterable, List, Mapping, Set

from .records import BASE_COLUMNS


def extract_extra_columns(rows: Iterable[Mapping[str, str]]) -> Set[str]:
    """Collect every column name outside the base columns across rows."""
    keys: Set[str] = set()
    for row in rows:
        keys.update(k for k in row if k not in BASE_COLUMNS)
    return keys


def build_columns(rows: Iterable[Mapping[str, str]]) -> List[str]:
    """Base columns first, then all other keys sorted by code point."""
    return list(BASE_COLUMNS) + sorted(extract_extra_columns(rows))

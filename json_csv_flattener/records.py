from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .values import stringify_value

BASE_COLUMNS = ('id', 'timestamp', 'url')


class Row(dict):
    """Flat column -> string mapping for one source document.

    Once a column is set it is never overwritten (first write wins).
    """

    def set_if_absent(self, key: str, value: str) -> bool:
        if key in self:
            return False
        self[key] = value
        return True


def seed_row(document: Any) -> Row:
    source = document if isinstance(document, dict) else {}
    return Row((column, stringify_value(source.get(column))) for column in BASE_COLUMNS)


def iter_object_entries(items: List[Any]):
    """Yield (position, entry) for dict entries only, position is 1-based among them."""
    position = 0
    for entry in items:
        if isinstance(entry, dict):
            position += 1
            yield position, entry


def split_url_key(entry: Dict[str, Any]) -> Tuple[Optional[str], List[str]]:
    url_key = next((k for k in entry if k.lower() == 'url'), None)
    data_keys = [k for k in entry if k != url_key]
    return url_key, data_keys


def build_row(document: Any) -> Row:
    """Flatten one parsed JSON document into a Row.

    Top-level `id`, `timestamp` and `url` seed the row. Each object in the
    `data` list contributes one column per key, plus a `<key>_URL` column
    when the entry carries a url. An entry holding nothing but a url lands
    in `URL_<n>`, where n counts object entries only.
    """
    row = seed_row(document)

    items = document.get('data') if isinstance(document, dict) else None
    if not isinstance(items, list):
        return row

    for position, entry in iter_object_entries(items):
        url_key, data_keys = split_url_key(entry)
        url_value = stringify_value(entry[url_key]) if url_key is not None else ''

        if not data_keys:
            if url_value:
                row.set_if_absent(f"URL_{position}", url_value)
            continue

        for key in data_keys:
            column = key.strip()
            if column:
                row.set_if_absent(column, stringify_value(entry[key]))
            if url_value:
                row.set_if_absent(f"{column}_URL", url_value)

    return row

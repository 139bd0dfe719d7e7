from __future__ import annotations

import csv
import io
import json
import logging
import os
from typing import Any, List, Mapping, Sequence

LOGGER = logging.getLogger(__name__)


def is_json_file_name(name: str) -> bool:
    return name.lower().endswith('.json')


def _warn_unreadable(error: OSError) -> None:
    LOGGER.warning("Cannot read directory %s: %s", error.filename, error.strerror or error)


def collect_json_files(directory: str) -> List[str]:
    """Recursively collect `.json` files (any case) under directory, sorted by path."""
    files: List[str] = []
    for current, _dirs, names in os.walk(directory, onerror=_warn_unreadable):
        for name in names:
            full_path = os.path.join(current, name)
            if is_json_file_name(name) and os.path.isfile(full_path):
                files.append(full_path)
    return sorted(files)


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content, parse_constant=_reject_constant)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f, parse_constant=_reject_constant)


def _write_rows(handle, rows: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> None:
    writer = csv.DictWriter(
        handle,
        fieldnames=list(columns),
        restval='',
        extrasaction='ignore',
        lineterminator='\n',
    )
    writer.writeheader()
    if rows:
        writer.writerows(rows)


def render_csv(rows: Sequence[Mapping[str, Any]], columns: Sequence[str]) -> str:
    """Serialize rows against columns; fields with ',', '"' or line breaks are quoted."""
    buffer = io.StringIO()
    _write_rows(buffer, rows, columns)
    return buffer.getvalue()


def write_csv(rows: Sequence[Mapping[str, Any]], columns: Sequence[str], destination: str) -> None:
    parent = os.path.dirname(destination)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(destination, 'w', newline='', encoding='utf-8') as f:
        _write_rows(f, rows, columns)

from __future__ import annotations

import os
import tempfile
from typing import Any, Dict, List

import gradio as gr

from .io_utils import write_csv
from .pipeline import flatten_documents
from .schema_utils import build_columns


def upload_label(file_obj) -> str:
    path = file_obj.name if hasattr(file_obj, 'name') else str(file_obj)
    return os.path.basename(path)


def order_uploads(files) -> List[Any]:
    """Sort uploads by file name so rows follow the same order as a directory run."""
    if not files:
        return []
    if not isinstance(files, (list, tuple)):
        files = [files]
    return sorted(files, key=upload_label)


def compute_document_count_text(rows, skipped=None) -> str:
    if not rows and not skipped:
        return ""
    text = f"Documents: {len(rows or [])}"
    if skipped:
        text += f" (skipped: {len(skipped)})"
    return text


def handle_files_upload(files):
    """Flatten every uploaded file into rows held in UI state."""
    ordered = order_uploads(files)
    if not ordered:
        return None, "No file uploaded.", "", None

    rows, _, skipped = flatten_documents((upload_label(f), f) for f in ordered)
    count_text = compute_document_count_text(rows, skipped)

    if not rows:
        return None, "No data rows were produced from the JSON files.", count_text, None

    columns = build_columns(rows)
    message = f"Successfully loaded {len(rows)} of {len(ordered)} files. Found {len(columns)} columns."
    if skipped:
        failures = "; ".join(f"{label}: {error}" for label, error in skipped)
        message += f" Failed to process {failures}"
    return rows, message, count_text, None


def flatten_rows_for_preview(rows, limit: int = 3) -> List[Dict[str, str]]:
    """Return the first rows with every column filled, in column order."""
    if not rows:
        return []
    columns = build_columns(rows)
    return [{c: row.get(c, '') for c in columns} for row in rows[:max(1, int(limit))]]


def preview_rows_handler(rows):
    preview = flatten_rows_for_preview(rows, limit=3)
    return preview if preview else None


def export_csv_handler(rows, file_name):
    if not rows:
        return None, "No data loaded."

    if not file_name or not file_name.strip():
        file_name = "data"
    file_name = file_name.strip()
    if not file_name.lower().endswith('.csv'):
        file_name += '.csv'

    path = os.path.join(tempfile.gettempdir(), file_name)
    columns = build_columns(rows)

    try:
        write_csv(rows, columns, path)
    except OSError as e:
        return None, f"Error during export: {str(e)}"

    return path, f"Saved {len(rows)} rows to {path}"


def handle_files_clear():
    """Drop loaded rows when the upload box is cleared."""
    return None, "", "", gr.update(value=None)

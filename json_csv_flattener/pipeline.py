from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

from .config import ConverterConfig
from .io_utils import collect_json_files, read_json_content, write_csv
from .records import Row, build_row
from .schema_utils import build_columns

LOGGER = logging.getLogger(__name__)

# JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting raises RecursionError.
PER_FILE_ERRORS = (OSError, ValueError, TypeError, RecursionError)


class ConversionError(ValueError):
    """A fatal condition that stops the whole run."""


class InputDirectoryNotFoundError(ConversionError):
    def __init__(self, path: str):
        super().__init__(f"Input directory not found: {path}")
        self.path = path


class NoJsonFilesError(ConversionError):
    def __init__(self, path: str):
        super().__init__(f"No JSON files found under {path}")
        self.path = path


class NoRowsProducedError(ConversionError):
    def __init__(self):
        super().__init__("No data rows were produced from the JSON files.")


@dataclass
class ConversionResult:
    rows: List[Row]
    columns: List[str]
    output_file: str = ''
    processed: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


def flatten_documents(named_documents: Iterable[Tuple[str, Any]]):
    """Flatten (label, source) pairs in the given order.

    `source` is anything `read_json_content` accepts: a path, an upload
    object or an open file. Failures are logged and reported back as
    (label, message) instead of aborting.
    """
    rows: List[Row] = []
    processed: List[str] = []
    skipped: List[Tuple[str, str]] = []

    for label, source in named_documents:
        try:
            row = build_row(read_json_content(source))
        except PER_FILE_ERRORS as exc:
            LOGGER.warning("Failed to process %s: %s", label, exc)
            skipped.append((label, str(exc)))
            continue
        rows.append(row)
        processed.append(label)

    return rows, processed, skipped


def convert_directory(config: ConverterConfig) -> ConversionResult:
    """Flatten every JSON file under `config.input_dir` into `config.output_file`.

    Raises a ConversionError subclass when the directory is missing, holds no
    JSON files, or none of them produced a row. Nothing is written in those
    cases.
    """
    if not os.path.isdir(config.input_dir):
        raise InputDirectoryNotFoundError(config.input_dir)

    json_files = collect_json_files(config.input_dir)
    if not json_files:
        raise NoJsonFilesError(config.input_dir)
    LOGGER.info("Found %d JSON file(s) under %s", len(json_files), config.input_dir)

    rows, processed, skipped = flatten_documents((path, path) for path in json_files)
    if not rows:
        raise NoRowsProducedError()

    columns = build_columns(rows)
    write_csv(rows, columns, config.output_file)
    LOGGER.info("Wrote %d rows and %d columns to %s", len(rows), len(columns), config.output_file)

    return ConversionResult(
        rows=rows,
        columns=columns,
        output_file=config.output_file,
        processed=processed,
        skipped=skipped,
    )

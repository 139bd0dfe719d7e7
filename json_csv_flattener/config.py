"""
Run configuration for the converter.

Paths come from the command line first, then from environment variables,
then from the built-in defaults. Everything is resolved to absolute paths
before it reaches the pipeline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_INPUT_DIR = "json"
DEFAULT_OUTPUT_FILE = "data.csv"

INPUT_DIR_ENV = "JSON_CSV_INPUT_DIR"
OUTPUT_FILE_ENV = "JSON_CSV_OUTPUT_FILE"


@dataclass(frozen=True)
class ConverterConfig:
    """Where to read JSON documents from and where to write the CSV."""

    input_dir: str
    output_file: str


def _pick(explicit: Optional[str], env_key: str, default: str) -> str:
    if explicit:
        return explicit
    return os.environ.get(env_key) or default


def resolve_config(
    input_dir: Optional[str] = None,
    output_file: Optional[str] = None,
) -> ConverterConfig:
    """
    Build a :class:`ConverterConfig` with absolute paths.

    :param input_dir: Directory given on the command line, if any.
    :param output_file: Output path given on the command line, if any.
    :returns: Configuration with both paths made absolute.
    """

    return ConverterConfig(
        input_dir=os.path.abspath(_pick(input_dir, INPUT_DIR_ENV, DEFAULT_INPUT_DIR)),
        output_file=os.path.abspath(_pick(output_file, OUTPUT_FILE_ENV, DEFAULT_OUTPUT_FILE)),
    )

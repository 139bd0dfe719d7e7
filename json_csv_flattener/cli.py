"""Command line entry point: ``json-csv-flattener [input_dir] [output_file]``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_FILE, resolve_config
from .pipeline import ConversionError, convert_directory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-csv-flattener",
        description="Flatten a directory tree of JSON documents into a single CSV file.",
    )
    parser.add_argument(
        "input_dir",
        nargs="?",
        help=f"Directory searched recursively for .json files (default: {DEFAULT_INPUT_DIR})",
    )
    parser.add_argument(
        "output_file",
        nargs="?",
        help=f"CSV file to write, overwritten if present (default: {DEFAULT_OUTPUT_FILE})",
    )
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, convert, and return the process exit status."""
    args = build_parser().parse_args(argv)
    config = resolve_config(args.input_dir, args.output_file)

    try:
        result = convert_directory(config)
    except ConversionError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(f"Saved {result.row_count} rows to {result.output_file}")
    return 0


def main() -> None:
    """Configure logging and run the converter."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run())


if __name__ == "__main__":
    main()

"""
Render an upsert statement for JSON records from the command line.

Usage:
    echo '[{"id": "1001", "name": "Tom"}]' | \\
        python -m upsert_builder.cli upsert --table person --column id,primary --column name

Prints ``{"sql": ..., "args": [...]}`` to stdout.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from upsert_builder.config import get_settings
from upsert_builder.exceptions import UpsertBuilderError
from upsert_builder.schema.core import ColumnDescriptor
from upsert_builder.schema.extractor import parse_annotation
from upsert_builder.sql.operations.upsert import (
    UpsertBuilder,
    UpsertOption,
    with_on_duplicate_error,
    with_on_duplicate_skip,
    with_placeholder,
    with_table_name,
)
from upsert_builder.utils.logging import get_logger

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="upsert_builder.cli upsert",
        description="Render INSERT ... ON CONFLICT for JSON records",
    )
    parser.add_argument("--table", required=True, help="Target table name")
    parser.add_argument(
        "--column",
        action="append",
        required=True,
        dest="columns",
        metavar="ANNOTATION",
        help="Column annotation in record order, e.g. 'id,primary' or 'name' (repeatable)",
    )
    parser.add_argument(
        "--on-duplicate",
        choices=["error", "skip"],
        default=None,
        help="Duplicate key policy (default from UPSERT_DUPLICATE_POLICY)",
    )
    parser.add_argument("--placeholder", default=None, help="Placeholder marker, e.g. '%%s'")
    parser.add_argument(
        "--input",
        default="-",
        help="JSON file with one object or an array of objects ('-' for stdin)",
    )
    parser.add_argument("--indent", type=int, default=None, help="Indent the JSON output")
    return parser


def _read_payload(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _descriptors(annotations: List[str]) -> List[ColumnDescriptor]:
    settings = get_settings()
    descriptors = []
    for annotation in annotations:
        name, primary = parse_annotation(annotation, settings.primary_marker, settings.marker_match)
        descriptors.append(ColumnDescriptor(field=name, name=name, primary_key=primary))
    return descriptors


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the ``upsert`` command.

    Returns:
        0 on success, 1 when the builder rejects the records, 2 on unreadable input
    """
    args = _build_parser().parse_args(argv)

    try:
        payload = _read_payload(args.input)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read records from {args.input}: {e}", file=sys.stderr)
        return 2

    options: List[UpsertOption] = [with_table_name(args.table)]
    if args.on_duplicate == "skip":
        options.append(with_on_duplicate_skip())
    elif args.on_duplicate == "error":
        options.append(with_on_duplicate_error())
    if args.placeholder:
        options.append(with_placeholder(args.placeholder))

    try:
        builder = UpsertBuilder(_descriptors(args.columns), *options)
        sql, params = builder.build_upsert(payload)
    except KeyError as e:
        print(f"Error: record is missing field {e}", file=sys.stderr)
        return 1
    except UpsertBuilderError as e:
        logger.error("upsert.cli.failed", table=args.table, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps({"sql": sql, "args": params}, indent=args.indent, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())

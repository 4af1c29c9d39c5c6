"""
Sheet lister — pipeline and CLI entry point.

Usage:
    python sheet_lister.py [FILES...] [--password] [--last-cell | --last-cell-values]
                           [--position NAME=A1] [--left-title NAME=LABEL]
                           [--top-title NAME=LABEL] [--host openpyxl|excel]
                           [--output <output.json>] [--flat]

Lists the worksheets of every input workbook, one record per sheet, and
optionally reads used-cell extents and cell values.  When no file is
given, paths are read from stdin, one per line.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import dotenv

from batch import BatchContext
from dto.options import InspectOptions
from dto.output import Diagnostic, SheetRecord
from errors import HostStartError, InputFileNotFoundError, WorkbookReadError
from extractors.workbook import WorkbookInspector
from hosts.factory import get_spreadsheet_host
from hosts.service import SpreadsheetHost

dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))


def resolve_log_level(name: Optional[str]) -> int:
    """Map a LOG_LEVEL name to a logging level; unknown names mean INFO."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=resolve_log_level(os.getenv("LOG_LEVEL")),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)


def _log_diagnostic(diagnostic: Diagnostic) -> None:
    logger.error("%s", diagnostic.message)
    if diagnostic.trace:
        logger.debug("%s", diagnostic.trace)


# -------------------------------------------------------------------
# Main pipeline
# -------------------------------------------------------------------


def list_sheets(
    inputs: Iterable[Any],
    options: Optional[InspectOptions] = None,
    host_kind: Optional[str] = None,
    on_error: Optional[Callable[[Diagnostic], None]] = None,
    host_factory: Optional[Callable[[Optional[str]], SpreadsheetHost]] = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> Iterator[SheetRecord]:
    """
    Lazily yield one ``SheetRecord`` per sheet of every input workbook.

    Inputs are consumed one at a time.  The host is started when the first
    record is requested and released exactly once when the generator is
    exhausted or closed.  File-level problems are reported to *on_error*
    (default: logged) and never stop the batch; only ``HostStartError``
    propagates.
    """
    options = options or InspectOptions()
    report = on_error or _log_diagnostic

    start_kwargs: Dict[str, Any] = {"host_factory": host_factory or get_spreadsheet_host}
    if prompt is not None:
        start_kwargs["prompt"] = prompt
    batch = BatchContext.start(
        prompt_password=options.prompt_password,
        host_kind=host_kind,
        **start_kwargs,
    )
    try:
        inspector = WorkbookInspector(batch.host, options, password=batch.password)
        for item in inputs:
            try:
                records = inspector.process(item)
            except (InputFileNotFoundError, WorkbookReadError) as exc:
                report(exc.to_diagnostic())
                continue
            yield from records
    finally:
        batch.end()


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def _named_value(text: str) -> Tuple[str, str]:
    """Parse NAME=VALUE for the repeatable cell lookup options."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name.strip(), value


def _to_mapping(pairs: Optional[List[Tuple[str, str]]]) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for name, value in pairs or []:
        if name in mapping:
            raise ValueError(f"Duplicate field name: {name!r}")
        mapping[name] = value
    return mapping


def _stdin_paths() -> Iterator[str]:
    for line in sys.stdin:
        line = line.strip()
        if line:
            yield line


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List the worksheets of spreadsheet files, optionally reading cells.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Workbook paths (default: read paths from stdin, one per line)",
    )
    parser.add_argument(
        "--password",
        action="store_true",
        help="Prompt once for a password used for every protected workbook",
    )
    parser.add_argument(
        "--last-cell",
        action="store_true",
        help="Add LastRow/LastColumn of the used range (formatting included)",
    )
    parser.add_argument(
        "--last-cell-values",
        action="store_true",
        help="Add LastRow/LastColumn of the cells holding values",
    )
    parser.add_argument(
        "--position",
        action="append",
        type=_named_value,
        metavar="NAME=A1",
        help="Add the value of a cell by coordinate (repeatable)",
    )
    parser.add_argument(
        "--left-title",
        action="append",
        type=_named_value,
        metavar="NAME=LABEL",
        help="Add the value found right of a label (repeatable)",
    )
    parser.add_argument(
        "--top-title",
        action="append",
        type=_named_value,
        metavar="NAME=LABEL",
        help="Add the value found below a label (repeatable)",
    )
    parser.add_argument(
        "--host",
        default=None,
        choices=["openpyxl", "excel"],
        help="Spreadsheet host (default: $SHEET_HOST or openpyxl)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (default: stdout)",
    )
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Write one flat object per sheet (SheetName, File, lookup fields)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        options = InspectOptions(
            prompt_password=args.password,
            find_last_cell=args.last_cell,
            find_last_cell_ignoring_formatted=args.last_cell_values,
            cell_by_position=_to_mapping(args.position),
            cell_by_left_title=_to_mapping(args.left_title),
            cell_by_top_title=_to_mapping(args.top_title),
        )
    except ValueError as exc:
        parser.error(str(exc))

    diagnostics: List[Diagnostic] = []

    def on_error(diagnostic: Diagnostic) -> None:
        diagnostics.append(diagnostic)
        _log_diagnostic(diagnostic)

    inputs = args.files or _stdin_paths()
    try:
        records = [
            record.as_row() if args.flat else record.model_dump(mode="json")
            for record in list_sheets(inputs, options, host_kind=args.host, on_error=on_error)
        ]
    except HostStartError as exc:
        logger.error("%s", exc)
        return 2

    json_str = json.dumps(records, indent=2, ensure_ascii=False, default=str)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(json_str)
        logger.info("Output written to %s", args.output)
    else:
        sys.stdout.write(json_str + "\n")

    return 1 if diagnostics else 0


if __name__ == "__main__":
    sys.exit(main())

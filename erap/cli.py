"""
Command line entry point.

Reads a TSV export, prints the diagnostics report and writes the normalized
programs (and the report, when non-empty) under the output directory.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import AbstractSet, List, Optional

from .counties import CountyResolver, load_default_counties
from .models import BatchResult
from .normalize import process_programs
from .rules import ERRORS_FILENAME, JSON_INDENT, OUTPUT_DIR, PROGRAMS_FILENAME, SUPPRESSED_STATES
from .tsv import decode_tsv_bytes, parse_tsv

logger = logging.getLogger("erap.cli")

USAGE_MESSAGE = "No argument was provided! This script requires a TSV file as its sole argument."


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="erap-normalize",
        description="Normalize an ERAP program listing export into JSON.",
    )
    parser.add_argument("tsv", nargs="?", help="path to the tab-separated export")
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR)
    parser.add_argument(
        "--counties",
        type=Path,
        help="county map JSON; the packaged map is a small sample, pass the full table for production runs",
    )
    parser.add_argument(
        "--suppress-state",
        action="append",
        metavar="STATE",
        help="hide State-level programs for STATE (repeatable, replaces the default list)",
    )
    parser.add_argument("--no-suppression", action="store_true", help="keep every State-level program")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _suppressed_states(args: argparse.Namespace) -> AbstractSet[str]:
    if args.no_suppression:
        return frozenset()
    if args.suppress_state:
        return frozenset(args.suppress_state)
    return SUPPRESSED_STATES


def write_outputs(result: BatchResult, output_dir: Path) -> List[Path]:
    """Write erap.json always and errors.txt only when there are diagnostics."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    programs_path = output_dir / PROGRAMS_FILENAME
    programs_path.write_text(
        result.programs.model_dump_json(indent=JSON_INDENT, exclude_none=True),
        encoding="utf-8",
    )
    written.append(programs_path)
    print("The file has been saved!")

    messages = result.diagnostics.messages()
    if messages:
        errors_path = output_dir / ERRORS_FILENAME
        errors_path.write_text("".join(m + "\n" for m in messages), encoding="utf-8")
        written.append(errors_path)
        print("Error file has been saved!")

    return written


def run(
    tsv_path: Path,
    output_dir: Path = OUTPUT_DIR,
    counties: Optional[CountyResolver] = None,
    suppressed_states: AbstractSet[str] = SUPPRESSED_STATES,
) -> BatchResult:
    if counties is None:
        logger.warning("No --counties given, using the packaged sample county map")
        counties = load_default_counties()

    text, encoding = decode_tsv_bytes(tsv_path.read_bytes())
    records = parse_tsv(text)
    logger.info("Read %d records from %s (%s)", len(records), tsv_path, encoding)

    result = process_programs(records, counties, suppressed_states)

    print("".join(m + "\n" for m in result.diagnostics.messages()))
    write_outputs(result, output_dir)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.tsv is None:
        print(USAGE_MESSAGE)
        return 0

    counties = CountyResolver.from_path(args.counties) if args.counties else None
    run(Path(args.tsv), args.output_dir, counties, _suppressed_states(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())

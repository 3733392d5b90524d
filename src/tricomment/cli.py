"""CLI entrypoint for annotating text with tricomments."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence
import unicodedata

from tricomment.config import load_config
from tricomment.models import Candidate
from tricomment.pipeline import Session, build_session
from tricomment.validation import find_malformed_records

LEVEL_CHOICES = ("off", "lv1", "lv2", "lv3")


def _display_width(text: str) -> int:
    """Count terminal columns, with wide and fullwidth characters taking two."""

    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _pad(text: str, width: int) -> str:
    return text + " " * (width - _display_width(text))


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Lay out diagnostic rows in aligned columns.

    Columns are sized by terminal width so keys and records made of CJK
    characters line up with ASCII headers.
    """

    rows = [headers, *data_rows]
    widths = [max(_display_width(row[idx]) for row in rows) for idx in range(len(headers))]

    def line(row: Sequence[str]) -> str:
        return " | ".join(_pad(value, widths[idx]) for idx, value in enumerate(row)).rstrip()

    separator_line = "-+-".join("-" * width for width in widths)
    return "\n".join([line(headers), separator_line, *(line(row) for row in data_rows)])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the annotate command.
    """

    parser = argparse.ArgumentParser(description="Show tricomments for candidate text.")
    parser.add_argument("text", nargs="*", help="Candidate texts to annotate.")
    parser.add_argument("--schema", required=True, type=Path, help="Path to schema YAML file.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding *.dict.yaml files (default: schema directory).",
    )
    parser.add_argument(
        "--level",
        choices=LEVEL_CHOICES,
        default=None,
        help="Annotation level to activate (default: schema default).",
    )
    parser.add_argument(
        "--type",
        dest="candidate_type",
        default="table",
        help="Candidate type tag to simulate (default: table).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Report malformed spelling records and rule coverage.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _select_level(session: Session, level: str) -> None:
    """Activate exactly one option flag by its level label."""

    index = LEVEL_CHOICES.index(level)
    for idx, name in enumerate(session.options.names):
        session.options.set_option(name, idx == index)


def _print_check(session: Session) -> None:
    """Print rule coverage and malformed-record diagnostics."""

    rule_rows = [
        [str(length), "".join(f"({c},{k})" for c, k in rule)]
        for length, rule in session.rules.rules.items()
    ]
    print("Rule table:")
    print(_format_table(["length", "instructions"], rule_rows))

    malformed = find_malformed_records(session.spelling_store.items())
    if not malformed:
        print("\nSpelling records: no malformed records.")
        return
    print(f"\nWARNING: Malformed spelling records ({len(malformed)}):")
    print(_format_table(["key", "record"], [[key, raw] for key, raw in malformed[:50]]))


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through annotated output.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.schema, data_dir=args.data_dir)
        session = build_session(config)
    except (FileNotFoundError, TypeError, ValueError) as exc:
        raise SystemExit(str(exc))

    if args.level is not None:
        _select_level(session, args.level)

    if args.check:
        _print_check(session)

    candidates = [
        Candidate(type=args.candidate_type, start=0, end=len(text), text=text) for text in args.text
    ]
    for candidate in session.annotate(candidates):
        print(f"{candidate.text}\t{candidate.comment}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

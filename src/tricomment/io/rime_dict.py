"""Readers for Rime ``*.dict.yaml`` files and plain tab-separated tables.

A Rime dictionary starts with a YAML header document between ``---`` and
``...``; the rows after it are ``text<TAB>value`` lines. Files without a header
are read as body rows only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

import yaml

logger = logging.getLogger(__name__)

HEADER_START = "---"
HEADER_END = "..."


def split_dict_yaml(lines: Iterable[str]) -> tuple[str, list[str]]:
    """Separate the YAML header text from the body rows.

    Args:
        lines: Raw file lines.

    Returns:
        ``(header_text, body_lines)``; ``header_text`` is empty when the file
        has no header document.
    """

    all_lines = [line.rstrip("\n") for line in lines]
    start = None
    for idx, line in enumerate(all_lines):
        stripped = line.strip()
        if stripped == HEADER_START:
            start = idx
            break
        if stripped and not stripped.startswith("#"):
            break

    if start is None:
        return "", all_lines

    for end in range(start + 1, len(all_lines)):
        if all_lines[end].strip() == HEADER_END:
            return "\n".join(all_lines[start + 1 : end]), all_lines[end + 1 :]

    # Header never closed: the whole file is header.
    return "\n".join(all_lines[start + 1 :]), []


def parse_dict_body(lines: Iterable[str]) -> Iterator[tuple[str, str]]:
    """Yield ``(text, value)`` rows from dictionary body lines.

    Blank lines and ``#`` comments are skipped. Rows with fewer than two
    tab-separated cells are logged and skipped. Cells after the second (such as
    weights) are ignored.

    Args:
        lines: Body lines without the YAML header.

    Yields:
        Text and value pairs in file order.
    """

    for lineno, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        cells = line.split("\t")
        if len(cells) < 2 or not cells[0]:
            logger.warning("Skipping malformed dictionary row %d: %r", lineno, line)
            continue
        yield cells[0], cells[1].strip()


def read_dict_header(path: Path) -> dict[str, Any]:
    """Load the YAML header of a dictionary file.

    Args:
        path: Dictionary path.

    Returns:
        Header mapping, or an empty dict when the file has no header.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the header is not valid YAML.
    """

    if not path.exists():
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        header_text, _ = split_dict_yaml(handle)

    if not header_text.strip():
        return {}
    try:
        header = yaml.safe_load(header_text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Error parsing dictionary header in {path}: {exc}") from exc
    return header if isinstance(header, dict) else {}


def read_encoder_rules(path: Path) -> list[dict[str, Any]] | None:
    """Return the header's ``encoder/rules`` list, or ``None`` when absent."""

    encoder = read_dict_header(path).get("encoder")
    if not isinstance(encoder, dict):
        return None
    rules = encoder.get("rules")
    return list(rules) if isinstance(rules, list) else None

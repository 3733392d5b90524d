"""Parsing utilities for raw per-character annotation records.

A raw record looks like ``[{于下}{四点}丶,kd_kdi,qiu2]``: a spelling field, an
optional code field and an optional pronunciation field separated by
top-level commas, with underscores separating alternates inside a field.
Braced runs such as ``{四点}`` name a single multi-character component.
"""

from __future__ import annotations

import re

from tricomment.models import AnnotationRecord, CodeMode

COMPONENT_RE = re.compile(r"\{[^{}]+\}|\S")
RECORD_BOUNDARY_RE = re.compile(r"(?<=\])\s+(?=\[)")


def _strip_brackets(raw: str) -> str:
    """Remove one leading ``[`` and one trailing ``]`` when present."""

    text = raw.strip()
    if text.startswith("["):
        text = text[1:]
    if text.endswith("]"):
        text = text[:-1]
    return text


def split_fields(raw: str) -> tuple[str, ...]:
    """Split a raw record into its top-level comma-separated fields.

    Commas inside braced unit names do not split fields. Missing brackets are
    tolerated so malformed rows still yield a best-effort split.

    Args:
        raw: Raw record string.

    Returns:
        Ordered fields; an empty tuple for an empty record.
    """

    text = _strip_brackets(raw)
    if not text:
        return ()

    fields: list[str] = []
    buf: list[str] = []
    depth = 0
    for ch in text:
        if ch == "{":
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
        elif ch == "," and not depth:
            fields.append("".join(buf))
            buf.clear()
            continue
        buf.append(ch)
    fields.append("".join(buf))
    return tuple(fields)


def tokenize_components(text: str) -> list[str]:
    """Split a field into atomic components.

    Braced units are kept whole; every other non-space codepoint becomes its
    own component.

    Args:
        text: One record field, e.g. ``{于下}{四点}丶``.

    Returns:
        Components in order, e.g. ``["{于下}", "{四点}", "丶"]``.
    """

    return COMPONENT_RE.findall(text)


def split_records(raw: str) -> list[str]:
    """Split a store value holding several space-joined records.

    A key with more than one dictionary row is stored as ``[..] [..]``; each
    bracketed record is returned separately. Values without that boundary are
    returned whole.

    Args:
        raw: Raw store value.

    Returns:
        Non-empty raw records in order.
    """

    return [part for part in RECORD_BOUNDARY_RE.split(raw.strip()) if part]


def parse_records(raw: str) -> list[AnnotationRecord]:
    """Parse every record of a store value, skipping empty ones."""

    records: list[AnnotationRecord] = []
    for part in split_records(raw):
        fields = split_fields(part)
        if fields:
            records.append(AnnotationRecord(fields=fields))
    return records


def parse_record(raw: str) -> AnnotationRecord | None:
    """Parse the first record of a store value into an ``AnnotationRecord``.

    Args:
        raw: Raw record string from the reverse-lookup store.

    Returns:
        Parsed first record, or ``None`` when the raw string is empty.
    """

    records = parse_records(raw)
    return records[0] if records else None


def record_components(record: AnnotationRecord, mode: CodeMode) -> list[str]:
    """Return the components of a parsed record for one extraction mode.

    ``SPELLING`` tokenizes the spelling field. ``TERSE`` keeps only the first
    code alternate. ``LITERAL`` keeps the whole code field verbatim, including
    alternate separators.
    """

    if mode is CodeMode.SPELLING:
        return tokenize_components(record.spelling)
    if mode is CodeMode.TERSE:
        alternates = record.code_alternates
        return tokenize_components(alternates[0]) if alternates else []
    return tokenize_components(record.code)


def components(raw: str, mode: CodeMode) -> list[str] | None:
    """Parse ``raw`` and return its components for ``mode``.

    Args:
        raw: Raw record string.
        mode: Extraction mode.

    Returns:
        Component list, or ``None`` when the record is empty (unavailable).
    """

    record = parse_record(raw)
    if record is None:
        return None
    return record_components(record, mode)

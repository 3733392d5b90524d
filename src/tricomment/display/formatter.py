"""Render parsed records and composed phrases as user-visible tricomments.

Single-character output looks like ``〔a<木> · ab cd · pin1〕``: non-empty
fields joined by `` · `` inside corner brackets, braced units shown as
``<...>`` and underscores shown as spaces. Phrases render as
``〔spelling · codes〕`` or ``〈 spelling 〉`` when no code is available.
"""

from __future__ import annotations

import re
from typing import Sequence

from pypinyin.contrib.tone_convert import to_tone

from tricomment.models import AnnotationRecord

FIELD_SEPARATOR = " · "
OPEN, CLOSE = "〔", "〕"
ALT_OPEN, ALT_CLOSE = "〈 ", " 〉"
PRONUNCIATION_FIELD = 2
NUMBERED_SYLLABLE_RE = re.compile(r"[a-zü]+[1-5]")
CODE_SPLIT_RE = re.compile(r"[\s_]+")

_DISPLAY_TABLE = str.maketrans({"{": "<", "}": ">", "_": " "})


def render_field(text: str) -> str:
    """Normalize one raw field for display and collapse repeated spaces."""

    return " ".join(text.translate(_DISPLAY_TABLE).split())


def render_pronunciation(text: str, tone_marks: bool = False) -> str:
    """Render a pronunciation field, optionally converting tone numbers.

    Args:
        text: Raw pronunciation field such as ``zhong1_chong2``.
        tone_marks: Convert ``zhong1`` style tokens to ``zhōng``.

    Returns:
        Space-separated pronunciation tokens.
    """

    tokens = render_field(text).split()
    if tone_marks:
        tokens = [
            to_tone(token) if NUMBERED_SYLLABLE_RE.fullmatch(token) else token for token in tokens
        ]
    return " ".join(tokens)


def wrap(parts: Sequence[str]) -> str:
    """Join non-empty parts with the field separator inside corner brackets."""

    kept = [part for part in parts if part]
    if not kept:
        return ""
    return f"{OPEN}{FIELD_SEPARATOR.join(kept)}{CLOSE}"


def format_record(record: AnnotationRecord, level: int, tone_marks: bool = False) -> str:
    """Format a single-character record at a verbosity level.

    Level 1 shows the spelling, level 2 adds the code, level 3 shows every
    field.

    Args:
        record: Parsed record.
        level: Verbosity level 1, 2 or 3.
        tone_marks: Render numbered pronunciations with tone marks.

    Returns:
        Tricomment text, or ``""`` when every shown field is empty.
    """

    fields = record.fields if level >= 3 else record.fields[:level]
    rendered = [
        render_pronunciation(text, tone_marks) if idx == PRONUNCIATION_FIELD else render_field(text)
        for idx, text in enumerate(fields)
    ]
    return wrap(rendered)


def format_records(
    records: Sequence[AnnotationRecord], level: int, tone_marks: bool = False
) -> str:
    """Format every record of a character, space-separated, skipping empty ones."""

    rendered = (format_record(record, level, tone_marks) for record in records)
    return " ".join(text for text in rendered if text)


def split_codes(code: str) -> list[str]:
    """Split a composed code into tokens sorted shortest-first (stable)."""

    return sorted((token for token in CODE_SPLIT_RE.split(code) if token), key=len)


def format_phrase(spelling: str, code: str | None, level: int) -> str:
    """Format a composed phrase spelling with its optional code.

    Args:
        spelling: Composed phrase spelling.
        code: Composed phrase code; ignored at level 1.
        level: Verbosity level 1, 2 or 3.

    Returns:
        Tricomment text.
    """

    shown = render_field(spelling)
    if level == 1:
        return f"{OPEN}{shown}{CLOSE}"
    codes = split_codes(code or "")
    if codes:
        return f"{OPEN}{shown}{FIELD_SEPARATOR}{' '.join(codes)}{CLOSE}"
    return f"{ALT_OPEN}{shown}{ALT_CLOSE}"

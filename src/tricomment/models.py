"""Data models shared by the annotation engine.

This module defines immutable contracts between the compiler, the record
parser, the phrase composer and the candidate filter so each piece keeps a
narrow, testable interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Instruction(NamedTuple):
    """One extraction step of a compiled formula.

    Both indexes are signed and 1-based: positive values count from the start,
    negative values count from the end (``-1`` is the last item).
    """

    char_index: int
    component_index: int


class CodeMode(Enum):
    """Which part of a raw annotation record the composer extracts from."""

    SPELLING = "spelling"
    TERSE = "terse"
    LITERAL = "literal"


@dataclass(frozen=True)
class AnnotationRecord:
    """Parsed form of one character's raw annotation record.

    The raw form is ``[spelling,code_code...,pron_pron...]``. ``fields`` keeps
    every top-level field in order so display code can render any prefix of
    them; the named attributes are views over the first three.
    """

    fields: tuple[str, ...]

    @property
    def spelling(self) -> str:
        """Return the spelling (decomposition) field."""

        return self.fields[0] if self.fields else ""

    @property
    def code(self) -> str:
        """Return the verbatim code field, or ``""`` when absent."""

        return self.fields[1] if len(self.fields) > 1 else ""

    @property
    def pronunciation(self) -> str:
        """Return the verbatim pronunciation field, or ``""`` when absent."""

        return self.fields[2] if len(self.fields) > 2 else ""

    @property
    def code_alternates(self) -> tuple[str, ...]:
        """Return underscore-separated code alternates with empty ones removed."""

        return tuple(part for part in self.code.split("_") if part)


class CandidateKind(Enum):
    """Closed set of candidate categories the filter dispatches on."""

    PLAIN = "plain"
    SIMPLIFIED = "simplified"
    COMPLETION = "completion"
    PUNCTUATION = "punctuation"
    SENTENCE = "sentence"
    OTHER = "other"

    @classmethod
    def of(cls, type_tag: str) -> CandidateKind:
        """Classify a host candidate type tag.

        Args:
            type_tag: Type string reported by the host engine.

        Returns:
            Matching kind; unknown tags map to ``OTHER``.
        """

        return _KIND_BY_TAG.get(type_tag, cls.OTHER)


_KIND_BY_TAG = {
    "table": CandidateKind.PLAIN,
    "user_table": CandidateKind.PLAIN,
    "phrase": CandidateKind.PLAIN,
    "user_phrase": CandidateKind.PLAIN,
    "simplified": CandidateKind.SIMPLIFIED,
    "completion": CandidateKind.COMPLETION,
    "punct": CandidateKind.PUNCTUATION,
    "sentence": CandidateKind.SENTENCE,
}


@dataclass(frozen=True)
class Candidate:
    """Host candidate as seen by the filter.

    Only ``type``, ``text`` and ``comment`` are interpreted; offsets are carried
    through untouched.
    """

    type: str
    start: int
    end: int
    text: str
    comment: str = ""

    @property
    def kind(self) -> CandidateKind:
        """Return the dispatch category for this candidate's type tag."""

        return CandidateKind.of(self.type)

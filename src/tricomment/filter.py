"""Candidate filter that attaches tricomments according to the option state."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Iterable, Iterator

from tricomment.compose.phrase import PhraseComposer
from tricomment.display.formatter import format_phrase, format_records
from tricomment.models import Candidate, CandidateKind, CodeMode
from tricomment.options import OptionGroup
from tricomment.record.parser import parse_records
from tricomment.record.repository import LookupStore

logger = logging.getLogger(__name__)

SIMPLIFIED_REVERSE_TYPE = "simp_rvlk"


@dataclass
class AnnotationFilter:
    """Lazy candidate transform driven by a shared ``OptionGroup``.

    The group's first flag is a global bypass; the second and third select
    verbosity levels 1 and 2, anything else means level 3.
    """

    options: OptionGroup
    spelling_store: LookupStore
    code_store: LookupStore
    composer: PhraseComposer
    phrase_enabled: bool = True
    mixed_typing: bool = False
    tone_marks: bool = False
    phrase_code_mode: CodeMode = CodeMode.LITERAL

    def is_off(self) -> bool:
        return bool(self.options.names) and self.options.is_active(self.options.names[0])

    def level(self) -> int:
        """Return the active verbosity level (1, 2 or 3)."""

        for level, name in enumerate(self.options.names[1:3], start=1):
            if self.options.is_active(name):
                return level
        return 3

    def tricomment(self, text: str) -> str | None:
        """Compute the tricomment for candidate text.

        Args:
            text: Candidate text.

        Returns:
            Formatted annotation, ``""`` when phrase annotation is disabled, or
            ``None`` when no annotation is available.
        """

        if len(text) == 1:
            records = parse_records(self.spelling_store.lookup(text))
            if not records:
                return None
            return format_records(records, self.level(), self.tone_marks)
        if not self.phrase_enabled:
            return ""
        if not text:
            return None

        spelling = self.composer.spell(text)
        if spelling is None:
            return None
        level = self.level()
        if level == 1:
            return format_phrase(spelling, None, level)
        return format_phrase(spelling, self.composer.code(text, self.phrase_code_mode), level)

    def _combine(self, candidate: Candidate, annotation: str | None) -> Candidate:
        if not annotation:
            return candidate
        if candidate.kind is CandidateKind.COMPLETION and self.mixed_typing:
            return replace(candidate, comment=annotation)
        return replace(candidate, comment=annotation + candidate.comment)

    def annotate(self, candidate: Candidate) -> Candidate:
        """Return ``candidate`` or an annotated copy of it."""

        kind = candidate.kind
        if kind is CandidateKind.SENTENCE:
            return candidate
        if kind is CandidateKind.SIMPLIFIED:
            annotation = self.tricomment(candidate.text) or ""
            return replace(
                candidate,
                type=SIMPLIFIED_REVERSE_TYPE,
                comment=annotation + candidate.comment,
            )
        if kind is CandidateKind.PUNCTUATION:
            return self._combine(candidate, self.code_store.lookup(candidate.text))
        return self._combine(candidate, self.tricomment(candidate.text))

    def filter(self, candidates: Iterable[Candidate]) -> Iterator[Candidate]:
        """Yield candidates in order, annotated unless the bypass flag is on.

        The option state is read once per round; the upstream iterable is
        consumed lazily.
        """

        if self.is_off():
            yield from candidates
            return
        for candidate in candidates:
            yield self.annotate(candidate)

    __call__ = filter

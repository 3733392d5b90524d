"""Compose phrase-level spellings and codes from per-character records."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from tricomment.encoder.rules import RuleTable
from tricomment.models import CodeMode
from tricomment.record.parser import components
from tricomment.record.repository import LookupStore

logger = logging.getLogger(__name__)

MISSING_COMPONENT = "～"


def resolve_index(index: int, size: int) -> int | None:
    """Convert a signed 1-based index into a zero-based position.

    Args:
        index: Positive (from start) or negative (from end) 1-based index.
        size: Length of the indexed sequence.

    Returns:
        Zero-based position, or ``None`` when out of range.
    """

    position = index - 1 if index > 0 else size + index
    if 0 <= position < size:
        return position
    return None


@dataclass(frozen=True)
class PhraseComposer:
    """Apply rule-table formulas across the characters of a phrase.

    The composer has no state beyond its rule table and store; results depend
    only on the phrase text and the store contents.
    """

    rules: RuleTable
    store: LookupStore

    def compose(self, text: str, mode: CodeMode) -> str | None:
        """Build the phrase-level string for ``text`` in ``mode``.

        Args:
            text: Phrase text; split per codepoint.
            mode: Which record part the components come from.

        Returns:
            Concatenated components, or ``None`` when no formula covers the
            phrase length, any referenced character has no record, or (for
            code modes) no referenced character has a code at all.
        """

        chars = list(text)
        rule = self.rules.for_length(len(chars))
        if rule is None:
            logger.debug("No formula for phrase length %d: %r", len(chars), text)
            return None

        parsed: dict[int, list[str] | None] = {}
        parts: list[str] = []
        for char_index, component_index in rule:
            position = resolve_index(char_index, len(chars))
            if position is None:
                logger.debug("Character index %d out of range for %r", char_index, text)
                return None
            if position not in parsed:
                parsed[position] = components(self.store.lookup(chars[position]), mode)
            char_components = parsed[position]
            if char_components is None:
                logger.debug("No record for %r in phrase %r", chars[position], text)
                return None

            component_position = resolve_index(component_index, len(char_components))
            if component_position is None:
                parts.append(MISSING_COMPONENT)
            else:
                parts.append(char_components[component_position])
        if mode is not CodeMode.SPELLING and not any(parsed.values()):
            logger.debug("No codes recorded for phrase %r", text)
            return None
        return "".join(parts)

    def spell(self, text: str) -> str | None:
        """Compose the phrase spelling."""

        return self.compose(text, CodeMode.SPELLING)

    def code(self, text: str, mode: CodeMode = CodeMode.LITERAL) -> str | None:
        """Compose the phrase code in ``mode`` (terse or literal)."""

        return self.compose(text, mode)

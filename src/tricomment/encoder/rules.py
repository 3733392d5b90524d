"""Build the phrase-length to formula rule table used by the phrase composer."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from tricomment.encoder.formula import parse_formula
from tricomment.models import Instruction
from tricomment.validation import format_errors, validate_rule_settings

logger = logging.getLogger(__name__)

DEFAULT_ENCODE_RULES: tuple[dict[str, Any], ...] = (
    {"length_equal": 2, "formula": "AaAbBaBb"},
    {"length_equal": 3, "formula": "AaBaCaCb"},
    {"length_in_range": [4, 10], "formula": "AaBaCaZa"},
)


@dataclass(frozen=True)
class RuleSetting:
    """One encoder rule entry: a formula for an exact length or a length range."""

    formula: str
    min_length: int
    max_length: int

    @classmethod
    def from_mapping(cls, entry: Mapping[str, Any]) -> RuleSetting:
        """Create a setting from a Rime-style ``encoder/rules`` mapping.

        Args:
            entry: Mapping with ``formula`` and either ``length_equal`` or
                ``length_in_range``.

        Returns:
            Normalized setting with an inclusive length range.
        """

        if entry.get("length_equal") is not None:
            length = int(entry["length_equal"])
            return cls(formula=str(entry["formula"]), min_length=length, max_length=length)
        low, high = entry["length_in_range"]
        return cls(formula=str(entry["formula"]), min_length=int(low), max_length=int(high))

    def lengths(self) -> range:
        """Return the covered phrase lengths."""

        return range(self.min_length, self.max_length + 1)


@dataclass(frozen=True)
class RuleTable:
    """Read-only mapping from phrase length to a compiled formula."""

    rules: Mapping[int, tuple[Instruction, ...]]

    def for_length(self, length: int) -> tuple[Instruction, ...] | None:
        """Return the compiled formula for ``length``, or ``None`` if unset."""

        return self.rules.get(length)

    def __contains__(self, length: object) -> bool:
        return length in self.rules

    def __len__(self) -> int:
        return len(self.rules)


def settings_from_config(entries: Sequence[Mapping[str, Any]]) -> list[RuleSetting]:
    """Validate raw configuration entries and convert them to settings.

    Args:
        entries: Raw ``encoder/rules`` list loaded from YAML.

    Returns:
        Settings in declared order.

    Raises:
        ValueError: If any entry is malformed.
    """

    validate_rule_settings(entries)
    return [RuleSetting.from_mapping(entry) for entry in entries]


def build_rule_table(settings: Iterable[RuleSetting]) -> RuleTable:
    """Expand settings per length and compile each distinct formula once.

    Later settings overwrite earlier ones at the same length. Lengths that share
    a formula string share the same compiled tuple.

    Args:
        settings: Rule settings in declared order.

    Returns:
        Immutable rule table.

    Raises:
        ValueError: If any formula fails to compile.
    """

    formula_by_length: dict[int, str] = {}
    for setting in settings:
        for length in setting.lengths():
            formula_by_length[length] = setting.formula

    compiled: dict[str, tuple[Instruction, ...]] = {}
    errors: list[str] = []
    for formula in dict.fromkeys(formula_by_length.values()):
        try:
            compiled[formula] = parse_formula(formula)
        except ValueError as exc:
            errors.append(str(exc))

    if errors:
        raise ValueError(format_errors("Rule table construction", errors))

    rules = {length: compiled[formula] for length, formula in sorted(formula_by_length.items())}
    logger.info(
        "Built rule table for %d lengths from %d distinct formulas", len(rules), len(compiled)
    )
    return RuleTable(rules=MappingProxyType(rules))

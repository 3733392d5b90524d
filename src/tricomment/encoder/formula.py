"""Compile compact encoder formulas such as ``AaBaCaZa`` into instructions."""

from __future__ import annotations

import re

from tricomment.models import Instruction

FORMULA_RE = re.compile(r"(?:[A-Z][a-z])+")
PAIR_RE = re.compile(r"([A-Z])([a-z])")


def _signed_position(letter: str, first: str, pivot: str, last: str) -> int:
    """Map one formula letter to a signed 1-based position.

    Letters before ``pivot`` count forward from ``first`` (``A`` -> 1); the
    pivot and later letters count backward from ``last`` (``Z`` -> -1,
    ``U`` -> -6).
    """

    code = ord(letter)
    if code < ord(pivot):
        return code - ord(first) + 1
    return code - ord(last) - 1


def parse_formula(formula: str) -> tuple[Instruction, ...]:
    """Parse a formula string into ``(char_index, component_index)`` pairs.

    Args:
        formula: Concatenation of uppercase-then-lowercase letter pairs.

    Returns:
        Ordered tuple of signed ``Instruction`` pairs, one per letter pair.

    Raises:
        ValueError: If the string is not exactly a non-empty sequence of
            uppercase-then-lowercase pairs.
    """

    if not isinstance(formula, str) or not FORMULA_RE.fullmatch(formula):
        raise ValueError(f"Invalid formula: {formula!r}")

    return tuple(
        Instruction(
            _signed_position(upper, "A", "U", "Z"),
            _signed_position(lower, "a", "u", "z"),
        )
        for upper, lower in PAIR_RE.findall(formula)
    )

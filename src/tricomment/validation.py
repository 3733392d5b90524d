"""Validation helpers for encoder settings and annotation store data quality."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from tricomment.record.parser import split_fields, split_records

MAX_ERROR_PREVIEW = 25


def format_errors(context: str, errors: Sequence[str]) -> str:
    """Render an aggregated error message with a bounded preview.

    Args:
        context: Short label for the failing step.
        errors: Individual error descriptions.

    Returns:
        Multi-line message listing at most ``MAX_ERROR_PREVIEW`` items.
    """

    preview = "\n".join(f"- {item}" for item in errors[:MAX_ERROR_PREVIEW])
    rest = len(errors) - min(MAX_ERROR_PREVIEW, len(errors))
    more = f"\n- ... and {rest} more" if rest > 0 else ""
    return f"{context} failed with {len(errors)} errors:\n{preview}{more}"


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_rule_settings(entries: Sequence[Mapping[str, Any]]) -> None:
    """Validate raw ``encoder/rules`` entries before they are compiled.

    Args:
        entries: Raw rule entries, typically loaded from YAML.

    Raises:
        ValueError: If any entry lacks a formula, names neither or both length
            keys, or uses non-positive or inverted lengths.
    """

    errors: list[str] = []
    for idx, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            errors.append(f"Rule {idx}: expected a mapping, got {type(entry).__name__}")
            continue
        if not isinstance(entry.get("formula"), str) or not entry.get("formula"):
            errors.append(f"Rule {idx}: missing formula")

        has_equal = entry.get("length_equal") is not None
        has_range = entry.get("length_in_range") is not None
        if has_equal == has_range:
            errors.append(f"Rule {idx}: expected exactly one of length_equal or length_in_range")
            continue

        if has_equal:
            if not _is_positive_int(entry["length_equal"]):
                errors.append(f"Rule {idx}: invalid length_equal {entry['length_equal']!r}")
            continue

        bounds = entry["length_in_range"]
        if (
            not isinstance(bounds, Sequence)
            or isinstance(bounds, str)
            or len(bounds) != 2
            or not all(_is_positive_int(bound) for bound in bounds)
        ):
            errors.append(f"Rule {idx}: invalid length_in_range {bounds!r}")
        elif bounds[0] > bounds[1]:
            errors.append(f"Rule {idx}: inverted length_in_range {list(bounds)!r}")

    if errors:
        raise ValueError(format_errors("Rule settings validation", errors))


def _is_malformed(raw: str) -> bool:
    if not (raw.startswith("[") and raw.endswith("]")):
        return True
    fields = split_fields(raw)
    return not fields or not fields[0]


def find_malformed_records(items: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Collect raw annotation records that violate the bracketed field shape.

    Empty records are not reported; they are a legitimate "no annotation" value.
    Values merged from several dictionary rows are checked record by record.

    Args:
        items: ``(key, raw_record)`` pairs.

    Returns:
        Offending pairs in input order.
    """

    malformed: list[tuple[str, str]] = []
    for key, raw in items:
        if not raw:
            continue
        if any(_is_malformed(part) for part in split_records(raw)):
            malformed.append((key, raw))
    return malformed

"""Unit tests for rule setting validation and record data-quality checks."""

from __future__ import annotations

import pytest

from tricomment.validation import find_malformed_records, format_errors, validate_rule_settings


def test_validate_rule_settings_accepts_well_formed_entries() -> None:
    validate_rule_settings(
        [
            {"length_equal": 2, "formula": "AaAbBaBb"},
            {"length_in_range": [4, 10], "formula": "AaBaCaZa"},
        ]
    )


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ({"length_equal": 2}, "missing formula"),
        ({"formula": "AaBa"}, "exactly one of"),
        ({"formula": "AaBa", "length_equal": 2, "length_in_range": [3, 4]}, "exactly one of"),
        ({"formula": "AaBa", "length_equal": 0}, "invalid length_equal"),
        ({"formula": "AaBa", "length_equal": True}, "invalid length_equal"),
        ({"formula": "AaBa", "length_in_range": [4]}, "invalid length_in_range"),
        ({"formula": "AaBa", "length_in_range": [5, 4]}, "inverted length_in_range"),
        ("AaBa", "expected a mapping"),
    ],
)
def test_validate_rule_settings_rejects_bad_entries(entry, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        validate_rule_settings([entry])


def test_format_errors_truncates_preview() -> None:
    message = format_errors("Step", [f"e{idx}" for idx in range(30)])

    assert message.startswith("Step failed with 30 errors:")
    assert "- e24" in message
    assert "- e25" not in message
    assert "- ... and 5 more" in message


def test_find_malformed_records_reports_shape_violations() -> None:
    items = [
        ("中", "[口丨,kd,zhong1]"),
        ("空", ""),
        ("甲", "甲,x"),
        ("乙", "[,x,y]"),
        ("丙", "[丙"),
    ]

    assert find_malformed_records(items) == [("甲", "甲,x"), ("乙", "[,x,y]"), ("丙", "[丙")]


def test_find_malformed_records_checks_each_merged_record() -> None:
    items = [
        ("着", "[丷王目,uw,zhe5] [丷王目,uwm,zhao2]"),
        ("了", "[乛亅,lz,le5] [,lz,liao3]"),
        ("丁", "[]"),
    ]

    assert find_malformed_records(items) == [
        ("了", "[乛亅,lz,le5] [,lz,liao3]"),
        ("丁", "[]"),
    ]

"""Unit tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from tricomment.cli import _format_table, main


@pytest.fixture
def schema(tmp_path: Path) -> Path:
    (tmp_path / "chaifen.dict.yaml").write_text(
        "中\t[口丨,kd_k,zhong1]\n国\t[囗王丶,gw,guo2]\n甲\t甲,x\n",
        encoding="utf-8",
    )
    path = tmp_path / "test.schema.yaml"
    path.write_text("schema_name:\n  spelling: chaifen\n", encoding="utf-8")
    return path


def test_main_prints_annotations(schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--schema", str(schema), "中", "中国"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["中\t〔口丨 · kd k · zhong1〕", "中国\t〔口丨囗王 · kdgw〕"]


def test_main_level_selection(schema: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--schema", str(schema), "--level", "lv1", "中国"])
    assert capsys.readouterr().out == "中国\t〔口丨囗王〕\n"

    main(["--schema", str(schema), "--level", "off", "中国"])
    assert capsys.readouterr().out == "中国\t\n"


def test_main_check_reports_malformed_records(
    schema: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["--schema", str(schema), "--check"])

    out = capsys.readouterr().out
    assert "Rule table:" in out
    assert "Malformed spelling records (1)" in out
    assert "甲,x" in out


def test_main_exits_on_startup_errors(tmp_path: Path) -> None:
    schema = tmp_path / "test.schema.yaml"
    schema.write_text("schema_name:\n  spelling: absent\n", encoding="utf-8")

    with pytest.raises(SystemExit, match="Spelling dictionary not found"):
        main(["--schema", str(schema), "中"])


def test_format_table_aligns_wide_characters() -> None:
    table = _format_table(["key", "record"], [["甲", "甲,x"], ["ab", "[ab]"]])

    assert table.splitlines() == [
        "key | record",
        "----+-------",
        "甲  | 甲,x",
        "ab  | [ab]",
    ]

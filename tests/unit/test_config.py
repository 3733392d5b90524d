"""Unit tests for schema configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tricomment.config import load_config
from tricomment.models import CodeMode


def _write(path: Path, text: str) -> Path:
    """Write helper for fixture files in tmp directories."""

    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_schema_settings(tmp_path: Path) -> None:
    schema = _write(
        tmp_path / "yulight.schema.yaml",
        "\n".join(
            [
                "schema_name:",
                "  spelling: yulight_chaifen",
                "  code: yulight",
                "yuhao_chaifen:",
                "  lua:",
                '    cycle_key: "Control+c"',
                '    switch_key: "Control+Shift+C"',
                "    phrase: 0",
                "    tone_marks: true",
                "    phrase_code_mode: terse",
                "abc_segmentor:",
                "  extra_tags: [reverse_lookup]",
                "encoder:",
                "  rules:",
                "    - length_equal: 2",
                "      formula: AaAbBaBb",
            ]
        )
        + "\n",
    )

    config = load_config(schema)

    assert config.spelling_dict == tmp_path / "yulight_chaifen.dict.yaml"
    assert config.code_dict == tmp_path / "yulight.dict.yaml"
    assert config.cycle_key == "Control+c"
    assert config.switch_key == "Control+Shift+C"
    assert config.phrase_enabled is False
    assert config.mixed_typing is True
    assert config.tone_marks is True
    assert config.phrase_code_mode is CodeMode.TERSE
    assert config.encode_rules == ({"length_equal": 2, "formula": "AaAbBaBb"},)


def test_load_config_defaults(tmp_path: Path) -> None:
    schema = _write(tmp_path / "min.schema.yaml", "schema_name:\n  spelling: chaifen\n")
    data_dir = tmp_path / "build"

    config = load_config(schema, data_dir=data_dir)

    assert config.spelling_dict == data_dir / "chaifen.dict.yaml"
    assert config.code_dict is None
    assert config.cycle_key is None
    assert config.phrase_enabled is True
    assert config.mixed_typing is False
    assert config.tone_marks is False
    assert config.phrase_code_mode is CodeMode.LITERAL
    assert config.encode_rules is None


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Schema file not found"):
        load_config(tmp_path / "missing.yaml")


def test_load_config_invalid_yaml(tmp_path: Path) -> None:
    schema = _write(tmp_path / "bad.yaml", "schema_name: [unclosed\n")

    with pytest.raises(ValueError, match="Error parsing YAML"):
        load_config(schema)


def test_load_config_requires_mapping_root(tmp_path: Path) -> None:
    schema = _write(tmp_path / "list.yaml", "- a\n- b\n")

    with pytest.raises(TypeError, match="must contain a mapping"):
        load_config(schema)


def test_load_config_collects_setting_errors(tmp_path: Path) -> None:
    schema = _write(
        tmp_path / "bad.schema.yaml",
        "\n".join(
            [
                "yuhao_chaifen:",
                "  lua:",
                "    phrase: yes please",
                "    phrase_code_mode: verbose",
                "encoder:",
                "  rules: AaBa",
            ]
        )
        + "\n",
    )

    with pytest.raises(ValueError) as excinfo:
        load_config(schema)

    message = str(excinfo.value)
    assert "missing schema_name/spelling" in message
    assert "phrase must be an integer" in message
    assert "phrase_code_mode must be literal or terse" in message
    assert "encoder/rules must be a list" in message

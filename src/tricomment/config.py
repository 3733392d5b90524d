"""Load annotation settings from a Rime-style schema YAML file.

Relevant schema keys::

    schema_name:
      spelling: yulight_chaifen      # spelling reverse-lookup dictionary
      code: yulight                  # punctuation/code reverse-lookup dictionary
    yuhao_chaifen:
      lua:
        cycle_key: "Control+c"
        switch_key: "Control+Shift+C"
        phrase: 1                    # 0 disables phrase annotation
        tone_marks: false
        phrase_code_mode: literal    # or terse
    abc_segmentor:
      extra_tags: [reverse_lookup]   # non-empty means mixed input style
    encoder:
      rules:
        - length_equal: 2
          formula: AaAbBaBb
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

import yaml

from tricomment.models import CodeMode

logger = logging.getLogger(__name__)

DICT_SUFFIX = ".dict.yaml"


@dataclass(frozen=True)
class TricommentConfig:
    """Typed view of the schema settings the annotation engine needs.

    Attributes:
        spelling_dict: Path of the spelling reverse-lookup dictionary.
        code_dict: Path of the code reverse-lookup dictionary, if configured.
        cycle_key: Key representation that cycles verbosity levels.
        switch_key: Key representation that toggles annotations on and off.
        phrase_enabled: Whether multi-character candidates are annotated.
        mixed_typing: Whether the schema mixes input styles.
        tone_marks: Whether numbered pronunciations are shown with tone marks.
        phrase_code_mode: Code extraction mode for phrases.
        encode_rules: Raw rule entries, or ``None`` to fall back to the
            spelling dictionary header and then the built-in rules.
    """

    spelling_dict: Path
    code_dict: Path | None = None
    cycle_key: str | None = None
    switch_key: str | None = None
    phrase_enabled: bool = True
    mixed_typing: bool = False
    tone_marks: bool = False
    phrase_code_mode: CodeMode = CodeMode.LITERAL
    encode_rules: tuple[dict[str, Any], ...] | None = None


def _get_path(data: dict[str, Any], path: str) -> Any:
    """Resolve a slash-separated key path, returning ``None`` when missing."""

    node: Any = data
    for key in path.split("/"):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def _dict_path(data_dir: Path, name: Any) -> Path | None:
    if not name:
        return None
    return data_dir / f"{name}{DICT_SUFFIX}"


def load_config(path: Path, data_dir: Path | None = None) -> TricommentConfig:
    """Read a schema file into a ``TricommentConfig``.

    Args:
        path: Schema YAML path.
        data_dir: Directory holding dictionaries; defaults to the schema's
            directory.

    Returns:
        Populated configuration.

    Raises:
        FileNotFoundError: If the schema file does not exist.
        ValueError: If the YAML is invalid or required settings are malformed.
        TypeError: If the YAML root is not a mapping.
    """

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError:
        raise FileNotFoundError(f"Schema file not found: {path}")
    except yaml.YAMLError as exc:
        raise ValueError(f"Error parsing YAML file at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise TypeError(f"Schema file {path} must contain a mapping.")

    base = data_dir if data_dir is not None else path.parent
    errors: list[str] = []

    spelling_dict = _dict_path(base, _get_path(data, "schema_name/spelling"))
    if spelling_dict is None:
        errors.append("missing schema_name/spelling")

    phrase = _get_path(data, "yuhao_chaifen/lua/phrase")
    if phrase is None:
        phrase = 1
    elif isinstance(phrase, bool) or not isinstance(phrase, int):
        errors.append(f"yuhao_chaifen/lua/phrase must be an integer, got {phrase!r}")
        phrase = 1

    mode_name = _get_path(data, "yuhao_chaifen/lua/phrase_code_mode") or CodeMode.LITERAL.value
    if mode_name not in (CodeMode.LITERAL.value, CodeMode.TERSE.value):
        errors.append(
            f"yuhao_chaifen/lua/phrase_code_mode must be literal or terse, got {mode_name!r}"
        )
        mode_name = CodeMode.LITERAL.value

    rules = _get_path(data, "encoder/rules")
    if rules is not None and not isinstance(rules, list):
        errors.append("encoder/rules must be a list")
        rules = None

    if errors:
        raise ValueError(f"Invalid schema {path}: " + "; ".join(errors))

    extra_tags = _get_path(data, "abc_segmentor/extra_tags") or []
    config = TricommentConfig(
        spelling_dict=spelling_dict,
        code_dict=_dict_path(base, _get_path(data, "schema_name/code")),
        cycle_key=_get_path(data, "yuhao_chaifen/lua/cycle_key"),
        switch_key=_get_path(data, "yuhao_chaifen/lua/switch_key"),
        phrase_enabled=phrase != 0,
        mixed_typing=len(extra_tags) > 0,
        tone_marks=bool(_get_path(data, "yuhao_chaifen/lua/tone_marks")),
        phrase_code_mode=CodeMode(mode_name),
        encode_rules=tuple(rules) if rules is not None else None,
    )
    logger.info("Loaded schema settings from %s", path)
    return config

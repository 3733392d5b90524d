"""Unit tests for phrase-level spelling and code composition."""

from __future__ import annotations

import pytest

from tricomment.compose.phrase import MISSING_COMPONENT, PhraseComposer, resolve_index
from tricomment.encoder.rules import (
    DEFAULT_ENCODE_RULES,
    RuleSetting,
    build_rule_table,
    settings_from_config,
)
from tricomment.models import CodeMode
from tricomment.record.repository import MappingLookupStore

RECORDS = {
    "中": "[口丨,kd_k,zhong1]",
    "国": "[囗王丶,gw,guo2]",
    "人": "[人,r,ren2]",
    "民": "[{民字框}一,mq,min2]",
    "空": "",
}


@pytest.fixture
def composer() -> PhraseComposer:
    rules = build_rule_table(settings_from_config(list(DEFAULT_ENCODE_RULES)))
    return PhraseComposer(rules=rules, store=MappingLookupStore(RECORDS))


def test_resolve_index_handles_signed_positions() -> None:
    assert resolve_index(1, 3) == 0
    assert resolve_index(-1, 3) == 2
    assert resolve_index(-3, 3) == 0
    assert resolve_index(4, 3) is None
    assert resolve_index(-4, 3) is None


def test_spell_two_character_phrase(composer: PhraseComposer) -> None:
    assert composer.spell("中国") == "口丨囗王"


def test_code_two_character_phrase(composer: PhraseComposer) -> None:
    assert composer.code("中国") == "kdgw"
    assert composer.code("中国", CodeMode.TERSE) == "kdgw"


def test_out_of_range_component_uses_placeholder(composer: PhraseComposer) -> None:
    """A missing component is replaced instead of dropping the phrase."""

    assert composer.spell("中国人") == f"口囗人{MISSING_COMPONENT}"


def test_last_character_rule_for_long_phrase(composer: PhraseComposer) -> None:
    assert composer.spell("中国人民") == "口囗人{民字框}"


def test_empty_record_aborts_whole_phrase(composer: PhraseComposer) -> None:
    assert composer.spell("中空") is None
    assert composer.code("中空") is None
    assert composer.spell("中未") is None


def test_lengths_without_formula_are_not_composed(composer: PhraseComposer) -> None:
    assert composer.spell("中") is None
    assert composer.spell("中" * 11) is None


def test_negative_indexes_count_from_the_end() -> None:
    """(-1, -1) on a 3-character phrase picks the last component of character 3."""

    composer = PhraseComposer(
        rules=build_rule_table([RuleSetting("Zz", 3, 3)]),
        store=MappingLookupStore({"甲": "[甲]", "乙": "[乙]", "丙": "[一二三四,x]"}),
    )

    assert composer.spell("甲乙丙") == "四"


def test_character_index_beyond_phrase_aborts() -> None:
    composer = PhraseComposer(
        rules=build_rule_table([RuleSetting("AaCa", 2, 2)]),
        store=MappingLookupStore(RECORDS),
    )

    assert composer.spell("中国") is None


def test_code_is_unavailable_when_no_character_has_a_code() -> None:
    composer = PhraseComposer(
        rules=build_rule_table(settings_from_config(list(DEFAULT_ENCODE_RULES))),
        store=MappingLookupStore({"中": "[口丨]", "国": "[囗王丶]", "人": "[人,r]"}),
    )

    assert composer.spell("中国") == "口丨囗王"
    assert composer.code("中国") is None
    assert composer.code("中国", CodeMode.TERSE) is None
    assert composer.code("中人") == f"{MISSING_COMPONENT}{MISSING_COMPONENT}r{MISSING_COMPONENT}"

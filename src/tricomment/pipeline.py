"""Top-level assembly of an annotation session from configuration."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Iterator

from tricomment.compose.phrase import PhraseComposer
from tricomment.config import TricommentConfig
from tricomment.encoder.rules import (
    DEFAULT_ENCODE_RULES,
    RuleTable,
    build_rule_table,
    settings_from_config,
)
from tricomment.filter import AnnotationFilter
from tricomment.io.rime_dict import read_encoder_rules
from tricomment.models import Candidate
from tricomment.options import OptionCycler, OptionGroup, chaifen_option_group
from tricomment.record.repository import LookupStore, MappingLookupStore, ReverseLookupStore

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Result bundle returned by :func:`build_session`.

    Attributes:
        options: Option group shared by the filter and the key processor.
        filter: Candidate filter.
        processor: Key processor for the cycle and switch keys.
        rules: Compiled rule table.
        spelling_store: Spelling reverse-lookup store.
    """

    options: OptionGroup
    filter: AnnotationFilter
    processor: OptionCycler
    rules: RuleTable
    spelling_store: ReverseLookupStore

    def annotate(self, candidates: Iterable[Candidate]) -> Iterator[Candidate]:
        """Run one round of candidates through the filter."""

        return self.filter.filter(candidates)


def resolve_rule_entries(config: TricommentConfig) -> tuple[dict, ...]:
    """Pick the rule source: schema, then spelling dictionary header, then defaults."""

    if config.encode_rules is not None:
        return config.encode_rules
    header_rules = read_encoder_rules(config.spelling_dict)
    if header_rules is not None:
        return tuple(header_rules)
    logger.info("No encoder rules configured; using built-in defaults")
    return DEFAULT_ENCODE_RULES


def build_session(config: TricommentConfig) -> Session:
    """Load stores, compile rules and wire the filter and key processor.

    Args:
        config: Loaded schema settings.

    Returns:
        Ready ``Session`` with the option group initialized.

    Raises:
        FileNotFoundError: If the spelling dictionary is missing.
        ValueError: If the rule settings or formulas are invalid.
    """

    if not config.spelling_dict.exists():
        raise FileNotFoundError(f"Spelling dictionary not found: {config.spelling_dict}")

    rules = build_rule_table(settings_from_config(resolve_rule_entries(config)))
    spelling_store = ReverseLookupStore(config.spelling_dict)

    code_store: LookupStore
    if config.code_dict is not None and config.code_dict.exists():
        code_store = ReverseLookupStore(config.code_dict)
    else:
        if config.code_dict is not None:
            logger.warning("Code dictionary not found: %s", config.code_dict)
        code_store = MappingLookupStore()

    options = chaifen_option_group()
    options.ensure_initialized()

    annotation_filter = AnnotationFilter(
        options=options,
        spelling_store=spelling_store,
        code_store=code_store,
        composer=PhraseComposer(rules=rules, store=spelling_store),
        phrase_enabled=config.phrase_enabled,
        mixed_typing=config.mixed_typing,
        tone_marks=config.tone_marks,
        phrase_code_mode=config.phrase_code_mode,
    )
    processor = OptionCycler(
        group=options,
        cycle_key=config.cycle_key,
        switch_key=config.switch_key,
    )
    return Session(
        options=options,
        filter=annotation_filter,
        processor=processor,
        rules=rules,
        spelling_store=spelling_store,
    )

"""Reverse-lookup stores mapping a key (a character or punctuation) to its record."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
import logging
from pathlib import Path
from typing import Iterable, Mapping, Protocol

from tricomment.io.rime_dict import parse_dict_body, split_dict_yaml

logger = logging.getLogger(__name__)


class LookupStore(Protocol):
    """Read-only key to string map; absent keys return ``""``."""

    def lookup(self, key: str) -> str: ...


def merge_values(rows: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Join all values of each key with a space, dropping duplicates.

    Args:
        rows: ``(key, value)`` pairs in file order.

    Returns:
        Mapping from key to space-joined values in first-seen order.
    """

    grouped: dict[str, list[str]] = {}
    for key, value in rows:
        values = grouped.setdefault(key, [])
        if value and value not in values:
            values.append(value)
    return {key: " ".join(values) for key, values in grouped.items()}


@dataclass(frozen=True)
class ReverseLookupStore:
    """File-backed store loaded lazily from a Rime dictionary or TSV file.

    Instances are path-scoped and deterministic; the file is read once on first
    lookup.
    """

    path: Path

    @cached_property
    def entries(self) -> dict[str, str]:
        """Load and cache the key to value mapping.

        Returns:
            Mapping from key to merged raw value.

        Raises:
            FileNotFoundError: If the configured file does not exist.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"Reverse-lookup file not found: {self.path}")

        with self.path.open("r", encoding="utf-8") as handle:
            _, body = split_dict_yaml(handle)
        entries = merge_values(parse_dict_body(body))
        logger.info("Loaded %d reverse-lookup entries from %s", len(entries), self.path)
        return entries

    def lookup(self, key: str) -> str:
        """Return the raw value for ``key``, or ``""`` when absent."""

        return self.entries.get(key, "")

    def items(self) -> Iterable[tuple[str, str]]:
        """Return all ``(key, value)`` pairs."""

        return self.entries.items()


@dataclass(frozen=True)
class MappingLookupStore:
    """In-memory store over a plain mapping."""

    mapping: Mapping[str, str] = field(default_factory=dict)

    def lookup(self, key: str) -> str:
        return self.mapping.get(key, "")

    def items(self) -> Iterable[tuple[str, str]]:
        return self.mapping.items()

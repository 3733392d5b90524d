"""Mutually exclusive option flags with toggle, cycle and switch semantics.

An ``OptionGroup`` holds a small ordered set of boolean flags where at most one
is expected to be on. Index 1 is treated as the "off" position by the switch
action and by the ``saved`` remembrance. Indexes are 1-based throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging

logger = logging.getLogger(__name__)

CHAIFEN_OPTIONS = (
    "yuhao_chaifen.off",
    "yuhao_chaifen.lv1",
    "yuhao_chaifen.lv2",
    "yuhao_chaifen.lv3",
)
CHAIFEN_DEFAULT = 4


@dataclass
class OptionGroup:
    """Ordered flags plus the ``default`` and last ``saved`` indexes."""

    names: tuple[str, ...]
    default: int | None = None
    saved: int | None = None
    states: dict[str, bool] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.names)

    def is_active(self, name: str) -> bool:
        return self.states.get(name, False)

    def set_option(self, name: str, value: bool) -> None:
        self.states[name] = value

    def active_index(self) -> int | None:
        """Return the 1-based index of the first active flag, if any."""

        for idx, name in enumerate(self.names, start=1):
            if self.is_active(name):
                return idx
        return None

    def _fallback_index(self) -> int:
        return self.saved or self.default or 1

    def toggle(self, name: str) -> None:
        """Flip one flag."""

        self.set_option(name, not self.is_active(name))

    def cycle(self, reverse: bool = False) -> int | None:
        """Move the active flag to the next (or previous) one.

        A single-flag group toggles its flag. When nothing is active, the
        ``saved`` index, then ``default``, then 1 is activated. Landing on an
        index other than 1 remembers it as ``saved``.

        Args:
            reverse: Step backward instead of forward.

        Returns:
            Newly active index, or ``None`` for an empty group.
        """

        size = len(self.names)
        if size == 0:
            return None
        if size == 1:
            self.toggle(self.names[0])
            return 1

        target = None
        current = self.active_index()
        if current is not None:
            self.set_option(self.names[current - 1], False)
            target = (current - 1 if reverse else current + 1) % size
            if target == 0:
                target = size

        index = target or self._fallback_index()
        self.set_option(self.names[index - 1], True)
        if index > 1:
            self.saved = index
        logger.info("Cycled option group to %s", self.names[index - 1])
        return index

    def ensure_initialized(self) -> None:
        """Activate ``saved``, ``default`` or the first flag when none is on."""

        if not self.names or self.active_index() is not None:
            return
        self.set_option(self.names[self._fallback_index() - 1], True)

    def switch(self) -> int | None:
        """Toggle between the "off" flag and the last meaningful flag.

        Returns:
            Newly active index, or ``None`` for an empty group.
        """

        if not self.names:
            return None

        for idx, name in enumerate(self.names, start=1):
            if idx > 1 and self.is_active(name):
                self.saved = idx

        index = self._fallback_index()
        off = self.names[0]
        if self.is_active(off):
            self.set_option(off, False)
            self.set_option(self.names[index - 1], True)
        else:
            self.set_option(self.names[index - 1], False)
            self.set_option(off, True)
            index = 1
        logger.info("Switched option group to %s", self.names[index - 1])
        return index


def chaifen_option_group() -> OptionGroup:
    """Create the annotation verbosity group: off, lv1, lv2, lv3 (default)."""

    return OptionGroup(names=CHAIFEN_OPTIONS, default=CHAIFEN_DEFAULT)


class KeyResult(Enum):
    """Outcome codes reported back to the host for a key event."""

    REJECTED = 0
    ACCEPTED = 1
    NOOP = 2


@dataclass
class OptionCycler:
    """Key processor that cycles or switches an option group while composing."""

    group: OptionGroup
    cycle_key: str | None = None
    switch_key: str | None = None
    reverse: bool = False

    def process_key(self, key_repr: str, composing: bool) -> KeyResult:
        """Handle one key event.

        Args:
            key_repr: Host representation of the pressed key.
            composing: Whether the host currently has an active composition.

        Returns:
            ``ACCEPTED`` when the key triggered an action, otherwise ``NOOP``.
        """

        if not composing:
            return KeyResult.NOOP
        if self.cycle_key and key_repr == self.cycle_key:
            self.group.cycle(self.reverse)
            return KeyResult.ACCEPTED
        if self.switch_key and key_repr == self.switch_key:
            self.group.switch()
            return KeyResult.ACCEPTED
        return KeyResult.NOOP

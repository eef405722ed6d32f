"""Transition table: per-source and wildcard records, first match wins."""
from __future__ import annotations

from typing import Iterable

from tick_state.types import TransitionRecord


class TransitionTable:
    """Ordered transition records keyed by source state and name.

    Records declared for a specific source always take precedence over
    wildcard records of the same name. Within each list, insertion order
    decides and the first record whose condition passes fires.
    """

    def __init__(self) -> None:
        self._by_source: dict[str, dict[str, list[TransitionRecord]]] = {}
        self._wildcard: dict[str, list[TransitionRecord]] = {}

    def add(self, name: str, sources: Iterable[str], record: TransitionRecord) -> None:
        for source in sources:
            self._by_source.setdefault(source, {}).setdefault(name, []).append(record)

    def add_wildcard(self, name: str, record: TransitionRecord) -> None:
        self._wildcard.setdefault(name, []).append(record)

    def exists(self, name: str, source: str) -> bool:
        """Registration check only; conditions are not evaluated."""
        return name in self._by_source.get(source, {}) or name in self._wildcard

    def find(self, name: str, source: str) -> TransitionRecord | None:
        """First passing record for ``name`` from ``source``, or None."""
        for record in self._by_source.get(source, {}).get(name, []):
            if record.passes():
                return record
        for record in self._wildcard.get(name, []):
            if record.passes():
                return record
        return None

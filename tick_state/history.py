"""Bounded log of previously-left states."""
from __future__ import annotations

from tick_state.types import InvalidArgumentError

DEFAULT_MAX_SIZE = 10


class StateHistory:
    """Oldest-evicted buffer of state names, recorded only while enabled."""

    def __init__(self, enabled: bool = False, max_size: int = DEFAULT_MAX_SIZE) -> None:
        _check_size(max_size)
        self._entries: list[str] = []
        self._enabled = enabled
        self._max_size = max_size

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def max_size(self) -> int:
        return self._max_size

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def record(self, state_name: str) -> None:
        """Append when enabled; drops from the front past ``max_size``."""
        if not self._enabled:
            return
        self._entries.append(state_name)
        if len(self._entries) > self._max_size:
            del self._entries[: len(self._entries) - self._max_size]

    def set_max_size(self, size: int) -> None:
        _check_size(size)
        self._max_size = size
        if len(self._entries) > size:
            self._entries = self._entries[-size:]

    def entries(self) -> list[str]:
        return list(self._entries)


def _check_size(size: int) -> None:
    if size < 1:
        raise InvalidArgumentError("History size must be at least 1")

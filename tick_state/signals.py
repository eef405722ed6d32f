"""Synchronous listener registry for built-in machine notifications."""
from __future__ import annotations

from typing import Any, Callable

from tick_state.types import STATE_CHANGED, InvalidArgumentError

BUILTIN_SIGNALS = frozenset({STATE_CHANGED})

_Handler = Callable[..., None]


class SignalBus:
    """Handlers run inline, in registration order, when a signal is emitted."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {name: [] for name in BUILTIN_SIGNALS}

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        if signal_name not in self._subscribers:
            raise InvalidArgumentError(f"Unknown signal '{signal_name}'")
        self._subscribers[signal_name].append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def emit(self, signal_name: str, *args: Any) -> None:
        # Copy so a handler may unsubscribe itself mid-emit.
        for handler in list(self._subscribers.get(signal_name, [])):
            handler(*args)

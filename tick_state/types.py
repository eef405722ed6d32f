"""Shared constants, type aliases, records and errors for tick-state."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Mapping, Union

WILDCARD = "*"
REFLEXIVE = "="

STATE_CHANGED = "state_changed"

EventMethod = Callable[[], None]
LifecycleMethod = Callable[..., None]
Condition = Callable[[], bool]
StateEvents = Mapping[str, Callable[..., None]]
StateChangedHandler = Callable[[str, str, Union[str, None]], None]


class Definedness(IntEnum):
    """Result of an event or transition lookup."""

    NOT_DEFINED = 0
    DEFINED = 1
    DEFAULT = 2


@dataclass(frozen=True, slots=True)
class TransitionRecord:
    dest_state: str
    condition: Condition | None = None
    leave_func: LifecycleMethod | None = None
    enter_func: LifecycleMethod | None = None

    def passes(self) -> bool:
        return self.condition is None or bool(self.condition())

    def resolve(self, current_state: str) -> str:
        """Concrete destination; the reflexive marker maps back to the source."""
        return current_state if self.dest_state == REFLEXIVE else self.dest_state


class StateMachineError(Exception):
    """Base class for every error raised by the engine."""


class NameCollisionError(StateMachineError):
    """Raised when an event name shadows an existing engine attribute."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Cannot use existing method/property name: {', '.join(names)}")


class UnknownStateError(StateMachineError, KeyError):
    """Raised when referencing a state that was never registered."""

    def __init__(self, state_name: Any, message: str) -> None:
        self.state_name = state_name
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidArgumentError(StateMachineError, ValueError):
    """Raised on out-of-range arguments (negative time, history size < 1)."""

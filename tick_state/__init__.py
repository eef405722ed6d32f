"""tick-state - Named-state finite state machine for interactive applications."""
from __future__ import annotations

from tick_state.clock import StateClock
from tick_state.config import MachineConfig
from tick_state.history import StateHistory
from tick_state.machine import StateMachine, create_state_machine
from tick_state.signals import SignalBus
from tick_state.transitions import TransitionTable
from tick_state.types import (
    REFLEXIVE,
    STATE_CHANGED,
    WILDCARD,
    Definedness,
    InvalidArgumentError,
    NameCollisionError,
    StateMachineError,
    TransitionRecord,
    UnknownStateError,
)

__all__ = [
    "StateMachine",
    "create_state_machine",
    "MachineConfig",
    "StateClock",
    "StateHistory",
    "SignalBus",
    "TransitionTable",
    "TransitionRecord",
    "Definedness",
    "WILDCARD",
    "REFLEXIVE",
    "STATE_CHANGED",
    "StateMachineError",
    "NameCollisionError",
    "UnknownStateError",
    "InvalidArgumentError",
]

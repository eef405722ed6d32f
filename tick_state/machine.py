"""StateMachine - named states, guarded transitions, history and timing."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Sequence

from tick_state.clock import StateClock
from tick_state.config import MachineConfig
from tick_state.history import StateHistory
from tick_state.signals import SignalBus
from tick_state.transitions import TransitionTable
from tick_state.types import (
    REFLEXIVE,
    STATE_CHANGED,
    WILDCARD,
    Condition,
    Definedness,
    EventMethod,
    InvalidArgumentError,
    LifecycleMethod,
    NameCollisionError,
    StateEvents,
    TransitionRecord,
    UnknownStateError,
)

logger = logging.getLogger(__name__)

_BUILTIN_EVENTS = ("enter", "leave")


def _noop(data: Any = None) -> None:
    return None


def _invoke(method: Callable[..., None], data: Any) -> None:
    if data is None:
        method()
    else:
        method(data)


class StateMachine:
    """Finite state machine driven by events, direct changes and triggers.

    States are plain mappings of event name to callback. ``enter`` and
    ``leave`` are the lifecycle events run by :meth:`change`; any other
    key becomes a dispatchable event, callable either as
    ``machine.dispatch("update")`` or as ``machine.update()``.

    Transitions are named and looked up from the current state first,
    then from the wildcard table. Conditions gate :meth:`trigger` only.
    """

    def __init__(
        self,
        initial: str,
        config: MachineConfig | None = None,
        time_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config: MachineConfig = config if config is not None else MachineConfig()
        self._events: set[str] = set(_BUILTIN_EVENTS)
        self._states: dict[str, dict[str, Callable[..., None]]] = {}
        self._defaults: dict[str, Callable[..., None]] = {}
        self._transitions = TransitionTable()
        self._signals = SignalBus()
        self._history = StateHistory(
            enabled=self.config.history_enabled,
            max_size=self.config.history_max_size,
        )
        self._state = initial
        self._previous: str | None = None
        self._clock = StateClock(time_fn)

    def __getattr__(self, name: str) -> EventMethod:
        # Only reached for names not found normally; installed events resolve here.
        events = self.__dict__.get("_events")
        if events is not None and name in events:
            return lambda: self.dispatch(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    # --- State registration ---

    def _check_for_illegal_keys(self, event_names: Sequence[str]) -> None:
        illegal = [
            key for key in event_names
            if key not in self._events and (hasattr(type(self), key) or key in self.__dict__)
        ]
        if illegal:
            raise NameCollisionError(illegal)

    def _install_event(self, event_name: str) -> None:
        if event_name in self._events:
            return
        self._events.add(event_name)
        logger.debug(f"[StateMachine] Installed event '{event_name}'")

    def add(self, state_name: str, events: StateEvents) -> StateMachine:
        """Register (or replace) the event table of ``state_name``."""
        self._check_for_illegal_keys(list(events))
        self._states[state_name] = dict(events)
        for event_name in events:
            self._install_event(event_name)
        logger.debug(f"[StateMachine] Added state '{state_name}' ({', '.join(events) or 'no events'})")
        return self

    def event_set_default_method(self, event_name: str, method: Callable[..., None]) -> StateMachine:
        """Fallback for ``event_name`` in states that do not define it."""
        self._check_for_illegal_keys([event_name])
        self._defaults[event_name] = method
        self._install_event(event_name)
        return self

    # --- Events ---

    def dispatch(self, event_name: str) -> None:
        """Run the current state's ``event_name`` callback, else its default."""
        method = self._states.get(self._state, {}).get(event_name)
        if callable(method):
            method()
        elif event_name in self._defaults:
            self._defaults[event_name]()

    def event_exists(self, event_name: str) -> Definedness:
        if callable(self._states.get(self._state, {}).get(event_name)):
            return Definedness.DEFINED
        if event_name in self._defaults:
            return Definedness.DEFAULT
        return Definedness.NOT_DEFINED

    def event_get_current_leave_method(self) -> Callable[..., None]:
        method = self._states.get(self._state, {}).get("leave")
        if method is not None:
            return method
        return self._defaults.get("leave", _noop)

    def enter(self, data: Any = None) -> StateMachine:
        """Run the current state's ``enter`` without changing state."""
        self._run_builtin("enter", data)
        return self

    def leave(self, data: Any = None) -> StateMachine:
        """Run the current state's ``leave`` without changing state."""
        self._run_builtin("leave", data)
        return self

    def _run_builtin(self, event_name: str, data: Any) -> None:
        method = self._states.get(self._state, {}).get(event_name)
        if method is not None:
            _invoke(method, data)
        elif event_name in self._defaults:
            self._defaults[event_name]()

    # --- State runtime ---

    def change(
        self,
        state_name: str,
        leave_func: LifecycleMethod | None = None,
        enter_func: LifecycleMethod | None = None,
        data: Any = None,
    ) -> StateMachine:
        """Leave the current state and enter ``state_name``.

        Overrides replace the registered ``leave``/``enter`` callbacks for
        this change only and always receive ``data``. Raises UnknownStateError before any side effect
        if ``state_name`` was never added.
        """
        return self._change(state_name, leave_func, enter_func, data, None)

    def _change(
        self,
        state_name: str,
        leave_func: LifecycleMethod | None,
        enter_func: LifecycleMethod | None,
        data: Any,
        transition_name: str | None,
    ) -> StateMachine:
        if state_name not in self._states:
            raise UnknownStateError(state_name, f"State '{state_name}' does not exist")

        source = self._state
        if leave_func is not None:
            leave_func(data)
        else:
            leave = self._states.get(source, {}).get("leave")
            if leave is not None:
                _invoke(leave, data)

        self._previous = source
        self._history.record(source)

        self._state = state_name
        self._clock.reset()

        if enter_func is not None:
            enter_func(data)
        else:
            enter = self._states[state_name].get("enter")
            if enter is not None:
                _invoke(enter, data)

        logger.debug(
            f"[StateMachine] {source} -> {state_name}"
            + (f" via '{transition_name}'" if transition_name is not None else "")
        )
        self._signals.emit(STATE_CHANGED, state_name, source, transition_name)
        return self

    def state_is(self, state_name: str, state_to_check: str | None = None) -> bool:
        """Compare ``state_name`` with ``state_to_check``, or the current state."""
        target = state_to_check if state_to_check is not None else self._state
        return state_name == target

    def state_exists(self, state_name: str) -> bool:
        return state_name in self._states

    def get_states(self) -> list[str]:
        return list(self._states)

    def get_current_state(self) -> str:
        return self._state

    def get_previous_state(self) -> str | None:
        return self._previous

    # --- Timing ---

    def get_time(self) -> float:
        """Milliseconds spent in the current state."""
        return self._clock.elapsed()

    def set_time(self, ms: float) -> StateMachine:
        self._clock.set_elapsed(ms)
        return self

    # --- History ---

    def history_enable(self) -> StateMachine:
        self._history.enable()
        return self

    def history_disable(self) -> StateMachine:
        self._history.disable()
        return self

    def history_is_enabled(self) -> bool:
        return self._history.enabled

    def history_set_max_size(self, size: int) -> StateMachine:
        self._history.set_max_size(size)
        return self

    def history_get_max_size(self) -> int:
        return self._history.max_size

    def history_get(self) -> list[str]:
        return self._history.entries()

    # --- Notifications ---

    def on(self, signal_name: str, handler: Callable[..., None]) -> StateMachine:
        """Register a listener. ``state_changed`` handlers get (dest, source, transition)."""
        self._signals.subscribe(signal_name, handler)
        return self

    def off(self, signal_name: str, handler: Callable[..., None]) -> StateMachine:
        self._signals.unsubscribe(signal_name, handler)
        return self

    # --- Transitions ---

    def add_transition(
        self,
        transition_name: str,
        source_state: str | Sequence[str],
        dest_state: str,
        condition: Condition | None = None,
        leave_func: LifecycleMethod | None = None,
        enter_func: LifecycleMethod | None = None,
    ) -> StateMachine:
        """Declare a transition from one state, a list of states, or WILDCARD.

        ``dest_state`` may be REFLEXIVE to return to whichever state the
        transition fired from.
        """
        record = TransitionRecord(
            dest_state=dest_state,
            condition=condition,
            leave_func=leave_func,
            enter_func=enter_func,
        )
        if source_state == WILDCARD:
            self._transitions.add_wildcard(transition_name, record)
            logger.debug(f"[StateMachine] Added wildcard transition '{transition_name}' -> {dest_state}")
            return self

        sources = [source_state] if isinstance(source_state, str) else list(source_state)
        if not sources:
            raise InvalidArgumentError(f"Transition '{transition_name}' needs at least one source state")
        for source in sources:
            if source not in self._states:
                raise UnknownStateError(source, f"Source state '{source}' does not exist")
        if dest_state != REFLEXIVE and dest_state not in self._states:
            raise UnknownStateError(dest_state, f"Destination state '{dest_state}' does not exist")

        self._transitions.add(transition_name, sources, record)
        logger.debug(
            f"[StateMachine] Added transition '{transition_name}' {', '.join(sources)} -> {dest_state}"
        )
        return self

    def add_wildcard_transition(
        self,
        transition_name: str,
        dest_state: str,
        condition: Condition | None = None,
        leave_func: LifecycleMethod | None = None,
        enter_func: LifecycleMethod | None = None,
    ) -> StateMachine:
        return self.add_transition(transition_name, WILDCARD, dest_state, condition, leave_func, enter_func)

    def add_reflexive_transition(
        self,
        transition_name: str,
        source_state: str | Sequence[str],
        condition: Condition | None = None,
        leave_func: LifecycleMethod | None = None,
        enter_func: LifecycleMethod | None = None,
    ) -> StateMachine:
        return self.add_transition(transition_name, source_state, REFLEXIVE, condition, leave_func, enter_func)

    def trigger(self, transition_name: str, data: Any = None) -> StateMachine:
        """Fire the first matching transition; a miss is a no-op."""
        record = self._transitions.find(transition_name, self._state)
        if record is None:
            logger.debug(f"[StateMachine] No transition '{transition_name}' from {self._state}")
            return self
        return self._change(
            record.resolve(self._state),
            record.leave_func,
            record.enter_func,
            data,
            transition_name,
        )

    def transition_exists(self, transition_name: str, source_state: str) -> Definedness:
        if self._transitions.exists(transition_name, source_state):
            return Definedness.DEFINED
        return Definedness.NOT_DEFINED


def create_state_machine(
    initial: str,
    config: MachineConfig | None = None,
    time_fn: Callable[[], float] = time.monotonic,
) -> StateMachine:
    """Build a machine starting in ``initial`` (which need not be added yet)."""
    return StateMachine(initial, config=config, time_fn=time_fn)

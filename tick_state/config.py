"""State machine configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from tick_state.history import DEFAULT_MAX_SIZE


@dataclass(frozen=True)
class MachineConfig:
    """Immutable construction options for a StateMachine.

    Attributes:
        history_enabled: Record left states from the first change on.
        history_max_size: Cap of the history buffer. Must be at least 1.
    """

    history_enabled: bool = False
    history_max_size: int = DEFAULT_MAX_SIZE

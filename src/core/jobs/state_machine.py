"""State machine tracking one counting run through its lifecycle."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from common.errors import BackendError, ErrorCode


class CounterState(str, Enum):
    """Supported lifecycle states for a counter engine."""

    IDLE = "IDLE"
    SETUP = "SETUP"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"
    FAILED = "FAILED"


_TERMINAL_STATES = {CounterState.FINISHED, CounterState.FAILED}
_NEXT_STATE: Dict[CounterState, CounterState] = {
    CounterState.IDLE: CounterState.SETUP,
    CounterState.SETUP: CounterState.RUNNING,
    CounterState.RUNNING: CounterState.FINISHED,
}

TransitionListener = Callable[[CounterState, Optional[str]], None]


class CounterStateMachine:
    """Enforces Idle -> Setup -> Running -> Finished, with Failed from anywhere.

    Transitions only move forward one step; terminal states are never left,
    so a finished or failed engine cannot be reused.
    """

    def __init__(self, *, listener: Optional[TransitionListener] = None) -> None:
        self._state = CounterState.IDLE
        self._listener = listener
        self.history: List[Tuple[CounterState, Optional[str]]] = [(CounterState.IDLE, None)]

    @property
    def state(self) -> CounterState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return self._state in _TERMINAL_STATES

    def transition(self, target: CounterState, *, detail: str | None = None) -> None:
        if not self._can_transition(target):
            raise BackendError(
                ErrorCode.STATE_ERROR,
                f"Invalid transition {self._state.value} -> {target.value}",
                context={"state": self._state.value, "target": target.value},
            )
        self._record(target, detail)

    def mark_failed(self, detail: str | None = None) -> None:
        if self._state == CounterState.FAILED:
            return
        self._record(CounterState.FAILED, detail)

    def _can_transition(self, target: CounterState) -> bool:
        if self._state in _TERMINAL_STATES:
            return False
        if target == CounterState.FAILED:
            return True
        return _NEXT_STATE.get(self._state) == target

    def _record(self, state: CounterState, detail: str | None) -> None:
        self._state = state
        self.history.append((state, detail))
        if self._listener:
            self._listener(state, detail)

"""Lifecycle tracking for counting runs."""

from .state_machine import CounterState, CounterStateMachine

__all__ = ["CounterState", "CounterStateMachine"]

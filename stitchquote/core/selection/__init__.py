"""Option selection rules."""

from .selection_state import SelectionStateMachine

__all__ = ["SelectionStateMachine"]

"""State machine components for statekeeper."""

from .history import TransitionHistory
from .machine import StateMachine

__all__ = [
    "StateMachine",
    "TransitionHistory",
]

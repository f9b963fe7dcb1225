"""Services module for statekeeper."""

from .state import StateMachine, TransitionHistory

__all__ = [
    "StateMachine",
    "TransitionHistory",
]

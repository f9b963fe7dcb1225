"""Undo/redo history of state transitions."""

from collections import deque

from src.statekeeper.utils.logging import get_logger

logger = get_logger(__name__)


class TransitionHistory:
    """Two-stack history of visited states.

    This class is responsible ONLY for:
    - Recording states entered through explicit transitions
    - Stepping back and forward through recorded states
    - Bounding both stacks to ``max_history`` entries

    The undo stack is oldest first and its top is the most recently
    entered state. The redo stack holds states popped by ``step_back``.
    """

    def __init__(self, initial: str | None = None, max_history: int | None = None):
        """Initialize history, optionally seeded with the initial state.

        Args:
            initial: State to seed the undo stack with
            max_history: Maximum entries kept per stack (None for unbounded)

        Raises:
            ValueError: If max_history is not a positive integer
        """
        if max_history is not None and max_history < 1:
            raise ValueError(f"max_history must be a positive integer, got {max_history}")

        self._max_history = max_history
        self._undo: deque[str] = deque(maxlen=max_history)
        self._redo: deque[str] = deque(maxlen=max_history)
        if initial is not None:
            self._undo.append(initial)

    @property
    def max_history(self) -> int | None:
        """Per-stack bound, None when unbounded."""
        return self._max_history

    @property
    def undo_stack(self) -> list[str]:
        """Copy of the undo stack, oldest first."""
        return list(self._undo)

    @property
    def redo_stack(self) -> list[str]:
        """Copy of the redo stack, oldest first."""
        return list(self._redo)

    def peek_undo(self) -> str | None:
        """Top of the undo stack, None when empty."""
        return self._undo[-1] if self._undo else None

    def peek_redo(self) -> str | None:
        """Top of the redo stack, None when empty."""
        return self._redo[-1] if self._redo else None

    def record(self, state: str) -> None:
        """Push a newly entered state. The redo stack is left untouched.

        Args:
            state: State that was entered
        """
        self._undo.append(state)

    def can_step_back(self) -> bool:
        """Check if there is a recorded state below the top of the undo stack."""
        # A lone entry is refused rather than popped, which would leave no current state
        return len(self._undo) > 1

    def step_back(self) -> str | None:
        """Pop the most recent state and return the one below it.

        The popped state goes onto the redo stack unless it already sits
        on top there.

        Returns:
            State to make current, or None if there is nothing to step back to
        """
        if not self.can_step_back():
            return None

        popped = self._undo.pop()
        if self.peek_redo() != popped:
            self._redo.append(popped)
        return self._undo[-1]

    def can_step_forward(self) -> bool:
        """Check if the redo stack has entries."""
        return bool(self._redo)

    def step_forward(self) -> str | None:
        """Pop the redo stack and return the state to make current.

        The state to activate is the popped entry when the redo stack is
        now empty, otherwise the new top of the redo stack. The popped
        entry goes back onto the undo stack unless it already sits on top.

        Returns:
            State to make current, or None if the redo stack is empty
        """
        if not self._redo:
            return None

        undone = self._redo.pop()
        state = self._redo[-1] if self._redo else undone
        if self.peek_undo() != undone:
            self._undo.append(undone)
        return state

    def clear(self) -> None:
        """Empty both stacks."""
        self._undo.clear()
        self._redo.clear()
        logger.debug("Cleared transition history")

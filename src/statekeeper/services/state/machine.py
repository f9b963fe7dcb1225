"""Finite state machine with undo/redo over state transitions."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.statekeeper.core.config import get_config
from src.statekeeper.core.exceptions import (
    ConfigError,
    InvalidConfigError,
    UnknownStateError,
    UnknownTransitionError,
)
from src.statekeeper.models.schemas import MachineConfig
from src.statekeeper.services.state.history import TransitionHistory
from src.statekeeper.utils.logging import get_logger, log_debug, log_info, log_warning

logger = get_logger(__name__)


class StateMachine:
    """Deterministic state machine driven by state names or events.

    Transitions made through ``change_state`` or ``trigger`` are recorded
    in a two-stack history that ``undo`` and ``redo`` walk. ``reset`` only
    moves the current state back to ``initial`` and leaves the history
    alone.

    Undeclared states referenced by the configuration are reported when
    they are reached, unless strict validation is enabled, in which case
    they are rejected at construction.
    """

    def __init__(
        self,
        config: MachineConfig | Mapping[str, Any] | None,
        *,
        strict: bool | None = None,
        max_history: int | None = None,
    ):
        """Initialize the machine in its initial state.

        Args:
            config: Machine configuration or a mapping of the same shape
            strict: Reject undeclared initial/target states now
                (None to use the FSM_STRICT_VALIDATION setting)
            max_history: Entries kept per history stack, 0 for unbounded
                (None to use the FSM_MAX_HISTORY setting)

        Raises:
            ConfigError: If config is missing or malformed, or max_history is negative
            InvalidConfigError: If strict validation finds undeclared states
        """
        if config is None:
            raise ConfigError("State machine configuration is required")

        self._config = self._load_config(config)

        if strict is None or max_history is None:
            settings = get_config()
            if strict is None:
                strict = settings.validation.FSM_STRICT_VALIDATION
            if max_history is None:
                max_history = settings.history.max_history

        if max_history is not None and max_history < 0:
            raise ConfigError(f"max_history must not be negative, got {max_history}")

        if strict:
            problems = self._config.find_problems()
            if problems:
                log_warning(logger, "Rejected state machine configuration", problems=problems)
                raise InvalidConfigError(problems)

        self._current = self._config.initial
        self._history = TransitionHistory(self._config.initial, max_history or None)

        log_info(
            logger,
            "State machine created",
            initial=self._config.initial,
            states=len(self._config.states),
            strict=strict,
        )

    @staticmethod
    def _load_config(config: MachineConfig | Mapping[str, Any]) -> MachineConfig:
        """Return a private copy of the configuration."""
        if isinstance(config, MachineConfig):
            return config.model_copy(deep=True)

        if not isinstance(config, Mapping):
            raise ConfigError(
                f"State machine configuration must be a mapping, got {type(config).__name__}"
            )

        try:
            return MachineConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigError(f"Malformed state machine configuration: {e}") from e

    @property
    def config(self) -> MachineConfig:
        """The machine configuration."""
        return self._config

    @property
    def undo_stack(self) -> list[str]:
        """Copy of the undo stack, oldest first."""
        return self._history.undo_stack

    @property
    def redo_stack(self) -> list[str]:
        """Copy of the redo stack, oldest first."""
        return self._history.redo_stack

    def get_state(self) -> str:
        """Get the current state."""
        return self._current

    def change_state(self, state: str) -> None:
        """Go to a declared state.

        Args:
            state: Target state

        Raises:
            UnknownStateError: If the state is not declared
        """
        if state not in self._config.states:
            log_warning(logger, "Rejected change to unknown state", state=state)
            raise UnknownStateError(state)

        log_debug(logger, "State changed", from_state=self._current, to_state=state)
        self._history.record(state)
        self._current = state

    def trigger(self, event: str) -> None:
        """Change state along the current state's transition for an event.

        Args:
            event: Event name

        Raises:
            UnknownTransitionError: If the current state has no transition for the event
            UnknownStateError: If the transition targets an undeclared state
        """
        definition = self._config.states.get(self._current)
        target = definition.transitions.get(event) if definition is not None else None
        if target is None:
            log_warning(logger, "Rejected unknown transition", state=self._current, event=event)
            raise UnknownTransitionError(self._current, event)

        log_debug(logger, "Event triggered", state=self._current, event=event, target=target)
        self.change_state(target)

    def reset(self) -> None:
        """Go back to the initial state without touching the history."""
        log_debug(logger, "State reset", from_state=self._current, to_state=self._config.initial)
        self._current = self._config.initial

    def get_states(self, event: str | None = None) -> list[str]:
        """List declared states in configuration order.

        Args:
            event: Only list states with a transition for this event

        Returns:
            State names
        """
        if event:
            return [
                name
                for name, definition in self._config.states.items()
                if event in definition.transitions
            ]
        return list(self._config.states)

    def get_transitions(self, state: str | None = None) -> dict[str, str]:
        """Get the transition table of a state.

        Args:
            state: State to inspect (None for the current state)

        Returns:
            Copy of the event -> target mapping

        Raises:
            UnknownStateError: If the state is not declared
        """
        name = self._current if state is None else state
        definition = self._config.states.get(name)
        if definition is None:
            raise UnknownStateError(name)
        return dict(definition.transitions)

    def can_undo(self) -> bool:
        """Check if ``undo`` would currently succeed."""
        return self._current != self._config.initial and self._history.can_step_back()

    def undo(self) -> bool:
        """Go back to the previously recorded state.

        Returns:
            True if the state changed, False if undo is not available
        """
        if self._current == self._config.initial:
            return False

        previous = self._history.step_back()
        if previous is None:
            return False

        log_debug(logger, "Undo", from_state=self._current, to_state=previous)
        self._current = previous
        return True

    def can_redo(self) -> bool:
        """Check if ``redo`` would currently succeed."""
        return self._history.can_step_forward()

    def redo(self) -> bool:
        """Go forward to an undone state.

        Returns:
            True if the state changed, False if redo is not available
        """
        state = self._history.step_forward()
        if state is None:
            return False

        log_debug(logger, "Redo", from_state=self._current, to_state=state)
        self._current = state
        return True

    def clear_history(self) -> None:
        """Forget all recorded transitions. The current state is kept."""
        self._history.clear()

    def validate(self) -> list[str]:
        """Check the configuration for references to undeclared states.

        Returns:
            Problems found, empty when the configuration is consistent
        """
        return self._config.find_problems()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(current={self._current!r}, "
            f"states={len(self._config.states)})"
        )

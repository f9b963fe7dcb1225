"""
Custom exception classes for the statekeeper state machine engine.

Invalid operations raise; operations that are merely unavailable
(undo/redo) report it through their return value instead.
"""


class StateKeeperException(Exception):
    """Base exception for all statekeeper custom exceptions."""

    pass


class ConfigError(StateKeeperException):
    """Exception raised for a missing or malformed configuration."""

    pass


class InvalidConfigError(ConfigError):
    """Exception raised when strict validation finds undeclared state references."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Invalid state machine configuration: " + "; ".join(self.problems))


class StateMachineError(StateKeeperException):
    """Exception raised for rejected state machine operations."""

    pass


class UnknownStateError(StateMachineError):
    """Exception raised when a target state is not declared in the configuration."""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"Unknown state: {state!r}")


class UnknownTransitionError(StateMachineError):
    """Exception raised when the current state has no transition for an event."""

    def __init__(self, state: str, event: str):
        self.state = state
        self.event = event
        super().__init__(f"No transition for event {event!r} from state {state!r}")

"""Data models for state machine configuration."""

from pydantic import BaseModel, ConfigDict, Field


class StateDefinition(BaseModel):
    """A declared state and its outgoing transitions (event -> target state)."""

    model_config = ConfigDict(frozen=True)

    transitions: dict[str, str] = Field(
        default_factory=dict, description="Target state keyed by event name"
    )


class MachineConfig(BaseModel):
    """State machine configuration. Key order of ``states`` is preserved."""

    model_config = ConfigDict(frozen=True)

    initial: str = Field(..., description="State the machine starts in and resets to")
    states: dict[str, StateDefinition] = Field(
        ..., description="Declared states keyed by state name"
    )

    def has_state(self, state: str) -> bool:
        """Check if a state is declared."""
        return state in self.states

    def find_problems(self) -> list[str]:
        """Collect references to undeclared states.

        Returns:
            Human-readable descriptions, empty when every reference resolves
        """
        problems = []
        if self.initial not in self.states:
            problems.append(f"initial state {self.initial!r} is not declared")
        for name, definition in self.states.items():
            for event, target in definition.transitions.items():
                if target not in self.states:
                    problems.append(
                        f"transition {name!r} --{event}--> {target!r} targets an undeclared state"
                    )
        return problems

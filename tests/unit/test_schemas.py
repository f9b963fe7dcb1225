"""Unit tests for machine configuration models."""

import pytest
from pydantic import ValidationError

from src.statekeeper.models.schemas import MachineConfig, StateDefinition


class TestMachineConfig:
    """Test configuration parsing and reference checks."""

    def test_parse_preserves_state_order(self, chain_config):
        """Test states keep their declaration order."""
        config = MachineConfig.model_validate(chain_config)

        assert config.initial == "A"
        assert list(config.states) == ["A", "B", "C", "D"]
        assert config.states["C"].transitions == {"next": "D", "back": "B"}

    def test_transitions_default_to_empty(self):
        """Test a state without transitions is a terminal state."""
        config = MachineConfig.model_validate({"initial": "done", "states": {"done": {}}})

        assert config.states["done"] == StateDefinition()
        assert config.states["done"].transitions == {}

    def test_missing_initial(self):
        """Test initial is required."""
        with pytest.raises(ValidationError):
            MachineConfig.model_validate({"states": {}})

    def test_wrong_transition_shape(self):
        """Test transitions must map event names to state names."""
        with pytest.raises(ValidationError):
            MachineConfig.model_validate(
                {"initial": "a", "states": {"a": {"transitions": ["b"]}}}
            )

    def test_frozen(self, idle_running_config):
        """Test fields cannot be reassigned."""
        config = MachineConfig.model_validate(idle_running_config)

        with pytest.raises(ValidationError):
            config.initial = "running"

    def test_has_state(self, idle_running_config):
        """Test declared state lookup."""
        config = MachineConfig.model_validate(idle_running_config)

        assert config.has_state("running")
        assert not config.has_state("paused")

    def test_find_problems_consistent(self, chain_config):
        """Test a consistent configuration has no problems."""
        assert MachineConfig.model_validate(chain_config).find_problems() == []

    def test_find_problems_reports_all_references(self):
        """Test undeclared initial and targets are all reported."""
        config = MachineConfig.model_validate(
            {
                "initial": "ghost",
                "states": {
                    "a": {"transitions": {"x": "b", "y": "c"}},
                    "b": {"transitions": {"z": "d"}},
                },
            }
        )

        assert config.find_problems() == [
            "initial state 'ghost' is not declared",
            "transition 'a' --y--> 'c' targets an undeclared state",
            "transition 'b' --z--> 'd' targets an undeclared state",
        ]

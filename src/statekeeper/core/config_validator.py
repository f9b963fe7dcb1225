"""
Settings validation for statekeeper.
Provides JSON schema validation for YAML settings files.
"""

import logging
from pathlib import Path
from typing import Any

import jsonschema
import yaml

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Validates settings documents against a JSON schema."""

    def __init__(self) -> None:
        """Initialize the settings validator."""
        self.schemas = self._load_schemas()

    def _load_schemas(self) -> dict[str, dict[str, Any]]:
        """Load JSON schema definitions for settings validation."""
        main_schema = {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "type": "object",
            "properties": {
                # Logging
                "LOG_LEVEL": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                },
                "LOG_FORMAT": {"type": "string", "minLength": 10},
                "LOG_FILE_PATH": {"type": "string", "minLength": 1},
                "LOG_FILE_MAX_BYTES": {
                    "type": "integer",
                    "minimum": 1048576,
                    "maximum": 1073741824,
                },
                "LOG_FILE_BACKUP_COUNT": {"type": "integer", "minimum": 1, "maximum": 50},
                "LOG_ENABLE_CONSOLE": {"type": "boolean"},
                "LOG_ENABLE_FILE": {"type": "boolean"},
                # History (0 means unbounded)
                "FSM_MAX_HISTORY": {"type": "integer", "minimum": 0},
                # Validation
                "FSM_STRICT_VALIDATION": {"type": "boolean"},
            },
            "additionalProperties": True,
        }

        return {"main": main_schema}

    def validate_yaml_file(self, file_path: Path) -> tuple[bool, list[str]]:
        """
        Validate a YAML settings file against its schema.

        Args:
            file_path: Path to the YAML file to validate

        Returns:
            Tuple of (is_valid, error_messages)
        """
        if not file_path.exists():
            return False, [f"Configuration file not found: {file_path}"]

        with open(file_path) as f:
            try:
                config_data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                line_info = "unknown"
                if getattr(e, "problem_mark", None):
                    line_info = str(e.problem_mark.line + 1)
                return False, [f"YAML syntax error at line {line_info}: {e}"]

        is_valid, errors = self.validate_config_dict(config_data or {})
        if is_valid:
            logger.info(f"Configuration file validation passed: {file_path}")
        return is_valid, errors

    def validate_config_dict(self, config_data: dict[str, Any]) -> tuple[bool, list[str]]:
        """
        Validate settings dictionary against schema.

        Args:
            config_data: Settings dictionary to validate

        Returns:
            Tuple of (is_valid, error_messages)
        """
        schema = self.schemas["main"]
        try:
            jsonschema.validate(config_data, schema)
            return True, []

        except jsonschema.ValidationError as e:
            error_path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
            return False, [f"Validation error at {error_path}: {e.message}"]

        except jsonschema.SchemaError as e:
            return False, [f"Schema error: {e.message}"]

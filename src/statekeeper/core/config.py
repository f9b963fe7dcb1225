"""
Settings management for statekeeper.
Loads settings from YAML files and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.statekeeper.core.config_validator import ConfigValidator
from src.statekeeper.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "STATEKEEPER_"
PROFILE_ALIASES = {"dev": "development", "prod": "production"}


@dataclass
class LoggingConfig:
    """Logging configuration."""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: str = "logs/statekeeper.log"
    LOG_FILE_MAX_BYTES: int = 10485760
    LOG_FILE_BACKUP_COUNT: int = 5
    LOG_ENABLE_CONSOLE: bool = True
    LOG_ENABLE_FILE: bool = False


@dataclass
class HistoryConfig:
    """Undo/redo history configuration."""

    FSM_MAX_HISTORY: int = 0  # 0 = unbounded

    @property
    def max_history(self) -> int | None:
        """History bound as accepted by the state machine, None when unbounded."""
        return self.FSM_MAX_HISTORY or None


@dataclass
class ValidationConfig:
    """Machine configuration validation settings."""

    FSM_STRICT_VALIDATION: bool = False


@dataclass
class Config:
    """Main settings container."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            "logging": self.logging.__dict__,
            "history": self.history.__dict__,
            "validation": self.validation.__dict__,
        }

    def to_flat_dict(self) -> dict[str, Any]:
        """Merge all sections into the flat key layout of the settings file."""
        return {**self.logging.__dict__, **self.history.__dict__, **self.validation.__dict__}


class ConfigLoader:
    """Settings loader that handles YAML files and environment variables."""

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize settings loader.

        Args:
            config_path: Path to settings file. Defaults to profile-based selection.
        """
        if config_path is None:
            # Get project root (4 levels up from this file)
            project_root = Path(__file__).parent.parent.parent.parent

            profile = os.getenv(f"{ENV_PREFIX}CONFIG_PROFILE", "default")
            config_file = f"{PROFILE_ALIASES.get(profile, profile)}.yaml"

            self.config_path = project_root / "config" / config_file
            if config_file != "default.yaml" and not self.config_path.exists():
                logger.warning(
                    f"Configuration profile {profile} has no {config_file}, using default.yaml"
                )
                self.config_path = project_root / "config" / "default.yaml"
            logger.debug(f"Selected configuration profile: {profile} -> {self.config_path.name}")
        else:
            self.config_path = Path(config_path)
        self.config = Config()

    def load(self) -> Config:
        """
        Load settings from file and environment variables.

        Environment variables override file settings.

        Returns:
            Loaded settings object

        Raises:
            ConfigError: If the file or the environment overrides fail validation
        """
        config_data = self._load_with_inheritance()

        if config_data:
            validator = ConfigValidator()
            is_valid, errors = validator.validate_config_dict(config_data)
            if not is_valid:
                self._fail_validation(errors, str(self.config_path))

            self._apply_yaml_config(config_data)
            logger.info(f"Loaded and validated configuration from {self.config_path}")
        else:
            logger.debug(f"Configuration file {self.config_path} not found, using defaults")

        self._apply_env_overrides()

        # Environment overrides are only checked once merged
        self._validate_config()

        return self.config

    def _validate_config(self) -> None:
        """Validate the merged settings after all loading is complete."""
        is_valid, errors = ConfigValidator().validate_config_dict(self.config.to_flat_dict())
        if not is_valid:
            self._fail_validation(errors, f"{self.config_path} and {ENV_PREFIX}* environment")

    def _fail_validation(self, errors: list[str], source: str) -> None:
        """Log and raise a settings validation failure."""
        error_msg = "Configuration validation failed:\n" + "\n".join(
            f"  - {error}" for error in errors
        )
        logger.error(f"Failed to load configuration from {source}: {error_msg}")
        raise ConfigError(error_msg)

    def _load_with_inheritance(self) -> dict[str, Any] | None:
        """
        Load settings with inheritance from the base settings file.

        Returns:
            Merged settings dictionary or None if file not found
        """
        if not self.config_path.exists():
            return None

        try:
            with open(self.config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {self.config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"Configuration file {self.config_path} must contain a mapping")

        # Profile-specific files inherit from default.yaml
        if self.config_path.name != "default.yaml":
            base_config_path = self.config_path.parent / "default.yaml"
            if base_config_path.exists():
                try:
                    with open(base_config_path) as f:
                        base_config = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    logger.warning(f"Failed to load base configuration: {e}")
                    return config_data

                merged_config = {**base_config, **config_data}
                logger.debug(f"Inherited base configuration from {base_config_path}")
                return merged_config

        return config_data

    def _section_for(self, key: str) -> Any | None:
        """Return the settings section a flat key belongs to."""
        if key.startswith("LOG_"):
            return self.config.logging
        if key == "FSM_MAX_HISTORY":
            return self.config.history
        if key == "FSM_STRICT_VALIDATION":
            return self.config.validation
        return None

    def _apply_yaml_config(self, yaml_config: dict[str, Any]) -> None:
        """Apply settings from YAML dictionary with proper type conversion."""
        for key, value in yaml_config.items():
            section = self._section_for(key)
            if section is None:
                logger.warning(f"Unknown configuration key: {key}")
                continue
            self._set_config_value(section, key, str(value))

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            config_key = env_key[len(ENV_PREFIX) :]
            section = self._section_for(config_key)
            if section is not None:
                self._set_config_value(section, config_key, env_value)

    def _set_config_value(self, config_section: Any, key: str, value: str) -> None:
        """
        Set settings value with appropriate type conversion.

        Args:
            config_section: Settings section object
            key: Settings key
            value: String value from file or environment
        """
        if not hasattr(config_section, key):
            logger.warning(f"Unknown configuration key: {key}")
            return

        current_value = getattr(config_section, key)

        converted_value: Any
        if isinstance(current_value, bool):
            converted_value = value.lower() in ("true", "1", "yes", "on")
        elif isinstance(current_value, int):
            try:
                converted_value = int(value)
            except ValueError:
                logger.error(f"Invalid integer value for {key}: {value}")
                return
        else:
            converted_value = value

        setattr(config_section, key, converted_value)
        logger.debug(f"Set {key} = {converted_value}")


# Global settings instance
_config: Config | None = None


def get_config(config_path: str | Path | None = None) -> Config:
    """
    Get settings instance (singleton pattern).

    Args:
        config_path: Optional path to settings file

    Returns:
        Settings object
    """
    global _config

    if _config is None:
        loader = ConfigLoader(config_path)
        _config = loader.load()

    return _config


def reload_config(config_path: str | Path | None = None) -> Config:
    """
    Reload settings from file and environment.

    Args:
        config_path: Optional path to settings file

    Returns:
        Reloaded settings object
    """
    global _config

    loader = ConfigLoader(config_path)
    _config = loader.load()

    return _config

"""
Config Module - Black Box Interface

Purpose: Runtime configuration for units
Interface: get_config(), reset_config(), ConfigModule.get()/set()/get_all()
Hidden: Config sources (defaults, YAML file, environment), parsing, validation

Lookup order, later wins:
- built-in defaults
- YAML file named by UNITCORE_CONFIG_FILE
- UNITCORE_* environment variables
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger("unitcore.config")


# Configuration Contract: every key the config module guarantees to provide

CONFIG_KEYS = {
    "log_level": {
        "description": "Logging level for the unitcore logger tree (DEBUG, INFO, WARNING, ERROR)",
        "env": "UNITCORE_LOG_LEVEL",
        "default": "INFO",
    },
    "strict_mode": {
        "description": "Default validator strictness for units that do not pin it",
        "env": "UNITCORE_STRICT_MODE",
        "default": False,
    },
    "emit_events": {
        "description": "Emit capability and learning events on unit emitters",
        "env": "UNITCORE_EMIT_EVENTS",
        "default": True,
    },
}

CONFIG_FILE_ENV = "UNITCORE_CONFIG_FILE"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class UnitSettings(BaseModel):
    """Validated shape of the YAML config file."""

    model_config = ConfigDict(extra="forbid")

    log_level: Optional[str] = None
    strict_mode: Optional[bool] = None
    emit_events: Optional[bool] = None

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}")
        return v.upper()


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigModule:
    """Configuration management module."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize from defaults, an optional YAML file and the environment.

        Args:
            config_file: YAML file path; defaults to $UNITCORE_CONFIG_FILE

        Raises:
            ValueError: If the config file is unreadable or malformed
        """
        self._config: Dict[str, Any] = {
            key: spec["default"] for key, spec in CONFIG_KEYS.items()
        }
        config_file = config_file or os.getenv(CONFIG_FILE_ENV)
        if config_file:
            self._config.update(self._load_from_file(config_file))
        self._config.update(self._load_from_env())

    def _load_from_file(self, path: str) -> Dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot read config file {path}: {e}") from e

        try:
            settings = UnitSettings(**data)
        except (TypeError, ValidationError) as e:
            raise ValueError(f"Invalid config file {path}: {e}") from e

        logger.debug(f"Loaded configuration from {path}")
        return settings.model_dump(exclude_none=True)

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment."""
        values: Dict[str, Any] = {}

        log_level = os.getenv("UNITCORE_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.upper()

        strict_mode = os.getenv("UNITCORE_STRICT_MODE")
        if strict_mode is not None:
            values["strict_mode"] = _parse_bool(strict_mode)

        emit_events = os.getenv("UNITCORE_EMIT_EVENTS")
        if emit_events is not None:
            values["emit_events"] = _parse_bool(emit_events)

        return values

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration contract.

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> schema['strict_mode']['env']
            'UNITCORE_STRICT_MODE'
        """
        return {key: spec.copy() for key, spec in CONFIG_KEYS.items()}


# Singleton instance
_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


def reset_config() -> None:
    """Drop the singleton so the next get_config() reloads its sources."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule", "UnitSettings", "CONFIG_KEYS"]

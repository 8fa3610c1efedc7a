#!/usr/bin/env python3
"""
Configuration manager for the flu toolkit
Handles loading and accessing configuration from various sources.
"""
import copy
import os
import yaml
import json
import logging
from typing import Dict, Any, Optional, List

from flu.exceptions import ConfigurationError
from .schema import ConfigSchema
from .defaults import DEFAULT_CONFIG


class ConfigManager:
    """Configuration manager for the flu toolkit

    Values are layered: defaults, then the config file, then a sibling
    ``<name>.local.<ext>`` file, then FLU_ environment variables.
    """

    ENV_PREFIX = "FLU_"

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager

        Args:
            config_path: Path to a YAML or JSON configuration file (optional)

        Raises:
            ConfigurationError: If config_path is given but cannot be read
        """
        self.logger = logging.getLogger("flu.config")
        self.config_path = config_path
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self.validation_errors: List[str] = []

        if config_path:
            if not os.path.exists(config_path):
                raise ConfigurationError(f"Configuration file not found: {config_path}",
                                         {'config_path': config_path})
            self._load_from_file(config_path)

            local_config_path = self._get_local_config_path(config_path)
            if os.path.exists(local_config_path):
                self._load_from_file(local_config_path)
                self.logger.info(f"Merged local configuration from {local_config_path}")

        self._load_from_env()
        self._validate_config()

    def _get_local_config_path(self, config_path: str) -> str:
        """Format: <filename>.local.<extension> next to the main file"""
        stem, ext = os.path.splitext(config_path)
        return f"{stem}.local{ext}"

    def _load_from_file(self, config_path: str) -> None:
        """Load configuration from YAML or JSON file

        Args:
            config_path: Path to configuration file
        """
        try:
            with open(config_path, 'r') as f:
                if config_path.endswith('.json'):
                    file_config = json.load(f)
                else:  # Assume YAML otherwise
                    file_config = yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Error loading config file {config_path}: {e}",
                                     {'config_path': config_path}) from e

        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping",
                                     {'config_path': config_path})

        self._deep_update(self.config, file_config)
        self.logger.info(f"Loaded configuration from {config_path}")

    def _load_from_env(self) -> None:
        """Override config with environment variables

        Environment variables are prefixed with FLU_ and use a double
        underscore for nesting, e.g. FLU_VALIDATION__MIN_IDENTITY=0.8
        """
        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            parts = key[len(self.ENV_PREFIX):].lower().split("__")
            self._set_nested_value(self.config, parts, value)
            self.logger.debug(f"Environment override for {'.'.join(parts)}")

    def _set_nested_value(self, config: Dict[str, Any],
                          key_parts: List[str], value: str) -> None:
        current = config
        for part in key_parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[key_parts[-1]] = self._convert_value(value)

    def _convert_value(self, value: str) -> Any:
        """Convert string environment variable to appropriate type"""
        lowered = value.lower()
        if lowered in ('true', 'yes'):
            return True
        if lowered in ('false', 'no'):
            return False
        if lowered in ('none', 'null'):
            return None
        try:
            return int(value)
        except ValueError:
            try:
                return float(value)
            except ValueError:
                return value

    def _deep_update(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """Recursively update target dictionary with values from source"""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_update(target[key], value)
            else:
                target[key] = value

    def _validate_config(self) -> None:
        """Validate the configuration against the schema"""
        self.validation_errors = ConfigSchema.validate(self.config)

        if self.validation_errors:
            for error in self.validation_errors:
                self.logger.error(f"Configuration error: {error}")
            self.logger.warning("Using configuration with validation errors")
        else:
            self.logger.debug("Configuration validated successfully")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation

        Args:
            key: Configuration key (can use dot notation for nested values)
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current: Any = self.config
        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_alignment_config(self, kind: str) -> Dict[str, Any]:
        """Get the scoring settings for 'dna' or 'protein' alignments

        Raises:
            ConfigurationError: If the section does not exist
        """
        section = self.get(f'alignment.{kind}')
        if not isinstance(section, dict):
            raise ConfigurationError(f"No alignment settings for '{kind}'")
        return dict(section)


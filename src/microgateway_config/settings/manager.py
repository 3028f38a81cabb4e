# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Settings manager for microgateway-config.

This module provides the central ConfigManager class that handles:
- Settings file loading (JSON/YAML)
- Environment variable loading with type conversion
- Environment profile application
- Thread-safe settings access and runtime updates
"""

import json
import logging
import os
from pathlib import Path
import threading
from typing import Any, Optional

import yaml

from .defaults import DEFAULT_SETTINGS, ENV_VAR_MAPPING, ENV_VAR_TYPES, get_profile_overrides
from .schema import LoggingSettings, RedisSettings, SettingsSchema, ValidatorSettings
from .validation import SettingsValidationError, SettingsValidator

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAMES = ("settings.json", "settings.yaml", "settings.yml")


class ConfigManager:
    """Thread-safe settings manager with environment variable support.

    Features:
    - Environment variable loading with MGC_ prefix
    - Type conversion and validation
    - Environment profiles (development, staging, production)
    - Settings file support (JSON/YAML)
    - Runtime settings updates
    """

    _instance: Optional["ConfigManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "ConfigManager":
        """Singleton pattern implementation."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings manager."""
        if hasattr(self, "_initialized"):
            return

        self._config_lock = threading.RLock()
        self._config: SettingsSchema = DEFAULT_SETTINGS.model_copy(deep=True)
        self._validator = SettingsValidator()
        self._loaded_from_env = False
        self._loaded_from_file: Path | None = None
        self._initialization_errors: list[str] = []

        try:
            self._load_configuration()
        except SettingsValidationError as e:
            logger.exception("Failed to load settings, falling back to defaults")
            self._initialization_errors.append(str(e))

        self._initialized = True

    def _load_configuration(self) -> None:
        """Load settings from files and environment variables."""
        with self._config_lock:
            config_data = DEFAULT_SETTINGS.model_dump()

            self._load_from_files(config_data)
            env_paths = self._load_from_environment(config_data)
            self._apply_environment_profile(config_data, skip=env_paths)

            try:
                new_config = SettingsSchema(**config_data)
                self._validator.validate_settings(new_config)
            except Exception as e:
                logger.exception("Settings validation failed")
                raise SettingsValidationError(f"Invalid settings: {e}") from e

            self._config = new_config
            logger.debug("Settings loaded successfully")
            if self._validator.warnings:
                logger.warning("Settings warnings: %s", self._validator.warnings)
            if self._validator.recommendations:
                logger.info("Settings recommendations: %s", self._validator.recommendations)

    def _settings_paths(self) -> list[Path]:
        directories = [
            Path("/etc/microgateway-config"),
            Path.home() / ".config" / "microgateway-config",
        ]
        paths = [directory / name for directory in directories for name in SETTINGS_FILE_NAMES]
        paths.extend(Path(f"microgateway-config.{suffix}") for suffix in ("json", "yaml", "yml"))
        return paths

    def _load_from_files(self, config_data: dict[str, Any]) -> None:
        """Load settings from the first JSON/YAML file found."""
        self._loaded_from_file = None

        for config_path in self._settings_paths():
            if not config_path.exists():
                continue
            try:
                with config_path.open() as f:
                    if config_path.suffix in (".yaml", ".yml"):
                        file_config = yaml.safe_load(f)
                    else:
                        file_config = json.load(f)
            except (json.JSONDecodeError, yaml.YAMLError, OSError) as e:
                logger.warning("Failed to load settings from %s: %s", config_path, e)
                continue

            if isinstance(file_config, dict) and file_config:
                self._merge_config(config_data, file_config)
                self._loaded_from_file = config_path
                logger.info("Loaded settings from %s", config_path)
                break

    def _load_from_environment(self, config_data: dict[str, Any]) -> set[str]:
        """Load settings from MGC_ environment variables.

        Returns:
            The dotted settings paths that were set from the environment
        """
        env_paths: set[str] = set()

        for env_var, config_path in ENV_VAR_MAPPING.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            try:
                converted_value = self._convert_env_value(env_var, env_value)
            except (ValueError, TypeError) as e:
                logger.warning("Invalid value for %s='%s': %s", env_var, env_value, e)
                continue

            self._set_nested_value(config_data, config_path, converted_value)
            env_paths.add(config_path)

        self._loaded_from_env = bool(env_paths)
        if env_paths:
            logger.info("Loaded %d settings values from environment variables", len(env_paths))
        return env_paths

    @staticmethod
    def _convert_env_value(env_var: str, env_value: str) -> Any:
        var_type = ENV_VAR_TYPES.get(env_var, str)
        if var_type is bool:
            return env_value.lower() in ("true", "1", "yes", "on")
        if var_type is list:
            return [item.strip() for item in env_value.split(",") if item.strip()]
        return var_type(env_value)

    def _apply_environment_profile(self, config_data: dict[str, Any], skip: set[str]) -> None:
        """Apply environment-specific overrides, keeping explicit env values."""
        environment = config_data.get("environment", "production")
        profile_overrides = get_profile_overrides(environment)

        applied = False
        for config_path, value in profile_overrides.items():
            if config_path in skip:
                continue
            self._set_nested_value(config_data, config_path, value)
            applied = True
        if applied:
            logger.debug("Applied %s environment profile", environment)

    def _set_nested_value(self, data: dict[str, Any], path: str, value: Any) -> None:
        """Set a nested dictionary value using dot notation path."""
        keys = path.split(".")
        current = data

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _merge_config(self, base_config: dict[str, Any], new_config: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries."""
        for key, value in new_config.items():
            if (
                key in base_config
                and isinstance(base_config[key], dict)
                and isinstance(value, dict)
            ):
                self._merge_config(base_config[key], value)
            else:
                base_config[key] = value

    @property
    def config(self) -> SettingsSchema:
        """Get current settings (thread-safe copy)."""
        with self._config_lock:
            result: SettingsSchema = self._config.model_copy(deep=True)
            return result

    @property
    def redis(self) -> RedisSettings:
        """Get key-value store settings."""
        return self._config.redis

    @property
    def validator(self) -> ValidatorSettings:
        """Get validator settings."""
        return self._config.validator

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings."""
        return self._config.logging

    def update_config(self, **kwargs: Any) -> None:
        """Update settings at runtime (thread-safe).

        Args:
            **kwargs: Settings values to update, nested keys joined by double underscores

        Example:
            settings.update_config(redis__host="cache.internal", redis__port=6380)
        """
        with self._config_lock:
            config_data = self._config.model_dump()

            for key, value in kwargs.items():
                self._set_nested_value(config_data, key.replace("__", "."), value)

            try:
                new_config = SettingsSchema(**config_data)
                self._validator.validate_settings(new_config)
            except Exception as e:
                logger.exception("Settings update failed")
                raise SettingsValidationError(f"Invalid settings update: {e}") from e

            self._config = new_config
            logger.info("Settings updated: %s", list(kwargs.keys()))

    def reload_configuration(self) -> None:
        """Reload settings from environment and files."""
        logger.info("Reloading settings...")
        self._initialization_errors.clear()
        self._load_configuration()

    def get_config_summary(self) -> dict[str, Any]:
        """Get settings summary."""
        with self._config_lock:
            return {
                "settings_version": self._config.settings_version,
                "environment": self._config.environment,
                "debug_mode": self._config.debug_mode,
                "loaded_from_env": self._loaded_from_env,
                "loaded_from_file": str(self._loaded_from_file) if self._loaded_from_file else None,
                "initialization_errors": list(self._initialization_errors),
                "validation": self._validator.get_validation_summary(),
                "redis": {
                    "host": self._config.redis.host,
                    "port": self._config.redis.port,
                    "db": self._config.redis.db,
                    "password_set": self._config.redis.password is not None,
                },
            }

    def export_config(self, format: str = "json") -> str:
        """Export current settings to JSON or YAML, without the Redis password."""
        config_dict = self._config.model_dump()
        if config_dict["redis"].get("password"):
            config_dict["redis"]["password"] = "***"

        if format.lower() == "yaml":
            return str(yaml.safe_dump(config_dict, default_flow_style=False, indent=2))
        return json.dumps(config_dict, indent=2)

    def get_env_var_help(self) -> dict[str, str]:
        """Get help text for all supported environment variables."""
        help_text = {}

        for env_var, config_path in ENV_VAR_MAPPING.items():
            var_type = ENV_VAR_TYPES.get(env_var, str)
            help_text[env_var] = f"Type: {var_type.__name__}, Path: {config_path}"

        return help_text


# Global settings instance
settings = ConfigManager()

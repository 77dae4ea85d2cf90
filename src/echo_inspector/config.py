"""
Configuration management for echo-inspector.

This module handles loading, validation, and access to configuration settings
from defaults, config files (YAML or JSON) and environment variables.
"""
import os
import json
from typing import Dict, Any, Optional, List

import yaml
from pydantic import BaseModel, Field, field_validator

from echo_inspector.constants import CONFIG_FILE_ENV, DEFAULT_SERVER_HOST, DEFAULT_SERVER_PORT, ENV_PREFIX
from echo_inspector.utils.errors import ConfigurationError
from echo_inspector.utils.logging import logger

# Default configuration file paths
DEFAULT_CONFIG_PATHS = [
    "./echo-inspector.yaml",
    "./echo-inspector.yml",
    "./echo-inspector.json",
    "~/.config/echo-inspector/config.yaml",
]

# Global configuration instance
_config = None


class ServerConfig(BaseModel):
    """Server configuration settings."""

    host: str = Field(DEFAULT_SERVER_HOST, description="Host to bind the server to")
    port: int = Field(DEFAULT_SERVER_PORT, description="Port to bind the server to")
    workers: int = Field(1, description="Number of worker processes")
    debug: bool = Field(False, description="Enable debug mode")
    cors_origins: List[str] = Field(default_factory=list, description="CORS allowed origins; empty disables CORS")
    log_level: str = Field("info", description="Logging level")
    log_file: Optional[str] = Field(None, description="Optional rotating log file path")
    access_log: bool = Field(True, description="Log every inspected request")
    mount_service_routes: bool = Field(True, description="Serve /, /health and /version")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        if v.lower() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.lower()

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not 0 < v < 65536:
            raise ValueError("Port must be between 1 and 65535")
        return v


class EchoInspectorConfig(BaseModel):
    """Main echo-inspector configuration model."""

    server: ServerConfig = Field(default_factory=ServerConfig)

    # Custom fields can be added dynamically
    extra: Dict[str, Any] = Field(default_factory=dict, description="Additional configuration")


def expand_path(path: str) -> str:
    """Expand user and variables in path."""
    return os.path.expandvars(os.path.expanduser(path))


def find_config_file() -> Optional[str]:
    """Find the first available configuration file from default paths.

    Returns:
        Path to config file or None if not found
    """
    for path in DEFAULT_CONFIG_PATHS:
        expanded_path = expand_path(path)
        if os.path.isfile(expanded_path):
            return expanded_path
    return None


def load_config_from_file(path: str) -> Dict[str, Any]:
    """Load configuration from a file.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If file does not exist
        ConfigurationError: If file format is invalid
    """
    path = expand_path(path)

    if not os.path.isfile(path):
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.debug(f"Loading configuration from {path}", component="config", operation="load_config")

    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in configuration file: {e}", path=path)
        elif path.endswith(".json"):
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in configuration file: {e}", path=path)
        else:
            raise ConfigurationError(f"Unsupported configuration file format: {path}", path=path)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}", path=path)
    return data


def _coerce_env_value(value: str) -> Any:
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    if value.isdigit():
        return int(value)
    if value.replace(".", "", 1).isdigit() and value.count(".") == 1:
        return float(value)
    return value


def load_config_from_env(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """Load configuration from environment variables.

    Nested keys are separated by double underscore, e.g.
    ECHO_INSPECTOR_SERVER__PORT=9000.

    Returns:
        Configuration dictionary
    """
    config: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix) or key == CONFIG_FILE_ENV:
            continue
        key_parts = key[len(prefix):].lower().split("__")

        current = config
        for part in key_parts[:-1]:
            current = current.setdefault(part, {})
        current[key_parts[-1]] = _coerce_env_value(value)

    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def load_config(
    config_file: Optional[str] = None,
    env_override: bool = True,
    defaults: Optional[Dict[str, Any]] = None,
) -> EchoInspectorConfig:
    """Load and initialize the configuration.

    Args:
        config_file: Optional path to configuration file; falls back to $ECHO_INSPECTOR_CONFIG
        env_override: Whether environment variables override file config
        defaults: Optional default values

    Returns:
        Validated EchoInspectorConfig instance

    Raises:
        FileNotFoundError: If the specified config file is not found
        ConfigurationError: If configuration validation fails
    """
    global _config

    config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
    config_data = dict(defaults or {})

    if config_file:
        config_data = merge_configs(config_data, load_config_from_file(config_file))
    else:
        default_file = find_config_file()
        if default_file:
            try:
                config_data = merge_configs(config_data, load_config_from_file(default_file))
            except (ConfigurationError, FileNotFoundError) as e:
                logger.warning(
                    f"Error loading default config file: {e}",
                    component="config",
                    operation="load_config",
                )

    if env_override:
        env_config = load_config_from_env()
        if env_config:
            config_data = merge_configs(config_data, env_config)
            logger.debug(
                "Applied environment variable configuration overrides",
                component="config",
                operation="load_config",
            )

    try:
        _config = EchoInspectorConfig(**config_data)
    except Exception as e:
        logger.error("Failed to load configuration", component="config", operation="load_config", exception=e)
        raise ConfigurationError(f"Configuration validation failed: {e}")

    logger.set_level(_config.server.log_level)
    logger.debug("Configuration loaded", component="config", operation="load_config")
    return _config


def get_config() -> EchoInspectorConfig:
    """Get the current configuration, loading defaults on first use."""
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next get_config() reloads it."""
    global _config
    _config = None


def get_config_as_dict() -> Dict[str, Any]:
    """Get the current configuration as a dictionary."""
    return get_config().model_dump()


def save_config(path: str) -> None:
    """Save the current configuration to a file.

    Args:
        path: Path to save configuration to (.yaml, .yml or .json)

    Raises:
        ConfigurationError: If the file extension is not supported
    """
    config = get_config_as_dict()
    path = expand_path(path)

    if not path.endswith((".yaml", ".yml", ".json")):
        raise ConfigurationError(f"Unsupported file format for saving configuration: {path}", path=path)

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        if path.endswith(".json"):
            json.dump(config, f, indent=2)
        else:
            yaml.safe_dump(config, f, default_flow_style=False)

    logger.success(f"Configuration saved to {path}", component="config", operation="save_config")

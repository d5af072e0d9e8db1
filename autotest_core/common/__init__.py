"""
================================================================================
Autotest Core Common Utilities
================================================================================

This module provides shared configuration management and logging setup for
the suite bookkeeping components.

Exports:
    - get_config: Read a configuration value by dot-notation key
    - get_bool_config: Read a boolean value, coercing env-provided strings
    - set_config: Override a configuration value at runtime
    - reload_config / reset_config: Re-read or drop the loaded configuration
    - init_logger: Initialize the loguru logger with standard settings

Configuration loading order:
    1. Built-in defaults
    2. config/config.yaml
    3. config/{ENV}.yaml (optional)
    4. Environment variables (SUITE__THROW_ON_EXPECTATION_FAILURE=true)

Usage:
    from autotest_core.common import get_config, init_logger

    init_logger()
    throw = get_bool_config("suite.throw_on_expectation_failure", False)

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from autotest_core.errors import SuiteError


class ConfigurationError(SuiteError):
    """Raised when configuration loading fails."""


# ============================================================
# Configuration Management
# ============================================================

_config: Dict[str, Any] = {}
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_TRUTHY = ("true", "1", "yes", "on")


def _get_defaults() -> Dict[str, Any]:
    """
    Returns default configuration values.
    """
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
            "file": None,
            "rotation": "10 MB",
            "retention": "7 days",
        },
        "suite": {
            "throw_on_expectation_failure": False,
        },
    }


def _config_dirs() -> List[Path]:
    return [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ]


def _ensure_config_loaded() -> None:
    if not _config:
        _load_config()


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in configuration file: {path}",
            details={"path": str(path), "error": str(e)},
        ) from e


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.
    """
    global _config

    loaded = _get_defaults()

    config_dir = next((d for d in _config_dirs() if d.is_dir()), None)
    if config_dir is None:
        logger.debug("No configuration directory found. Using defaults.")
    else:
        default_config_path = config_dir / "config.yaml"
        if default_config_path.exists():
            loaded = _deep_merge(loaded, _read_yaml(default_config_path))
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            loaded = _deep_merge(loaded, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _config = loaded
    _apply_env_overrides()


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Use double underscore to separate nested keys:
    LOGGING__LEVEL=DEBUG overrides logging.level.
    """
    for key, value in os.environ.items():
        if "__" in key and not key.startswith("_"):
            parts = [p.lower() for p in key.split("__")]
            if all(parts):
                _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        existing = d.get(key)
        if not isinstance(existing, dict):
            existing = d[key] = {}
        d = existing
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("suite.throw_on_expectation_failure", False)
        False
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def get_bool_config(key: str, default: bool = False) -> bool:
    """
    Retrieves a boolean configuration value.

    Environment overrides always arrive as strings, so "true", "1", "yes"
    and "on" (any case) are read as True and every other string as False.
    """
    value = get_config(key, default)
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reset_config() -> None:
    """
    Drops the loaded configuration so the next access reloads it.

    Useful for testing when environment variables change between cases.
    """
    global _config
    _config = {}


def reload_config() -> None:
    """
    Reloads the configuration from files and the environment.
    """
    global _logger_initialized
    reset_config()
    _load_config()
    _logger_initialized = False
    init_logger()
    logger.info("Configuration reloaded.")


# ============================================================
# Logging Setup
# ============================================================

def init_logger(level: Optional[str] = None, format_str: Optional[str] = None) -> None:
    """
    Initializes the loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Log format string. Defaults to config value.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_level = (level or get_config("logging.level", "INFO")).upper()
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_file = get_config("logging.file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


__all__ = [
    "ConfigurationError",
    "get_config",
    "get_bool_config",
    "set_config",
    "reset_config",
    "reload_config",
    "init_logger",
]

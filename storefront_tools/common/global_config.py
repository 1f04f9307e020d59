"""
================================================================================
Global Configuration for the Storefront E2E Suite
================================================================================

This module provides centralized configuration management for the suite,
including logging setup and configuration file loading.

Features:
    - YAML-based configuration loading (config/config.yaml)
    - Environment-specific overlays (config/{ENV}.yaml)
    - Environment variable overrides (SECTION__KEY)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Top-level sections that SECTION__KEY environment variables may override
CONFIG_SECTIONS = ("logging", "browser", "artifacts", "runner")


def init_logger(level: str = None, format_str: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Should be called once at process start (root conftest, runner script)
    so every page object logs through the same sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = level or get_config("logging.level", "INFO")
    log_format = format_str or get_config(
        "logging.format",
        "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    )

    logger.remove()
    logger.add(
        sys.stderr,
        level=str(log_level).upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        log_path = Path(log_file)
        if not log_path.is_absolute():
            log_path = PROJECT_ROOT / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=str(log_level).upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    global _config
    if not _config:
        _load_config()


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Default configuration file (config/config.yaml)
        2. Environment-specific configuration (config/{ENV}.yaml)
        3. Environment variables (override YAML settings)
    """
    global _config

    config_dir = PROJECT_ROOT / "config"
    default_config_path = config_dir / "config.yaml"

    if default_config_path.exists():
        with open(default_config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        _config = _deep_merge(_get_defaults(), loaded)
        logger.debug(f"Loaded configuration from {default_config_path}")
    else:
        logger.warning(f"Configuration file not found: {default_config_path}. Using defaults.")
        _config = _get_defaults()

    env = os.getenv("ENVIRONMENT", os.getenv("ENV", "demo"))
    env_config_path = config_dir / f"{env}.yaml"
    if env_config_path.exists():
        with open(env_config_path, "r", encoding="utf-8") as f:
            env_config = yaml.safe_load(f) or {}
        _config = _deep_merge(_config, env_config)
        logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _get_defaults() -> Dict[str, Any]:
    """
    Returns default configuration values.
    """
    return {
        "logging": {
            "level": "INFO",
            "format": "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        },
        "browser": {
            "type": "chromium",
            "headless": True,
            "viewport": {"width": 1440, "height": 900},
            "action_timeout": 15000,
            "navigation_timeout": 30000,
        },
        "artifacts": {
            "results_dir": "test-results",
            "evidence_dir": "test-results/evidence",
            "trace": "on-first-retry",
            "screenshot": "only-on-failure",
            "video": "retain-on-failure",
        },
        "runner": {
            "local": {"retries": 0, "workers": 1, "headless": False},
            "ci": {"retries": 2, "workers": 4, "headless": True},
        },
    }


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

    Environment variable naming convention:
        - Use double underscore to separate nested keys
        - Example: BROWSER__HEADLESS=false overrides browser.headless
        - Only the sections in CONFIG_SECTIONS are overridable
    """
    for key, value in os.environ.items():
        parts = [p.lower() for p in key.split("__")]
        if len(parts) < 2 or parts[0] not in CONFIG_SECTIONS or not all(parts):
            continue
        _set_nested(_config, parts, _coerce(value))


def _coerce(value: str) -> Any:
    lowered = value.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    try:
        return int(value)
    except ValueError:
        return value


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        if not isinstance(d.get(key), dict):
            d[key] = {}
        d = d[key]
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "browser.headless", "artifacts.evidence_dir").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("browser.viewport.width", 1280)
        1440
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def resolve_path(key: str, default: str) -> Path:
    """Return a configured path, anchored at the project root when relative."""
    path = Path(get_config(key, default))
    return path if path.is_absolute() else PROJECT_ROOT / path


__all__ = [
    "PROJECT_ROOT",
    "init_logger",
    "get_config",
    "set_config",
    "resolve_path",
]

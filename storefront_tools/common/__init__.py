"""
================================================================================
Storefront Tools Common Utilities
================================================================================

Shared configuration, environment loading, logging setup and text helpers.

Usage:
    from storefront_tools.common import get_config, init_logger, load_environment

    init_logger()
    env = load_environment()
    timeout = get_config("browser.action_timeout", 15000)

================================================================================
"""

from .env import ConfigurationError, Environment, is_ci, load_environment
from .global_config import get_config, init_logger, resolve_path
from .text import escape_regex, exact_pattern, literal_pattern

__all__ = [
    "ConfigurationError",
    "Environment",
    "escape_regex",
    "exact_pattern",
    "get_config",
    "init_logger",
    "is_ci",
    "literal_pattern",
    "load_environment",
    "resolve_path",
]

"""
Environment loader.

Resolves the storefront base URL from the process environment (optionally
seeded from a ``.env`` file at the project root) and fails fast when it is
missing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from loguru import logger

from .global_config import PROJECT_ROOT

BASE_URL_VAR = "BASE_URL"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass(frozen=True)
class Environment:
    """Resolved run environment."""

    base_url: str
    ci: bool = False


def require(name: str) -> str:
    """
    Return a required environment variable.

    Raises:
        ConfigurationError: If the variable is unset or blank.
    """
    value = os.environ.get(name, "").strip()
    if not value:
        raise ConfigurationError(f"Missing required env var: {name}")
    return value


def is_ci() -> bool:
    return os.environ.get("CI", "").strip().lower() not in ("", "0", "false", "no")


def load_environment(dotenv_path: Optional[Path] = None) -> Environment:
    """
    Load the run environment.

    Values already present in the process environment win over ``.env``.

    Args:
        dotenv_path: Optional ``.env`` location. Defaults to ``<project>/.env``.

    Returns:
        Environment with a normalised base URL (no trailing slash).

    Raises:
        ConfigurationError: If ``BASE_URL`` is missing or not an http(s) URL.
    """
    env_file = dotenv_path or PROJECT_ROOT / ".env"
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded environment file: {env_file}")

    base_url = require(BASE_URL_VAR).rstrip("/")
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"{BASE_URL_VAR} must be an absolute http(s) URL, got: {base_url!r}"
        )

    return Environment(base_url=base_url, ci=is_ci())


__all__ = [
    "BASE_URL_VAR",
    "ConfigurationError",
    "Environment",
    "is_ci",
    "load_environment",
    "require",
]

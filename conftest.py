"""
Repository-level pytest configuration.

Configures loguru from config/config.yaml before any test runs.

Secrets and the target URL are never embedded here: BASE_URL comes from the
environment or a local .env file (see .env.example).
"""

from __future__ import annotations

from storefront_tools.common import init_logger


def pytest_configure(config):
    init_logger()

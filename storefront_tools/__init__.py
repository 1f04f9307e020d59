"""
================================================================================
Storefront Tools
================================================================================

Support utilities for the storefront E2E suite.

Modules:
    - common: Configuration, environment loading, logging and text helpers
    - data_generator: Credentials and checkout fixtures
    - report_tools: Allure attachments and report processing

Example:
    from storefront_tools.common import load_environment, init_logger
    from storefront_tools.data_generator import new_credentials

    init_logger()
    env = load_environment()
    user = new_credentials()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "data_generator",
    "report_tools",
]

"""
================================================================================
Suite Pytest Configuration
================================================================================

This module provides the pytest configuration shared by all test suites.
It registers common markers and tags tests by directory.

================================================================================
"""

import pytest

from storefront_tools.common import get_config


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser tests against the live storefront"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework (no browser)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "checkout: Tests related to cart and checkout"
    )
    config.addinivalue_line(
        "markers", "auth: Tests related to sign up, login and logout"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Tags tests with 'ui' or 'unit' by the directory they live in, so the
    runner can select suites with ``-m``.
    """
    for item in items:
        path = str(item.fspath)

        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        # Auto-add 'unit' marker to tests in unit directory
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Spree Storefront E2E Suite",
        f"browser: {get_config('browser.type', 'chromium')} "
        f"(headless={get_config('browser.headless', True)})",
        "=" * 60,
        "",
    ]

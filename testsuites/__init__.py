"""
Test suites package.

Kept importable so the runner, fixtures and unit tests share one import path:
  - ui_testing: page objects, browser framework and the live storefront tests
  - unit: offline tests of the framework (no browser, no BASE_URL needed)
"""

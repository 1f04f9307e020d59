"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Fail-fast BASE_URL check before any browser is launched
- One browser per test, one isolated context per test
- Failure screenshot, URL and network/console diagnostics
- Trace (retry runs) and video (failures) retained as artifacts
- Page Object fixtures for all storefront pages

================================================================================
"""

from typing import AsyncGenerator

import allure
import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page

from storefront_tools.common import Environment, load_environment
from storefront_tools.data_generator import Credentials, new_credentials
from storefront_tools.report_tools import attach_file, attach_text
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.pages import (
    AccountPage,
    AuthPage,
    CartPage,
    CheckoutPage,
    Header,
    HomePage,
    ProductDetailPage,
    ProductsPage,
)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report as ``item.rep_<phase>`` for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _test_failed(request: pytest.FixtureRequest) -> bool:
    node = request.node
    for phase in ("setup", "call"):
        report = getattr(node, f"rep_{phase}", None)
        if report is not None and report.failed:
            return True
    return False


# ================================================================================
# Environment
# ================================================================================

@pytest.fixture(scope="session")
def environment() -> Environment:
    """
    Validated storefront environment.

    Raises ConfigurationError (test setup error) when BASE_URL is missing,
    so no browser is ever launched against an unknown target.
    """
    env = load_environment()
    logger.info(f"Storefront under test: {env.base_url} (ci={env.ci})")
    return env


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager(environment: Environment) -> AsyncGenerator[BrowserManager, None]:
    """Launch a browser for the test and close it afterwards."""
    async with BrowserManager(base_url=environment.base_url) as manager:
        yield manager


@pytest.fixture
async def context(
    request: pytest.FixtureRequest,
    browser_manager: BrowserManager,
) -> AsyncGenerator[BrowserContext, None]:
    """
    Function-scoped browser context fixture.

    Creates a new browser context for each test, providing isolation.
    Trace and video are kept only when the test failed.
    """
    context = await browser_manager.new_context()
    yield context

    failed = _test_failed(request)
    kept = await browser_manager.finalize_context(context, request.node.nodeid, failed=failed)
    for path in kept:
        attach_file(path, name=path.name)


@pytest.fixture
async def page(
    request: pytest.FixtureRequest,
    context: BrowserContext,
    environment: Environment,
) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Failed tests get a full-page screenshot, the current URL, and recent
    failed responses / console errors attached to the report.
    """
    page = await context.new_page()
    diagnostics = BasePage(page, environment.base_url)
    diagnostics.start_diagnostics()

    yield page

    if _test_failed(request):
        try:
            await diagnostics.capture_failure(request.node.name)
        except Exception as e:
            logger.warning(f"Failed to capture failure details: {e}")


# ================================================================================
# Test Data Fixtures
# ================================================================================

@pytest.fixture
def e2e_user() -> Credentials:
    """Fresh customer credentials, recorded in the report for traceability."""
    credentials = new_credentials()
    allure.dynamic.parameter("e2e_user", credentials.email)
    attach_text(credentials.email, name="e2e_user")
    return credentials


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(page: Page, environment: Environment) -> HomePage:
    return HomePage(page, environment.base_url)


@pytest.fixture
def header(page: Page, environment: Environment) -> Header:
    return Header(page, environment.base_url)


@pytest.fixture
def auth_page(page: Page, environment: Environment) -> AuthPage:
    return AuthPage(page, environment.base_url)


@pytest.fixture
def account_page(page: Page, environment: Environment) -> AccountPage:
    return AccountPage(page, environment.base_url)


@pytest.fixture
def products_page(page: Page, environment: Environment) -> ProductsPage:
    return ProductsPage(page, environment.base_url)


@pytest.fixture
def product_detail_page(page: Page, environment: Environment) -> ProductDetailPage:
    return ProductDetailPage(page, environment.base_url)


@pytest.fixture
def cart_page(page: Page, environment: Environment) -> CartPage:
    return CartPage(page, environment.base_url)


@pytest.fixture
def checkout_page(page: Page, environment: Environment) -> CheckoutPage:
    return CheckoutPage(page, environment.base_url)

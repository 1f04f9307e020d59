"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to the storefront base URL
    - Smart element resolution (lazy, frame-aware)
    - Evidence screenshots and failure diagnostics
    - URL assertions

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Union

import allure
from loguru import logger
from playwright.async_api import ConsoleMessage, Page, Response, expect

from storefront_tools.common import load_environment, resolve_path
from storefront_tools.report_tools import attach_json, attach_png, attach_text

from .smart_locator import SmartLocator
from .waits import timeout_for


UrlMatch = Union[str, Pattern[str]]

# Recent diagnostics kept per page
MAX_CAPTURED = 20


class NavigationError(Exception):
    """Raised when an action that must change the page location did not."""
    pass


def evidence_dir() -> Path:
    return resolve_path("artifacts.evidence_dir", "test-results/evidence")


class BasePage:
    """
    Base class for all page objects and components.

    Usage:
        class CartPage(BasePage):
            URL_PATH = "/cart"

            async def go_to_cart(self):
                await self.navigate()
                await self.expect_url(re.compile(r"/cart", re.I), "Should be on cart page")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Storefront base URL. Defaults to the BASE_URL environment.
        """
        self.page = page
        self._base_url = base_url.rstrip("/") if base_url else ""
        self.smart = SmartLocator(page)

        self._failed_responses: List[Dict[str, Any]] = []
        self._console_errors: List[str] = []

    @property
    def base_url(self) -> str:
        if not self._base_url:
            self._base_url = load_environment().base_url
        return self._base_url

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def start_diagnostics(self) -> None:
        """
        Record failed HTTP responses and console errors for failure reports.

        Registered once per Page by the fixtures, not per page object.
        """

        def on_response(response: Response) -> None:
            if response.status >= 400:
                self._failed_responses.append({
                    "timestamp": datetime.now().isoformat(),
                    "url": response.url,
                    "status": response.status,
                    "method": response.request.method,
                })
                if len(self._failed_responses) > MAX_CAPTURED:
                    self._failed_responses.pop(0)

        def on_console(message: ConsoleMessage) -> None:
            if message.type == "error":
                self._console_errors.append(message.text)
                if len(self._console_errors) > MAX_CAPTURED:
                    self._console_errors.pop(0)

        self.page.on("response", on_response)
        self.page.on("console", on_console)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate(self, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        await self.navigate_to(self.URL_PATH, wait_for=wait_for)

    async def navigate_to(
        self,
        path: str,
        wait_for: str = "domcontentloaded",
    ) -> None:
        """
        Navigate to a path relative to the base URL.

        Args:
            path: URL path to navigate to
            wait_for: Wait condition
        """
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url, wait_until=wait_for)
            logger.debug(f"Navigated to: {full_url}")

    async def wait_for_page_load(
        self,
        state: str = "domcontentloaded",
        timeout: int = 15000,
    ) -> None:
        await self.page.wait_for_load_state(state, timeout=timeout)

    async def expect_url(
        self,
        pattern: UrlMatch,
        description: str,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Assert the page URL matches ``pattern`` within the timeout.

        Args:
            pattern: String or compiled regex
            description: Failure message
            timeout: Timeout in milliseconds
        """
        await expect(self.page, description).to_have_url(
            pattern, timeout=timeout or timeout_for("default")
        )

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def save_evidence(self, name: str, directory: Optional[Path] = None) -> Path:
        """
        Save a full-page evidence screenshot as ``{name}.png``.

        Args:
            name: Evidence name (without extension)
            directory: Target directory. Defaults to the configured evidence dir.

        Returns:
            Path to saved screenshot
        """
        target_dir = directory or evidence_dir()
        target_dir.mkdir(parents=True, exist_ok=True)
        filepath = target_dir / f"{name}.png"

        image = await self.page.screenshot(path=str(filepath), full_page=True)
        attach_png(image, name=name)

        logger.info(f"Evidence saved: {filepath}")
        return filepath

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take a timestamped screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        shots_dir = resolve_path("artifacts.artifacts_dir", "test-results/artifacts")
        shots_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = shots_dir / f"{name}_{timestamp}.png"

        image = await self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            attach_png(image, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Full-page screenshot
            - Current URL
            - Recent failed HTTP responses
            - Recent console errors
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            attach_text(self.page.url, name="Current URL")

            if self._failed_responses:
                attach_json(self._failed_responses[-10:], name="Recent Failed Responses")
            if self._console_errors:
                attach_text("\n".join(self._console_errors[-10:]), name="Console Errors")


__all__ = [
    "BasePage",
    "NavigationError",
    "PageBase",
    "evidence_dir",
]

# Many page objects prefer PageBase naming
PageBase = BasePage

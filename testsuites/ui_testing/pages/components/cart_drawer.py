"""
================================================================================
Cart Drawer Component
================================================================================

Slide-over mini cart that opens after "Add to cart".

Synchronization:
    - open      -> overlay, drawer and title visible
    - loaded    -> line-item list visible and item count polled until > 0
    - product   -> a line item with the product title visible
    - close     -> skipped when the close control is not rendered

================================================================================
"""

from __future__ import annotations

import re

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import PollConfig, poll_until, timeout_for


class CartDrawer(PageBase):
    """Mini cart drawer component (async)."""

    # ============================================================
    # Elements
    # ============================================================

    def overlay(self) -> Locator:
        return self.smart.css("#cart-pane")

    def drawer(self) -> Locator:
        return self.smart.css("#slideover-cart")

    def title(self) -> Locator:
        return self.drawer().get_by_text(re.compile(r"^cart$", re.I))

    def line_items_list(self) -> Locator:
        return self.drawer().locator("#line-items")

    def line_items(self) -> Locator:
        return self.line_items_list().locator("li.cart-line-item")

    def line_item_by_name(self, name: str) -> Locator:
        return self.drawer().locator("#line-items a.font-semibold.text-text", has_text=name).first

    def close_button(self) -> Locator:
        return self.drawer().get_by_role("button", name=re.compile(r"close sidebar", re.I))

    # ============================================================
    # Waits
    # ============================================================

    @allure.step("Wait for cart drawer to open")
    async def wait_for_open(self) -> None:
        timeout = timeout_for("default")
        await expect(self.overlay(), "Cart drawer overlay should be visible").to_be_visible(timeout=timeout)
        await expect(self.drawer(), "Cart drawer should be visible").to_be_visible(timeout=timeout)
        await expect(self.title(), "Cart drawer title should be visible").to_be_visible(timeout=timeout)

    @allure.step("Wait for cart drawer items")
    async def wait_for_items_loaded(self) -> int:
        """
        Wait until the drawer lists at least one line item.

        Returns:
            Number of line items observed
        """
        await self.wait_for_open()
        await expect(
            self.line_items_list(), "Cart line items list should be visible"
        ).to_be_visible(timeout=timeout_for("default"))

        count = await poll_until(
            self.line_items().count,
            lambda n: n > 0,
            description="At least one cart line item should appear",
            config=PollConfig(timeout=timeout_for("default") / 1000),
        )
        logger.debug(f"Cart drawer shows {count} line item(s)")
        return count

    @allure.step("Wait for product in cart drawer: {name}")
    async def wait_for_product(self, name: str) -> None:
        await self.wait_for_items_loaded()
        await expect(
            self.line_item_by_name(name), f"Mini cart should contain product: {name}"
        ).to_be_visible(timeout=timeout_for("default"))

    @allure.step("Close cart drawer")
    async def close(self) -> bool:
        """
        Close the drawer when a close control is rendered.

        Returns:
            True if the drawer was closed, False if there was nothing to close
        """
        button = self.close_button()
        if not await self.smart.exists(button):
            logger.debug("Cart drawer has no close control; leaving it as is")
            return False

        await button.click(force=True)
        await expect(
            self.overlay(), "Cart drawer overlay should be hidden after close"
        ).to_be_hidden(timeout=timeout_for("default"))
        return True

"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================

Full cart page (/cart): line items by product name, quantity and price
checks, and the hand-off into checkout.

================================================================================
"""

from __future__ import annotations

import re

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from storefront_tools.common import literal_pattern
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import timeout_for


CHECKOUT_ADDRESS_RE = re.compile(r"/checkout/[A-Za-z0-9]+/address$", re.I)
PRICE_RE = re.compile(r"\$\d+")


class CartPage(PageBase):
    """Cart page object (async)."""

    URL_PATH = "/cart"
    PAGE_TITLE = "Cart"

    def line_items(self) -> Locator:
        return self.smart.css("#line-items li.cart-line-item")

    def line_item_titles(self) -> Locator:
        return self.smart.css("#line-items a.font-semibold.text-text")

    def line_item_by_name(self, name: str) -> Locator:
        """Line item whose product link contains ``name`` (case-insensitive, literal)."""
        return self.line_items().filter(
            has=self.page.locator("a", has_text=literal_pattern(name))
        ).first

    def checkout_button(self) -> Locator:
        return self.smart.by_role("link", re.compile(r"^checkout$", re.I)).first

    @allure.step("Open cart")
    async def go_to_cart(self) -> None:
        await self.navigate()
        await self.expect_url(re.compile(r"/cart", re.I), "Should be on cart page")

    @allure.step("Verify cart contains: {name}")
    async def assert_item_present_by_name(self, name: str) -> None:
        item = self.line_item_by_name(name)
        try:
            await expect(item, f"Cart should contain product: {name}").to_be_visible(
                timeout=timeout_for("default")
            )
        except AssertionError:
            titles = [t.strip() for t in await self.line_item_titles().all_inner_texts()]
            logger.error(f"Cart titles observed while looking for '{name}': {titles}")
            raise

    @allure.step("Verify quantity of {name} is {expected}")
    async def assert_quantity_for_product(self, name: str, expected: int) -> None:
        quantity = self.line_item_by_name(name).locator('input[aria-label="Quantity"]')
        await expect(quantity, "Quantity input should be visible").to_be_visible(timeout=timeout_for("default"))
        await expect(quantity, "Quantity should match").to_have_value(str(expected))

    @allure.step("Verify price shown for {name}")
    async def assert_price_visible_for_product(self, name: str) -> None:
        price_block = self.line_item_by_name(name).locator("div.mb-2.text-sm").first
        await expect(price_block, "Price block should be visible").to_be_visible(timeout=timeout_for("default"))
        await expect(price_block, "Price block should contain a dollar amount").to_contain_text(PRICE_RE)

    @allure.step("Proceed to checkout")
    async def proceed_to_checkout(self) -> None:
        """Click Checkout and wait for the address step URL."""
        button = self.checkout_button()
        await expect(button, "Checkout button should be visible on cart").to_be_visible(
            timeout=timeout_for("default")
        )
        await button.click()
        await self.page.wait_for_url(CHECKOUT_ADDRESS_RE, timeout=timeout_for("checkout_start"))

"""
================================================================================
Product Detail Page Object (Async / Playwright)
================================================================================

Product detail page (PDP): optional size selection and add to cart.

Some products render a "Size" option group, others do not. The size flow is
probed first and skipped entirely when the group is absent.

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from storefront_tools.common import exact_pattern
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import timeout_for
from testsuites.ui_testing.pages.components import CartDrawer


DEFAULT_SIZE_PREFERENCE = ("S", "M", "L")
PLEASE_CHOOSE = re.compile(r"please choose", re.I)


class ProductDetailPage(PageBase):
    """Product detail page object (async)."""

    # ============================================================
    # Page Elements
    # ============================================================

    def add_to_cart_button(self) -> Locator:
        return self.smart.by_role("button", re.compile(r"add to cart", re.I))

    def size_fieldset(self) -> Locator:
        return self.smart.css('fieldset[data-option-id] [role="group"][aria-label="Size"]').first

    def size_dropdown_button(self) -> Locator:
        return self.size_fieldset().locator('button[data-dropdown-target="button"]').first

    def size_dropdown_menu(self) -> Locator:
        return self.size_fieldset().locator('[data-dropdown-target="menu"][role="menu"]').first

    def size_options(self) -> Locator:
        return self.size_fieldset().locator('label[role="menuitem"]')

    # ============================================================
    # Size Selection
    # ============================================================

    async def has_size_selector(self) -> bool:
        return await self.smart.exists(self.size_fieldset())

    @allure.step("Select size if the product has one")
    async def select_size_if_present(
        self,
        preferred: Sequence[str] = DEFAULT_SIZE_PREFERENCE,
    ) -> Optional[str]:
        """
        Choose a size when the product offers one.

        Args:
            preferred: Size labels to try, in order

        Returns:
            The chosen size label, or None when the product has no size option
        """
        if not await self.has_size_selector():
            logger.debug("Product has no size option; skipping size selection")
            return None
        return await self.select_size(preferred)

    async def select_size(self, preferred: Sequence[str] = DEFAULT_SIZE_PREFERENCE) -> str:
        button = self.size_dropdown_button()
        await expect(button, "Size dropdown trigger should exist").to_have_count(1, timeout=timeout_for("default"))

        await self._open_size_menu()

        for size in preferred:
            option = await self._find_size_option(size)
            if option is not None:
                return await self._choose_size(option, size)

        logger.warning(f"None of the preferred sizes {list(preferred)} offered; using the first option")
        first = self.size_options().first
        await expect(first, "At least one size option should exist").to_be_visible(timeout=timeout_for("default"))
        label = (await first.inner_text()).strip()
        return await self._choose_size(first, label)

    async def _open_size_menu(self) -> None:
        menu = self.size_dropdown_menu()
        if not await menu.is_visible():
            button = self.size_dropdown_button()
            await button.scroll_into_view_if_needed()
            await button.click(force=True)

        await expect(menu, "Size dropdown menu should be visible").to_be_visible(timeout=timeout_for("default"))

    async def _find_size_option(self, size: str) -> Optional[Locator]:
        by_text = self.size_options().filter(has=self.page.locator("p", has_text=size)).first
        if await self.smart.exists(by_text):
            return by_text

        by_label = self.size_options().filter(has_text=exact_pattern(size)).first
        if await self.smart.exists(by_label):
            return by_label

        return None

    async def _choose_size(self, option: Locator, label: str) -> str:
        await option.click(force=True)
        await expect(
            self.size_dropdown_button(), "Size should be selected (not 'Please choose')"
        ).not_to_contain_text(PLEASE_CHOOSE, timeout=timeout_for("default"))
        logger.info(f"Selected size: {label}")
        return label

    # ============================================================
    # Cart
    # ============================================================

    @allure.step("Add to cart and wait for mini cart: {product_name}")
    async def add_to_cart_and_wait_for_mini_cart(self, product_name: str) -> None:
        await self.select_size_if_present()

        button = self.add_to_cart_button()
        timeout = timeout_for("default")
        await expect(button, "Add to cart should be visible").to_be_visible(timeout=timeout)
        await expect(button, "Add to cart should be enabled").to_be_enabled(timeout=timeout)
        await button.click()

        drawer = CartDrawer(self.page, self._base_url)
        await drawer.wait_for_product(product_name)
        await drawer.close()

"""
================================================================================
Products Page Object (Async / Playwright)
================================================================================

Product listing (/products). Opening a product captures a
`ProductSelection` snapshot that later steps compare against the cart and
the order.

================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import ElementSpec
from testsuites.ui_testing.framework.waits import timeout_for


@dataclass(frozen=True)
class ProductSelection:
    """Product name and price as displayed on its detail page."""
    name: str
    price_text: str


class ProductsPage(PageBase):
    """Product listing page object (async)."""

    URL_PATH = "/products"
    PAGE_TITLE = "All Products"

    PRODUCT_PRICE = ElementSpec(
        "Product price",
        css='[data-hook="product-price"]',
        first=True,
        fallbacks=(
            ElementSpec("Product price (.price)", css=".price"),
            ElementSpec("Product price (class*=price)", css='[class*="price"]'),
        ),
    )

    def product_links(self) -> Locator:
        """All product detail links in the listing."""
        return self.smart.css('a[href*="/products/"]')

    def product_title(self) -> Locator:
        return self.smart.by_role("heading").first

    def product_price(self) -> Locator:
        return self.smart.resolve(self.PRODUCT_PRICE)

    @allure.step("Open all products")
    async def go_to_all_products(self) -> None:
        await self.navigate()
        await self.expect_url(re.compile(r"/products", re.I), "Should be on products listing")

    @allure.step("Open first listed product")
    async def open_first_product(self) -> ProductSelection:
        """
        Open the first product of the listing.

        Returns:
            ProductSelection read from the product detail page
        """
        timeout = timeout_for("default")
        first = self.product_links().first
        await expect(first, "At least one product should be listed").to_be_visible(timeout=timeout)
        await first.click()

        await self.expect_url(re.compile(r"/products/", re.I), "Should open product detail page")

        name = self.product_title()
        await expect(name, "Product name should be visible").to_be_visible(timeout=timeout)

        price = self.product_price()
        await expect(price, "Product price should be visible").to_be_visible(timeout=timeout)

        selection = ProductSelection(
            name=(await name.inner_text()).strip(),
            price_text=(await price.inner_text()).strip(),
        )
        logger.info(f"Picked product: {selection.name} ({selection.price_text})")
        return selection

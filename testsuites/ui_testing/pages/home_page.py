"""Storefront home page."""

from __future__ import annotations

import re
from urllib.parse import urlparse

import allure
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import timeout_for
from storefront_tools.common import escape_regex


class HomePage(PageBase):
    """Home page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Home"

    def header(self) -> Locator:
        return self.smart.css("header")

    def shop_all_link(self) -> Locator:
        return self.header().get_by_role("link", name=re.compile(r"shop all", re.I))

    @allure.step("Open storefront")
    async def open(self) -> "HomePage":
        await self.navigate()
        host = re.compile(escape_regex(urlparse(self.base_url).netloc), re.I)
        await self.expect_url(host, "Should be on the storefront configured by BASE_URL")
        return self

    @allure.step("Verify home page loaded")
    async def assert_loaded(self) -> None:
        await expect(self.header(), "Header should be visible").to_be_visible(timeout=timeout_for("default"))
        await expect(self.shop_all_link(), "Shop All link should be visible").to_be_visible()

"""
================================================================================
Account Page Object (Async / Playwright)
================================================================================

"My Account" area. Signed-in customers land on /account/orders; the page
carries the sign-out form button.

================================================================================
"""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import timeout_for
from testsuites.ui_testing.pages.auth_page import SIGNED_OUT_NOTICE
from testsuites.ui_testing.pages.components import FlashBanner


ACCOUNT_PATH_RE = re.compile(r"/account(/|$)", re.I)


class AccountPage(PageBase):
    """Account page object (async)."""

    URL_PATH = "/account"
    PAGE_TITLE = "My Account"

    def logout_button(self) -> Locator:
        return self.smart.css(
            'form.button_to[action="/user/sign_out"] >> button[type="submit"]',
            has_text="Log out",
        )

    @allure.step("Logout from account page")
    async def logout_and_assert(self) -> None:
        await self.expect_url(ACCOUNT_PATH_RE, "Precondition: should be on account page before logout")
        await self.expect_url(
            re.compile(r"/account/orders", re.I),
            "Precondition: should be on /account/orders before logout",
        )

        logout = self.logout_button()
        await expect(logout, "Log out button should be visible").to_be_visible(timeout=timeout_for("default"))
        await logout.scroll_into_view_if_needed()

        await logout.click(force=True)
        await self.wait_for_page_load("domcontentloaded")

        await FlashBanner(self.page, self._base_url).expect_notice(SIGNED_OUT_NOTICE)

        await expect(
            self.page, "Postcondition: should leave /account after logout"
        ).not_to_have_url(ACCOUNT_PATH_RE, timeout=timeout_for("default"))

"""
Site header with the account trigger.

The same trigger opens the login side panel for guests and navigates to
/account for signed-in customers. The caller knows the session state and
picks the matching flow.
"""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import SmartLocator
from testsuites.ui_testing.framework.waits import timeout_for


LOGIN_FRAME_SELECTOR = "turbo-frame#login"


class Header(PageBase):
    """Storefront header component (async)."""

    def account_trigger(self) -> Locator:
        return self.smart.by_label("Open account panel").first

    @property
    def login_frame(self) -> SmartLocator:
        return self.smart.within(LOGIN_FRAME_SELECTOR, name="login panel")

    async def _click_account_trigger(self) -> None:
        trigger = self.account_trigger()
        await expect(trigger, "Account trigger should be visible").to_be_visible(
            timeout=timeout_for("default")
        )
        await trigger.scroll_into_view_if_needed()
        # Trial click waits for actionability without firing the handler
        await trigger.click(trial=True)
        await trigger.click()

    @allure.step("Open account panel (guest) and expect login form")
    async def open_account_panel_expect_login(self) -> None:
        await self._click_account_trigger()

        frame = self.login_frame
        timeout = timeout_for("default")
        await expect(
            frame.by_role("heading", re.compile(r"login", re.I)),
            "Login heading should be visible in the account panel",
        ).to_be_visible(timeout=timeout)
        await expect(frame.by_label(re.compile(r"email", re.I)), "Email should be visible").to_be_visible(
            timeout=timeout
        )
        await expect(
            frame.by_label(re.compile(r"^password$", re.I)), "Password should be visible"
        ).to_be_visible(timeout=timeout)

    @allure.step("Open account page (signed in) and expect My Account")
    async def open_account_page_expect_account(self) -> None:
        await self._click_account_trigger()

        await self.expect_url(re.compile(r"/account", re.I), "Should navigate to /account")
        await expect(
            self.smart.by_role("heading", re.compile(r"my account", re.I)),
            "My Account heading should be visible",
        ).to_be_visible(timeout=timeout_for("default"))

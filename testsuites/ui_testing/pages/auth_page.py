"""
================================================================================
Auth Page Object (Async / Playwright)
================================================================================

Login and sign-up forms rendered inside the account side panel
(`turbo-frame#login`), plus the header logout link.

Flash notices confirm every server-side action:
    - sign up  -> "Welcome! You have signed up successfully."
    - login    -> "Signed in successfully."
    - logout   -> "Signed out successfully."

================================================================================
"""

from __future__ import annotations

import re

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from storefront_tools.data_generator import Credentials
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import ElementSpec, SmartLocator
from testsuites.ui_testing.framework.waits import timeout_for
from testsuites.ui_testing.pages.components import FlashBanner, LOGIN_FRAME_SELECTOR


SIGNED_UP_NOTICE = re.compile(r"welcome! you have signed up successfully\.", re.I)
SIGNED_IN_NOTICE = re.compile(r"signed in successfully\.", re.I)
SIGNED_OUT_NOTICE = re.compile(r"signed out successfully\.", re.I)


class AuthPage(PageBase):
    """Account panel login / sign-up page object (async)."""

    PAGE_TITLE = "Login"

    # ============================================================
    # Element Specs (scoped to the login frame)
    # ============================================================

    EMAIL = ElementSpec("Email", label=re.compile(r"email", re.I))
    PASSWORD = ElementSpec("Password", label=re.compile(r"^password$", re.I))
    REMEMBER_ME = ElementSpec("Remember me", label=re.compile(r"remember me", re.I))
    LOGIN_BUTTON = ElementSpec("Login button", role="button", role_name=re.compile(r"^login$", re.I))
    SIGN_UP_LINK = ElementSpec("Sign Up link", role="link", role_name=re.compile(r"sign up", re.I))
    FORGOT_PASSWORD_LINK = ElementSpec(
        "Forgot password link", role="link", role_name=re.compile(r"forgot password", re.I)
    )

    SIGN_UP_HEADING = ElementSpec("Sign Up heading", role="heading", role_name=re.compile(r"^sign up$", re.I))
    SIGN_UP_EMAIL = ElementSpec("Sign Up email", label=re.compile(r"^email$", re.I))
    SIGN_UP_PASSWORD_CONFIRMATION = ElementSpec(
        "Password confirmation", label=re.compile(r"^password confirmation$", re.I)
    )
    SIGN_UP_BUTTON = ElementSpec("Sign Up button", role="button", role_name=re.compile(r"^sign up$", re.I))

    # Page-level (outside the frame)
    LOGOUT_LINK = ElementSpec(
        "Log out link", role="link", role_name=re.compile(r"log out|logout", re.I), first=True
    )
    EXACT_LOGOUT_LINK = ElementSpec(
        "Log out link", role="link", role_name=re.compile(r"^log out$", re.I), first=True
    )

    @property
    def login_frame(self) -> SmartLocator:
        return self.smart.within(LOGIN_FRAME_SELECTOR, name="login panel")

    @property
    def flash(self) -> FlashBanner:
        return FlashBanner(self.page, self._base_url)

    # ============================================================
    # Locators
    # ============================================================

    def email(self) -> Locator:
        return self.login_frame.resolve(self.EMAIL)

    def password(self) -> Locator:
        return self.login_frame.resolve(self.PASSWORD)

    def remember_me_checkbox(self) -> Locator:
        return self.login_frame.resolve(self.REMEMBER_ME)

    def login_button(self) -> Locator:
        return self.login_frame.resolve(self.LOGIN_BUTTON)

    def sign_up_link(self) -> Locator:
        return self.login_frame.resolve(self.SIGN_UP_LINK)

    def forgot_password_link(self) -> Locator:
        return self.login_frame.resolve(self.FORGOT_PASSWORD_LINK)

    def logout_link(self) -> Locator:
        return self.smart.resolve(self.LOGOUT_LINK)

    # ============================================================
    # Assertions
    # ============================================================

    @allure.step("Verify login form is ready")
    async def assert_login_form_ready(self) -> None:
        timeout = timeout_for("default")
        await expect(self.email(), "Email field should be visible").to_be_visible(timeout=timeout)
        await expect(self.password(), "Password field should be visible").to_be_visible(timeout=timeout)

        await expect(self.remember_me_checkbox(), "Remember me checkbox should be visible").to_be_visible()
        await expect(self.login_button(), "Login button should be visible").to_be_visible()
        await expect(self.login_button(), "Login button should be enabled").to_be_enabled()

        await expect(self.sign_up_link(), "Sign Up link should be visible").to_be_visible()
        await expect(self.forgot_password_link(), "Forgot password link should be visible").to_be_visible()

    @allure.step("Verify customer is logged in")
    async def assert_logged_in(self) -> None:
        await expect(
            self.logout_link(), "Logout should be visible for authenticated user"
        ).to_be_visible(timeout=timeout_for("default"))

    @allure.step("Verify sign up succeeded")
    async def assert_sign_up_success(self) -> None:
        # Sign up redirects home and shows a notice
        await self.flash.expect_notice(SIGNED_UP_NOTICE)

    # ============================================================
    # Actions
    # ============================================================

    @allure.step("Switch account panel to Sign Up")
    async def go_to_sign_up_from_panel(self) -> None:
        await self.assert_login_form_ready()
        await self.sign_up_link().click()

        frame = self.login_frame
        timeout = timeout_for("default")
        await expect(
            frame.resolve(self.SIGN_UP_HEADING), "Sign Up heading should appear in account panel"
        ).to_be_visible(timeout=timeout)
        await expect(frame.resolve(self.SIGN_UP_EMAIL), "Sign Up email should be visible").to_be_visible(
            timeout=timeout
        )
        await expect(frame.resolve(self.PASSWORD), "Sign Up password should be visible").to_be_visible(
            timeout=timeout
        )
        await expect(
            frame.resolve(self.SIGN_UP_PASSWORD_CONFIRMATION),
            "Sign Up password confirmation should be visible",
        ).to_be_visible(timeout=timeout)
        await expect(
            frame.resolve(self.SIGN_UP_BUTTON), "Sign Up submit button should be visible"
        ).to_be_visible(timeout=timeout)

    @allure.step("Sign up as {email}")
    async def sign_up(self, email: str, password: str) -> None:
        """Fill and submit the sign-up form (call `go_to_sign_up_from_panel` first)."""
        frame = self.login_frame
        await expect(
            frame.resolve(self.SIGN_UP_HEADING), "Sign Up form should be open"
        ).to_be_visible(timeout=timeout_for("default"))

        await frame.resolve(self.SIGN_UP_EMAIL).fill(email)
        await frame.resolve(self.PASSWORD).fill(password)
        await frame.resolve(self.SIGN_UP_PASSWORD_CONFIRMATION).fill(password)
        await frame.resolve(self.SIGN_UP_BUTTON).click()
        logger.info(f"Submitted sign up for {email}")

    async def sign_up_and_assert_success(self, email: str, password: str) -> None:
        await self.sign_up(email, password)
        await self.assert_sign_up_success()

    @allure.step("Login as {email}")
    async def login(self, email: str, password: str) -> None:
        await self.assert_login_form_ready()
        await self.email().fill(email)
        await self.password().fill(password)
        await self.login_button().click()

        await self.flash.expect_notice(SIGNED_IN_NOTICE)
        logger.info(f"Logged in as {email}")

    async def login_with(self, credentials: Credentials) -> None:
        await self.login(credentials.email, credentials.password)

    @allure.step("Logout from header")
    async def logout_and_assert(self) -> None:
        link = self.logout_link()
        await expect(link, "Log out link should be visible").to_be_visible(timeout=timeout_for("default"))
        await link.click()

        await self.flash.expect_notice(SIGNED_OUT_NOTICE)

    @allure.step("Logout if a session is active")
    async def logout_if_needed(self) -> bool:
        """
        Log out when a "Log out" link is rendered; otherwise do nothing.

        Returns:
            True if a logout was performed
        """
        link = self.smart.resolve(self.EXACT_LOGOUT_LINK)
        if not await self.smart.exists(link):
            logger.debug("No active session; skipping logout")
            return False

        await expect(link, "Log out link should be visible").to_be_visible(timeout=timeout_for("default"))
        await link.scroll_into_view_if_needed()
        await link.click(force=True)

        await self.flash.expect_notice(SIGNED_OUT_NOTICE)
        return True

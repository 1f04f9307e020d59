"""Flash message banner shown after sign up, login and logout."""

from __future__ import annotations

from typing import Pattern, Union

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.waits import timeout_for


class FlashBanner(PageBase):
    """Server-side flash notices (`.alert-notice`)."""

    NOTICE_SELECTOR = ".alert-notice .flash-message"

    def notice_message(self) -> Locator:
        return self.smart.css(self.NOTICE_SELECTOR)

    @allure.step("Expect notice: {text}")
    async def expect_notice(self, text: Union[str, Pattern[str]]) -> None:
        """
        Wait for the notice banner and assert its text.

        Args:
            text: Exact text or regex the notice must match
        """
        message = self.notice_message()
        await expect(message, "Notice flash message should be visible").to_be_visible(
            timeout=timeout_for("default")
        )
        await expect(message, "Notice flash message text mismatch").to_have_text(text)
        logger.info(f"Flash notice shown: {getattr(text, 'pattern', text)}")

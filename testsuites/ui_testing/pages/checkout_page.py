"""
================================================================================
Checkout Page Object (Async / Playwright)
================================================================================

Checkout wizard: Address -> Delivery -> Payment -> Complete (forward only).

Every transition blocks on an observable condition (next step heading or
the completion URL) instead of elapsed time.

Conditional UI handled by explicit probes:
    - State input: <select> for countries with states, free text otherwise
    - Shipping method: radio inside the method label, or a clickable card
    - Payment iframe: a hidden duplicate may be present (aria-hidden="true")

================================================================================
"""

from __future__ import annotations

import asyncio
import re
from enum import Enum
from typing import Literal

import allure
from loguru import logger
from playwright.async_api import Locator, expect

from storefront_tools.common import escape_regex
from storefront_tools.data_generator import CardDetails, ShippingAddress
from storefront_tools.report_tools import attach_json
from testsuites.ui_testing.framework.page_base import NavigationError, PageBase
from testsuites.ui_testing.framework.smart_locator import ElementSpec
from testsuites.ui_testing.framework.waits import timeout_for


CHECKOUT_PATH_RE = re.compile(r"/checkout/[A-Za-z0-9]+", re.I)
CHECKOUT_COMPLETE_RE = re.compile(r"/checkout/[A-Za-z0-9]+/complete$", re.I)
ORDER_NUMBER_RE = re.compile(r"order\s+r\d+", re.I)

PAYMENT_IFRAME = 'iframe[title="Secure payment input frame"]'
VISIBLE_PAYMENT_IFRAME = f'{PAYMENT_IFRAME}:not([aria-hidden="true"])'

SHIPPING_RATE_RADIO = (
    'input[type="radio"][name^="order[shipments_attributes]"][name$="[selected_shipping_rate_id]"]'
)

ShippingMethod = Literal["test Shipping", "Standard", "Premium", "Next Day"]

# Shipping methods and prices offered by the demo store
EXPECTED_SHIPPING_METHODS = ("test shipping", "standard", "premium", "next day")
EXPECTED_SHIPPING_PRICES = ("$5.00", "$10.00", "$15.00")


class StateInputKind(Enum):
    """How the address form renders the state field."""
    SELECT = "select"
    TEXT = "text"


class CheckoutPage(PageBase):
    """Checkout page object (async)."""

    PAGE_TITLE = "Checkout"

    # ============================================================
    # Address Step Elements
    # ============================================================

    COUNTRY = ElementSpec(
        "Country",
        label=re.compile(r"^country$", re.I),
        fallbacks=(ElementSpec("Country (id)", css="#order_ship_address_attributes_country_id"),),
        first=True,
    )
    FIRST_NAME = ElementSpec(
        "First name",
        label=re.compile(r"^first name$", re.I),
        fallbacks=(ElementSpec("First name (id)", css="#order_ship_address_attributes_firstname"),),
        first=True,
    )
    LAST_NAME = ElementSpec(
        "Last name",
        label=re.compile(r"^last name$", re.I),
        fallbacks=(ElementSpec("Last name (id)", css="#order_ship_address_attributes_lastname"),),
        first=True,
    )
    ADDRESS1 = ElementSpec("Street and house number", label=re.compile(r"street and house number", re.I))
    ADDRESS2 = ElementSpec("Apartment, suite", label=re.compile(r"apartment, suite", re.I))
    CITY = ElementSpec("City", label=re.compile(r"^city$", re.I))
    ZIP = ElementSpec("Postal code", label=re.compile(r"postal code", re.I))
    PHONE = ElementSpec("Phone", label=re.compile(r"^phone", re.I))

    def address_heading(self) -> Locator:
        return self.smart.by_role("heading", re.compile(r"address", re.I))

    def country_select(self) -> Locator:
        return self.smart.resolve(self.COUNTRY)

    def first_name(self) -> Locator:
        return self.smart.resolve(self.FIRST_NAME)

    def last_name(self) -> Locator:
        return self.smart.resolve(self.LAST_NAME)

    def address1(self) -> Locator:
        return self.smart.resolve(self.ADDRESS1)

    def address2(self) -> Locator:
        return self.smart.resolve(self.ADDRESS2)

    def city(self) -> Locator:
        return self.smart.resolve(self.CITY)

    def state_select(self) -> Locator:
        return self.smart.css("#order_ship_address_attributes_state_id")

    def state_text(self) -> Locator:
        return self.smart.css("#order_ship_address_attributes_state_name")

    def zip(self) -> Locator:
        return self.smart.resolve(self.ZIP)

    def phone(self) -> Locator:
        return self.smart.resolve(self.PHONE)

    def save_and_continue(self) -> Locator:
        return self.smart.by_role("button", re.compile(r"save and continue", re.I))

    # ============================================================
    # Step Navigation
    # ============================================================

    @allure.step("Verify checkout started")
    async def assert_on_checkout(self) -> None:
        await self.expect_url(CHECKOUT_PATH_RE, "Should be on checkout page")
        await expect(self.address_heading(), "Address step heading should be visible").to_be_visible(
            timeout=timeout_for("default")
        )

    async def _submit_step(self, next_heading: Locator, description: str, timeout: int) -> None:
        button = self.save_and_continue()
        await expect(button, "Save and Continue should be visible").to_be_visible(timeout=timeout_for("default"))
        await expect(button, "Save and Continue should be enabled").to_be_enabled(timeout=timeout_for("default"))

        await button.click()
        await self.wait_for_page_load("domcontentloaded")

        await expect(next_heading, description).to_be_visible(timeout=timeout)

    # ============================================================
    # Address Step
    # ============================================================

    async def state_input_kind(self) -> StateInputKind:
        """Probe which state control the selected country rendered."""
        if await self.smart.is_visible(self.state_select()):
            return StateInputKind.SELECT
        return StateInputKind.TEXT

    async def _select_state(self, state: str) -> None:
        await self.state_select().select_option(label=state)

    async def _fill_state_text(self, state: str) -> None:
        state_text = self.state_text()
        await expect(
            state_text, "State textbox should be visible when dropdown isn't"
        ).to_be_visible(timeout=timeout_for("default"))
        await state_text.fill(state)

    async def fill_state(self, state: str) -> StateInputKind:
        kind = await self.state_input_kind()
        logger.debug(f"State input rendered as {kind.value}")
        if kind is StateInputKind.SELECT:
            await self._select_state(state)
        else:
            await self._fill_state_text(state)
        return kind

    @allure.step("Fill shipping address")
    async def fill_shipping_address(self, address: ShippingAddress) -> None:
        await expect(self.address_heading(), "Address step heading should be visible").to_be_visible(
            timeout=timeout_for("default")
        )

        if address.country:
            await self.country_select().select_option(label=address.country)

        await self.first_name().fill(address.first_name)
        await self.last_name().fill(address.last_name)
        await self.address1().fill(address.address1)
        if address.address2:
            await self.address2().fill(address.address2)
        await self.city().fill(address.city)

        await self.fill_state(address.state)

        await self.zip().fill(address.zip)
        if address.phone:
            await self.phone().fill(address.phone)

        logger.info(f"Shipping address filled for {address.first_name} {address.last_name}")
        attach_json(address.to_dict(), name="Shipping address")

    @allure.step("Continue to delivery")
    async def continue_to_delivery(self) -> None:
        await self._submit_step(self.delivery_heading(), "Should reach Delivery step", timeout_for("default"))

    # ============================================================
    # Delivery Step
    # ============================================================

    def delivery_heading(self) -> Locator:
        return self.smart.by_role("heading", re.compile(r"delivery", re.I))

    def checked_shipping_rate_radios(self) -> Locator:
        return self.smart.css(f"{SHIPPING_RATE_RADIO}:checked")

    def shipping_method_card_by_label(self, label: str) -> Locator:
        return self.smart.css("label").filter(has_text=re.compile(escape_regex(label), re.I)).first

    @allure.step("Verify delivery options and prices")
    async def assert_delivery_options_and_prices(self) -> None:
        delivery_box = self.smart.by_text("Delivery method").first.locator("..").locator("..")
        await expect(delivery_box, "Delivery methods section should be visible").to_be_visible(
            timeout=timeout_for("default")
        )

        for method in EXPECTED_SHIPPING_METHODS:
            await expect(
                self.smart.by_text(re.compile(escape_regex(method), re.I)).first,
                f"Shipping method '{method}' should be listed",
            ).to_be_visible()

        await expect(
            self.smart.by_text(re.compile(r"^free$", re.I)).first, "Should show a Free option"
        ).to_be_visible()
        for price in EXPECTED_SHIPPING_PRICES:
            await expect(
                self.smart.by_text(re.compile(escape_regex(price))).first,
                f"Should show {price} option",
            ).to_be_visible()

    async def _check_radio(self, radio: Locator, label: str) -> None:
        await radio.check(force=True)
        await expect(radio, f'Shipping radio for "{label}" should be checked').to_be_checked(
            timeout=timeout_for("radio_checked")
        )
        await self._expect_single_rate_checked(label)

    async def _click_container(self, row: Locator, label: str) -> None:
        await row.click()
        await self._expect_single_rate_checked(label)

    async def _expect_single_rate_checked(self, label: str) -> None:
        await expect(
            self.checked_shipping_rate_radios(),
            f'Exactly one shipping rate radio should be checked after selecting "{label}"',
        ).to_have_count(1, timeout=timeout_for("radio_checked"))

    @allure.step("Select shipping method: {label}")
    async def select_shipping_method(self, label: ShippingMethod = "test Shipping") -> None:
        await expect(self.delivery_heading(), "Delivery step heading should be visible").to_be_visible(
            timeout=timeout_for("default")
        )

        row = self.shipping_method_card_by_label(label)
        await expect(row, f'Shipping method "{label}" should be visible').to_be_visible(
            timeout=timeout_for("default")
        )

        radio = row.locator('input[type="radio"]').first
        if await self.smart.exists(radio):
            await self._check_radio(radio, label)
        else:
            logger.debug(f'No radio inside "{label}" card; clicking the card instead')
            await self._click_container(row, label)

    @allure.step("Continue to payment")
    async def continue_to_payment(self) -> None:
        await self._submit_step(self.payment_heading(), "Should reach Payment step", timeout_for("payment"))

    # ============================================================
    # Payment Step
    # ============================================================

    def payment_heading(self) -> Locator:
        return self.smart.by_role("heading", re.compile(r"payment", re.I))

    def payment_iframes(self) -> Locator:
        return self.smart.css(VISIBLE_PAYMENT_IFRAME)

    def payment_method_card_tab(self) -> Locator:
        return self.smart.frame(VISIBLE_PAYMENT_IFRAME, name="payment").by_role("tab", re.compile(r"^card$", re.I))

    def card_number(self) -> Locator:
        return self.smart.frame(VISIBLE_PAYMENT_IFRAME, name="payment").by_label(re.compile(r"card number", re.I))

    def expiry(self) -> Locator:
        return self.smart.frame(VISIBLE_PAYMENT_IFRAME, name="payment").by_label(re.compile(r"expiration", re.I))

    def cvc(self) -> Locator:
        return self.smart.frame(VISIBLE_PAYMENT_IFRAME, name="payment").by_label(re.compile(r"security code", re.I))

    def pay_now(self) -> Locator:
        return self.smart.by_role("button", re.compile(r"pay now", re.I))

    @allure.step("Select card payment")
    async def select_payment_method_card(self) -> None:
        timeout = timeout_for("payment")
        await expect(self.payment_heading(), "Payment step heading should be visible").to_be_visible(
            timeout=timeout
        )

        iframe = self.payment_iframes()
        await expect(iframe, "Payment iframe should be present (non-hidden)").to_have_count(1, timeout=timeout)
        await expect(iframe.first, "Payment iframe should be visible").to_be_visible(timeout=timeout)

        card_tab = self.payment_method_card_tab()
        await expect(card_tab, "Card payment tab should be visible").to_be_visible(timeout=timeout)
        await card_tab.click()

        await expect(self.card_number(), "Card number should be visible").to_be_visible(timeout=timeout)
        await expect(self.expiry(), "Expiration should be visible").to_be_visible(timeout=timeout)
        await expect(self.cvc(), "CVC should be visible").to_be_visible(timeout=timeout)

    @allure.step("Enter card details")
    async def enter_card(self, details: CardDetails) -> None:
        await self.card_number().fill(details.number)
        await self.expiry().fill(details.normalized_expiry)
        await self.cvc().fill(details.cvc)

        await expect(
            self.card_number(), f"Card number should end with {details.last4}"
        ).to_have_value(re.compile(rf"{details.last4}\s*$"))

    @allure.step("Pay and confirm order")
    async def pay_and_confirm_order(self) -> None:
        """
        Submit payment and wait for the completion page.

        Raises:
            NavigationError: If clicking "Pay now" left the URL unchanged
        """
        pay = self.pay_now()
        timeout = timeout_for("payment")
        await expect(pay, "Pay now button should be visible").to_be_visible(timeout=timeout)
        await expect(pay, "Pay now button should be enabled").to_be_enabled(timeout=timeout)
        await pay.scroll_into_view_if_needed()

        before_url = self.page.url
        await asyncio.gather(
            self.page.wait_for_url(
                CHECKOUT_COMPLETE_RE,
                timeout=timeout_for("order_complete"),
                wait_until="domcontentloaded",
            ),
            pay.click(),
        )

        after_url = self.page.url
        if after_url == before_url:
            raise NavigationError(f"Pay now click did not navigate. URL stayed: {after_url}")
        logger.info(f"Payment submitted, now at {after_url}")

        await self.assert_order_confirmation()

    # ============================================================
    # Confirmation
    # ============================================================

    def order_number(self) -> Locator:
        return self.smart.by_text(ORDER_NUMBER_RE)

    def success_message(self) -> Locator:
        return self.smart.by_text(re.compile(r"your order is confirmed", re.I))

    @allure.step("Verify order confirmation")
    async def assert_order_confirmation(self) -> str:
        """
        Assert the completion page shows an order number and success message.

        Returns:
            The displayed order number text
        """
        await self.expect_url(
            CHECKOUT_COMPLETE_RE, "Should be on checkout complete page", timeout=timeout_for("order_complete")
        )

        order_number = self.order_number()
        await expect(order_number, "Order number should be visible").to_be_visible(
            timeout=timeout_for("confirmation")
        )
        await expect(self.success_message(), "Success message should be visible").to_be_visible(
            timeout=timeout_for("confirmation")
        )

        text = (await order_number.first.inner_text()).strip()
        logger.info(f"Order confirmed: {text}")
        return text

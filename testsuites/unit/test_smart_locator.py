import re
from unittest.mock import AsyncMock, MagicMock

import pytest

from testsuites.ui_testing.framework import ElementNotFoundError, ElementSpec, SmartLocator


EMAIL = ElementSpec("Email", label=re.compile(r"email", re.I))


def test_resolve_is_lazy_and_uses_the_declared_strategy():
    page = MagicMock()
    locator = SmartLocator(page).resolve(EMAIL)

    page.get_by_label.assert_called_once_with(EMAIL.label, exact=False)
    assert locator is page.get_by_label.return_value
    # Building a locator never queries the DOM
    page.get_by_label.return_value.count.assert_not_called()


def test_role_spec_without_name():
    page = MagicMock()
    SmartLocator(page).resolve(ElementSpec("Heading", role="heading"))
    page.get_by_role.assert_called_once_with("heading")


def test_fallbacks_are_merged_with_or_and_first_applied():
    page = MagicMock()
    spec = ElementSpec(
        "Product price",
        css='[data-hook="product-price"]',
        first=True,
        fallbacks=(ElementSpec("price class", css=".price"),),
    )

    locator = SmartLocator(page).resolve(spec)

    primary = page.locator.return_value
    primary.or_.assert_called_once_with(primary)
    assert locator is primary.or_.return_value.first


def test_spec_without_strategy_raises():
    with pytest.raises(ElementNotFoundError, match="Broken"):
        SmartLocator(MagicMock()).resolve(ElementSpec("Broken"))


def test_within_and_frame_scope_queries():
    page = MagicMock()
    smart = SmartLocator(page)

    panel = smart.within("turbo-frame#login", name="login panel")
    panel.resolve(EMAIL)
    page.locator.assert_called_once_with("turbo-frame#login")
    page.locator.return_value.get_by_label.assert_called_once()
    assert panel.scope_name == "login panel"

    payment = smart.frame('iframe[title="Secure payment input frame"]')
    payment.by_role("tab", "Card")
    page.frame_locator.return_value.get_by_role.assert_called_once_with("tab", name="Card", exact=False)


def test_css_with_has_text():
    page = MagicMock()
    SmartLocator(page).css("form button", has_text="Log out")
    page.locator.assert_called_once_with("form button", has_text="Log out")


async def test_presence_probes():
    present = MagicMock()
    present.count = AsyncMock(return_value=2)
    absent = MagicMock()
    absent.count = AsyncMock(return_value=0)

    assert await SmartLocator.exists(present) is True
    assert await SmartLocator.exists(absent) is False

    hidden = MagicMock()
    hidden.first.is_visible = AsyncMock(return_value=False)
    assert await SmartLocator.is_visible(hidden) is False

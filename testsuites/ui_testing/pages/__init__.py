"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the storefront pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .components import CartDrawer, FlashBanner, Header
from .home_page import HomePage
from .auth_page import AuthPage
from .account_page import AccountPage
from .products_page import ProductSelection, ProductsPage
from .product_detail_page import ProductDetailPage
from .cart_page import CartPage
from .checkout_page import CheckoutPage, StateInputKind

__all__ = [
    "AccountPage",
    "AuthPage",
    "CartDrawer",
    "CartPage",
    "CheckoutPage",
    "FlashBanner",
    "Header",
    "HomePage",
    "ProductDetailPage",
    "ProductSelection",
    "ProductsPage",
    "StateInputKind",
]

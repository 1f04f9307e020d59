"""Reusable UI fragments shared by several pages."""

from .cart_drawer import CartDrawer
from .flash_banner import FlashBanner
from .header import Header, LOGIN_FRAME_SELECTOR

__all__ = [
    "CartDrawer",
    "FlashBanner",
    "Header",
    "LOGIN_FRAME_SELECTOR",
]

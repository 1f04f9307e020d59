"""
================================================================================
Storefront Test Data Generator
================================================================================

Produces the input values consumed by the checkout journey:

- Unique customer credentials (one registration + login pair per run)
- Fixed demo shipping address
- Fixed test card details accepted by the demo payment provider

Emails combine a millisecond timestamp (base36), a uuid4-derived suffix and,
under pytest-xdist, the worker id, so parallel runs never share an account.

================================================================================
"""

from __future__ import annotations

import os
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from loguru import logger


DEFAULT_PASSWORD = "P@ssw0rd123!"
DEFAULT_EMAIL_PREFIX = "spree"
EMAIL_DOMAIN = "example.com"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


# ================================================================================
# Value Objects
# ================================================================================

@dataclass(frozen=True)
class Credentials:
    """Customer account credentials."""
    email: str
    password: str


@dataclass(frozen=True)
class ShippingAddress:
    """
    Shipping address as entered on the checkout address step.

    Attributes:
        first_name: Given name
        last_name: Family name
        address1: Street and house number
        city: City
        state: State/region name (dropdown label or free text)
        zip: Postal code
        address2: Apartment, suite, etc.
        phone: Contact phone
        country: Country dropdown label
    """
    first_name: str
    last_name: str
    address1: str
    city: str
    state: str
    zip: str
    address2: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CardDetails:
    """Payment card details."""
    number: str
    expiry: str
    cvc: str

    @property
    def normalized_expiry(self) -> str:
        """Expiry with whitespace runs collapsed (``"12  / 26"`` -> ``"12 / 26"``)."""
        return " ".join(self.expiry.split())

    @property
    def last4(self) -> str:
        digits = "".join(ch for ch in self.number if ch.isdigit())
        return digits[-4:]


# ================================================================================
# Generators
# ================================================================================

def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def default_password() -> str:
    return DEFAULT_PASSWORD


def unique_email(prefix: str = DEFAULT_EMAIL_PREFIX) -> str:
    """
    Generate a unique email for each test run.

    Args:
        prefix: Local-part prefix

    Returns:
        Lower-cased address, e.g. ``spree.lx3k9a1b.4f9c2e1a.gw0@example.com``
    """
    timestamp = _to_base36(int(time.time() * 1000))
    random_part = uuid.uuid4().hex[:8]
    parts = [prefix, timestamp, random_part]

    worker = os.environ.get("PYTEST_XDIST_WORKER")
    if worker:
        parts.append(worker)

    return f"{'.'.join(parts)}@{EMAIL_DOMAIN}".lower()


def new_credentials(prefix: str = DEFAULT_EMAIL_PREFIX) -> Credentials:
    """Create a fresh credential pair for one registration + login round trip."""
    credentials = Credentials(email=unique_email(prefix), password=default_password())
    logger.info(f"Generated e2e user: {credentials.email}")
    return credentials


def demo_shipping_address() -> ShippingAddress:
    """Spree demo-friendly shipping address."""
    return ShippingAddress(
        country="United States",
        first_name="Bruce",
        last_name="Wayne",
        address1="1-23 Main Street",
        address2="Apartment, suite, etc. (optional)",
        city="Queens",
        state="New York",
        zip="10001",
    )


def demo_card_details() -> CardDetails:
    """Test card accepted by the demo payment provider."""
    return CardDetails(
        number="4242 4242 4242 4242",
        expiry="12 / 26",
        cvc="123",
    )


__all__ = [
    "CardDetails",
    "Credentials",
    "DEFAULT_PASSWORD",
    "ShippingAddress",
    "default_password",
    "demo_card_details",
    "demo_shipping_address",
    "new_credentials",
    "unique_email",
]

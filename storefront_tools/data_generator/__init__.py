from .test_data import (
    CardDetails,
    Credentials,
    ShippingAddress,
    default_password,
    demo_card_details,
    demo_shipping_address,
    new_credentials,
    unique_email,
)

__all__ = [
    "CardDetails",
    "Credentials",
    "ShippingAddress",
    "default_password",
    "demo_card_details",
    "demo_shipping_address",
    "new_credentials",
    "unique_email",
]

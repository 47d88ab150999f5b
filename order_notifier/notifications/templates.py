"""
Ordered body parameters for the two approved templates.

Order confirmation: {{1}} customer name, {{2}} order number,
                    {{3}} total price, {{4}} product names
Fulfillment:        {{1}} customer name, {{2}} order number,
                    {{3}} tracking number, {{4}} tracking link
"""

from __future__ import annotations

from typing import Optional

FALLBACK_CUSTOMER_NAME = "Valued Customer"
FALLBACK_TRACKING_NUMBER = "N/A"
FALLBACK_TRACKING_URL = "Tracking info will be updated soon"


def order_confirmation_parameters(
    *,
    first_name: Optional[str],
    order_name: str,
    total_price: str,
    currency: str,
    product_summary: str,
) -> list[str]:
    return [
        first_name or FALLBACK_CUSTOMER_NAME,
        order_name,
        f"{total_price} {currency}",
        product_summary,
    ]


def fulfillment_parameters(
    *,
    first_name: Optional[str],
    order_name: str,
    tracking_number: Optional[str],
    tracking_url: Optional[str],
) -> list[str]:
    return [
        first_name or FALLBACK_CUSTOMER_NAME,
        order_name,
        tracking_number or FALLBACK_TRACKING_NUMBER,
        tracking_url or FALLBACK_TRACKING_URL,
    ]

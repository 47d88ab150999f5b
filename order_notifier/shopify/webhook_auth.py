"""
Order Notifier
Shopify webhook verification

Shopify signs every webhook body with HMAC-SHA256 keyed by the app's API
secret and sends the base64 digest in X-Shopify-Hmac-Sha256. Nothing past
this module sees an unverified event.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from typing import Mapping

from order_notifier.notifications.events import InboundEvent, Topic

HMAC_HEADER = "X-Shopify-Hmac-Sha256"
TOPIC_HEADER = "X-Shopify-Topic"
SHOP_HEADER = "X-Shopify-Shop-Domain"


class WebhookVerificationError(RuntimeError):
    pass


def compute_hmac(raw_body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_hmac(raw_body: bytes, received: str | None, secret: str) -> bool:
    if not received or not secret:
        return False
    return hmac.compare_digest(compute_hmac(raw_body, secret), received.strip())


def authenticate_webhook(raw_body: bytes, headers: Mapping[str, str], *, secret: str) -> InboundEvent:
    """
    Verify and decode one webhook request.

    Raises WebhookVerificationError when the signature does not match or
    the shop cannot be established, ValueError when a verified body is
    not a JSON object.
    """
    if not verify_hmac(raw_body, headers.get(HMAC_HEADER), secret):
        raise WebhookVerificationError("Webhook HMAC validation failed")

    shop = (headers.get(SHOP_HEADER) or "").strip()
    if not shop:
        raise WebhookVerificationError("Webhook authenticated but no shop found.")

    payload = json.loads(raw_body.decode("utf-8") or "{}")
    if not isinstance(payload, dict):
        raise ValueError("Webhook payload must be a JSON object")

    raw_topic = headers.get(TOPIC_HEADER)
    return InboundEvent(
        topic=Topic.from_header(raw_topic),
        shop=shop,
        payload=payload,
        raw_topic=raw_topic,
    )

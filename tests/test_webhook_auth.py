from __future__ import annotations

import json

import pytest

from conftest import SHOP
from order_notifier.notifications.events import Topic
from order_notifier.shopify.webhook_auth import (
    WebhookVerificationError,
    authenticate_webhook,
    compute_hmac,
    verify_hmac,
)

SECRET = "test-secret"
BODY = json.dumps({"name": "#1001"}).encode("utf-8")


def headers(topic: str = "orders/create", body: bytes = BODY, secret: str = SECRET) -> dict[str, str]:
    return {
        "X-Shopify-Hmac-Sha256": compute_hmac(body, secret),
        "X-Shopify-Topic": topic,
        "X-Shopify-Shop-Domain": SHOP,
    }


def test_verify_hmac() -> None:
    signature = compute_hmac(BODY, SECRET)

    assert verify_hmac(BODY, signature, SECRET)
    assert not verify_hmac(BODY + b" ", signature, SECRET)
    assert not verify_hmac(BODY, None, SECRET)
    assert not verify_hmac(BODY, signature, "")


def test_authenticate_webhook_builds_event() -> None:
    event = authenticate_webhook(BODY, headers(), secret=SECRET)

    assert event.topic is Topic.ORDERS_CREATE
    assert event.shop == SHOP
    assert event.payload == {"name": "#1001"}
    assert event.raw_topic == "orders/create"


@pytest.mark.parametrize(
    "raw, topic",
    [
        ("app/uninstalled", Topic.APP_UNINSTALLED),
        ("fulfillments/create", Topic.FULFILLMENTS_CREATE),
        ("ORDERS_CREATE", Topic.ORDERS_CREATE),
        ("products/update", Topic.OTHER),
        (None, Topic.OTHER),
    ],
)
def test_topic_from_header(raw, topic) -> None:
    assert Topic.from_header(raw) is topic


def test_tampered_body_is_rejected() -> None:
    with pytest.raises(WebhookVerificationError):
        authenticate_webhook(b'{"name": "#9999"}', headers(), secret=SECRET)


def test_missing_shop_is_rejected() -> None:
    h = headers()
    del h["X-Shopify-Shop-Domain"]

    with pytest.raises(WebhookVerificationError, match="no shop"):
        authenticate_webhook(BODY, h, secret=SECRET)


def test_non_object_body_is_value_error() -> None:
    body = b"[1, 2]"

    with pytest.raises(ValueError):
        authenticate_webhook(body, headers(body=body), secret=SECRET)

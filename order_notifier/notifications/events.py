"""
Order Notifier
Inbound event types and dispatch outcomes.

Transport-shaped webhook payloads are mapped here into small frozen
dataclasses so the dispatcher never digs through raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Protocol

from order_notifier.outbound.gateway import OutboundSendReceipt


class Topic(str, Enum):
    APP_UNINSTALLED = "APP_UNINSTALLED"
    ORDERS_CREATE = "ORDERS_CREATE"
    FULFILLMENTS_CREATE = "FULFILLMENTS_CREATE"
    OTHER = "OTHER"

    @classmethod
    def from_header(cls, raw: str | None) -> "Topic":
        """
        Accepts both header style ("orders/create") and enum style
        ("ORDERS_CREATE").
        """
        name = (raw or "").strip().upper().replace("/", "_")
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class InboundEvent:
    topic: Topic
    shop: str
    payload: Mapping[str, Any]
    raw_topic: Optional[str] = None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class OrderPayload:
    name: str
    customer_first_name: Optional[str]
    customer_phone: Optional[str]
    phone: Optional[str]
    total_price: str
    currency: str
    line_item_titles: tuple[str, ...]

    @property
    def destination_phone(self) -> Optional[str]:
        return self.customer_phone or self.phone

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "OrderPayload":
        customer = payload.get("customer")
        if not isinstance(customer, Mapping):
            customer = {}
        line_items = payload.get("line_items") or []
        return cls(
            name=str(payload.get("name") or ""),
            customer_first_name=_text(customer.get("first_name")),
            customer_phone=_text(customer.get("phone")),
            phone=_text(payload.get("phone")),
            total_price=str(payload.get("total_price") or ""),
            currency=str(payload.get("currency") or ""),
            line_item_titles=tuple(
                str(item.get("title") or "") for item in line_items if isinstance(item, Mapping)
            ),
        )


@dataclass(frozen=True)
class FulfillmentPayload:
    order_gid: Optional[str]
    tracking_number: Optional[str]
    tracking_url: Optional[str]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FulfillmentPayload":
        return cls(
            order_gid=_text(payload.get("order_id")),
            tracking_number=_text(payload.get("tracking_number")),
            tracking_url=_text(payload.get("tracking_url")),
        )


@dataclass(frozen=True)
class OrderDetails:
    name: str
    customer_first_name: Optional[str] = None
    customer_phone: Optional[str] = None


class OrderLookup(Protocol):
    async def fetch_order_by_gid(self, order_id: str) -> OrderDetails:
        ...


class DispatchStatus(str, Enum):
    SENT = "sent"
    IGNORED = "ignored"
    CONFIG_INCOMPLETE = "config_incomplete"
    FIELD_MISSING = "field_missing"
    LOOKUP_FAILED = "lookup_failed"
    DELIVERY_FAILED = "delivery_failed"


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Result of handling one inbound event. Every status is a normal,
    acknowledged outcome; none of them is an error for the caller.
    """
    status: DispatchStatus
    reasons: tuple[str, ...] = ()
    receipt: Optional[OutboundSendReceipt] = field(default=None, compare=False)

    @property
    def sent(self) -> bool:
        return self.status is DispatchStatus.SENT

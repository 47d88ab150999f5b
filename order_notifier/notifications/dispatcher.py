"""
File: order_notifier/notifications/dispatcher.py

Project: Order Notifier

Purpose:
Turn one verified Shopify webhook into zero or one WhatsApp template send.

Topics:
- APP_UNINSTALLED      -> nothing to send
- ORDERS_CREATE        -> order confirmation template
- FULFILLMENTS_CREATE  -> fulfillment template (order looked up via Admin API)
- anything else        -> logged as unhandled

Rules:
- Missing or incomplete settings are a normal state: skip, never fail
- Delivery is best-effort: a failed send still ends the event normally
- No state is shared between events; settings are read once per event
- Blocking collaborators (DB, requests) run in the threadpool
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from order_notifier.notifications.events import (
    DispatchOutcome,
    DispatchStatus,
    FulfillmentPayload,
    InboundEvent,
    OrderLookup,
    OrderPayload,
    Topic,
)
from order_notifier.notifications.summary import summarize
from order_notifier.notifications.templates import (
    fulfillment_parameters,
    order_confirmation_parameters,
)
from order_notifier.outbound.gateway import SendGateway
from order_notifier.services.settings_store import TenantSettings

Handler = Callable[[InboundEvent, Optional[OrderLookup]], Awaitable[DispatchOutcome]]


class TenantSettingsReader(Protocol):
    def get(self, shop: str) -> Optional[TenantSettings]:
        ...


def missing_settings(settings: Optional[TenantSettings], template_field: str) -> list[str]:
    if settings is None:
        return ["settings have not been saved"]
    missing = []
    if not settings.phone_id:
        missing.append("phone number id is not set")
    if not settings.access_token:
        missing.append("access token is not set")
    if not getattr(settings, template_field):
        missing.append(f"{template_field.replace('_', ' ')} name is not set")
    return missing


class EventDispatcher:
    def __init__(
        self,
        *,
        settings_store: TenantSettingsReader,
        gateway: SendGateway,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings_store = settings_store
        self._gateway = gateway
        self._logger = logger or logging.getLogger("dispatcher")
        self._handlers: dict[Topic, Handler] = {
            Topic.APP_UNINSTALLED: self._on_app_uninstalled,
            Topic.ORDERS_CREATE: self._on_order_created,
            Topic.FULFILLMENTS_CREATE: self._on_fulfillment_created,
            Topic.OTHER: self._on_unhandled,
        }

    @property
    def handled_topics(self) -> frozenset[Topic]:
        return frozenset(self._handlers)

    async def dispatch(
        self,
        event: InboundEvent,
        order_lookup: Optional[OrderLookup] = None,
    ) -> DispatchOutcome:
        self._logger.info("Webhook received. Topic: %s, Shop: %s", event.topic.value, event.shop)
        outcome = await self._handlers[event.topic](event, order_lookup)
        self._logger.info(
            "Webhook handled. Topic: %s, Shop: %s, Outcome: %s",
            event.topic.value,
            event.shop,
            outcome.status.value,
        )
        return outcome

    # ------------------------------------------------------------------
    # Topic handlers
    # ------------------------------------------------------------------
    async def _on_app_uninstalled(self, event: InboundEvent, _lookup: Optional[OrderLookup]) -> DispatchOutcome:
        self._logger.info("App was uninstalled for %s. No action needed.", event.shop)
        return DispatchOutcome(DispatchStatus.IGNORED, ("app uninstalled",))

    async def _on_order_created(self, event: InboundEvent, _lookup: Optional[OrderLookup]) -> DispatchOutcome:
        settings = await self._load_settings(event.shop)
        missing = missing_settings(settings, "confirmation_template")
        if missing:
            return self._skip(event, DispatchStatus.CONFIG_INCOMPLETE, missing)

        order = OrderPayload.from_payload(event.payload)
        self._logger.info("Processing ORDERS_CREATE for order %s", order.name)

        phone = order.destination_phone
        if not phone:
            return self._skip(event, DispatchStatus.FIELD_MISSING, ["customer phone is missing"])

        parameters = order_confirmation_parameters(
            first_name=order.customer_first_name,
            order_name=order.name,
            total_price=order.total_price,
            currency=order.currency,
            product_summary=summarize(order.line_item_titles),
        )
        return await self._send(settings, phone, settings.confirmation_template, parameters)

    async def _on_fulfillment_created(
        self, event: InboundEvent, order_lookup: Optional[OrderLookup]
    ) -> DispatchOutcome:
        settings = await self._load_settings(event.shop)
        missing = missing_settings(settings, "fulfillment_template")
        if missing:
            return self._skip(event, DispatchStatus.CONFIG_INCOMPLETE, missing)

        fulfillment = FulfillmentPayload.from_payload(event.payload)
        self._logger.info("Processing FULFILLMENTS_CREATE for order %s", fulfillment.order_gid)

        if not fulfillment.order_gid:
            return self._skip(event, DispatchStatus.FIELD_MISSING, ["order reference is missing"])
        if order_lookup is None:
            return self._skip(event, DispatchStatus.LOOKUP_FAILED, ["no admin session for shop"])

        try:
            order = await order_lookup.fetch_order_by_gid(fulfillment.order_gid)
        except Exception as exc:
            self._logger.exception("Failed to fetch order details for fulfillment")
            return DispatchOutcome(DispatchStatus.LOOKUP_FAILED, (str(exc),))

        if not order.customer_phone:
            reasons = ["customer phone is missing"]
            if not fulfillment.tracking_url:
                reasons.append("tracking link is missing")
            return self._skip(event, DispatchStatus.FIELD_MISSING, reasons)

        if not fulfillment.tracking_url:
            self._logger.info("Tracking link is missing for order %s, using fallback text", order.name)

        parameters = fulfillment_parameters(
            first_name=order.customer_first_name,
            order_name=order.name,
            tracking_number=fulfillment.tracking_number,
            tracking_url=fulfillment.tracking_url,
        )
        return await self._send(settings, order.customer_phone, settings.fulfillment_template, parameters)

    async def _on_unhandled(self, event: InboundEvent, _lookup: Optional[OrderLookup]) -> DispatchOutcome:
        self._logger.info("Unhandled webhook topic: %s", event.raw_topic or event.topic.value)
        return DispatchOutcome(DispatchStatus.IGNORED, ("unhandled topic",))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    async def _load_settings(self, shop: str) -> Optional[TenantSettings]:
        return await run_in_threadpool(self._settings_store.get, shop)

    async def _send(
        self,
        settings: TenantSettings,
        to_number: str,
        template_name: str,
        parameters: list[str],
    ) -> DispatchOutcome:
        receipt = await run_in_threadpool(
            self._gateway.send_template,
            settings,
            to_number=to_number,
            template_name=template_name,
            parameters=parameters,
        )
        if not receipt.ok:
            reason = receipt.failure.value if receipt.failure else receipt.detail
            return DispatchOutcome(DispatchStatus.DELIVERY_FAILED, (reason,), receipt=receipt)
        return DispatchOutcome(DispatchStatus.SENT, receipt=receipt)

    def _skip(self, event: InboundEvent, status: DispatchStatus, reasons: list[str]) -> DispatchOutcome:
        self._logger.warning(
            "Skipping %s for %s: %s",
            event.topic.value,
            event.shop,
            "; ".join(reasons),
        )
        return DispatchOutcome(status, tuple(reasons))

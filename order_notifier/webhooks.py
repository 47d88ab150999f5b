"""
File: order_notifier/webhooks.py
Path: order_notifier/webhooks.py

Project: Order Notifier

Purpose:
Inbound Shopify webhook handler.

Responses:
- 200 "Webhook processed."  every normal outcome, including all skips and
                             failed WhatsApp sends (avoids redelivery storms)
- 404                       GET, unverifiable webhook, or no shop context
- 500 <error message>       unexpected exception while handling the event

Notes:
- The handler only wires collaborators; all topic logic lives in
  notifications.dispatcher.
- APP_UNINSTALLED drops the stored Admin API session. Settings are kept so
  a reinstall picks them up again.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from order_notifier.config import AppSettings, get_app_settings
from order_notifier.db import get_db
from order_notifier.notifications.dispatcher import EventDispatcher
from order_notifier.notifications.events import Topic
from order_notifier.outbound.factory import get_send_gateway
from order_notifier.outbound.gateway import SendGateway
from order_notifier.services.settings_store import SettingsStore
from order_notifier.services.shop_sessions import delete_shop_session
from order_notifier.shopify.admin_client import build_order_lookup
from order_notifier.shopify.webhook_auth import WebhookVerificationError, authenticate_webhook

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = logging.getLogger("webhooks")


def _drop_shop_session(db: Session, shop: str) -> None:
    # Uninstall is always acknowledged; a failed cleanup is only logged.
    try:
        if delete_shop_session(db, shop=shop):
            logger.info("Admin session removed for %s", shop)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to remove admin session for %s", shop)


@router.get("/shopify", response_class=PlainTextResponse)
def shopify_webhook_get():
    return PlainTextResponse("Not Found", status_code=404)


@router.post("/shopify", response_class=PlainTextResponse)
async def shopify_webhook(
    request: Request,
    db: Session = Depends(get_db),
    app_settings: AppSettings = Depends(get_app_settings),
    gateway: SendGateway = Depends(get_send_gateway),
):
    try:
        raw_body = await request.body()
        event = authenticate_webhook(raw_body, request.headers, secret=app_settings.shopify_api_secret)

        order_lookup = None
        if event.topic is Topic.FULFILLMENTS_CREATE:
            order_lookup = await run_in_threadpool(build_order_lookup, db, event.shop, app_settings)

        dispatcher = EventDispatcher(
            settings_store=SettingsStore(db),
            gateway=gateway,
            logger=logging.getLogger("dispatcher"),
        )
        outcome = await dispatcher.dispatch(event, order_lookup=order_lookup)

        if event.topic is Topic.APP_UNINSTALLED:
            await run_in_threadpool(_drop_shop_session, db, event.shop)

        logger.info("Webhook processed: %s %s", outcome.status.value, ", ".join(outcome.reasons))

    except WebhookVerificationError as e:
        logger.warning("Webhook rejected: %s", e)
        return PlainTextResponse(str(e), status_code=404)
    except Exception as e:
        logger.exception("Could not process webhook")
        return PlainTextResponse(str(e), status_code=500)

    return PlainTextResponse("Webhook processed.", status_code=200)

"""
File: order_notifier/outbound/factory.py
Path: order_notifier/outbound/factory.py

Project: Order Notifier

Purpose:
- Provide a single place to construct the outbound send gateway
- Reuse a single gateway instance (singleton-style) so the requests
  connection pool is shared across webhooks

Design rules:
- No business logic here
- Only construction / wiring
"""

from __future__ import annotations

from order_notifier.config import AppSettings, get_app_settings
from order_notifier.outbound.dry_run import DryRunSendGateway
from order_notifier.outbound.gateway import SendGateway
from order_notifier.outbound.meta import MetaSendGateway
from order_notifier.outbound.phone import PhoneNormalizer

OUTBOUND_MODE_LIVE = "live"
OUTBOUND_MODE_DRY_RUN = "dry_run"


def build_send_gateway(settings: AppSettings) -> SendGateway:
    normalizer = PhoneNormalizer(
        default_country_code=settings.default_country_code,
        national_number_length=settings.national_number_length,
    )
    if settings.outbound_mode == OUTBOUND_MODE_DRY_RUN:
        return DryRunSendGateway(normalizer=normalizer)
    if settings.outbound_mode != OUTBOUND_MODE_LIVE:
        raise RuntimeError(f"Unknown OUTBOUND_MODE: {settings.outbound_mode!r}")
    return MetaSendGateway(
        normalizer=normalizer,
        api_version=settings.meta_api_version,
        timeout=settings.http_timeout_seconds,
    )


# -------------------------------------------------
# Gateway singleton (FastAPI dependency)
# -------------------------------------------------
_send_gateway: SendGateway | None = None


def get_send_gateway() -> SendGateway:
    global _send_gateway
    if _send_gateway is None:
        _send_gateway = build_send_gateway(get_app_settings())
    return _send_gateway

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Sequence

_DB_DIR = tempfile.mkdtemp(prefix="order-notifier-tests-")

os.environ.setdefault("DATABASE_URL", f"sqlite:///{Path(_DB_DIR) / 'test.db'}")
os.environ.setdefault("SHOPIFY_API_SECRET", "test-secret")
os.environ.setdefault("ADMIN_API_TOKEN", "admin-token")

import pytest  # noqa: E402

from order_notifier.db import SessionLocal, engine  # noqa: E402
from order_notifier.models import Base  # noqa: E402
from order_notifier.notifications.events import OrderDetails  # noqa: E402
from order_notifier.outbound.gateway import (  # noqa: E402
    DeliveryFailure,
    OutboundSendReceipt,
    SendStatus,
)
from order_notifier.services.settings_store import TenantSettings  # noqa: E402


class RecordingGateway:
    """Gateway double that records every send and returns a fixed status."""

    def __init__(self, failure: Optional[DeliveryFailure] = None) -> None:
        self.failure = failure
        self.calls: list[dict[str, Any]] = []

    def send_template(
        self,
        tenant: TenantSettings,
        *,
        to_number: str,
        template_name: str,
        parameters: Sequence[str],
    ) -> OutboundSendReceipt:
        self.calls.append(
            {
                "tenant": tenant,
                "to_number": to_number,
                "template_name": template_name,
                "parameters": list(parameters),
            }
        )
        if self.failure is not None:
            return OutboundSendReceipt.now(
                SendStatus.FAILED,
                to_number=to_number,
                template_name=template_name,
                detail="HTTP 400",
                failure=self.failure,
                status_code=400,
            )
        return OutboundSendReceipt.now(
            SendStatus.SENT,
            to_number=to_number,
            template_name=template_name,
            detail="HTTP 200",
        )


class DictSettingsStore:
    def __init__(self, *settings: TenantSettings) -> None:
        self._by_shop = {s.tenant_id: s for s in settings}
        self.reads: list[str] = []

    def get(self, shop: str) -> Optional[TenantSettings]:
        self.reads.append(shop)
        return self._by_shop.get(shop)


class FakeOrderLookup:
    def __init__(self, details: Optional[OrderDetails] = None, error: Optional[Exception] = None) -> None:
        self.details = details
        self.error = error
        self.requested: list[str] = []

    async def fetch_order_by_gid(self, order_id: str) -> OrderDetails:
        self.requested.append(order_id)
        if self.error is not None:
            raise self.error
        assert self.details is not None
        return self.details


SHOP = "demo-store.myshopify.com"


def make_settings(**overrides: Any) -> TenantSettings:
    base: dict[str, Any] = {
        "tenant_id": SHOP,
        "phone_id": "1234567890",
        "access_token": "EAAG-secret-token",
        "confirmation_template": "order_confirmation",
        "fulfillment_template": "order_shipped",
    }
    return TenantSettings(**(base | overrides))


def make_order_payload(**overrides: Any) -> dict[str, Any]:
    base: dict[str, Any] = {
        "name": "#1001",
        "customer": {"first_name": "Asha", "phone": "9876543210"},
        "phone": None,
        "total_price": "500.00",
        "currency": "INR",
        "line_items": [{"title": "Blue Shirt"}, {"title": "Red Hat"}],
    }
    return base | overrides


def make_fulfillment_payload(**overrides: Any) -> dict[str, Any]:
    base: dict[str, Any] = {
        "order_id": 450789469,
        "tracking_number": "TRK123",
        "tracking_url": "https://track.example.com/TRK123",
    }
    return base | overrides


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def gateway() -> RecordingGateway:
    return RecordingGateway()

"""
File: order_notifier/services/settings_store.py
Project: Order Notifier

Purpose:
Per-shop WhatsApp settings store.

This is the ONLY place allowed to:
- read a shop's WhatsApp settings
- create / update a shop's WhatsApp settings

Used by:
- webhooks.py (read, once per event)
- admin/routes.py (read + upsert)

Design rules:
- Idempotent upsert keyed by shop
- A masked or empty access token never overwrites the stored one
- Empty strings are stored as NULL
- DB is source of truth
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from order_notifier.models import WhatsAppSettings

MASK_MARKER = "••••"
MASKED_TOKEN = "••••••••••••••••"


@dataclass(frozen=True)
class TenantSettings:
    """
    Read-only snapshot of one shop's messaging configuration.
    """
    tenant_id: str
    phone_id: Optional[str] = None
    access_token: Optional[str] = field(default=None, repr=False)
    confirmation_template: Optional[str] = None
    fulfillment_template: Optional[str] = None

    @classmethod
    def from_row(cls, row: WhatsAppSettings) -> "TenantSettings":
        return cls(
            tenant_id=row.shop,
            phone_id=row.phone_id,
            access_token=row.access_token,
            confirmation_template=row.confirmation_template,
            fulfillment_template=row.fulfillment_template,
        )


def mask_token(token: Optional[str]) -> str:
    return MASKED_TOKEN if token else ""


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class SettingsStore:
    def __init__(self, db: Session) -> None:
        self._db = db

    # -------------------------------------------------
    # Queries
    # -------------------------------------------------
    def get(self, shop: str) -> Optional[TenantSettings]:
        row = self._db.get(WhatsAppSettings, shop)
        if row is None:
            return None
        return TenantSettings.from_row(row)

    # -------------------------------------------------
    # Commands
    # -------------------------------------------------
    def upsert(
        self,
        shop: str,
        *,
        phone_id: Optional[str],
        access_token: Optional[str],
        confirmation_template: Optional[str],
        fulfillment_template: Optional[str],
    ) -> TenantSettings:
        """
        Creates or updates the settings row for `shop`.

        The access token is only replaced when a real (non-masked,
        non-empty) value is submitted.
        """
        row = self._db.get(WhatsAppSettings, shop)
        if row is None:
            row = WhatsAppSettings(shop=shop)
            self._db.add(row)

        row.phone_id = _clean(phone_id)
        row.confirmation_template = _clean(confirmation_template)
        row.fulfillment_template = _clean(fulfillment_template)

        token = _clean(access_token)
        if token and MASK_MARKER not in token:
            row.access_token = token

        self._db.commit()
        self._db.refresh(row)
        return TenantSettings.from_row(row)

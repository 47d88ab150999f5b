"""
order_notifier/outbound/settings.py
Order Notifier
Outbound Settings

Purpose:
- Per-shop Meta WhatsApp Cloud API endpoint + credentials.
- Credentials come from the shop's stored settings, never from code.

Notes:
- These are required for sending template messages:
  - phone number id
  - access token
- The API version is global (META_WA_API_VERSION, defaults to v20.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from order_notifier.services.settings_store import TenantSettings


@dataclass(frozen=True)
class MetaWhatsAppSettings:
    api_version: str
    access_token: str = field(repr=False)
    phone_number_id: str

    @property
    def base_url(self) -> str:
        return f"https://graph.facebook.com/{self.api_version}"

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/{self.phone_number_id}/messages"

    @classmethod
    def for_tenant(cls, tenant: "TenantSettings", api_version: str = "v20.0") -> "MetaWhatsAppSettings":
        return cls(
            api_version=api_version,
            access_token=tenant.access_token or "",
            phone_number_id=tenant.phone_id or "",
        )

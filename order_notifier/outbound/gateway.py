"""
Order Notifier
Outbound delivery abstraction

This module defines a stable SendGateway interface and strongly-typed
request/receipt objects for WhatsApp template delivery.

Guardrails:
- Gateways never raise on delivery problems; failures come back as receipts.
- Delivery is best-effort and at-most-once: there is no retry here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from order_notifier.services.settings_store import TenantSettings

LANGUAGE_CODE = "en_US"


class SendStatus(str, Enum):
    DRY_RUN = "dry_run"
    SENT = "sent"
    FAILED = "failed"


class DeliveryFailure(str, Enum):
    NETWORK_UNREACHABLE = "network_unreachable"
    REMOTE_REJECTED = "remote_rejected"
    REQUEST_MALFORMED = "request_malformed"


@dataclass(frozen=True)
class OutboundTemplateRequest:
    """
    One template message, already addressed to a normalised number.

    Parameter order is the wire contract: it must match the template's
    declared placeholders {{1}}..{{n}}.
    """
    to_number: str
    template_name: str
    parameters: tuple[str, ...]
    language_code: str = LANGUAGE_CODE

    def to_payload(self) -> Dict[str, Any]:
        return {
            "messaging_product": "whatsapp",
            "to": self.to_number,
            "type": "template",
            "template": {
                "name": self.template_name,
                "language": {"code": self.language_code},
                "components": [
                    {
                        "type": "body",
                        "parameters": [{"type": "text", "text": p} for p in self.parameters],
                    }
                ],
            },
        }


@dataclass(frozen=True)
class OutboundSendReceipt:
    """
    Result of a delivery attempt (or simulated attempt).
    """
    status: SendStatus
    to_number: str
    template_name: str
    detail: str
    created_at_utc: datetime
    failure: Optional[DeliveryFailure] = None
    status_code: Optional[int] = None
    provider_message_id: Optional[str] = None
    response_json: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is not SendStatus.FAILED

    @staticmethod
    def now(
        status: SendStatus,
        *,
        to_number: str,
        template_name: str,
        detail: str,
        failure: Optional[DeliveryFailure] = None,
        status_code: Optional[int] = None,
        provider_message_id: Optional[str] = None,
        response_json: Optional[Dict[str, Any]] = None,
    ) -> "OutboundSendReceipt":
        return OutboundSendReceipt(
            status=status,
            to_number=to_number,
            template_name=template_name,
            detail=detail,
            created_at_utc=datetime.now(timezone.utc),
            failure=failure,
            status_code=status_code,
            provider_message_id=provider_message_id,
            response_json=response_json or {},
        )


class SendGateway(Protocol):
    """
    Abstract gateway for outbound template delivery.
    """
    def send_template(
        self,
        tenant: "TenantSettings",
        *,
        to_number: str,
        template_name: str,
        parameters: Sequence[str],
    ) -> OutboundSendReceipt:
        """
        Normalise `to_number`, deliver the template (or simulate it) and
        report the outcome. Must not throw in normal cases.
        """
        ...

"""
Order Notifier
Outbound delivery abstraction - DRY-RUN gateway

This gateway never sends anything.
It simply returns a receipt that indicates a simulated send.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, TYPE_CHECKING

from .gateway import OutboundSendReceipt, SendStatus
from .phone import PhoneNormalizer

if TYPE_CHECKING:
    from order_notifier.services.settings_store import TenantSettings

logger = logging.getLogger("dry_run_gateway")


class DryRunSendGateway:
    def __init__(self, normalizer: Optional[PhoneNormalizer] = None) -> None:
        self._normalizer = normalizer or PhoneNormalizer()

    def send_template(
        self,
        tenant: "TenantSettings",
        *,
        to_number: str,
        template_name: str,
        parameters: Sequence[str],
    ) -> OutboundSendReceipt:
        # No side effects. Never raises. Never calls external services.
        to_msisdn = self._normalizer.normalize(to_number)
        detail = (
            "DRY_RUN: outbound delivery simulated (not sent). "
            f"to={to_msisdn} template={template_name} params={len(parameters)}"
        )
        logger.info("%s", detail, extra={"destination": to_msisdn, "template": template_name})
        return OutboundSendReceipt.now(
            SendStatus.DRY_RUN,
            to_number=to_msisdn,
            template_name=template_name,
            detail=detail,
        )

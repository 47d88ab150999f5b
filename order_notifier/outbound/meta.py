"""
File: order_notifier/outbound/meta.py
Path: order_notifier/outbound/meta.py

Project: Order Notifier

Purpose:
Meta WhatsApp Cloud API gateway for template messages.

Failure classification (never raised, always returned on the receipt):
- network_unreachable: connection refused, DNS, timeouts, broken transfers
- request_malformed:   the request could not be built (bad URL, bad JSON,
                       empty destination or template name)
- remote_rejected:     Meta answered with a non-2xx status
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, TYPE_CHECKING

import requests

from order_notifier.outbound.gateway import (
    DeliveryFailure,
    OutboundSendReceipt,
    OutboundTemplateRequest,
    SendStatus,
)
from order_notifier.outbound.phone import PhoneNormalizer
from order_notifier.outbound.settings import MetaWhatsAppSettings

if TYPE_CHECKING:
    from order_notifier.services.settings_store import TenantSettings

logger = logging.getLogger("meta_client")

_MALFORMED_REQUEST_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.InvalidJSONError,
)

_DETAIL_LIMIT = 500


class MetaSendGateway:
    def __init__(
        self,
        *,
        normalizer: Optional[PhoneNormalizer] = None,
        api_version: str = "v20.0",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._normalizer = normalizer or PhoneNormalizer()
        self._api_version = api_version
        self._timeout = timeout
        self._session = session or requests.Session()

    def send_template(
        self,
        tenant: "TenantSettings",
        *,
        to_number: str,
        template_name: str,
        parameters: Sequence[str],
    ) -> OutboundSendReceipt:
        req = OutboundTemplateRequest(
            to_number=self._normalizer.normalize(to_number),
            template_name=template_name,
            parameters=tuple(parameters),
        )
        settings = MetaWhatsAppSettings.for_tenant(tenant, api_version=self._api_version)

        if not req.to_number or not req.template_name or not settings.phone_number_id:
            return self._failed(
                req,
                DeliveryFailure.REQUEST_MALFORMED,
                "destination, template name and phone number id are required",
            )

        logger.info(
            "Preparing to send template '%s' to %s",
            req.template_name,
            req.to_number,
            extra={"destination": req.to_number, "template": req.template_name},
        )

        headers = {
            "Authorization": f"Bearer {settings.access_token}",
            "Content-Type": "application/json",
        }

        try:
            resp = self._session.post(
                settings.messages_url,
                json=req.to_payload(),
                headers=headers,
                timeout=self._timeout,
            )
        except _MALFORMED_REQUEST_ERRORS as e:
            return self._failed(req, DeliveryFailure.REQUEST_MALFORMED, str(e))
        except (requests.ConnectionError, requests.Timeout) as e:
            return self._failed(req, DeliveryFailure.NETWORK_UNREACHABLE, str(e))
        except requests.RequestException as e:
            return self._failed(req, DeliveryFailure.NETWORK_UNREACHABLE, str(e))

        data = _response_json(resp)

        if not 200 <= resp.status_code < 300:
            return self._failed(
                req,
                DeliveryFailure.REMOTE_REJECTED,
                f"HTTP {resp.status_code}: {resp.text[:_DETAIL_LIMIT]}",
                status_code=resp.status_code,
                response_json=data,
            )

        provider_message_id = _provider_message_id(data)
        logger.info(
            "Template '%s' sent to %s (message id %s)",
            req.template_name,
            req.to_number,
            provider_message_id,
            extra={"destination": req.to_number, "template": req.template_name},
        )
        return OutboundSendReceipt.now(
            SendStatus.SENT,
            to_number=req.to_number,
            template_name=req.template_name,
            detail=f"HTTP {resp.status_code}",
            status_code=resp.status_code,
            provider_message_id=provider_message_id,
            response_json=data,
        )

    def _failed(
        self,
        req: OutboundTemplateRequest,
        failure: DeliveryFailure,
        detail: str,
        *,
        status_code: Optional[int] = None,
        response_json: Optional[Dict[str, Any]] = None,
    ) -> OutboundSendReceipt:
        logger.error(
            "Failed to send template '%s' to %s: %s (%s)",
            req.template_name,
            req.to_number,
            failure.value,
            detail,
            extra={
                "destination": req.to_number,
                "template": req.template_name,
                "failure": failure.value,
            },
        )
        return OutboundSendReceipt.now(
            SendStatus.FAILED,
            to_number=req.to_number,
            template_name=req.template_name,
            detail=detail,
            failure=failure,
            status_code=status_code,
            response_json=response_json,
        )


def _response_json(resp: requests.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {"raw_text": resp.text}
    return data if isinstance(data, dict) else {"raw": data}


def _provider_message_id(data: Dict[str, Any]) -> Optional[str]:
    try:
        return data["messages"][0]["id"]
    except (KeyError, IndexError, TypeError):
        return None

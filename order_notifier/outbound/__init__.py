# order_notifier/outbound/__init__.py
from .gateway import (
    DeliveryFailure,
    OutboundSendReceipt,
    OutboundTemplateRequest,
    SendGateway,
    SendStatus,
)
from .dry_run import DryRunSendGateway
from .meta import MetaSendGateway
from .phone import PhoneNormalizer
from .factory import build_send_gateway, get_send_gateway

"""Event-to-message dispatch: topic routing, parameter building, send."""

from .dispatcher import EventDispatcher
from .events import (
    DispatchOutcome,
    DispatchStatus,
    InboundEvent,
    OrderDetails,
    OrderLookup,
    Topic,
)
from .summary import summarize

__all__ = [
    "DispatchOutcome",
    "DispatchStatus",
    "EventDispatcher",
    "InboundEvent",
    "OrderDetails",
    "OrderLookup",
    "Topic",
    "summarize",
]

"""
File: order_notifier/models.py

Project: Order Notifier

Purpose:
SQLAlchemy ORM models for per-shop state.

- WhatsAppSettings: messaging credentials + template names, one row per shop
- ShopSession: offline Admin API token stored at install time

Design principles:
- One row per shop, keyed by the shop domain
- No business logic in models
- All writes are controlled by application logic, not model side-effects
"""

from sqlalchemy import Column, DateTime, Text, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


# ---------------------------------------------------------------------
# WhatsApp settings (per shop)
# ---------------------------------------------------------------------
class WhatsAppSettings(Base):
    __tablename__ = "whatsapp_settings"

    shop = Column(Text, primary_key=True)
    phone_id = Column(Text, nullable=True)
    access_token = Column(Text, nullable=True)
    confirmation_template = Column(Text, nullable=True)
    fulfillment_template = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


# ---------------------------------------------------------------------
# Shop session (offline Admin API access)
# ---------------------------------------------------------------------
class ShopSession(Base):
    __tablename__ = "shop_sessions"

    shop = Column(Text, primary_key=True)
    access_token = Column(Text, nullable=False)
    scope = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

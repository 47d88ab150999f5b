"""
File: order_notifier/admin/__init__.py

Project: Order Notifier

Purpose:
Admin package for per-shop settings and Admin API sessions.

Design rules:
- Token-protected endpoints only
- No messaging, no side effects beyond the settings and session rows
"""

from .routes import router as admin_router

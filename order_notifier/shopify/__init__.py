"""Shopify edge: webhook verification and Admin API order lookup."""

from .admin_client import OrderLookupError, ShopifyAdminClient, build_order_lookup
from .webhook_auth import WebhookVerificationError, authenticate_webhook

"""Shopify order and fulfillment notifications over WhatsApp templates."""

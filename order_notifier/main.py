"""
File: order_notifier/main.py

Project: Order Notifier

Purpose:
Application entry point.
Responsible only for:
- Logging setup
- FastAPI app creation
- Table creation on startup
- Router registration (webhooks, admin settings, health)

Design principles:
- No business logic in this file
- No outbound message creation
- All inbound Shopify processing is delegated to order_notifier.webhooks
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from order_notifier.admin.routes import router as admin_router
from order_notifier.db import init_db
from order_notifier.health import router as health_router
from order_notifier.webhooks import router as webhooks_router

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    yield


app = FastAPI(lifespan=lifespan)

# -------------------------------------------------------------------
# Webhook routes (POST/GET /webhooks/shopify)
# -------------------------------------------------------------------
app.include_router(webhooks_router)

# -------------------------------------------------------------------
# Per-shop settings (GET/POST /admin/settings/{shop})
# -------------------------------------------------------------------
app.include_router(admin_router)

# -------------------------------------------------------------------
# Health
# -------------------------------------------------------------------
app.include_router(health_router)

"""
File: order_notifier/health.py

Project: Order Notifier

Purpose:
Liveness and database readiness probes for the notifier.

Endpoints:
- GET /health      process is up (no I/O)
- GET /health/db   settings/session database answers SELECT 1

A failing database is reported in the body, not as an HTTP error, so the
platform health check keeps the process while the database recovers.
"""

import logging

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from order_notifier.db import test_db_connection

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger("health")


@router.get("")
def liveness():
    return {"status": "ok"}


@router.get("/db")
def database_readiness():
    try:
        test_db_connection()
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return {"database": "unhealthy", "error": str(e)}
    return {"database": "healthy"}

"""
File: order_notifier/admin/routes.py

Project: Order Notifier

Purpose:
Per-shop WhatsApp settings and Admin API session endpoints.

Endpoints:
- GET  /admin/settings/{shop}   (access token masked)
- POST /admin/settings/{shop}   (upsert)
- GET  /admin/sessions/{shop}   (installed or not, never the token)
- POST /admin/sessions/{shop}   (store the offline Admin API token)

Design rules:
- Shared-secret header X-Admin-Token, compared in constant time
- Endpoints answer 404 when ADMIN_API_TOKEN is not configured
- The access token is never returned in clear text
"""

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from order_notifier.config import AppSettings, get_app_settings
from order_notifier.db import get_db
from order_notifier.services.settings_store import SettingsStore, mask_token
from order_notifier.services.shop_sessions import get_shop_session, save_shop_session

router = APIRouter(prefix="/admin", tags=["admin"])


class SettingsForm(BaseModel):
    phoneId: Optional[str] = None
    accessToken: Optional[str] = None
    confirmationTemplate: Optional[str] = None
    fulfillmentTemplate: Optional[str] = None


def require_admin_token(
    x_admin_token: Optional[str] = Header(default=None),
    app_settings: AppSettings = Depends(get_app_settings),
) -> None:
    expected = app_settings.admin_api_token
    if not expected:
        raise HTTPException(status_code=404, detail="Not Found")
    if not x_admin_token or not hmac.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=401, detail="Invalid admin token")


# -------------------------------------------------------------------
# Settings
# -------------------------------------------------------------------
@router.get("/settings/{shop}", dependencies=[Depends(require_admin_token)])
def read_settings(shop: str, db: Session = Depends(get_db)):
    settings = SettingsStore(db).get(shop)
    if settings is None:
        return {}

    return {
        "shop": settings.tenant_id,
        "phoneId": settings.phone_id or "",
        "accessToken": mask_token(settings.access_token),
        "confirmationTemplate": settings.confirmation_template or "",
        "fulfillmentTemplate": settings.fulfillment_template or "",
    }


@router.post("/settings/{shop}", dependencies=[Depends(require_admin_token)])
def save_settings(shop: str, form: SettingsForm, db: Session = Depends(get_db)):
    SettingsStore(db).upsert(
        shop,
        phone_id=form.phoneId,
        access_token=form.accessToken,
        confirmation_template=form.confirmationTemplate,
        fulfillment_template=form.fulfillmentTemplate,
    )
    return {"success": True}


# -------------------------------------------------------------------
# Admin API sessions (written by the install flow)
# -------------------------------------------------------------------
class SessionForm(BaseModel):
    accessToken: str
    scope: Optional[str] = None


@router.get("/sessions/{shop}", dependencies=[Depends(require_admin_token)])
def read_session(shop: str, db: Session = Depends(get_db)):
    session = get_shop_session(db, shop=shop)
    return {
        "shop": shop,
        "installed": session is not None,
        "scope": session.scope if session else None,
    }


@router.post("/sessions/{shop}", dependencies=[Depends(require_admin_token)])
def save_session(shop: str, form: SessionForm, db: Session = Depends(get_db)):
    token = form.accessToken.strip()
    if not token:
        raise HTTPException(status_code=422, detail="accessToken is required")

    save_shop_session(db, shop=shop, access_token=token, scope=form.scope)
    return {"success": True}

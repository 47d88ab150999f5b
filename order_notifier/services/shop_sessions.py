"""
File: order_notifier/services/shop_sessions.py
Project: Order Notifier

Purpose:
Offline Admin API sessions, one per installed shop.

Design rules:
- Idempotent operations
- No messaging
- The install/OAuth flow that creates sessions lives outside this service
"""

from typing import Optional

from sqlalchemy.orm import Session

from order_notifier.models import ShopSession


# -------------------------------------------------
# Queries
# -------------------------------------------------

def get_shop_session(db: Session, *, shop: str) -> Optional[ShopSession]:
    return db.get(ShopSession, shop)


# -------------------------------------------------
# Commands
# -------------------------------------------------

def save_shop_session(db: Session, *, shop: str, access_token: str, scope: str | None = None) -> ShopSession:
    session = db.get(ShopSession, shop)
    if session is None:
        session = ShopSession(shop=shop, access_token=access_token, scope=scope)
        db.add(session)
    else:
        session.access_token = access_token
        session.scope = scope
    db.commit()
    return session


def delete_shop_session(db: Session, *, shop: str) -> bool:
    """
    Removes the shop's session if it exists.

    Returns:
        True  -> session was removed
        False -> no session stored
    """
    session = db.get(ShopSession, shop)
    if not session:
        return False

    db.delete(session)
    db.commit()
    return True

"""
File: order_notifier/shopify/admin_client.py

Project: Order Notifier

Purpose:
Shopify Admin GraphQL client used to resolve the order behind a
fulfillment webhook (fulfillment payloads carry no customer details).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from order_notifier.config import AppSettings
from order_notifier.notifications.events import OrderDetails
from order_notifier.services.shop_sessions import get_shop_session

logger = logging.getLogger("shopify_admin")

ORDER_GID_PREFIX = "gid://shopify/Order/"

GET_ORDER_QUERY = """#graphql
query getOrder($id: ID!) {
  order(id: $id) {
    name
    customer {
      firstName
      phone
    }
  }
}"""


class OrderLookupError(RuntimeError):
    pass


def to_order_gid(order_id: str | int) -> str:
    text = str(order_id).strip()
    if text.startswith("gid://"):
        return text
    return f"{ORDER_GID_PREFIX}{text}"


class ShopifyAdminClient:
    def __init__(
        self,
        *,
        shop: str,
        access_token: str,
        api_version: str = "2024-07",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._shop = shop
        self._access_token = access_token
        self._api_version = api_version
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def graphql_url(self) -> str:
        return f"https://{self._shop}/admin/api/{self._api_version}/graphql.json"

    def graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "X-Shopify-Access-Token": self._access_token,
            "Content-Type": "application/json",
        }
        try:
            resp = self._session.post(
                self.graphql_url,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise OrderLookupError(f"Admin API request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise OrderLookupError(f"Admin API HTTP {resp.status_code}: {resp.text[:300]}")

        try:
            data = resp.json()
        except ValueError as e:
            raise OrderLookupError("Admin API returned a non-JSON body") from e

        if data.get("errors"):
            raise OrderLookupError(f"Admin API errors: {data['errors']}")
        return data.get("data") or {}

    def get_order(self, order_id: str | int) -> OrderDetails:
        data = self.graphql(GET_ORDER_QUERY, {"id": to_order_gid(order_id)})
        order = data.get("order")
        if not order:
            raise OrderLookupError(f"Order not found: {order_id}")

        customer = order.get("customer") or {}
        return OrderDetails(
            name=order.get("name") or "",
            customer_first_name=customer.get("firstName"),
            customer_phone=customer.get("phone"),
        )

    async def fetch_order_by_gid(self, order_id: str) -> OrderDetails:
        return await run_in_threadpool(self.get_order, order_id)


def build_order_lookup(db: Session, shop: str, settings: AppSettings) -> Optional[ShopifyAdminClient]:
    """
    Admin client for `shop`, or None when the shop has no stored session.
    """
    session = get_shop_session(db, shop=shop)
    if session is None:
        logger.warning("No admin session stored for %s", shop)
        return None
    return ShopifyAdminClient(
        shop=shop,
        access_token=session.access_token,
        api_version=settings.shopify_api_version,
        timeout=settings.http_timeout_seconds,
    )

from __future__ import annotations

from unittest import mock

import pytest
import requests

from conftest import SHOP
from order_notifier.config import load_app_settings
from order_notifier.services.shop_sessions import save_shop_session
from order_notifier.shopify.admin_client import (
    GET_ORDER_QUERY,
    OrderLookupError,
    ShopifyAdminClient,
    build_order_lookup,
    to_order_gid,
)


def make_client(status_code: int = 200, json_body=None, text: str = "") -> tuple[ShopifyAdminClient, mock.Mock]:
    session = mock.Mock(spec=requests.Session)
    response = session.post.return_value
    response.status_code = status_code
    response.text = text
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    client = ShopifyAdminClient(shop=SHOP, access_token="shpat_123", session=session, timeout=5)
    return client, session


def test_to_order_gid() -> None:
    assert to_order_gid(450789469) == "gid://shopify/Order/450789469"
    assert to_order_gid("gid://shopify/Order/1") == "gid://shopify/Order/1"


def test_get_order_queries_by_gid() -> None:
    client, session = make_client(
        json_body={
            "data": {
                "order": {
                    "name": "#1001",
                    "customer": {"firstName": "Asha", "phone": "+919876543210"},
                }
            }
        }
    )

    details = client.get_order("450789469")

    assert details.name == "#1001"
    assert details.customer_first_name == "Asha"
    assert details.customer_phone == "+919876543210"
    call = session.post.call_args
    assert call.args[0] == f"https://{SHOP}/admin/api/2024-07/graphql.json"
    assert call.kwargs["headers"]["X-Shopify-Access-Token"] == "shpat_123"
    assert call.kwargs["json"] == {
        "query": GET_ORDER_QUERY,
        "variables": {"id": "gid://shopify/Order/450789469"},
    }
    assert call.kwargs["timeout"] == 5


def test_order_without_customer() -> None:
    client, _ = make_client(json_body={"data": {"order": {"name": "#1002", "customer": None}}})

    details = client.get_order(1002)

    assert details.customer_first_name is None
    assert details.customer_phone is None


@pytest.mark.parametrize(
    "status_code, json_body",
    [
        (401, None),
        (200, None),
        (200, {"errors": [{"message": "Throttled"}]}),
        (200, {"data": {"order": None}}),
    ],
)
def test_lookup_failures_raise(status_code, json_body) -> None:
    client, _ = make_client(status_code=status_code, json_body=json_body, text="denied")

    with pytest.raises(OrderLookupError):
        client.get_order(1)


def test_transport_error_raises_lookup_error() -> None:
    client, session = make_client()
    session.post.side_effect = requests.ConnectionError("refused")

    with pytest.raises(OrderLookupError, match="request failed"):
        client.get_order(1)


@pytest.mark.asyncio
async def test_fetch_order_by_gid_runs_sync_lookup() -> None:
    client, _ = make_client(json_body={"data": {"order": {"name": "#7", "customer": {}}}})

    details = await client.fetch_order_by_gid("7")

    assert details.name == "#7"


def test_build_order_lookup_requires_stored_session(db) -> None:
    settings = load_app_settings()
    assert build_order_lookup(db, SHOP, settings) is None

    save_shop_session(db, shop=SHOP, access_token="shpat_123")
    lookup = build_order_lookup(db, SHOP, settings)

    assert isinstance(lookup, ShopifyAdminClient)
    assert lookup.graphql_url.startswith(f"https://{SHOP}/admin/api/")

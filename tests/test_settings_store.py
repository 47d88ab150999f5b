from __future__ import annotations

from conftest import SHOP
from order_notifier.services.settings_store import MASKED_TOKEN, SettingsStore, mask_token
from order_notifier.services.shop_sessions import delete_shop_session, get_shop_session, save_shop_session


def save(store: SettingsStore, **overrides):
    values = {
        "phone_id": "1234567890",
        "access_token": "EAAG-secret-token",
        "confirmation_template": "order_confirmation",
        "fulfillment_template": "order_shipped",
    }
    return store.upsert(SHOP, **(values | overrides))


def test_get_unknown_shop_is_none(db) -> None:
    assert SettingsStore(db).get(SHOP) is None


def test_upsert_creates_then_updates_single_row(db) -> None:
    store = SettingsStore(db)

    save(store)
    updated = save(store, confirmation_template="order_received")

    assert updated.confirmation_template == "order_received"
    assert store.get(SHOP) == updated


def test_upsert_stores_blank_values_as_none(db) -> None:
    settings = save(SettingsStore(db), phone_id="  ", fulfillment_template="")

    assert settings.phone_id is None
    assert settings.fulfillment_template is None


def test_upsert_ignores_masked_and_empty_tokens(db) -> None:
    store = SettingsStore(db)
    save(store)

    assert save(store, access_token=MASKED_TOKEN).access_token == "EAAG-secret-token"
    assert save(store, access_token="").access_token == "EAAG-secret-token"
    assert save(store, access_token=None).access_token == "EAAG-secret-token"
    assert save(store, access_token="EAAG-rotated").access_token == "EAAG-rotated"


def test_mask_token() -> None:
    assert mask_token("EAAG-secret-token") == MASKED_TOKEN
    assert mask_token(None) == ""


def test_shop_sessions_round_trip(db) -> None:
    save_shop_session(db, shop=SHOP, access_token="shpat_1", scope="read_orders")
    save_shop_session(db, shop=SHOP, access_token="shpat_2")

    session = get_shop_session(db, shop=SHOP)
    assert session is not None
    assert session.access_token == "shpat_2"

    assert delete_shop_session(db, shop=SHOP) is True
    assert delete_shop_session(db, shop=SHOP) is False
    assert get_shop_session(db, shop=SHOP) is None

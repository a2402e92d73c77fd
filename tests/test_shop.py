"""Tests for the Storefront controller."""

from unittest.mock import Mock

import pytest

from storefront import state as st
from storefront.client import CatalogClient, CatalogClientError
from storefront.models import PLACEHOLDER_IMAGE, Product, ProductDraft
from storefront.shop import Storefront
from storefront.storage import MemoryStorage


class TestStorefront:
    """Test cases for Storefront."""

    @pytest.fixture
    def alerts(self):
        return []

    @pytest.fixture
    def storage(self):
        return MemoryStorage()

    @pytest.fixture
    def shop(self, catalog, storage, alerts):
        return Storefront(catalog, storage, alert=lambda message, ok=True: alerts.append((message, ok)))

    def test_refresh_loads_catalog(self, shop, catalog):
        catalog.create_product({"name": "Hoe", "price": 15, "category": "Tools"})
        assert shop.refresh() is True
        assert [p.name for p in shop.state.products] == ["Hoe"]
        assert st.categories(shop.state.products) == ["All", "Tools"]

    def test_failed_refresh_keeps_previous_products(self, storage):
        client = Mock(spec=CatalogClient)
        client.list_products.side_effect = [[Product(id="1", name="Hoe", price=15)], CatalogClientError("down")]
        shop = Storefront(client, storage)

        assert shop.refresh() is True
        assert shop.refresh() is False
        assert [p.name for p in shop.state.products] == ["Hoe"]

    def test_submit_creates_then_refreshes(self, shop, alerts):
        draft = ProductDraft(name="Hoe", price=15, category="Tools")
        assert shop.submit_product(draft) is True
        assert [p.name for p in shop.state.products] == ["Hoe"]
        assert shop.state.draft == ProductDraft()
        assert alerts[-1] == ("Added!", True)

    def test_submit_updates_while_editing(self, shop, catalog, alerts):
        hoe = catalog.create_product({"name": "Hoe", "price": 15, "category": "Tools"})
        shop.refresh()
        shop.apply(st.start_edit, hoe)

        draft = shop.state.draft.model_copy(update={"price": 18.0})
        assert shop.submit_product(draft) is True
        assert shop.state.editing_id is None
        assert [(p.id, p.price) for p in shop.state.products] == [(hoe.id, 18.0)]
        assert alerts[-1] == ("Updated!", True)

    def test_failed_submit_keeps_form(self, shop, alerts):
        draft = ProductDraft(name="Hoe")
        assert shop.submit_product(draft) is False
        assert shop.state.draft == draft
        assert alerts[-1][1] is False
        assert shop.state.products == ()

    def test_delete_then_refresh(self, shop, catalog):
        hoe = catalog.create_product({"name": "Hoe", "price": 15})
        shop.refresh()
        assert shop.delete_product(hoe.id) is True
        assert shop.state.products == ()
        # already gone: still succeeds
        assert shop.delete_product(hoe.id) is True

    def test_cart_is_mirrored_to_storage(self, shop, storage, alerts):
        hoe = Product(id="1", name="Hoe", price=15)
        shop.add_to_cart(hoe)
        assert storage.data["cart"] == [hoe.model_dump()]
        assert alerts[-1] == ("Added to cart!", True)

        shop.apply(st.remove_from_cart, 0)
        assert storage.data["cart"] == []

    def test_state_restored_from_storage(self, catalog):
        storage = MemoryStorage({"cart": [{"id": "1", "name": "Hoe", "price": 15}], "user": {"name": "jane", "role": "user"}})
        shop = Storefront(catalog, storage)
        assert [line.name for line in shop.state.cart] == ["Hoe"]
        assert shop.state.session.name == "jane"

    def test_place_order(self, shop, storage, alerts):
        shop.add_to_cart(Product(id="a", name="A", price=10))
        shop.add_to_cart(Product(id="b", name="B", price=5.5))
        assert shop.place_order("Jane Farmer", "The Barn") is True
        assert alerts[-1] == ("Order placed for Jane Farmer! Total: $15.50", True)
        assert shop.state.cart == ()
        assert storage.data["cart"] == []

    def test_place_order_with_empty_cart(self, shop, alerts):
        assert shop.place_order("Jane Farmer", "The Barn") is False
        assert alerts[-1] == ("Your cart is empty.", False)

    def test_sign_out_clears_stored_session(self, shop, storage):
        shop.apply(st.sign_in, "admin", "123")
        assert storage.data["user"]["role"] == "admin"
        shop.apply(st.sign_out)
        assert "user" not in storage.data

    def test_image_placeholder(self, storage):
        client = Mock(spec=CatalogClient)
        shop = Storefront(client, storage)
        hoe = Product(id="1", name="Hoe", price=15, image="https://example.com/hoe.jpg")

        client.image_loads.return_value = True
        assert shop.image_for(hoe) == "https://example.com/hoe.jpg"
        client.image_loads.return_value = False
        assert shop.image_for(hoe) == PLACEHOLDER_IMAGE

    def test_malformed_catalog_keeps_previous_products(self, storage):
        session = Mock()
        good = [{"id": "1", "name": "Hoe", "price": 15}]
        bad = [{"id": "2", "name": "Rake", "price": None}]
        session.request.side_effect = [
            Mock(status_code=200, json=Mock(return_value=good)),
            Mock(status_code=200, json=Mock(return_value=bad)),
        ]
        shop = Storefront(CatalogClient(session=session), storage)

        assert shop.refresh() is True
        assert shop.refresh() is False
        assert [p.name for p in shop.state.products] == ["Hoe"]

    def test_buy_now_alerts_only_when_adding(self, shop, alerts):
        hoe = Product(id="1", name="Hoe", price=15)
        shop.buy_now(hoe)
        assert alerts == [("Added to cart!", True)]
        assert isinstance(shop.state.view, st.CheckoutView)

        shop.buy_now(hoe)
        assert len(alerts) == 1
        assert len(shop.state.cart) == 1

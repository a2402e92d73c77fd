# tests/test_client.py
from unittest.mock import Mock

import pytest
import requests

from storefront.client import CatalogClient, CatalogClientError

def test_crud_round_trip(catalog):
    created = catalog.create_product({"name": "Hoe", "price": 15, "category": "Tools"})
    assert created.id
    assert [p.name for p in catalog.list_products()] == ["Hoe"]

    updated = catalog.update_product(created.id, {"price": 16.5})
    assert updated.price == 16.5
    assert catalog.get_product(created.id).price == 16.5

    assert catalog.delete_product(created.id) == {"message": "Product deleted"}
    assert catalog.list_products() == []

def test_error_status_raises(catalog):
    with pytest.raises(CatalogClientError) as exc:
        catalog.update_product("missing", {"price": 1})
    assert exc.value.status_code == 404
    assert "product not found" in str(exc.value)

def test_validation_error_raises(catalog):
    with pytest.raises(CatalogClientError) as exc:
        catalog.create_product({"name": "Hoe"})
    assert exc.value.status_code == 422

def test_transport_failure_raises():
    session = Mock()
    session.request.side_effect = requests.ConnectionError("connection refused")
    c = CatalogClient(base_url="http://127.0.0.1:1", session=session)
    with pytest.raises(CatalogClientError) as exc:
        c.list_products()
    assert exc.value.status_code is None

def test_base_url_trailing_slash():
    session = Mock()
    session.request.return_value = Mock(status_code=200, json=Mock(return_value=[]))
    c = CatalogClient(base_url="http://shop.example.com/", timeout=3, session=session)
    assert c.list_products() == []
    session.request.assert_called_once_with("GET", "http://shop.example.com/api/products", timeout=3)

def test_image_loads():
    session = Mock()
    c = CatalogClient(session=session)

    session.head.return_value = Mock(status_code=200)
    assert c.image_loads("https://example.com/hoe.jpg") is True

    session.head.return_value = Mock(status_code=404)
    assert c.image_loads("https://example.com/missing.jpg") is False

    session.head.side_effect = requests.Timeout("slow")
    assert c.image_loads("https://example.com/slow.jpg") is False

    assert c.image_loads("") is False
    assert c.image_loads(None) is False

def test_malformed_product_raises():
    session = Mock()
    session.request.return_value = Mock(status_code=200, json=Mock(return_value=[{"id": "1", "name": "Hoe", "price": None}]))
    c = CatalogClient(session=session)
    with pytest.raises(CatalogClientError):
        c.list_products()
    session.request.return_value = Mock(status_code=200, json=Mock(return_value={"id": "1"}))
    with pytest.raises(CatalogClientError):
        c.get_product("1")

def test_non_list_catalog_raises():
    session = Mock()
    session.request.return_value = Mock(status_code=200, json=Mock(return_value={"detail": "nope"}))
    with pytest.raises(CatalogClientError):
        CatalogClient(session=session).list_products()

def test_non_json_body_raises():
    session = Mock()
    session.request.return_value = Mock(status_code=200, json=Mock(side_effect=ValueError("not json")))
    with pytest.raises(CatalogClientError) as exc:
        CatalogClient(session=session).list_products()
    assert exc.value.status_code == 200

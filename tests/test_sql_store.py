"""Tests for the SQLAlchemy-backed product collection."""

import pytest
from fastapi.testclient import TestClient

from catalog_service.config import ServiceSettings
from catalog_service.database import SqlProductStore, build_store, InMemoryProductStore, mask_url, new_product_id
from catalog_service.errors import ServiceUnavailable
from catalog_service.main import create_app


def _product(name, price, **extra):
    return {"id": new_product_id(), "name": name, "price": price, **extra}


class TestSqlProductStore:
    """Test cases for SqlProductStore."""

    def test_insert_and_list_in_insertion_order(self, sql_store):
        a = sql_store.insert(_product("Hoe", 15, category="Tools"))
        b = sql_store.insert(_product("Seeds", 2.5))

        listed = sql_store.list()
        assert [p["id"] for p in listed] == [a["id"], b["id"]]
        assert listed[0]["category"] == "Tools"
        assert listed[1]["category"] is None

    def test_get(self, sql_store):
        p = sql_store.insert(_product("Hoe", 15))
        assert sql_store.get(p["id"]) == p
        assert sql_store.get("missing") is None

    def test_update_sets_given_fields(self, sql_store):
        p = sql_store.insert(_product("Hoe", 15, description="Sturdy"))
        updated = sql_store.update(p["id"], {"price": 18.0, "category": "Tools"})
        assert updated["price"] == 18.0
        assert updated["category"] == "Tools"
        assert updated["description"] == "Sturdy"
        assert sql_store.update("missing", {"price": 1}) is None

    def test_delete(self, sql_store):
        p = sql_store.insert(_product("Hoe", 15))
        assert sql_store.delete(p["id"]) is True
        assert sql_store.delete(p["id"]) is False
        assert sql_store.list() == []

    def test_unreachable_database(self, tmp_path):
        store = SqlProductStore(f"sqlite:///{tmp_path}/missing/dir/store.db")
        with pytest.raises(ServiceUnavailable):
            store.initialize()
        with pytest.raises(ServiceUnavailable):
            store.list()

    def test_api_on_sql_store(self, sql_store):
        client = TestClient(create_app(store=sql_store, settings=ServiceSettings(database_url="")))
        pid = client.post("/api/products", json={"name": "Hoe", "price": 15, "category": "Tools"}).json()["id"]
        assert client.put(f"/api/products/{pid}", json={"price": 16}).json()["price"] == 16
        assert [p["name"] for p in client.get("/api/products").json()] == ["Hoe"]
        assert client.delete(f"/api/products/{pid}").status_code == 200
        assert client.get("/api/products").json() == []


def test_build_store():
    assert isinstance(build_store(""), InMemoryProductStore)
    assert isinstance(build_store("sqlite://"), SqlProductStore)


def test_mask_url():
    assert mask_url("postgresql://farm:secret@db:5432/farm") == "postgresql://farm:***@db:5432/farm"
    assert mask_url("sqlite:///farm.db") == "sqlite:///farm.db"

import pytest
from fastapi.testclient import TestClient

from catalog_service.config import ServiceSettings
from catalog_service.database import InMemoryProductStore, SqlProductStore
from catalog_service.main import create_app
from storefront.client import CatalogClient


@pytest.fixture
def store():
    return InMemoryProductStore()


@pytest.fixture
def app(store):
    return create_app(store=store, settings=ServiceSettings(database_url=""))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def sql_store():
    s = SqlProductStore("sqlite://")
    s.initialize()
    yield s
    s.close()


@pytest.fixture
def catalog(client):
    """Storefront SDK talking to the in-process app."""
    return CatalogClient(base_url="http://testserver", session=client)

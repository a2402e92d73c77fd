# storefront/client.py
import logging
from typing import Any, Dict, List, Optional

import httpx
import requests
from pydantic import ValidationError

from .models import Product

logger = logging.getLogger(__name__)


class CatalogClientError(Exception):
    """Any failed call to the catalog service, whatever the cause."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _detail(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


def _product(data: Any) -> Product:
    try:
        return Product.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected product in response: {e}")
        raise CatalogClientError(f"malformed product in response: {e}") from e


class CatalogClient:
    def __init__(self, base_url: str = "http://127.0.0.1:5000", timeout: float = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # anything with a requests-style request() works here (tests pass a TestClient)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except (requests.RequestException, httpx.HTTPError) as e:
            logger.error(f"{method} {url} failed: {e}")
            raise CatalogClientError(f"{method} {path} failed: {e}") from e
        if r.status_code >= 400:
            detail = _detail(r)
            logger.error(f"{method} {url} returned {r.status_code}: {detail}")
            raise CatalogClientError(f"HTTP {r.status_code}: {detail}", status_code=r.status_code)
        try:
            return r.json()
        except ValueError as e:
            logger.error(f"{method} {url} returned a non-JSON body")
            raise CatalogClientError(f"{method} {path} returned a non-JSON body", status_code=r.status_code) from e

    # Products
    def list_products(self) -> List[Product]:
        data = self._request("GET", "/api/products")
        if not isinstance(data, list):
            raise CatalogClientError(f"expected a list of products, got {type(data).__name__}")
        return [_product(p) for p in data]

    def get_product(self, product_id: str) -> Product:
        return _product(self._request("GET", f"/api/products/{product_id}"))

    def create_product(self, fields: Dict[str, Any]) -> Product:
        return _product(self._request("POST", "/api/products", json=fields))

    def update_product(self, product_id: str, fields: Dict[str, Any]) -> Product:
        return _product(self._request("PUT", f"/api/products/{product_id}", json=fields))

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/products/{product_id}")

    # Async update (used to demo racing admins)
    async def update_product_async(self, product_id: str, fields: Dict[str, Any]) -> Product:
        url = f"{self.base_url}/api/products/{product_id}"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                r = await client.put(url, json=fields)
            except httpx.HTTPError as e:
                raise CatalogClientError(f"PUT {url} failed: {e}") from e
        if r.status_code >= 400:
            raise CatalogClientError(f"HTTP {r.status_code}: {_detail(r)}", status_code=r.status_code)
        try:
            data = r.json()
        except ValueError as e:
            raise CatalogClientError(f"PUT {url} returned a non-JSON body", status_code=r.status_code) from e
        return _product(data)

    # Images
    def image_loads(self, url: Optional[str]) -> bool:
        if not url:
            return False
        try:
            r = self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug(f"Image {url} unreachable: {e}")
            return False
        return r.status_code < 400

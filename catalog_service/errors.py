# catalog_service/errors.py
from typing import Optional


class CatalogError(Exception):
    """Base class for failures surfaced by the catalog service."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(CatalogError):
    status_code = 422


class NotFound(CatalogError):
    status_code = 404

    def __init__(self, product_id: Optional[str] = None):
        super().__init__("product not found")
        self.product_id = product_id


class ServiceUnavailable(CatalogError):
    status_code = 503

    def __init__(self, detail: str = "datastore unavailable"):
        super().__init__(detail)

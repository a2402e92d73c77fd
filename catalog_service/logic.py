import logging
from typing import Any, Dict, List

from .core import ProductIn, ProductUpdate, REQUIRED_FIELDS, _make_product_dict
from .database import ProductStore, new_product_id
from .errors import NotFound, ValidationError

# This file contains the core logic for the product endpoints.

logger = logging.getLogger(__name__)

def list_products_logic(store: ProductStore) -> List[Dict[str, Any]]:
    return store.list()

def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.get(product_id)
    if p is None:
        raise NotFound(product_id)
    return p

def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    pid = new_product_id()
    product = store.insert(_make_product_dict(pid, payload))
    logger.info(f"Created product {pid} ({product['name']!r})")
    return product

def update_product_logic(store: ProductStore, product_id: str, payload: ProductUpdate) -> Dict[str, Any]:
    # Only the fields the caller sent are written
    fields = payload.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in fields and fields[key] is None:
            raise ValidationError(f"{key} may not be null")

    product = store.update(product_id, fields)
    if product is None:
        raise NotFound(product_id)
    logger.info(f"Updated product {product_id} fields={sorted(fields)}")
    return product

def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, str]:
    # Deleting an unknown id is a no-op success
    if store.delete(product_id):
        logger.info(f"Deleted product {product_id}")
    else:
        logger.debug(f"Delete of unknown product {product_id} ignored")
    return {"message": "Product deleted"}

# storefront/shop.py
import logging
from typing import Callable, Optional

from . import state as st
from .client import CatalogClient, CatalogClientError
from .models import PLACEHOLDER_IMAGE, Product, ProductDraft
from .state import AppState, CheckoutError
from .storage import Storage

logger = logging.getLogger(__name__)


class Storefront:
    """Runs state transitions against the catalog service and local storage.

    Failures are logged and reported through ``alert``; the previous state
    is kept as it was.
    """

    def __init__(self, client: CatalogClient, storage: Storage, alert: Optional[Callable[..., None]] = None):
        self.client = client
        self.storage = storage
        self.alert = alert or (lambda message, ok=True: logger.info(message))
        self.state: AppState = storage.load()

    def apply(self, transition: Callable[..., AppState], *args) -> AppState:
        self.state = transition(self.state, *args)
        self.storage.save(self.state)
        return self.state

    # Catalog
    def refresh(self) -> bool:
        try:
            products = self.client.list_products()
        except CatalogClientError as e:
            logger.error(f"Refresh failed, keeping {len(self.state.products)} products: {e}")
            return False
        self.apply(st.with_products, products)
        return True

    def submit_product(self, draft: ProductDraft) -> bool:
        """Create the product, or update it when an edit is in progress."""
        self.apply(st.set_draft, draft)
        editing_id = self.state.editing_id
        try:
            if editing_id:
                self.client.update_product(editing_id, draft.to_payload())
                message = "Updated!"
            else:
                self.client.create_product(draft.to_payload())
                message = "Added!"
        except CatalogClientError as e:
            self.alert(f"Could not save product: {e}", False)
            return False
        self.apply(st.cancel_edit)
        self.alert(message)
        self.refresh()
        return True

    def delete_product(self, product_id: str) -> bool:
        try:
            self.client.delete_product(product_id)
        except CatalogClientError as e:
            self.alert(f"Could not delete product: {e}", False)
            return False
        self.refresh()
        return True

    def image_for(self, product: Product) -> str:
        if self.client.image_loads(product.image):
            return product.image
        return PLACEHOLDER_IMAGE

    # Cart
    def add_to_cart(self, product: Product) -> None:
        self.apply(st.add_to_cart, product)
        self.alert("Added to cart!")

    def buy_now(self, product: Product) -> None:
        before = len(self.state.cart)
        self.apply(st.buy_now, product)
        if len(self.state.cart) > before:
            self.alert("Added to cart!")

    def place_order(self, full_name: str, address: str) -> bool:
        self.apply(st.set_checkout, full_name, address)
        try:
            new_state, message = st.place_order(self.state)
        except CheckoutError as e:
            self.alert(str(e), False)
            return False
        self.apply(lambda _: new_state)
        self.alert(message)
        return True

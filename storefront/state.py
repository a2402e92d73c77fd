"""Storefront application state and its transitions.

The whole client is described by one immutable :class:`AppState`. Every
user action is a pure function ``(state, ...) -> state``; the caller keeps
the returned value. The current page is one of the view dataclasses below,
so rendering dispatches on the view's type rather than comparing strings.

Roles only decide which actions the terminal offers. The catalog service
performs no authorization of its own, so any HTTP client can still call the
mutation endpoints directly.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple, Union

from .models import ROLE_ADMIN, ROLE_USER, Product, ProductDraft, Session

ALL_CATEGORIES = "All"

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "123"
ADMIN_DISPLAY_NAME = "Administrator"


# ---------------------------
# Views
# ---------------------------
@dataclass(frozen=True)
class StoreView:
    pass


@dataclass(frozen=True)
class DetailsView:
    product: Product


@dataclass(frozen=True)
class CartView:
    pass


@dataclass(frozen=True)
class CheckoutView:
    pass


@dataclass(frozen=True)
class LoginView:
    pass


@dataclass(frozen=True)
class AboutView:
    pass


@dataclass(frozen=True)
class ContactView:
    pass


View = Union[StoreView, DetailsView, CartView, CheckoutView, LoginView, AboutView, ContactView]


@dataclass(frozen=True)
class CheckoutForm:
    full_name: str = ""
    address: str = ""


@dataclass(frozen=True)
class AppState:
    view: View = field(default_factory=StoreView)
    products: Tuple[Product, ...] = ()
    cart: Tuple[Product, ...] = ()
    session: Optional[Session] = None
    search: str = ""
    category: str = ALL_CATEGORIES
    draft: ProductDraft = field(default_factory=ProductDraft)
    editing_id: Optional[str] = None
    checkout: CheckoutForm = field(default_factory=CheckoutForm)


class CheckoutError(ValueError):
    pass


# ---------------------------
# Catalog projection
# ---------------------------
def with_products(state: AppState, products: Iterable[Product]) -> AppState:
    """Replace the local catalog copy wholesale."""
    return replace(state, products=tuple(products))


def set_search(state: AppState, text: str) -> AppState:
    return replace(state, search=text)


def set_category(state: AppState, category: str) -> AppState:
    return replace(state, category=category)


def matches(product: Product, search: str, category: str) -> bool:
    # name match ignores case, category match does not
    if search.lower() not in product.name.lower():
        return False
    return category == ALL_CATEGORIES or product.category == category


def visible_products(state: AppState) -> List[Product]:
    return [p for p in state.products if matches(p, state.search, state.category)]


def categories(products: Iterable[Product]) -> List[str]:
    """``All`` followed by each non-empty category in order of first appearance."""
    seen: List[str] = []
    for p in products:
        if p.category and p.category not in seen:
            seen.append(p.category)
    return [ALL_CATEGORIES] + seen


# ---------------------------
# Navigation
# ---------------------------
def navigate(state: AppState, view: View) -> AppState:
    return replace(state, view=view)


def show_details(state: AppState, product: Product) -> AppState:
    return replace(state, view=DetailsView(product))


# ---------------------------
# Cart & checkout
# ---------------------------
def add_to_cart(state: AppState, product: Product) -> AppState:
    return replace(state, cart=state.cart + (product.model_copy(),))


def buy_now(state: AppState, product: Product) -> AppState:
    if any(line.id == product.id for line in state.cart):
        return replace(state, view=CheckoutView())
    return replace(add_to_cart(state, product), view=CheckoutView())


def remove_from_cart(state: AppState, index: int) -> AppState:
    return replace(state, cart=tuple(line for i, line in enumerate(state.cart) if i != index))


def cart_total(cart: Iterable[Product]) -> float:
    return sum(line.price for line in cart)


def format_price(amount: float) -> str:
    return f"{amount:.2f}"


def set_checkout(state: AppState, full_name: str, address: str) -> AppState:
    return replace(state, checkout=CheckoutForm(full_name=full_name, address=address))


def place_order(state: AppState) -> Tuple[AppState, str]:
    """Simulate placing an order with the current checkout form.

    Nothing is sent anywhere: the confirmation message is returned and the
    cart and form are emptied.
    """
    if not state.cart:
        raise CheckoutError("Your cart is empty.")
    form = state.checkout
    if not form.full_name.strip() or not form.address.strip():
        raise CheckoutError("Full name and address are required.")

    total = format_price(cart_total(state.cart))
    message = f"Order placed for {form.full_name.strip()}! Total: ${total}"
    new_state = replace(state, cart=(), checkout=CheckoutForm(), view=StoreView())
    return new_state, message


# ---------------------------
# Mock session
# ---------------------------
def sign_in(state: AppState, username: str, password: str) -> AppState:
    if username == ADMIN_USERNAME and password == ADMIN_PASSWORD:
        session = Session(name=ADMIN_DISPLAY_NAME, role=ROLE_ADMIN)
    else:
        session = Session(name=username, role=ROLE_USER)
    return replace(state, session=session, view=StoreView())


def sign_out(state: AppState) -> AppState:
    return replace(state, session=None, view=StoreView())


def is_admin(state: AppState) -> bool:
    return state.session is not None and state.session.is_admin


# ---------------------------
# Inventory form
# ---------------------------
def start_edit(state: AppState, product: Product) -> AppState:
    return replace(state, draft=ProductDraft.from_product(product), editing_id=product.id)


def set_draft(state: AppState, draft: ProductDraft) -> AppState:
    return replace(state, draft=draft)


def cancel_edit(state: AppState) -> AppState:
    return replace(state, draft=ProductDraft(), editing_id=None)

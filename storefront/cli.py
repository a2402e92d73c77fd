# storefront/cli.py
import math
import sys
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from . import state as st
from .client import CatalogClient
from .config import get_settings, setup_logging
from .models import Product, ProductDraft
from .shop import Storefront
from .state import (
    AboutView, AppState, CartView, CheckoutView, ContactView, DetailsView,
    LoginView, StoreView,
)
from .storage import JsonFileStorage

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#2e7d32 #ffffff',
    'completion-menu.completion.current': 'bg:#66bb6a #000000',
    'scrollbar.background': 'bg:#88aa88',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def alert(message: str, ok: bool = True):
    console.print(show_status(message, ok))


def create_header(state: AppState):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    if state.session:
        who = f"Hi, [bold]{state.session.name}[/bold]"
    else:
        who = "[dim]Not signed in[/dim]"
    header.add_row(
        "🌾 Fabe's [green]Farm[/green]",
        f"🛒 {len(state.cart)} in cart   {who}",
        f"[dim]{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}[/dim]"
    )
    return Panel(header, style="bold green")


def show_products(products: List[Product], admin: bool = False):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="🧺 Shop",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold green",
        show_lines=True
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    if admin:
        table.add_column("ID", style="dim", width=34)

    for i, p in enumerate(products, start=1):
        row = [str(i), p.name, f"${st.format_price(p.price)}", p.category or "-"]
        if admin:
            row.append(p.id)
        table.add_row(*row)
    console.print(table)


def show_store(state: AppState):
    filters = Text()
    filters.append("Category: ", style="bold")
    filters.append(state.category, style="cyan")
    filters.append("   Search: ", style="bold")
    filters.append(state.search or "-", style="cyan")
    console.print(filters)
    show_products(st.visible_products(state), admin=st.is_admin(state))
    if st.is_admin(state) and state.editing_id:
        console.print(Panel.fit(
            f"Editing [bold]{state.draft.name}[/bold] ({state.editing_id})",
            title="🛠️ Inventory Manager", border_style="yellow"
        ))


def show_details(shop: Storefront, product: Product):
    body = Text()
    body.append(f"{product.name}\n", style="bold")
    body.append(f"${st.format_price(product.price)}\n\n", style="bold green")
    body.append(f"{product.display_description}\n\n")
    body.append("Image: ", style="dim")
    body.append(shop.image_for(product), style="dim underline")
    console.print(Panel(body, title=product.category or "Product", border_style="green"))


def show_cart(state: AppState, title: str = "🛒 Your Cart"):
    if not state.cart:
        console.print(Panel("Cart is empty.", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Price", justify="right", width=12)
    for i, line in enumerate(state.cart):
        table.add_row(str(i), line.name, f"${st.format_price(line.price)}")

    total = st.format_price(st.cart_total(state.cart))
    heading = Text()
    heading.append(title, style="bold")
    heading.append(f" - Total: ${total}", style="bold green")
    console.print(Panel(table, title=heading, border_style="blue"))


def show_about():
    console.print(Panel(
        "Established in 1985, Fabe's Farm Store began as a small roadside stand. "
        "Today, we are the trusted source for quality farming equipment and seeds.",
        title="Our Story", border_style="green"
    ))


def show_contact():
    console.print(Panel(
        "[bold]Address:[/bold] The Barn, Springfield, IL 62704\n"
        "[bold]Phone:[/bold] (555) 123-4567\n"
        "[bold]Email:[/bold] support@fabesfarm.com",
        title="Contact Us", border_style="green"
    ))


def render(shop: Storefront):
    state = shop.state
    view = state.view
    if isinstance(view, StoreView):
        show_store(state)
    elif isinstance(view, DetailsView):
        show_details(shop, view.product)
    elif isinstance(view, CartView):
        show_cart(state)
    elif isinstance(view, CheckoutView):
        show_cart(state, title="✅ Checkout")
    elif isinstance(view, AboutView):
        show_about()
    elif isinstance(view, ContactView):
        show_contact()
    elif isinstance(view, LoginView):
        console.print(Panel.fit("Try [bold]admin[/bold] / [bold]123[/bold] for Admin Tools.", title="Sign In"))


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> float:
    while True:
        raw = Prompt.ask(message, default=None if default is None else str(default))
        try:
            value = float(raw)
        except (TypeError, ValueError):
            console.print("[red]Please enter a valid number.[/red]")
            continue
        if not math.isfinite(value):
            console.print("[red]Please enter a finite number.[/red]")
            continue
        if value < 0:
            console.print("[red]Price cannot be negative.[/red]")
            continue
        return value


def pick_product(products: List[Product], message: str = "Product name or #") -> Optional[Product]:
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return None
    completer = WordCompleter([p.name for p in products] + [p.id for p in products], ignore_case=True)
    choice = prompt_with_autocomplete(message, completer=completer).strip()
    if choice.isdigit() and 1 <= int(choice) <= len(products):
        return products[int(choice) - 1]
    for p in products:
        if choice in (p.id, p.name):
            return p
    alert(f"Could not find product '{choice}'", False)
    return None


def ask_draft(draft: ProductDraft) -> ProductDraft:
    name = ""
    while not name:
        name = prompt_with_autocomplete("Product name", default=draft.name).strip()
    price = ask_float("💰 Price", default=draft.price)
    category = prompt_with_autocomplete("🏷️ Category", default=draft.category).strip()
    description = prompt_with_autocomplete("Description", default=draft.description).strip()
    image = prompt_with_autocomplete("Image URL", default=draft.image).strip()
    return ProductDraft(name=name, price=price, category=category, description=description, image=image)


def with_spinner(fn, *args):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description="Processing...", total=None)
        return fn(*args)


# ---------------------------
# Menu
# ---------------------------
def menu_options(state: AppState):
    options = [
        ("1", "🧺 Shop"),
        ("2", "🔍 Search"),
        ("3", "🏷️ Category"),
        ("4", "ℹ️ Product details"),
        ("5", "🛒 Cart"),
        ("6", "✅ Checkout"),
        ("7", "📖 About"),
        ("8", "📞 Contact"),
        ("9", "👋 Sign out" if state.session else "👤 Sign in"),
        ("r", "🔄 Refresh"),
    ]
    if isinstance(state.view, DetailsView):
        options += [("b", "⚡ Buy now"), ("c", "➕ Add to cart")]
    if isinstance(state.view, CartView) and state.cart:
        options += [("x", "➖ Remove from cart")]
    if st.is_admin(state):
        options += [("a", "🛠️ Add / update product"), ("e", "✏️ Edit product"), ("d", "🗑️ Delete product")]
        if state.editing_id:
            options += [("n", "↩️ Cancel edit")]
    options.append(("q", "Quit"))
    return options


def handle(shop: Storefront, choice: str):
    state = shop.state

    if choice == "1":
        shop.apply(st.navigate, StoreView())

    elif choice == "2":
        shop.apply(st.set_search, prompt_with_autocomplete("Search products", default=state.search))
        shop.apply(st.navigate, StoreView())

    elif choice == "3":
        cats = st.categories(state.products)
        picked = prompt_with_autocomplete("Category", completer=WordCompleter(cats), default=state.category).strip()
        if picked in cats:
            shop.apply(st.set_category, picked)
        else:
            alert(f"Could not find category '{picked}'", False)
        shop.apply(st.navigate, StoreView())

    elif choice == "4":
        product = pick_product(st.visible_products(state))
        if product:
            shop.apply(st.show_details, product)

    elif choice == "5":
        shop.apply(st.navigate, CartView())

    elif choice == "6":
        shop.apply(st.navigate, CheckoutView())
        render(shop)
        if not shop.state.cart:
            return
        console.print("[bold]Shipping Info[/bold]")
        full_name = Prompt.ask("Full Name", default=state.checkout.full_name or None)
        address = Prompt.ask("Address", default=state.checkout.address or None)
        if Confirm.ask("Confirm order?"):
            shop.place_order(full_name or "", address or "")

    elif choice == "7":
        shop.apply(st.navigate, AboutView())

    elif choice == "8":
        shop.apply(st.navigate, ContactView())

    elif choice == "9":
        if state.session:
            shop.apply(st.sign_out)
        else:
            shop.apply(st.navigate, LoginView())
            render(shop)
            username = Prompt.ask("Username")
            password = Prompt.ask("Password", password=True)
            shop.apply(st.sign_in, username, password)

    elif choice == "r":
        if not with_spinner(shop.refresh):
            alert("Could not load products", False)

    elif choice == "b" and isinstance(state.view, DetailsView):
        shop.buy_now(state.view.product)

    elif choice == "c" and isinstance(state.view, DetailsView):
        shop.add_to_cart(state.view.product)

    elif choice == "x" and isinstance(state.view, CartView):
        index = IntPrompt.ask("Remove line #", default=0)
        shop.apply(st.remove_from_cart, index)

    elif choice in ("a", "e", "d", "n") and st.is_admin(state):
        if choice == "a":
            draft = ask_draft(state.draft)
            with_spinner(shop.submit_product, draft)
        elif choice == "e":
            product = pick_product(st.visible_products(state), "Edit which product")
            if product:
                shop.apply(st.start_edit, product)
                draft = ask_draft(shop.state.draft)
                with_spinner(shop.submit_product, draft)
        elif choice == "d":
            product = pick_product(st.visible_products(state), "Delete which product")
            if product and Confirm.ask(f"Delete {product.name}?"):
                with_spinner(shop.delete_product, product.id)
        else:
            shop.apply(st.cancel_edit)

    else:
        alert(f"Could not handle option '{choice}'", False)


def menu(shop: Storefront):
    console.clear()
    if not with_spinner(shop.refresh):
        alert("Could not load products", False)

    while True:
        console.print(create_header(shop.state))
        render(shop)

        options = menu_options(shop.state)
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([key for key, _ in options] + ["quit", "exit"])
        ).strip().lower()

        if choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for shopping at Fabe's Farm! 👋[/bold green]", title="Goodbye"))
                return
            continue

        handle(shop, choice)

        console.print()
        console.rule(style="dim")


def run():
    settings = get_settings()
    setup_logging(settings)
    client = CatalogClient(base_url=settings.api_url, timeout=settings.timeout)
    shop = Storefront(client, JsonFileStorage(settings.storage_path), alert=alert)
    try:
        menu(shop)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    run()

#!/usr/bin/env python
from storefront import state as st
from storefront.client import CatalogClient

def main():
    c = CatalogClient(base_url="http://127.0.0.1:5000")

    # -----------------------------
    # Stock the shelves
    # -----------------------------
    print("Adding products...")
    hoe = c.create_product({"name": "Hoe", "price": 15, "category": "Tools", "image": "https://example.com/hoe.jpg"})
    seeds = c.create_product({"name": "Tomato Seeds", "price": 5.5, "category": "Seeds"})
    print(hoe)
    print(seeds)

    # -----------------------------
    # Browse
    # -----------------------------
    state = st.with_products(st.AppState(), c.list_products())
    print("\nCategories:", st.categories(state.products))

    state = st.set_category(state, "Tools")
    print("Tools:", [p.name for p in st.visible_products(state)])

    state = st.set_search(st.set_category(state, st.ALL_CATEGORIES), "seed")
    print("Search 'seed':", [p.name for p in st.visible_products(state)])

    # -----------------------------
    # Cart & checkout
    # -----------------------------
    state = st.add_to_cart(state, hoe)
    state = st.add_to_cart(state, seeds)
    print("\nCart total:", st.format_price(st.cart_total(state.cart)))

    state = st.set_checkout(state, "Jane Farmer", "The Barn, Springfield")
    state, message = st.place_order(state)
    print(message)

    # -----------------------------
    # Admin edits
    # -----------------------------
    print("\nUpdating price of the hoe...")
    print(c.update_product(hoe.id, {"price": 17.25}))

    print("\nDeleting the seeds (twice)...")
    print(c.delete_product(seeds.id))
    print(c.delete_product(seeds.id))

    print("\nCatalog now:")
    for p in c.list_products():
        print(" -", p.name, st.format_price(p.price), p.category)

if __name__ == "__main__":
    main()

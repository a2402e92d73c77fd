import asyncio
from storefront.client import CatalogClient, CatalogClientError

async def simulate_edit(client, admin, product_id, price):
    try:
        p = await client.update_product_async(product_id, {"price": price})
        print(f"✅ {admin} set price to {p.price}")
    except CatalogClientError as e:
        print(f"❌ {admin} edit failed: {e}")

async def main():
    c = CatalogClient(base_url="http://127.0.0.1:5000")

    product = c.create_product({"name": "Wheelbarrow", "price": 80, "category": "Tools"})
    print(f"\n🛒 Created product: {product}")

    # Two admins editing the same item race; whichever write lands last wins
    print("\n⚡ Simulating concurrent edits...")
    await asyncio.gather(
        simulate_edit(c, "admin-1", product.id, 75),
        simulate_edit(c, "admin-2", product.id, 90),
    )

    print("\n📦 Final product state:", c.get_product(product.id))

if __name__ == "__main__":
    asyncio.run(main())

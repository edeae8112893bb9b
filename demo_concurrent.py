import asyncio
import os

from sdk.pycatalog import CatalogClient


async def simulate_create(client, label, name):
    try:
        resp = await client.create_product_async(name, 99, "electronics")
        if resp.status_code == 201:
            print(f"✅ {label} created '{name}' (id {resp.json()['id']})")
        elif resp.status_code == 409:
            print(f"❌ {label} rejected: {resp.json()['error']}")
        else:
            print(f"⚠️  {label} unexpected response {resp.status_code}: {resp.text}")
    except Exception as e:
        print(f"❌ {label} unexpected failure: {e}")


async def main():
    c = CatalogClient(base_url=os.getenv("CATALOG_API_URL", "http://127.0.0.1:3000"), api_key="secret-token")

    # Same name, different case, sent at the same time
    print("\n⚡ Simulating concurrent creates...")
    await asyncio.gather(
        simulate_create(c, "client A", "Gaming Monitor"),
        simulate_create(c, "client B", "gaming monitor"),
    )

    print("\n📦 Matching products:", c.list_products(search="gaming monitor"))


if __name__ == "__main__":
    asyncio.run(main())

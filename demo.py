#!/usr/bin/env python
import os

import requests
from sdk.pycatalog import CatalogClient


def main():
    base_url = os.getenv("CATALOG_API_URL", "http://127.0.0.1:3000")
    c = CatalogClient(base_url=base_url, api_key="secret-token")

    print(c.root())

    # -----------------------------
    # List seeded products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nKitchen products that are out of stock...")
    print(c.list_products(category="kitchen", in_stock=False))

    print("\nSecond page, one per page...")
    print(c.list_products(page=2, limit=1))

    # -----------------------------
    # Create, read, update, delete
    # -----------------------------
    print("\nCreating product...")
    created = c.create_product("Desk Lamp", 35, "home", description="LED lamp with dimmer")
    print(created)

    print("\nFetching it back...")
    print(c.get_product(created["id"]))

    print("\nUpdating price (inStock left out, so it is kept)...")
    print(c.update_product(created["id"], "Desk Lamp", 29.5, "home", description="LED lamp with dimmer"))

    print("\nCreating a duplicate name...")
    try:
        c.create_product("desk lamp", 10, "home")
    except requests.exceptions.HTTPError as e:
        print(e.response.status_code, e.response.json())

    print("\nDeleting...")
    print(c.delete_product(created["id"]))

    # -----------------------------
    # Missing token
    # -----------------------------
    print("\nCreating without a token...")
    anonymous = CatalogClient(base_url=base_url)
    try:
        anonymous.create_product("Kettle", 25, "kitchen")
    except requests.exceptions.HTTPError as e:
        print(e.response.status_code, e.response.json())


if __name__ == "__main__":
    main()

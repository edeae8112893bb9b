# sdk/pycatalog.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

    @staticmethod
    def _product_body(name: str, price: float, category: str,
                      description: Optional[str] = None, in_stock: Optional[bool] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": name, "price": price, "category": category}
        if description is not None:
            body["description"] = description
        if in_stock is not None:
            body["inStock"] = in_stock
        return body

    def root(self):
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self, search: Optional[str] = None, category: Optional[str] = None,
                      in_stock: Optional[bool] = None, page: Optional[int] = None, limit: Optional[int] = None):
        params: Dict[str, Any] = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        r = self.session.post(f"{self.base_url}/api/products",
                              json=self._product_body(name, price, category, description, in_stock),
                              timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        r = self.session.put(f"{self.base_url}/api/products/{product_id}",
                             json=self._product_body(name, price, category, description, in_stock),
                             timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (example)
    async def create_product_async(self, name: str, price: float, category: str,
                                   description: Optional[str] = None, in_stock: Optional[bool] = None):
        # returns the raw response so callers can inspect 409s
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(f"{self.base_url}/api/products",
                                     json=self._product_body(name, price, category, description, in_stock),
                                     headers=self._auth_headers())


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product catalog client")
    parser.add_argument("--base-url", default=os.getenv("CATALOG_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--token", default=os.getenv("CATALOG_API_TOKEN", "secret-token"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List, search and paginate products")
    lp.add_argument("--search", help="Substring matched against name or description")
    lp.add_argument("--category", help="Exact category (case-insensitive)")
    lp.add_argument("--in-stock", choices=["true", "false"], help="Filter by stock status")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for cmd in ("create-product", "update-product"):
        sp = subparsers.add_parser(cmd)
        if cmd == "update-product":
            sp.add_argument("--product-id", required=True)
        sp.add_argument("--name", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--description")
        sp.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete-product", help="Delete a product by its ID")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url, api_key=args.token)
    stock = None if getattr(args, "in_stock", None) is None else args.in_stock == "true"

    if args.command == "list-products":
        print(c.list_products(args.search, args.category, stock, args.page, args.limit))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.price, args.category, args.description, stock))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, args.name, args.price, args.category, args.description, stock))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))

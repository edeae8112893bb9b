# catalog_api/database.py
from typing import Any, Dict, Iterable, List, Optional

from .errors import NotFoundError
from .models import Product

# Records present when a fresh store is created.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


class ProductStore:
    """Ordered in-memory product collection.

    Every method is synchronous and never yields, so a caller that checks
    and then writes inside one call stack cannot be interleaved with
    another request on the same event loop.  There is no locking.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = list(products or [])

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(Product(**record) for record in SEED_PRODUCTS)

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        return list(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def find_by_id(self, product_id: str) -> Optional[Product]:
        i = self._index_of(product_id)
        return self._products[i] if i >= 0 else None

    def find_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        term = name.lower()
        for p in self._products:
            if p.name.lower() == term and p.id != exclude_id:
                return p
        return None

    def insert(self, product: Product) -> None:
        # id uniqueness is the caller's job
        self._products.append(product)

    def replace_at(self, product_id: str, product: Product) -> None:
        i = self._index_of(product_id)
        if i < 0:
            raise NotFoundError()
        self._products[i] = product

    def remove(self, product_id: str) -> Product:
        i = self._index_of(product_id)
        if i < 0:
            raise NotFoundError()
        return self._products.pop(i)

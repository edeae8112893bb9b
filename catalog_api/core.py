# catalog_api/core.py
import re
import uuid
from typing import Any, Dict, List, Optional

from .models import Product, ProductPayload

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_int_or_default(raw: Optional[str], default: int) -> int:
    """Read a leading integer from a query string value.

    Trailing characters are ignored ("2abc" -> 2, "3.7" -> 3).  No
    digits at all, or a value of zero, gives ``default``.  Negative
    values are returned unchanged.
    """
    if raw is None:
        return default
    m = _INT_PREFIX.match(raw)
    if not m:
        return default
    return int(m.group(1)) or default


def filter_products(
    products: List[Product],
    search: Optional[str] = None,
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
) -> List[Product]:
    out = products
    if search:
        term = search.lower()
        out = [p for p in out if term in p.name.lower() or term in p.description.lower()]
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if in_stock is not None:
        stock_value = in_stock == "true"
        out = [p for p in out if p.in_stock == stock_value]
    return out


def paginate(products: List[Product], page: int, limit: int) -> Dict[str, Any]:
    start_index = (page - 1) * limit
    end_index = page * limit
    total = len(products)

    result: Dict[str, Any] = {
        "products": [p.to_dict() for p in products[start_index:end_index]],
        "total": total,
        "page": page,
        "limit": limit,
    }
    if end_index < total:
        result["next"] = {"page": page + 1, "limit": limit}
    if start_index > 0:
        result["previous"] = {"page": page - 1, "limit": limit}
    return result


def new_product_id() -> str:
    return str(uuid.uuid4())


def _make_product(product_id: str, payload: ProductPayload, default_in_stock: bool) -> Product:
    return Product(
        id=product_id,
        name=payload.name,
        description=payload.description or "",
        price=payload.price,
        category=payload.category,
        in_stock=default_in_stock if payload.in_stock is None else payload.in_stock,
    )

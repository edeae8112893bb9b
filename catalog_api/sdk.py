# catalog_api/sdk.py
from typing import Any, Dict, Optional

from .core import (
    DEFAULT_LIMIT, DEFAULT_PAGE, _make_product, filter_products,
    new_product_id, paginate, parse_int_or_default,
)
from .database import ProductStore
from .errors import ConflictError, NotFoundError, handler_boundary
from .models import ProductPayload

# Core logic behind every product endpoint.  Nothing here awaits, so
# the duplicate-name check and the write that follows it always run
# back to back.


@handler_boundary("Failed to retrieve products")
def list_products_logic(
    store: ProductStore,
    search: Optional[str] = None,
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    products = filter_products(store.list(), search=search, category=category, in_stock=in_stock)
    return paginate(
        products,
        page=parse_int_or_default(page, DEFAULT_PAGE),
        limit=parse_int_or_default(limit, DEFAULT_LIMIT),
    )


@handler_boundary("Failed to retrieve product")
def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.find_by_id(product_id)
    if p is None:
        raise NotFoundError()
    return p.to_dict()


@handler_boundary("Failed to create product")
def create_product_logic(store: ProductStore, payload: ProductPayload) -> Dict[str, Any]:
    if store.find_by_name(payload.name) is not None:
        raise ConflictError()
    product = _make_product(new_product_id(), payload, default_in_stock=True)
    store.insert(product)
    return product.to_dict()


@handler_boundary("Failed to update product")
def update_product_logic(store: ProductStore, product_id: str, payload: ProductPayload) -> Dict[str, Any]:
    current = store.find_by_id(product_id)
    if current is None:
        raise NotFoundError()
    if store.find_by_name(payload.name, exclude_id=product_id) is not None:
        raise ConflictError()
    # missing inStock keeps whatever the record had
    product = _make_product(product_id, payload, default_in_stock=current.in_stock)
    store.replace_at(product_id, product)
    return product.to_dict()


@handler_boundary("Failed to delete product")
def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    if store.find_by_id(product_id) is None:
        raise NotFoundError()
    removed = store.remove(product_id)
    return {"message": "Product deleted successfully", "product": removed.to_dict()}

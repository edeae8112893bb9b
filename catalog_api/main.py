# catalog_api/main.py
"""
Entrypoint for the product catalog API.

``create_app`` builds a FastAPI application that owns its own
``ProductStore``.  Passing a store in lets tests start from a known
state; otherwise the three seed products are loaded.  The module-level
``app`` can be served directly::

    uvicorn catalog_api.main:app --port 3000
"""

import contextlib
import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .database import ProductStore
from .errors import ApiError
from .filters import RequestContext, filter_chain, log_request, require_token, validate_product
from .logging_config import setup_logging
from .sdk import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, update_product_logic,
)

logger = logging.getLogger("catalog_api")


async def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_file)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server is running on http://localhost:%s", settings.port)
        yield

    # "/api/products/" is an unknown route, not a redirect
    app = FastAPI(title=settings.project_name, lifespan=lifespan, redirect_slashes=False)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore.seeded()

    # ---------------------------
    # Filters & error handlers
    # ---------------------------
    @app.middleware("http")
    async def logging_filter(request: Request, call_next):
        log_request(request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # unknown paths and unsupported methods look the same to callers
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Something went wrong!"})

    mutate_filters = filter_chain(require_token, validate_product)
    delete_filters = filter_chain(require_token)

    # ---------------------------
    # Routes
    # ---------------------------
    @app.get("/")
    async def root():
        return {"message": "Product API is running!"}

    @app.get("/api/products")
    async def list_products(
        search: Optional[str] = None,
        category: Optional[str] = None,
        inStock: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        store: ProductStore = Depends(get_store),
    ):
        return list_products_logic(
            store, search=search, category=category, in_stock=inStock, page=page, limit=limit,
        )

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return get_product_logic(store, product_id)

    @app.post("/api/products", status_code=201)
    async def create_product(
        ctx: RequestContext = Depends(mutate_filters),
        store: ProductStore = Depends(get_store),
    ):
        return create_product_logic(store, ctx.payload)

    @app.put("/api/products/{product_id}")
    async def update_product(
        product_id: str,
        ctx: RequestContext = Depends(mutate_filters),
        store: ProductStore = Depends(get_store),
    ):
        return update_product_logic(store, product_id, ctx.payload)

    @app.delete("/api/products/{product_id}")
    async def delete_product(
        product_id: str,
        ctx: RequestContext = Depends(delete_filters),
        store: ProductStore = Depends(get_store),
    ):
        return delete_product_logic(store, product_id)

    return app


app = create_app()


def run() -> None:
    s = app.state.settings
    uvicorn.run(app, host=s.host, port=s.port, log_level=s.log_level.lower())


if __name__ == "__main__":
    run()

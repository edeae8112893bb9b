# catalog_api/filters.py
"""
Request filters.

A filter looks at a ``RequestContext`` and returns a ``FilterResult``:
either ``forward()`` to let the next filter run, or ``fail(error)`` to
stop the chain.  ``filter_chain`` turns an ordered list of filters into
a FastAPI dependency; the first failing filter's error is raised and
rendered by the app's ``ApiError`` handler.

The logging filter is different: it runs for every request, before
routing, and can never fail the request.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from .errors import ApiError, AuthError, ValidationError
from .models import ProductPayload

request_logger = logging.getLogger("catalog_api.requests")
logger = logging.getLogger("catalog_api.filters")


@dataclass
class RequestContext:
    headers: Mapping[str, str]
    body: Dict[str, Any] = field(default_factory=dict)
    api_token: str = ""
    payload: Optional[ProductPayload] = None


@dataclass
class FilterResult:
    ok: bool
    error: Optional[ApiError] = None

    @classmethod
    def forward(cls) -> "FilterResult":
        return cls(ok=True)

    @classmethod
    def fail(cls, error: ApiError) -> "FilterResult":
        return cls(ok=False, error=error)


Filter = Callable[[RequestContext], FilterResult]


# ---------------------------
# Logging
# ---------------------------
def iso_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_request(method: str, path: str) -> None:
    try:
        request_logger.info("[%s] %s %s", iso_timestamp(), method, path)
    except Exception:
        # a broken log line must never fail the request
        logger.debug("request logging failed", exc_info=True)


# ---------------------------
# Auth
# ---------------------------
def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def require_token(ctx: RequestContext) -> FilterResult:
    token = _bearer_token(ctx.headers.get("authorization"))
    if token is None or token != ctx.api_token:
        return FilterResult.fail(AuthError())
    return FilterResult.forward()


# ---------------------------
# Validation
# ---------------------------
_FIELD_MESSAGES = {
    "name": "Name is required and must be a non-empty string",
    "price": "Price is required and must be a non-negative number",
    "category": "Category is required and must be a non-empty string",
    "description": "Description must be a string",
    "inStock": "inStock must be a boolean",
}


def validate_product(ctx: RequestContext) -> FilterResult:
    try:
        ctx.payload = ProductPayload.model_validate(ctx.body)
    except PydanticValidationError as e:
        field_name = e.errors()[0]["loc"][0]
        return FilterResult.fail(ValidationError(_FIELD_MESSAGES.get(field_name)))
    return FilterResult.forward()


# ---------------------------
# Chain
# ---------------------------
async def _read_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def run_filters(ctx: RequestContext, filters) -> None:
    for f in filters:
        result = f(ctx)
        if not result.ok:
            raise result.error


def filter_chain(*filters: Filter):
    """Build a dependency that runs ``filters`` in order and returns the context."""

    async def dependency(request: Request) -> RequestContext:
        ctx = RequestContext(
            headers=request.headers,
            body=await _read_body(request),
            api_token=request.app.state.settings.api_token,
        )
        run_filters(ctx, filters)
        return ctx

    return dependency

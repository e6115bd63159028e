# app/main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import require_api_key
from .config import get_settings
from .core import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, update_product_logic,
)
from .database import STORE, ProductStore, get_store, seed_store
from .errors import ApiError, ErrorKind, error_envelope, utc_timestamp
from .middleware import AccessLogMiddleware, SecurityHeadersMiddleware
from .models import Principal, ProductFields, ProductQuery
from .observability import setup_logging
from .validation import list_query, product_payload

logger = logging.getLogger(__name__)

AVAILABLE_ROUTES = [
    "GET /",
    "GET /health",
    "GET /api/products",
    "GET /api/products/stats",
    "GET /api/products/:id",
    "POST /api/products",
    "PUT /api/products/:id",
    "DELETE /api/products/:id",
]

settings = get_settings()
seed_store(STORE, settings.seed_sample_data)
_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Product catalog API started ({settings.environment}), {len(STORE.list())} products loaded")
    yield
    logger.info("Product catalog API shutting down")


app = FastAPI(title="Product Catalog API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
# added last so it wraps everything, CORS included
app.add_middleware(AccessLogMiddleware)


# ---------------------------
# Error responder
# ---------------------------
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    logger.warning(
        f"{exc.kind.value}: {exc.message}",
        extra={"error_kind": exc.kind.value, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content=error_envelope(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
    return await api_error_handler(request, ApiError.validation("Invalid request data", details))


@app.exception_handler(StarletteHTTPException)
async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Route not found",
                "message": f"Cannot {request.method} {request.url.path}",
                "availableRoutes": AVAILABLE_ROUTES,
                "timestamp": utc_timestamp(),
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail), "timestamp": utc_timestamp()},
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"error_kind": ErrorKind.INTERNAL.value, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content=error_envelope(exc, include_stack=get_settings().is_development),
    )


# ---------------------------
# Service endpoints
# ---------------------------
@app.get("/")
async def root():
    return {
        "message": "Welcome to the Product Catalog API",
        "version": app.version,
        "endpoints": {
            "products": "/api/products",
            "health": "/health",
            "stats": "/api/products/stats",
        },
        "documentation": "/docs",
    }


@app.get("/health")
async def health():
    return {
        "status": "OK",
        "timestamp": utc_timestamp(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "environment": settings.environment,
    }


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products(query: ProductQuery = Depends(list_query), store: ProductStore = Depends(get_store)):
    return await list_products_logic(store, query)


# must stay registered ahead of /api/products/{product_id}
@app.get("/api/products/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return await product_stats_logic(store)


@app.get("/api/products/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await get_product_logic(store, product_id)


@app.post("/api/products", status_code=201)
async def create_product(
    principal: Principal = Depends(require_api_key),
    fields: ProductFields = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    return await create_product_logic(store, fields)


@app.put("/api/products/{product_id}")
async def update_product(
    product_id: str,
    principal: Principal = Depends(require_api_key),
    fields: ProductFields = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    return await update_product_logic(store, product_id, fields)


@app.delete("/api/products/{product_id}")
async def delete_product(
    product_id: str,
    principal: Principal = Depends(require_api_key),
    store: ProductStore = Depends(get_store),
):
    return await delete_product_logic(store, product_id)


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from catalog.config import DATABASE_URL, DEBUG, GZIP_MINIMUM_SIZE
from catalog.database.database import create_db_engine, create_session_factory
from catalog.models.schemas.settings import (
    CurrencySettings,
    PaginationSettings,
    load_currency_settings,
    load_pagination_settings,
)
from catalog.routes import product
from catalog.services.cache import PageCache
from catalog.services.currency import build_registry
from catalog.services.errors import StoreUnavailableError
from catalog.services.product import CatalogService
from catalog.services.store import InMemoryProductStore, ProductStore, SqlProductStore, seed_products
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


def _default_store() -> ProductStore:
    if not DATABASE_URL:
        return InMemoryProductStore()

    session_factory = create_session_factory(create_db_engine(DATABASE_URL))
    seed_products(session_factory)
    return SqlProductStore(session_factory)


def create_app(
    store: Optional[ProductStore] = None,
    currency_settings: Optional[CurrencySettings] = None,
    pagination_settings: Optional[PaginationSettings] = None,
    cache: Optional[PageCache] = None,
    debug: bool = DEBUG,
) -> FastAPI:
    """
    Build the catalog application.

    Settings are validated here so a misconfigured service refuses to start;
    a ConfigurationError propagates to the caller.
    """
    currency_settings = currency_settings or load_currency_settings()
    pagination_settings = pagination_settings or load_pagination_settings()

    registry = build_registry(currency_settings)
    service = CatalogService(store or _default_store(), registry, cache or PageCache())

    app = FastAPI(title="Product Catalog API")
    app.state.catalog_service = service
    app.state.pagination_settings = pagination_settings

    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        logger.error(f"Product store unavailable: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "title": "The product store is unavailable.",
                "status": status.HTTP_503_SERVICE_UNAVAILABLE,
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"An unhandled exception has occurred: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "title": "An internal server error occurred.",
                "detail": str(exc) if debug else None,
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            },
        )

    app.include_router(product.router)

    return app


app = create_app()

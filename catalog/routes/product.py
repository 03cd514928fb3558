# routes/product.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from catalog.models.enums import CurrencyCode
from catalog.models.schemas.product import PagedResult, ProductDto
from catalog.models.schemas.settings import PaginationSettings
from catalog.services.product import CatalogService
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/product", tags=["product"])


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_pagination_settings(request: Request) -> PaginationSettings:
    return request.app.state.pagination_settings


def _bad_request(error: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)


@router.get("", response_model=PagedResult[ProductDto])
async def get_products(
    page_start: int = Query(0, alias="pageStart", description="Zero-based offset of the first product"),
    page_size: int = Query(5, alias="pageSize", description="Products per page"),
    currency: str = Query(CurrencyCode.GBP.value, description="Currency to price products in"),
    service: CatalogService = Depends(get_catalog_service),
    pagination: PaginationSettings = Depends(get_pagination_settings),
):
    """List a page of products priced in the requested currency."""
    with logger.contextualize(page_start=page_start, page_size=page_size, currency=currency):
        if page_start < 0:
            error = "pageStart must be a non-negative number."
            logger.warning(f"Validation failed: {error}")
            raise _bad_request(error)

        max_page_size = pagination.max_page_size
        if page_size <= 0 or page_size > max_page_size:
            error = f"pageSize must be a positive number and cannot exceed {max_page_size}."
            logger.warning(f"Validation failed: {error} (Received: {page_size})")
            raise _bad_request(error)

        target_currency = currency.upper()
        if not service.registry.supports(target_currency):
            supported = ", ".join(service.registry.supported_codes)
            error = f"Unsupported currency. Supported values are: {supported}."
            logger.warning(f"Validation failed: {error} (Received: {currency})")
            raise _bad_request(error)

        logger.info("Validation passed. Delegating product retrieval to service.")
        return await service.get_products(page_start, page_size, target_currency)

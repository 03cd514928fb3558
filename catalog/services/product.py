# services/product.py
from typing import Optional

from catalog.models.schemas.product import CachedPage, PagedResult, PageKey, ProductDto
from catalog.services.cache import PageCache
from catalog.services.currency import CurrencyRegistry
from catalog.services.errors import ContractViolationError
from catalog.services.store import ProductStore
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Serves paginated product pages priced in a requested currency."""

    def __init__(
        self,
        store: ProductStore,
        registry: CurrencyRegistry,
        cache: Optional[PageCache] = None,
    ):
        self.store = store
        self.registry = registry
        self.cache = cache if cache is not None else PageCache()

    async def get_products(
        self, page_start: int, page_size: int, currency_code: str
    ) -> PagedResult[ProductDto]:
        """
        Get one page of products converted to the given currency

        The page itself is cached per (page_start, page_size); conversion is
        applied on every call so one cached page serves every currency.

        Args:
            page_start: int - Zero-based offset of the first product
            page_size: int - Number of products in the page
            currency_code: str - Validated code of a registered currency

        Returns:
            PagedResult[ProductDto]: Converted items plus pagination metadata

        Raises:
            ContractViolationError: If the arguments were not validated upstream
            StoreUnavailableError: If the product store fetch fails
        """
        self._check_preconditions(page_start, page_size, currency_code)

        key = PageKey(page_start=page_start, page_size=page_size)

        async def fetch_page() -> CachedPage:
            products, total_count = await self.store.fetch(page_start, page_size)
            return CachedPage(products=tuple(products), total_count=total_count)

        page = await self.cache.get_or_fetch(key, fetch_page)

        # Empty pages report no total, whatever the store counted
        if not page.products:
            return PagedResult[ProductDto](
                items=[], total_count=0, page_start=page_start, page_size=page_size
            )

        converter = self.registry.get(currency_code)
        items = [
            ProductDto(
                name=product.name,
                currency=currency_code,
                price=converter.convert(product.base_price),
            )
            for product in page.products
        ]

        return PagedResult[ProductDto](
            items=items,
            total_count=page.total_count,
            page_start=page_start,
            page_size=page_size,
        )

    def _check_preconditions(self, page_start: int, page_size: int, currency_code: str) -> None:
        if isinstance(page_start, bool) or not isinstance(page_start, int) or page_start < 0:
            error = f"page_start must be a non-negative integer, got {page_start!r}"
        elif isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            error = f"page_size must be a positive integer, got {page_size!r}"
        elif not self.registry.supports(currency_code):
            error = f"Currency {currency_code!r} is not registered"
        else:
            return

        logger.error(f"Contract violation in get_products: {error}")
        raise ContractViolationError(error)

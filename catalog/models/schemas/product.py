# models/schemas/product.py
from decimal import Decimal
from typing import Annotated, Generic, List, Tuple, TypeVar

from pydantic import Field, PlainSerializer

from .base import CamelModel, FrozenModel

T = TypeVar("T")


class Product(FrozenModel):
    name: str = Field(..., min_length=1, max_length=255)
    base_price: Decimal = Field(..., ge=0)


class PageKey(FrozenModel):
    page_start: int = Field(..., ge=0)
    page_size: int = Field(..., gt=0)

    def cache_key(self) -> str:
        return f"products:page_start={self.page_start}:page_size={self.page_size}"


class CachedPage(FrozenModel):
    products: Tuple[Product, ...] = ()
    total_count: int = Field(0, ge=0)


class CacheEntry(FrozenModel):
    key: PageKey
    value: CachedPage
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


# Rendered as a JSON number; the Decimal is already rounded to 2 places
JsonPrice = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductDto(CamelModel):
    name: str
    price: JsonPrice
    currency: str


class PagedResult(CamelModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total_count: int
    page_start: int
    page_size: int

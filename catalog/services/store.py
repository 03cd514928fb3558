# services/store.py
import asyncio
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from catalog.models.database_models import ProductRecord
from catalog.models.schemas.product import Product
from catalog.services.errors import StoreUnavailableError
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS: Tuple[Product, ...] = (
    Product(name="Sausage Roll", base_price=Decimal("1")),
    Product(name="Vegan Sausage Roll", base_price=Decimal("1.1")),
    Product(name="Steak Bake", base_price=Decimal("1.2")),
    Product(name="Yum Yum", base_price=Decimal("0.7")),
    Product(name="Pink Jammie", base_price=Decimal("0.5")),
    Product(name="Mexican Baguette", base_price=Decimal("2.1")),
    Product(name="Bacon Sandwich", base_price=Decimal("1.95")),
    Product(name="Coca Cola", base_price=Decimal("1.2")),
)


class ProductStore(ABC):
    """Read-only paginated source of products."""

    @abstractmethod
    async def fetch(
        self, page_start: Optional[int] = None, page_size: Optional[int] = None
    ) -> Tuple[List[Product], int]:
        """
        Fetch one page of products

        Args:
            page_start: Offset of the first product; None starts at 0
            page_size: Maximum products to return; None returns all remaining

        Returns:
            Tuple of the page and the total product count before pagination

        Raises:
            StoreUnavailableError: If the underlying source cannot be read
        """


class InMemoryProductStore(ProductStore):
    def __init__(self, products: Iterable[Product] = SAMPLE_PRODUCTS):
        self._products: Tuple[Product, ...] = tuple(products)

    async def fetch(
        self, page_start: Optional[int] = None, page_size: Optional[int] = None
    ) -> Tuple[List[Product], int]:
        total_count = len(self._products)
        start = page_start or 0
        end = None if page_size is None else start + page_size
        return list(self._products[start:end]), total_count


class SqlProductStore(ProductStore):
    """Product store backed by the Product table, ordered by id."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def fetch(
        self, page_start: Optional[int] = None, page_size: Optional[int] = None
    ) -> Tuple[List[Product], int]:
        return await asyncio.to_thread(self._fetch, page_start, page_size)

    def _fetch(
        self, page_start: Optional[int], page_size: Optional[int]
    ) -> Tuple[List[Product], int]:
        db: Session = self.session_factory()
        try:
            total_count = db.scalar(select(func.count()).select_from(ProductRecord))

            query = select(ProductRecord).order_by(ProductRecord.id)
            if page_start:
                query = query.offset(page_start)
            if page_size is not None:
                query = query.limit(page_size)

            records = db.scalars(query).all()
            products = [
                Product(name=r.name, base_price=Decimal(r.base_price)) for r in records
            ]
            return products, total_count or 0
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Product store read failed: {e}")
            raise StoreUnavailableError("Product store is unavailable") from e
        finally:
            db.close()


def seed_products(session_factory: sessionmaker, products: Sequence[Product] = SAMPLE_PRODUCTS) -> int:
    """Insert products into an empty Product table, returning rows added."""
    db: Session = session_factory()
    try:
        if db.scalar(select(func.count()).select_from(ProductRecord)):
            return 0
        db.add_all(
            ProductRecord(name=p.name, base_price=p.base_price) for p in products
        )
        db.commit()
        return len(products)
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()

"""Shared fixtures for catalog tests."""

import asyncio
from decimal import Decimal

import pytest

from catalog.models.schemas.settings import CurrencySettings, PaginationSettings
from catalog.services.cache import PageCache
from catalog.services.currency import build_registry
from catalog.services.store import SAMPLE_PRODUCTS, ProductStore


class CountingStore(ProductStore):
    """In-memory store that records every fetch and can be gated or failed."""

    def __init__(self, products=SAMPLE_PRODUCTS, total_count=None, gated=False):
        self.products = list(products)
        self.total_count = total_count
        self.calls = []
        self.errors = []
        self.release = asyncio.Event() if gated else None

    async def fetch(self, page_start=None, page_size=None):
        self.calls.append((page_start, page_size))
        if self.release is not None:
            await self.release.wait()
        if self.errors:
            raise self.errors.pop(0)

        start = page_start or 0
        end = None if page_size is None else start + page_size
        total = len(self.products) if self.total_count is None else self.total_count
        return self.products[start:end], total


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return PageCache(ttl=60, clock=clock)


@pytest.fixture
def registry():
    return build_registry(CurrencySettings(eur_exchange_rate=Decimal("1.11")))


@pytest.fixture
def pagination_settings():
    return PaginationSettings(max_page_size=10)

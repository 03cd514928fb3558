# models/schemas/settings.py
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from catalog import config
from catalog.services.errors import ConfigurationError


class CurrencySettings(BaseModel):
    eur_exchange_rate: Decimal = Field(..., gt=0, description="GBP to EUR rate")


class PaginationSettings(BaseModel):
    max_page_size: int = Field(..., ge=1, le=1000)


def load_currency_settings(
    eur_exchange_rate: Optional[Union[str, Decimal]] = None,
) -> CurrencySettings:
    """
    Validate exchange rates, failing startup on bad values

    Args:
        eur_exchange_rate: Rate override; defaults to the EUR_EXCHANGE_RATE setting

    Raises:
        ConfigurationError: If the rate is missing, malformed or not positive
    """
    raw = config.EUR_EXCHANGE_RATE if eur_exchange_rate is None else eur_exchange_rate
    try:
        return CurrencySettings(eur_exchange_rate=raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid currency settings: {e}") from e


def load_pagination_settings(
    max_page_size: Optional[Union[str, int]] = None,
) -> PaginationSettings:
    raw = config.MAX_PAGE_SIZE if max_page_size is None else max_page_size
    try:
        return PaginationSettings(max_page_size=raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid pagination settings: {e}") from e

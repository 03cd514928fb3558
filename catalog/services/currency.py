from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Tuple

from catalog.models.enums import CurrencyCode
from catalog.models.schemas.settings import CurrencySettings
from catalog.services.errors import ConfigurationError, UnknownCurrencyError
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

_CENTS = Decimal("0.01")


def round_price(value: Decimal) -> Decimal:
    """Round to 2 places, midpoints away from zero (0.775 -> 0.78)."""
    return Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


class ConversionStrategy(ABC):
    """Converts a base-currency price into one target currency."""

    @property
    @abstractmethod
    def currency_code(self) -> str:
        ...

    @abstractmethod
    def convert(self, base_price: Decimal) -> Decimal:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.currency_code})"


class GbpConverter(ConversionStrategy):
    """Base currency: no rate applied, only rounding."""

    @property
    def currency_code(self) -> str:
        return CurrencyCode.GBP.value

    def convert(self, base_price: Decimal) -> Decimal:
        return round_price(base_price)


class FixedRateConverter(ConversionStrategy):
    def __init__(self, currency_code: str, rate: Decimal):
        rate = Decimal(rate)
        if rate <= 0:
            raise ConfigurationError(
                f"Exchange rate for {currency_code} must be positive, got {rate}"
            )
        self._currency_code = currency_code.upper()
        self.rate = rate

    @property
    def currency_code(self) -> str:
        return self._currency_code

    def convert(self, base_price: Decimal) -> Decimal:
        return round_price(Decimal(base_price) * self.rate)


class EurConverter(FixedRateConverter):
    def __init__(self, rate: Decimal):
        super().__init__(CurrencyCode.EUR.value, rate)


class CurrencyRegistry:
    """
    Immutable lookup table of conversion strategies keyed by currency code.

    Codes are matched case-insensitively. Registering the same code twice
    is a configuration error raised at construction.
    """

    def __init__(self, strategies: Iterable[ConversionStrategy]):
        converters: Dict[str, ConversionStrategy] = {}
        for strategy in strategies:
            code = strategy.currency_code.upper()
            if code in converters:
                raise ConfigurationError(
                    f"Duplicate converter registered for currency {code}"
                )
            converters[code] = strategy

        self._converters = converters
        logger.info(f"Currency registry built with: {', '.join(converters)}")

    @property
    def supported_codes(self) -> Tuple[str, ...]:
        return tuple(self._converters)

    def supports(self, currency_code: str) -> bool:
        return isinstance(currency_code, str) and currency_code.upper() in self._converters

    def get(self, currency_code: str) -> ConversionStrategy:
        """
        Get the converter for a currency code

        Args:
            currency_code: str - Code to look up, any case

        Raises:
            UnknownCurrencyError: If no converter is registered for the code
        """
        try:
            return self._converters[currency_code.upper()]
        except (KeyError, AttributeError) as e:
            raise UnknownCurrencyError(currency_code) from e

    def convert(self, currency_code: str, base_price: Decimal) -> Decimal:
        return self.get(currency_code).convert(base_price)


def build_registry(settings: CurrencySettings) -> CurrencyRegistry:
    """Build the registry of every currency the catalog can price in."""
    return CurrencyRegistry(
        [
            GbpConverter(),
            EurConverter(settings.eur_exchange_rate),
        ]
    )

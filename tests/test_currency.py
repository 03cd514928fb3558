from decimal import Decimal

import pytest

from catalog.models.schemas.settings import CurrencySettings
from catalog.services.currency import (
    CurrencyRegistry,
    EurConverter,
    FixedRateConverter,
    GbpConverter,
    build_registry,
    round_price,
)
from catalog.services.errors import ConfigurationError, UnknownCurrencyError


class TestRoundPrice:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0.235", "0.24"),
            ("0.775", "0.78"),
            ("-0.775", "-0.78"),
            ("1.234", "1.23"),
            ("1", "1.00"),
            ("2.125", "2.13"),
        ],
    )
    def test_midpoints_round_away_from_zero(self, value, expected):
        assert round_price(Decimal(value)) == Decimal(expected)

    def test_always_two_fractional_digits(self):
        assert round_price(Decimal("3")).as_tuple().exponent == -2
        assert str(round_price(Decimal("1.1"))) == "1.10"


class TestConverters:
    def test_gbp_is_identity_with_rounding(self):
        converter = GbpConverter()
        assert converter.currency_code == "GBP"
        assert converter.convert(Decimal("1.1")) == Decimal("1.10")
        assert converter.convert(Decimal("0.235")) == Decimal("0.24")

    @pytest.mark.parametrize(
        "base_price, expected",
        [
            ("1", "1.11"),
            ("1.1", "1.22"),  # 1.221
            ("0.7", "0.78"),  # 0.777
            ("1.95", "2.16"),  # 2.1645
        ],
    )
    def test_eur_applies_rate_then_rounds(self, base_price, expected):
        converter = EurConverter(Decimal("1.11"))
        assert converter.currency_code == "EUR"
        assert converter.convert(Decimal(base_price)) == Decimal(expected)

    @pytest.mark.parametrize("rate", ["0", "-1.11"])
    def test_non_positive_rate_is_configuration_error(self, rate):
        with pytest.raises(ConfigurationError):
            EurConverter(Decimal(rate))

    def test_fixed_rate_normalizes_code(self):
        assert FixedRateConverter("usd", Decimal("1.25")).currency_code == "USD"


class TestCurrencyRegistry:
    def test_lookup_is_case_insensitive(self, registry):
        assert registry.get("eur").currency_code == "EUR"
        assert registry.get("Gbp").currency_code == "GBP"
        assert registry.supports("eUr")

    def test_supported_codes(self, registry):
        assert registry.supported_codes == ("GBP", "EUR")

    def test_convert_delegates_to_strategy(self, registry):
        assert registry.convert("EUR", Decimal("1.1")) == Decimal("1.22")
        assert registry.convert("gbp", Decimal("1.95")) == Decimal("1.95")

    def test_duplicate_code_fails_construction(self):
        with pytest.raises(ConfigurationError):
            CurrencyRegistry([GbpConverter(), FixedRateConverter("gbp", Decimal("2"))])

    def test_unknown_code_raises_lookup_error(self, registry):
        with pytest.raises(UnknownCurrencyError):
            registry.get("USD")
        with pytest.raises(KeyError):
            registry.convert("USD", Decimal("1"))
        assert not registry.supports("USD")
        assert not registry.supports(None)

    def test_build_registry_uses_configured_rate(self):
        registry = build_registry(CurrencySettings(eur_exchange_rate=Decimal("2")))
        assert registry.convert("EUR", Decimal("1.2")) == Decimal("2.40")

from enum import Enum


class CurrencyCode(str, Enum):
    GBP = "GBP"
    EUR = "EUR"


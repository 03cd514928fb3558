# services/errors.py


class CatalogError(Exception):
    """Base exception for catalog errors."""

    pass


class StoreUnavailableError(CatalogError):
    """Raised when the product store cannot serve a fetch."""

    pass


class ConfigurationError(CatalogError):
    """Raised at startup when conversion or pagination settings are invalid."""

    pass


class ContractViolationError(CatalogError, ValueError):
    """Raised when the catalog service is called with unvalidated input."""

    pass


class UnknownCurrencyError(CatalogError, KeyError):
    """Raised when no converter is registered for a currency code."""

    pass

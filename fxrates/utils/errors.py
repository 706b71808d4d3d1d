"""Custom exception classes for the currency exchange service."""


class CurrencyExchangeError(Exception):
    """Base exception for all currency exchange errors."""
    pass


class ConfigurationError(CurrencyExchangeError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(CurrencyExchangeError):
    """Raised when data validation fails."""
    pass


class DataProviderError(CurrencyExchangeError):
    """Base exception for upstream data provider errors."""
    pass


class RateFetchError(DataProviderError):
    """Raised when the rate provider cannot deliver a usable snapshot."""
    pass


class GeolocationError(DataProviderError):
    """Raised when an IP address cannot be resolved to a country."""
    pass


class StoreUninitializedError(CurrencyExchangeError):
    """Raised when the rate store is read before it was populated."""

    def __init__(self, message: str = "Rates not available yet"):
        super().__init__(message)


class UnknownCurrencyError(CurrencyExchangeError):
    """Raised when a requested currency is absent from the active snapshot."""

    def __init__(self, code: str, side: str):
        self.code = code
        self.side = side  # "source" | "target"
        super().__init__(f"Unknown {side} currency: {code}")


class InvalidRateError(CurrencyExchangeError):
    """Raised when a conversion would divide by a zero or non-finite rate."""

    def __init__(self, code: str, rate: float):
        self.code = code
        self.rate = rate
        super().__init__(f"Invalid rate for {code}: {rate}")

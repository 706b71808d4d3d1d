"""Country code to currency code lookup."""
from typing import Dict

DEFAULT_COUNTRY = "US"
DEFAULT_CURRENCY = "USD"
SUGGESTED_TARGET = "USD"

# ISO 3166 alpha-2 country -> ISO 4217 currency
COUNTRY_CURRENCIES: Dict[str, str] = {
    "MY": "MYR",
    "US": "USD",
    "GB": "GBP",
    "EU": "EUR",
    "DE": "EUR",
    "FR": "EUR",
    "IT": "EUR",
    "ES": "EUR",
    "JP": "JPY",
    "CN": "CNY",
    "SG": "SGD",
    "AU": "AUD",
    "CA": "CAD",
    "IN": "INR",
}


def detect_currency(country_code: str) -> str:
    """Return the currency for a country code, USD for anything unrecognized.

    Matching is case-sensitive: "de" is not a known code.
    """
    return COUNTRY_CURRENCIES.get(country_code, DEFAULT_CURRENCY)

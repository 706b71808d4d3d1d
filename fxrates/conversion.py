"""
Currency conversion against a single-base rate table.

Every rate in a snapshot is expressed against the base currency, so a
cross conversion goes through the base:

    amount_in_base = amount / rates[from]
    result         = amount_in_base * rates[to]

which is the same as ``amount * rates[to] / rates[from]``.

Example (base MYR, MYR=1.0, USD=0.21, EUR=0.19):
    1000 MYR -> USD = 1000 * 0.21 / 1.0  = 210.0
    1000 USD -> EUR = 1000 * 0.19 / 0.21 ~ 904.76
"""
import math
from typing import Mapping, Tuple

from fxrates.utils.errors import InvalidRateError, UnknownCurrencyError


def normalize_pair(from_code: str, to_code: str) -> Tuple[str, str]:
    """Strip and uppercase a user-supplied currency pair."""
    return from_code.strip().upper(), to_code.strip().upper()


def convert(
    amount: float,
    from_code: str,
    to_code: str,
    base: str,
    rates: Mapping[str, float],
) -> float:
    """
    Convert ``amount`` from ``from_code`` to ``to_code``.

    Args:
        amount: Amount in the source currency (negative amounts scale linearly)
        from_code: Source currency code, must be a key of ``rates``
        to_code: Target currency code, must be a key of ``rates``
        base: Currency every rate is quoted against (``rates[base] == 1.0``)
        rates: Currency code -> rate relative to ``base``

    Raises:
        UnknownCurrencyError: if either code is missing (source reported first)
        InvalidRateError: if a rate involved is zero or not finite
    """
    if from_code not in rates:
        raise UnknownCurrencyError(from_code, "source")
    if to_code not in rates:
        raise UnknownCurrencyError(to_code, "target")

    if from_code == to_code:
        return amount

    from_rate = rates[from_code]
    to_rate = rates[to_code]
    for code, rate in ((from_code, from_rate), (to_code, to_rate)):
        if rate == 0 or not math.isfinite(rate):
            raise InvalidRateError(code, rate)

    # Amount is already in base units
    if from_code == base:
        return amount * to_rate
    # Express in base units first, then in target units
    return amount / from_rate * to_rate

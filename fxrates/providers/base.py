"""Provider base class and wire contract for rate providers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

from pydantic import BaseModel

from fxrates.models import RateSnapshot
from fxrates.utils.errors import ValidationError


class RatesPayload(BaseModel):
    """Latest-rates response body: ``{"base": ..., "date": ..., "rates": {...}}``.

    All three fields are required; extra fields (e.g. ``amount``) are ignored.
    """

    base: str
    date: str
    rates: Dict[str, float]

    def to_snapshot(self) -> RateSnapshot:
        return RateSnapshot(base=self.base, date=self.date, rates=self.rates)


class BaseProvider(ABC):
    """Abstract base class for rate providers."""

    NAME: str = "base"

    @abstractmethod
    async def fetch_snapshot(self, base: str) -> RateSnapshot:
        """Fetch the latest rates quoted against ``base``."""

    @staticmethod
    def validate_currency_code(code: str) -> None:
        """Validate a 3-letter ISO currency code in uppercase."""
        if not code or len(code) != 3 or not code.isalpha() or code != code.upper():
            raise ValidationError(
                f"Invalid currency code: {code}. Expect 3-letter uppercase ISO code."
            )

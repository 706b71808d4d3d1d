"""
Data models for exchange rate snapshots.
"""
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from fxrates.utils.errors import ValidationError


@dataclass(frozen=True)
class RateSnapshot:
    """
    Immutable point-in-time set of exchange rates relative to ``base``.

    Currency codes are stored uppercase and the base currency is always
    present with a rate of 1.0, even when the provider leaves it out.
    """
    base: str  # e.g. "MYR"
    date: str  # provider as-of date, kept opaque
    rates: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        base = (self.base or "").strip().upper()
        if not base:
            raise ValidationError("Snapshot base currency is required")
        if not self.date:
            raise ValidationError("Snapshot date is required")

        normalized: Dict[str, float] = {}
        for code, rate in self.rates.items():
            code = str(code).strip().upper()
            if not code:
                raise ValidationError("Empty currency code in rates")
            if code in normalized:
                raise ValidationError(f"Duplicate currency code in rates: {code}")
            try:
                value = float(rate)
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid rate for {code}: {rate!r}")
            if not math.isfinite(value) or value <= 0:
                raise ValidationError(f"Invalid rate for {code}: {rate!r}")
            normalized[code] = value

        normalized[base] = 1.0

        # Frozen dataclass: bypass __setattr__ while normalizing
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "date", str(self.date))
        object.__setattr__(self, "rates", MappingProxyType(normalized))

    def has_currency(self, code: str) -> bool:
        return code.upper() in self.rates

    def currencies(self) -> List[str]:
        """Sorted list of every currency code in the snapshot."""
        return sorted(self.rates)

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "base": self.base, "rates": dict(self.rates)}

    def __str__(self) -> str:
        return f"RateSnapshot(base={self.base}, date={self.date}, currencies={len(self.rates)})"

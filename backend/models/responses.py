from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RatesResponse(BaseModel):
    date: str
    base: str
    rates: Dict[str, float]


class ConversionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(..., alias="from")
    amount: float
    to_currency: str = Field(..., alias="to")
    result: float
    date: str


class DetectCurrencyResponse(BaseModel):
    """Detected currency for the caller; ``error`` replaces ``all_currencies`` when rates are not loaded."""
    detected_currency: str
    available: bool
    suggested_target: str
    all_currencies: Optional[List[str]] = None
    error: Optional[str] = None

"""Rates, conversion and currency detection endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request

from backend.dependencies import get_geolocator, get_rate_store
from backend.models.responses import ConversionResponse, DetectCurrencyResponse, RatesResponse
from fxrates.conversion import convert, normalize_pair
from fxrates.detection import SUGGESTED_TARGET, detect_currency
from fxrates.geolocation import IpGeolocator
from fxrates.store import RateStore


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/rates", response_model=RatesResponse)
async def get_rates(store: RateStore = Depends(get_rate_store)):
    """Return the current rate snapshot verbatim."""
    snapshot = store.require()
    return RatesResponse(**snapshot.to_dict())


@router.get("/convert", response_model=ConversionResponse)
async def convert_amount(
    amount: float = Query(..., description="Amount in the source currency"),
    from_currency: str = Query(..., alias="from", description="Source currency code, e.g. MYR"),
    to_currency: str = Query(..., alias="to", description="Target currency code, e.g. USD"),
    store: RateStore = Depends(get_rate_store),
):
    """Convert an amount between two currencies of the current snapshot."""
    snapshot = store.require()
    source, target = normalize_pair(from_currency, to_currency)
    result = convert(amount, source, target, snapshot.base, snapshot.rates)
    return ConversionResponse(
        from_currency=source,
        amount=amount,
        to_currency=target,
        result=result,
        date=snapshot.date,
    )


@router.get(
    "/detect-currency",
    response_model=DetectCurrencyResponse,
    response_model_exclude_none=True,
)
async def detect_caller_currency(
    request: Request,
    store: RateStore = Depends(get_rate_store),
    geolocator: IpGeolocator = Depends(get_geolocator),
):
    """Guess the caller's currency from their network address."""
    client_ip = request.client.host if request.client else None
    country_code = await geolocator.country_for(client_ip)
    currency = detect_currency(country_code)
    logger.info(
        f"Detected {currency} for {client_ip}",
        extra={"client_ip": client_ip, "country_code": country_code},
    )

    snapshot = store.read()
    if snapshot is None:
        return DetectCurrencyResponse(
            detected_currency=currency,
            available=False,
            suggested_target=SUGGESTED_TARGET,
            error="Rates not loaded",
        )

    return DetectCurrencyResponse(
        detected_currency=currency,
        available=currency in snapshot.rates,
        suggested_target=SUGGESTED_TARGET,
        all_currencies=snapshot.currencies(),
    )

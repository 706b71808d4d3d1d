from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from backend.routes import health, rates
from fxrates.config import Config, load_config
from fxrates.geolocation import IpGeolocator
from fxrates.loader import load_rates
from fxrates.providers import BaseProvider, get_provider
from fxrates.store import RateStore
from fxrates.utils.errors import (
    InvalidRateError,
    StoreUninitializedError,
    UnknownCurrencyError,
)
from fxrates.utils.logging import get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Populate the rate store before the server accepts requests.

    A failed fetch propagates and aborts startup.
    """
    if app.state.load_on_startup:
        await load_rates(app.state.store, app.state.provider, app.state.base_currency)
    yield


def create_app(
    config: Optional[Config] = None,
    store: Optional[RateStore] = None,
    provider: Optional[BaseProvider] = None,
    geolocator: Optional[IpGeolocator] = None,
    load_on_startup: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Loaded configuration (defaults to the global config)
        store: Rate store shared by the handlers (a fresh empty one by default)
        provider: Rate provider used for the startup load
        geolocator: IP geolocation client for /api/detect-currency
        load_on_startup: Fetch rates in the lifespan before serving
    """
    config = config or load_config()

    app = FastAPI(
        title=config.app_name,
        description="Exchange rates, conversion and currency detection",
        version=config.app_version,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.store = store if store is not None else RateStore()
    app.state.provider = provider or get_provider(config)
    app.state.geolocator = geolocator or IpGeolocator.from_config(config)
    app.state.base_currency = config.base_currency
    app.state.load_on_startup = load_on_startup

    # Permissive CORS for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreUninitializedError, _store_uninitialized_handler)
    app.add_exception_handler(UnknownCurrencyError, _bad_currency_handler)
    app.add_exception_handler(InvalidRateError, _bad_currency_handler)

    app.include_router(rates.router, prefix="/api", tags=["rates"])
    app.include_router(health.router, tags=["health"])

    return app


async def _store_uninitialized_handler(request: Request, exc: StoreUninitializedError):
    logger.warning(f"{request.url.path} requested before rates were loaded")
    return PlainTextResponse(str(exc), status_code=503)


async def _bad_currency_handler(request: Request, exc: Exception):
    return PlainTextResponse(str(exc), status_code=400)

from __future__ import annotations

from typing import Optional

from fastapi import Request

from fxrates.config import Config
from fxrates.geolocation import IpGeolocator
from fxrates.store import RateStore


def get_rate_store(request: Request) -> RateStore:
    return request.app.state.store


def get_geolocator(request: Request) -> IpGeolocator:
    return request.app.state.geolocator


def get_app_config(request: Request) -> Optional[Config]:
    return request.app.state.config

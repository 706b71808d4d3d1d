"""IP address to country lookup (ip-api.com)."""
from __future__ import annotations

import httpx

from fxrates.config import Config
from fxrates.detection import DEFAULT_COUNTRY
from fxrates.utils.errors import GeolocationError
from fxrates.utils.logging import get_logger


logger = get_logger(__name__)


class IpGeolocator:
    """
    Resolves an IP address to an ISO country code.

    API call:
        GET {base_url}/{ip}  ->  {"status": "success", "countryCode": "MY", ...}

    ``country_for`` never raises: any failure (timeout, network error,
    malformed body, missing countryCode) falls back to ``default_country``.
    """

    def __init__(
        self,
        base_url: str = "http://ip-api.com/json",
        timeout: float = 3.0,
        default_country: str = DEFAULT_COUNTRY,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_country = default_country

    @classmethod
    def from_config(cls, config: Config) -> "IpGeolocator":
        return cls(base_url=config.geolocation_base_url, timeout=config.geolocation_timeout)

    async def lookup(self, ip: str) -> str:
        """Return the country code for ``ip`` or raise GeolocationError."""
        url = f"{self.base_url}/{ip}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise GeolocationError(f"Geolocation request failed: {e}") from e
        except ValueError as e:
            raise GeolocationError("Geolocation response is not valid JSON") from e

        country_code = data.get("countryCode") if isinstance(data, dict) else None
        if not isinstance(country_code, str) or not country_code:
            raise GeolocationError(f"Geolocation response has no countryCode for {ip}")
        return country_code

    async def country_for(self, ip: str | None) -> str:
        if not ip:
            logger.warning(f"No client address, defaulting to {self.default_country}")
            return self.default_country
        try:
            return await self.lookup(ip)
        except GeolocationError as e:
            logger.warning(
                f"Geolocation failed, defaulting to {self.default_country}: {e}",
                extra={"client_ip": ip},
            )
            return self.default_country

"""Frankfurter (ECB reference rates) provider implementation."""
from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError as PayloadValidationError

from fxrates.config import Config
from fxrates.models import RateSnapshot
from fxrates.providers.base import BaseProvider, RatesPayload
from fxrates.utils.decorators import retry, log_execution
from fxrates.utils.errors import RateFetchError, ValidationError
from fxrates.utils.logging import get_logger


logger = get_logger(__name__)


class FrankfurterClient(BaseProvider):
    """
    Client for the Frankfurter latest-rates endpoint.

    API call:
        GET {base_url}/latest?base=MYR

    Example response:
        {"amount": 1.0, "base": "MYR", "date": "2024-01-01",
         "rates": {"USD": 0.21, "EUR": 0.19, ...}}
    """

    NAME = "frankfurter"

    def __init__(
        self,
        base_url: str = "https://api.frankfurter.app",
        timeout: float = 10.0,
        retry_attempts: int = 1,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts

    @classmethod
    def from_config(cls, config: Config) -> "FrankfurterClient":
        return cls(
            base_url=config.rates_base_url,
            timeout=config.rates_timeout,
            retry_attempts=config.rates_retry_attempts,
        )

    async def fetch_snapshot(self, base: str) -> RateSnapshot:
        """
        Fetch the latest rates for ``base`` and build a validated snapshot.

        Raises:
            ValidationError: if ``base`` is not a 3-letter uppercase code
            RateFetchError: on network errors, non-2xx responses, malformed
                JSON or a payload missing base/date/rates
        """
        self.validate_currency_code(base)
        fetch = retry(
            max_attempts=self.retry_attempts,
            delay=1.0,
            exceptions=(RateFetchError,),
        )(self._fetch)
        return await fetch(base)

    @log_execution
    async def _fetch(self, base: str) -> RateSnapshot:
        url = f"{self.base_url}/latest"
        params = {"base": base}

        logger.info(f"Calling Frankfurter API | {url} | params={params}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from Frankfurter API: {e}")
            raise RateFetchError(f"Rate provider returned an error: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error reaching Frankfurter API: {e}")
            raise RateFetchError(f"Rate provider unreachable: {e}") from e
        except ValueError as e:
            logger.error(f"Frankfurter API returned malformed JSON: {e}")
            raise RateFetchError("Rate provider returned malformed JSON") from e

        snapshot = self._parse(data)
        logger.info(
            f"Fetched {len(snapshot.rates)} rates | base={snapshot.base} | date={snapshot.date}"
        )
        return snapshot

    @staticmethod
    def _parse(data: Optional[object]) -> RateSnapshot:
        if not isinstance(data, dict):
            raise RateFetchError("Rate provider response is not a JSON object")

        try:
            payload = RatesPayload.model_validate(data)
        except PayloadValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or "response"
            raise RateFetchError(f"Invalid '{field}' field in rate provider response: {first.get('msg')}") from e

        try:
            return payload.to_snapshot()
        except ValidationError as e:
            raise RateFetchError(f"Rate provider returned unusable rates: {e}") from e

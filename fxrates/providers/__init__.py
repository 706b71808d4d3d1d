"""Provider factory and exports."""

from fxrates.config import Config

from .base import BaseProvider, RatesPayload
from .frankfurter import FrankfurterClient


def get_provider(config: Config) -> BaseProvider:
    """Build the provider named by ``rates.provider``.

    Canonical names:
    - "frankfurter" (default)
    """
    provider_name = config.get("rates.provider", "frankfurter")
    if provider_name == "frankfurter":
        return FrankfurterClient.from_config(config)
    raise ValueError(f"Unknown provider: {provider_name}")


__all__ = [
    "BaseProvider",
    "RatesPayload",
    "FrankfurterClient",
    "get_provider",
]

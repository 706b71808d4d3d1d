"""Populate a RateStore from a provider."""
from fxrates.models import RateSnapshot
from fxrates.providers.base import BaseProvider
from fxrates.store import RateStore
from fxrates.utils.logging import get_logger

logger = get_logger(__name__)


async def load_rates(store: RateStore, provider: BaseProvider, base: str) -> RateSnapshot:
    """
    Fetch a fresh snapshot and atomically publish it to ``store``.

    The store is only written once the snapshot is complete and valid, so a
    failed fetch leaves the previous value (or the empty state) untouched.

    Raises:
        RateFetchError: propagated from the provider
    """
    logger.info(f"Fetching latest exchange rates with {base} as base...")
    snapshot = await provider.fetch_snapshot(base)
    store.write(snapshot)
    logger.info(
        f"Rates as of {snapshot.date} loaded | base={snapshot.base} | {len(snapshot.rates)} currencies"
    )
    return snapshot

"""System health report."""
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import asyncio
from fxrates.config import Config
from fxrates.store import RateStore
from fxrates.utils.logging import get_logger

logger = get_logger(__name__)


class HealthStatus:
    """Health check status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


async def check_store(store: RateStore) -> Dict[str, Any]:
    """Check that the rate store holds a snapshot."""
    snapshot = store.read()
    if snapshot is None:
        return {
            "status": HealthStatus.UNHEALTHY,
            "message": "Rates not loaded"
        }

    updated_at = store.updated_at
    return {
        "status": HealthStatus.HEALTHY,
        "message": "Rates loaded",
        "base": snapshot.base,
        "date": snapshot.date,
        "currencies": len(snapshot.rates),
        "updated_at": updated_at.isoformat() if updated_at else None,
    }


async def check_config(config: Optional[Config]) -> Dict[str, Any]:
    """Check configuration loading."""
    if config is None:
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Running without a configuration file"
        }

    required_fields = ["app_name", "rates_base_url", "base_currency", "port"]
    for field in required_fields:
        try:
            getattr(config, field)
        except Exception as e:
            logger.error(f"Config health check failed: {e}")
            return {
                "status": HealthStatus.UNHEALTHY,
                "message": f"Config error in {field}: {e}"
            }

    return {
        "status": HealthStatus.HEALTHY,
        "message": "Configuration loaded"
    }


async def get_health_status(store: RateStore, config: Optional[Config] = None) -> Dict[str, Any]:
    """
    Get overall system health status.

    Returns:
        Dict containing overall status and component statuses
    """
    store_health, config_health = await asyncio.gather(
        check_store(store),
        check_config(config),
    )

    statuses = [store_health["status"], config_health["status"]]

    if all(s == HealthStatus.HEALTHY for s in statuses):
        overall_status = HealthStatus.HEALTHY
    elif any(s == HealthStatus.UNHEALTHY for s in statuses):
        overall_status = HealthStatus.UNHEALTHY
    else:
        overall_status = HealthStatus.DEGRADED

    return {
        "status": overall_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "store": store_health,
            "config": config_health,
        }
    }

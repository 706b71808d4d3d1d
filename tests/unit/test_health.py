"""Tests for health check functionality."""
import pytest
from fxrates.config import Config
from fxrates.health import (
    check_config,
    check_store,
    get_health_status,
    HealthStatus
)
from fxrates.store import RateStore


@pytest.mark.asyncio
async def test_check_store_populated(store):
    result = await check_store(store)
    assert result["status"] == HealthStatus.HEALTHY
    assert result["base"] == "MYR"
    assert result["date"] == "2024-01-01"
    assert result["currencies"] == 3
    assert result["updated_at"] is not None


@pytest.mark.asyncio
async def test_check_store_empty():
    result = await check_store(RateStore())
    assert result["status"] == HealthStatus.UNHEALTHY
    assert result["message"] == "Rates not loaded"


@pytest.mark.asyncio
async def test_check_config(temp_config_file):
    result = await check_config(Config(temp_config_file))
    assert result["status"] == HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_check_config_missing():
    result = await check_config(None)
    assert result["status"] == HealthStatus.DEGRADED


@pytest.mark.asyncio
async def test_check_config_bad_port(temp_config_file, monkeypatch):
    monkeypatch.setenv("FX_PORT", "nope")
    result = await check_config(Config(temp_config_file))
    assert result["status"] == HealthStatus.UNHEALTHY
    assert "port" in result["message"]


@pytest.mark.asyncio
async def test_get_health_status(store, temp_config_file):
    """Test overall health status."""
    status = await get_health_status(store, Config(temp_config_file))

    assert status["status"] == HealthStatus.HEALTHY
    assert "timestamp" in status
    assert set(status["components"]) == {"store", "config"}


@pytest.mark.asyncio
async def test_get_health_status_unhealthy_without_rates(temp_config_file):
    status = await get_health_status(RateStore(), Config(temp_config_file))
    assert status["status"] == HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_get_health_status_degraded_without_config(store):
    status = await get_health_status(store)
    assert status["status"] == HealthStatus.DEGRADED

"""Pytest configuration and fixtures."""
import logging
import pytest
from pathlib import Path
import tempfile
import yaml

from fxrates.config import reset_config
from fxrates.models import RateSnapshot
from fxrates.store import RateStore


CONFIG_DATA = {
    'app': {
        'name': 'Test App',
        'version': '0.1.0',
    },
    'server': {
        'host': '127.0.0.1',
        'port': 3000,
    },
    'rates': {
        'base_url': 'https://rates.test',
        'base_currency': 'MYR',
        'timeout': 1,
        'retry_attempts': 1,
    },
    'geolocation': {
        'base_url': 'http://geo.test/json',
        'timeout': 0.5,
    },
    'logging': {
        'enabled': False,
    },
}


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(CONFIG_DATA, f)
        config_path = f.name

    yield config_path

    Path(config_path).unlink()


@pytest.fixture
def snapshot():
    """Small MYR-based snapshot used across tests."""
    return RateSnapshot(
        base="MYR",
        date="2024-01-01",
        rates={"MYR": 1.0, "USD": 0.21, "EUR": 0.19},
    )


@pytest.fixture
def store(snapshot):
    return RateStore(snapshot)


@pytest.fixture(autouse=True)
def reset_global_state():
    """Forget the global config and restore root logging after each test."""
    root = logging.getLogger()
    level = root.level
    reset_config()
    yield
    reset_config()
    logging.disable(logging.NOTSET)
    # Drop handlers installed by setup_logging; pytest's own are subclasses
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

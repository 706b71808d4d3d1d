"""Configuration management for the currency exchange service."""
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv
from fxrates.utils.errors import ConfigurationError
from fxrates.utils.logging import setup_logging
import logging

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config.yaml"

# Environment variable -> dot-separated config key
ENV_OVERRIDES = {
    "FX_HOST": "server.host",
    "FX_PORT": "server.port",
    "FX_BASE_CURRENCY": "rates.base_currency",
    "FX_RATES_URL": "rates.base_url",
    "FX_GEOLOCATION_URL": "geolocation.base_url",
}


class Config:
    """Application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. Defaults to $FX_CONFIG
                or ./config.yaml.
        """
        # Load environment variables from .env first so FX_CONFIG can live there
        load_dotenv()
        self.config_path = Path(config_path or os.getenv("FX_CONFIG", DEFAULT_CONFIG_PATH))
        self._config: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML and environment."""
        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            self._config = yaml.safe_load(f)

        if not self._config:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")

        self._validate()
        self._apply_env_overrides()

        # Setup logging
        log_config = self._config.get('logging') or {}
        setup_logging(
            level=os.getenv('LOG_LEVEL', log_config.get('level', 'INFO')),
            log_file=log_config.get('file'),
            format_type=log_config.get('format', 'text'),
            enabled=log_config.get('enabled', True)
        )

        logger.info("Configuration loaded successfully")

    def _validate(self) -> None:
        """Validate required configuration sections."""
        if not isinstance(self._config, dict):
            raise ConfigurationError(f"Invalid configuration file: {self.config_path}")

        required_sections = ['app', 'rates']

        for section in required_sections:
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")

        if not isinstance(self._config['rates'], dict) or 'base_url' not in self._config['rates']:
            raise ConfigurationError("Missing rates.base_url in config")

    def _apply_env_overrides(self) -> None:
        for env_key, config_key in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            section, _, name = config_key.partition('.')
            self._config.setdefault(section, {})[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "rates.base_currency")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Currency Exchange API')

    @property
    def app_version(self) -> str:
        return self.get('app.version', '0.1.0')

    @property
    def host(self) -> str:
        return self.get('server.host', '127.0.0.1')

    @property
    def port(self) -> int:
        try:
            return int(self.get('server.port', 3000))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid server.port: {self.get('server.port')}")

    @property
    def cors_origins(self) -> list:
        return self.get('server.cors_origins', ['*'])

    @property
    def rates_base_url(self) -> str:
        return self.get('rates.base_url').rstrip('/')

    @property
    def base_currency(self) -> str:
        return str(self.get('rates.base_currency', 'MYR')).upper()

    @property
    def rates_timeout(self) -> float:
        return float(self.get('rates.timeout', 10))

    @property
    def rates_retry_attempts(self) -> int:
        return int(self.get('rates.retry_attempts', 1))

    @property
    def geolocation_base_url(self) -> str:
        return self.get('geolocation.base_url', 'http://ip-api.com/json').rstrip('/')

    @property
    def geolocation_timeout(self) -> float:
        return float(self.get('geolocation.timeout', 3.0))


# Global config instance
_config: Optional[Config] = None


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and return global configuration instance."""
    global _config
    if _config is None:
        _config = Config(config_path)
    return _config


def get_config() -> Config:
    """Get global configuration instance."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Forget the global configuration (used by tests and the CLI)."""
    global _config
    _config = None

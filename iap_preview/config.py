"""Configuration management - loads products.yaml and environment variables."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from iap_preview.logging_config import get_logger
from iap_preview.models import PreviewSettings, ProductsConfig

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "fixtures" / "products.yaml"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


class Config:
    """Loads products.yaml and gives validated access to:
    - Catalog product definitions
    - Preview store settings (purchase delay, filtering, transaction fixture)
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to products.yaml. Falls back to the CONFIG_PATH env var,
                        then to the catalog packaged with iap_preview.
        """
        self._config_path = self._resolve_config_path(config_path)
        self._products_config: Optional[ProductsConfig] = None
        self._load_config()

    def _resolve_config_path(self, config_path: Optional[str]) -> Path:
        if config_path:
            return Path(config_path)

        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            return Path(env_path)

        return DEFAULT_CONFIG_PATH

    def _load_config(self) -> None:
        """Load and validate products.yaml."""
        if not self._config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {self._config_path}\n"
                f"Unset CONFIG_PATH to use the packaged preview catalog"
            )

        try:
            with open(self._config_path, encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML configuration: {e}") from e

        if not raw_config:
            raise ConfigurationError(f"Configuration file is empty: {self._config_path}")
        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(raw_config).__name__}"
            )

        try:
            self._products_config = ProductsConfig(**raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        logger.debug(
            "config_loaded",
            config_path=str(self._config_path),
            product_count=len(self._products_config.products),
        )

    @property
    def products(self) -> ProductsConfig:
        """Get validated products configuration."""
        if self._products_config is None:
            raise ConfigurationError("Configuration not loaded")
        return self._products_config

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def preview_settings(self) -> PreviewSettings:
        """Preview store behavior settings."""
        return self.products.preview

    def get_all_product_ids(self) -> list[str]:
        return [p.id for p in self.products.products]

    def reload(self) -> None:
        """Reload configuration from disk.

        Useful while editing products.yaml during preview work.
        """
        self._load_config()


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(config_path: Optional[str] = None) -> Config:
    """Get global configuration instance (singleton).

    Args:
        config_path: Optional path to configuration file (only used on first call)
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_path)
    return _config_instance


def reload_config() -> None:
    """Reload global configuration from disk."""
    global _config_instance
    if _config_instance:
        _config_instance.reload()
    else:
        _config_instance = Config()


def reset_config() -> None:
    """Drop the global configuration so the next get_config() loads afresh."""
    global _config_instance
    _config_instance = None

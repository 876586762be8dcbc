"""Shared fixtures: singleton resets and fast preview configs."""

import pytest
import yaml

from iap_preview.config import DEFAULT_CONFIG_PATH, reset_config
from iap_preview.repositories.product_catalog import reset_product_catalog
from iap_preview.services.purchase_manager import reset_purchase_manager
from iap_preview.services.transaction_feed import reset_preview_transaction, reset_transaction_feed


def _reset_singletons():
    reset_config()
    reset_product_catalog()
    reset_purchase_manager()
    reset_transaction_feed()
    reset_preview_transaction()


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Start every test from the packaged catalog with no cached fixtures."""
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    _reset_singletons()
    yield
    _reset_singletons()


@pytest.fixture
def packaged_config():
    """Raw dict of the packaged products.yaml."""
    with open(DEFAULT_CONFIG_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def write_config(tmp_path):
    """Write a config dict (or raw text) to a temporary products.yaml."""

    def _write(content, name="products.yaml"):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fast_config_path(packaged_config, write_config, monkeypatch):
    """Packaged catalog with a short purchase delay, installed as the global config."""
    packaged_config["preview"]["purchase_delay_seconds"] = 0.05
    path = write_config(packaged_config)
    monkeypatch.setenv("CONFIG_PATH", str(path))
    return path

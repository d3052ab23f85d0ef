"""Unit tests for the pricing config tables and override loading."""

from __future__ import annotations

import copy
import json
import math

import pytest

from src.removals_quote.config import (
    DEFAULT_CONFIG,
    DEFAULT_TABLES,
    ConfigurationError,
    PricingConfig,
    config_from_env,
    load_config,
)


def test_default_config_passes_check():
    assert DEFAULT_CONFIG.check() is DEFAULT_CONFIG
    assert DEFAULT_CONFIG.currency == "GBP"
    assert DEFAULT_CONFIG.profit_margin == 0.65


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CONFIG.cubes_table[300] = DEFAULT_CONFIG.cubes_table[250]
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.profit_margin = 0.5


def test_last_mileage_band_is_unbounded():
    assert math.isinf(DEFAULT_CONFIG.mileage_rates[-1].max_miles)


def test_every_property_size_resolves_to_a_sizing_rule():
    for size, triple in DEFAULT_CONFIG.property_cubes.items():
        for bucket in ("few", "average", "many"):
            assert triple[bucket] > 0, size


def test_missing_cube_bucket_is_a_config_error():
    raw = copy.deepcopy(DEFAULT_TABLES)
    del raw["property_cubes"]["2bed"]["many"]
    with pytest.raises(ConfigurationError, match="2bed"):
        PricingConfig.from_dict(raw).check()


def test_missing_section_is_a_config_error():
    raw = copy.deepcopy(DEFAULT_TABLES)
    del raw["van_rates"]
    with pytest.raises(ConfigurationError):
        PricingConfig.from_dict(raw)


def test_load_config_overrides_from_file(tmp_path):
    path = tmp_path / "pricing.json"
    path.write_text(json.dumps({"van_rates": {"full_day": 120}, "profit_margin": 0.5}))
    config = load_config(path)
    assert config.van_rates["full_day"] == 120
    assert config.van_rates["half_day"] == 50
    assert config.profit_margin == 0.5
    # defaults untouched
    assert DEFAULT_CONFIG.van_rates["full_day"] == 100


def test_load_config_margin_override():
    assert load_config(profit_margin=0.4).profit_margin == 0.4


def test_load_config_rejects_table_gap(tmp_path):
    path = tmp_path / "pricing.json"
    path.write_text(json.dumps({"cubes_table": {"100": {"men": 1, "vans": 1, "load_time": 0.5}}}))
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_load_config_rejects_bad_margin():
    with pytest.raises(ConfigurationError):
        load_config(profit_margin=1.0)


def test_config_from_env_defaults(monkeypatch):
    monkeypatch.delenv("PRICING_CONFIG_PATH", raising=False)
    monkeypatch.setenv("PROFIT_MARGIN", "  ")
    assert config_from_env() is DEFAULT_CONFIG


def test_config_from_env_applies_file_and_margin(monkeypatch, tmp_path):
    path = tmp_path / "pricing.json"
    path.write_text(json.dumps({"van_rates": {"half_day": 60}}))
    monkeypatch.setenv("PRICING_CONFIG_PATH", str(path))
    monkeypatch.setenv("PROFIT_MARGIN", "0.5")
    config = config_from_env()
    assert config.van_rates["half_day"] == 60
    assert config.profit_margin == 0.5


@pytest.mark.parametrize("raw", ["abc", "nan", "1.5"])
def test_config_from_env_rejects_bad_margin(monkeypatch, raw):
    monkeypatch.delenv("PRICING_CONFIG_PATH", raising=False)
    monkeypatch.setenv("PROFIT_MARGIN", raw)
    with pytest.raises(ConfigurationError):
        config_from_env()

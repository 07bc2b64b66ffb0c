from pathlib import Path

import pytest
import yaml

from expense_tracker import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("EXPENSES_FILE", raising=False)
    monkeypatch.delenv("EXPENSES_LOG_LEVEL", raising=False)
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")


def test_defaults_without_file():
    cfg = config.load_config()
    assert cfg["data_file"] == "expenses.json"
    assert cfg["default_category"] == "Uncategorized"
    assert "csv" in cfg["output_modules"]


def test_file_values_merge_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump({"data_file": "ledger.json", "currency_symbol": "€"}, f)

    cfg = config.load_config(path)
    assert cfg["data_file"] == "ledger.json"
    assert cfg["currency_symbol"] == "€"
    assert cfg["log_level"] == "WARNING"


def test_merge_does_not_share_default_dicts(tmp_path):
    cfg = config.load_config()
    cfg["output_modules"]["csv"] = "something.else"
    assert config.DEFAULT_CONFIG["output_modules"]["csv"].endswith("CSVOutput")


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("data_file: ledger.json\n")
    monkeypatch.setenv("EXPENSES_FILE", str(tmp_path / "env.json"))

    cfg = config.load_config(path)
    assert cfg["data_file"] == str(tmp_path / "env.json")


def test_non_mapping_config_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        config.load_config(path)


def test_resolve_data_file_prefers_override():
    cfg = {"data_file": "expenses.json"}
    assert config.resolve_data_file(cfg) == Path("expenses.json")
    assert config.resolve_data_file(cfg, "other.json") == Path("other.json")

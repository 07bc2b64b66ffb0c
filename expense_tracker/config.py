from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "data_file": "expenses.json",
    "default_category": "Uncategorized",
    "currency_symbol": "$",
    "log_level": "WARNING",
    "output_dir": "data",
    "output_modules": {
        "csv": "expense_tracker.outputs.csv_output.CSVOutput",
        "excel": "expense_tracker.outputs.excel_output.ExcelOutput",
    },
}

DEFAULT_CONFIG_PATH = Path("config.yaml")

# Environment variable -> config key
ENV_OVERRIDES = {
    "EXPENSES_FILE": "data_file",
    "EXPENSES_LOG_LEVEL": "log_level",
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: str | os.PathLike | None = None) -> Dict[str, object]:
    """Load the YAML config at *path* and apply defaults and env overrides.

    A missing file is not an error; the defaults are used instead.
    """
    target = Path(path) if path else DEFAULT_CONFIG_PATH
    data: Dict[str, object] = {}
    if target.exists():
        with target.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {target} must contain a mapping")
    config = _merge_defaults(data, DEFAULT_CONFIG)
    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config[key] = value
    return config


def resolve_data_file(config: Dict[str, object], override: str | None = None) -> Path:
    return Path(override or str(config["data_file"]))

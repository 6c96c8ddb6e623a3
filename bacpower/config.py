"""Configuration loading utilities for bacpower runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from bacpower.core.types import ArchitectureModel, SimulationSettings


def load_json_config(path: str | Path) -> dict[str, Any]:
    """Load and validate a run config from a JSON file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if config_path.suffix.lower() != ".json":
        raise ValueError(
            f"Unsupported config format for '{config_path}'. Use a .json config file."
        )

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Invalid JSON in config '{config_path}' at line {exc.lineno}, "
            f"column {exc.colno}: {exc.msg}"
        ) from exc

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid config root in '{config_path}': expected JSON object, got {type(data).__name__}."
        )
    return data


def parse_run_config(data: dict[str, Any]) -> tuple[ArchitectureModel, SimulationSettings]:
    for section in ("architecture", "simulation"):
        if section not in data:
            raise KeyError(f"config is missing the '{section}' section.")
        if not isinstance(data[section], dict):
            raise ValueError(f"config section '{section}' must be a JSON object.")
    return (
        ArchitectureModel.from_config(data["architecture"]),
        SimulationSettings.from_config(data["simulation"]),
    )


def load_run_config(path: str | Path) -> tuple[ArchitectureModel, SimulationSettings]:
    return parse_run_config(load_json_config(path))

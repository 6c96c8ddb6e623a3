"""Output writers for simulation tables and run metadata."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd


def ensure_dir(path: str | Path) -> Path:
    """Create a directory if needed and return it as ``Path``."""
    out = Path(path)
    out.mkdir(parents=True, exist_ok=True)
    return out


def json_safe(obj: Any) -> Any:
    """Replace non-finite floats with ``None`` so output is strict JSON."""
    if isinstance(obj, dict):
        return {k: json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [json_safe(v) for v in obj]
    if isinstance(obj, (float, np.floating)):
        return float(obj) if math.isfinite(float(obj)) else None
    if isinstance(obj, np.integer):
        return int(obj)
    return obj


def write_json(path: str | Path, payload: dict[str, Any] | list[Any]) -> Path:
    """Write JSON payload to disk; NaN and inf become ``null``."""
    out = Path(path)
    ensure_dir(out.parent)
    out.write_text(
        json.dumps(json_safe(payload), indent=2, sort_keys=True, allow_nan=False),
        encoding="utf-8",
    )
    return out


def atomic_write_csv(path: str | Path, df: pd.DataFrame, *, index: bool = False) -> Path:
    """Safely write a CSV by replacing a temporary file."""
    out = Path(path)
    ensure_dir(out.parent)
    tmp = out.with_suffix(out.suffix + ".tmp")
    df.to_csv(tmp, index=index)
    tmp.replace(out)
    return out


def read_table(path: str | Path) -> pd.DataFrame:
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"Table not found: {src}")
    df = pd.read_csv(src)
    if "replicate" in df.columns:
        df = df.set_index("replicate")
    return df

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from bacpower.io import json_safe, write_json


def _strict_loads(text: str):
    def _reject(token):
        raise ValueError(f"non-standard JSON constant {token}")

    return json.loads(text, parse_constant=_reject)


def test_write_json_maps_non_finite_to_null(tmp_path: Path):
    out = write_json(
        tmp_path / "summary.json",
        {"mean": float("nan"), "sd": np.float64(np.inf), "n": np.int64(3), "vals": [1.0, -np.inf]},
    )
    data = _strict_loads(out.read_text(encoding="utf-8"))
    assert data == {"mean": None, "sd": None, "n": 3, "vals": [1.0, None]}


def test_json_safe_keeps_finite_values():
    assert json_safe({"a": 0.5, "b": "x", "c": None}) == {"a": 0.5, "b": "x", "c": None}


def test_strict_loader_rejects_bare_nan():
    with pytest.raises(ValueError, match="NaN"):
        _strict_loads('{"a": NaN}')

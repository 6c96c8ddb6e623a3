"""Tabular summaries of a SimulationTable."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from bacpower.core.types import TABLE_COLUMNS

COUNT_COLUMNS = ("bonferroni_true", "fdr_true", "fdr_detected")


def _missing_cols(df: pd.DataFrame, required_cols: list[str]) -> list[str]:
    have = set(str(c) for c in df.columns)
    return [str(c) for c in required_cols if str(c) not in have]


def validate_table(table: pd.DataFrame) -> None:
    miss = _missing_cols(table, list(TABLE_COLUMNS))
    if miss:
        raise ValueError(f"simulation table missing required columns: {miss}")
    if table.empty:
        raise ValueError("simulation table has no rows.")


def detection_distribution(table: pd.DataFrame, column: str, max_count: int) -> pd.DataFrame:
    """Empirical distribution of a detection count over replicates.

    One row per k in 0..max_count with `count`, `probability`,
    `prob_at_least` (P(X >= k)) and `prob_at_most` (P(X <= k)).
    """
    validate_table(table)
    if column not in COUNT_COLUMNS:
        raise ValueError(f"column must be one of {COUNT_COLUMNS}, got '{column}'.")
    values = table[column].to_numpy(dtype=int)
    top = int(max_count)
    if top < 0:
        raise ValueError("max_count must be >= 0.")
    if values.size and int(values.max()) > top:
        raise ValueError(f"{column} exceeds max_count={top}.")

    counts = np.bincount(values, minlength=top + 1)[: top + 1]
    prob = counts / float(values.size)
    return pd.DataFrame(
        {
            "k": np.arange(top + 1, dtype=int),
            "count": counts.astype(int),
            "probability": prob,
            "prob_at_least": np.cumsum(prob[::-1])[::-1],
            "prob_at_most": np.cumsum(prob),
        }
    )


def summarize_table(table: pd.DataFrame, n: int, N: int) -> dict[str, Any]:
    validate_table(table)
    n_i = int(n)
    if n_i < 1 or int(N) < n_i:
        raise ValueError("require 1 <= n <= N.")

    bonf = table["bonferroni_true"].to_numpy(dtype=float)
    fdr_true = table["fdr_true"].to_numpy(dtype=float)
    fdr_all = table["fdr_detected"].to_numpy(dtype=float)
    false_disc = fdr_all - fdr_true
    fdp = np.divide(false_disc, fdr_all, out=np.zeros_like(false_disc), where=fdr_all > 0)
    h2 = table["h2"].to_numpy(dtype=float)
    h2_finite = h2[np.isfinite(h2)]

    return {
        "n_replicates": int(len(table)),
        "n_causal": n_i,
        "n_tested": int(N),
        "bonferroni_power": float(np.mean(bonf) / n_i),
        "fdr_power": float(np.mean(fdr_true) / n_i),
        "prob_all_bonferroni": float(np.mean(bonf == n_i)),
        "prob_all_fdr": float(np.mean(fdr_true == n_i)),
        "mean_fdr_false_discoveries": float(np.mean(false_disc)),
        "empirical_fdp": float(np.mean(fdp)),
        "mean_realized_h2": float(np.mean(h2_finite)) if h2_finite.size else float("nan"),
        "sd_realized_h2": float(np.std(h2_finite, ddof=1)) if h2_finite.size > 1 else float("nan"),
        "median_min_p": float(np.median(table["min_p"].to_numpy(dtype=float))),
    }

"""Detection scoring for one replicate under Bonferroni and BH-FDR."""

from __future__ import annotations

import numpy as np

from bacpower.core.types import ReplicateSummary
from bacpower.core.utils import require_length
from bacpower.errors import ShapeMismatch
from bacpower.stats.multiple_testing import bh_fdr, bonferroni_threshold


def null_pvalues(n_null: int, rng: np.random.Generator) -> np.ndarray:
    """Uniform(0, 1) p-values standing in for the untested null genes."""
    return rng.random(max(0, int(n_null)))


def realized_heritability(signal: np.ndarray, phenotype: np.ndarray) -> float:
    g = np.asarray(signal, dtype=float).ravel()
    y = np.asarray(phenotype, dtype=float).ravel()
    if y.size < 2:
        return float("nan")
    var_y = float(np.var(y, ddof=1))
    if var_y <= 0.0:
        return float("nan")
    return float(np.var(g, ddof=1)) / var_y


def score_replicate(
    pvalues: np.ndarray,
    n: int,
    N: int,
    alpha: float,
    fdr_thr: float,
    genotypes: np.ndarray,
    beta: np.ndarray,
    phenotype: np.ndarray,
    rng: np.random.Generator,
) -> ReplicateSummary:
    """Summarize one replicate's causal-gene p-values.

    The N - n null p-values are drawn once from `rng` and BH is applied
    once to the combined vector of length N; the first n positions are
    the causal genes.
    """
    n_i = int(n)
    N_i = int(N)
    p_causal = require_length("pvalues", pvalues, n_i)
    beta_arr = require_length("beta", beta, n_i)
    y = np.asarray(phenotype, dtype=float).ravel()
    G = np.asarray(genotypes)
    if G.ndim != 2 or G.shape != (y.size, n_i):
        raise ShapeMismatch(
            f"genotypes must have shape ({y.size}, {n_i}), got {tuple(G.shape)}."
        )

    bonferroni_true = int(np.sum(p_causal < bonferroni_threshold(alpha, N_i)))

    p_all = np.concatenate([p_causal, null_pvalues(N_i - n_i, rng)])
    hits = bh_fdr(p_all) < float(fdr_thr)
    fdr_detected = int(hits.sum())
    fdr_true_detected = int(hits[:n_i].sum())

    return ReplicateSummary(
        min_p=float(np.min(p_causal)),
        max_p=float(np.max(p_causal)),
        bonferroni_true=bonferroni_true,
        fdr_detected=fdr_detected,
        fdr_true_detected=fdr_true_detected,
        realized_h2=realized_heritability(G @ beta_arr, y),
    )

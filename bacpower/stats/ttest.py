"""Two-sample association test between a binary genotype and a phenotype."""

from __future__ import annotations

import warnings

import numpy as np
from scipy.stats import ttest_ind

MIN_GROUP_SIZE = 2
P_FLOOR = float(np.finfo(float).tiny)


def welch_pvalue(
    phenotype: np.ndarray, carrier: np.ndarray, min_group_size: int = MIN_GROUP_SIZE
) -> tuple[float, bool]:
    """Welch t-test p-value for carriers vs non-carriers.

    Returns ``(p, degenerate)``. A group with fewer than `min_group_size`
    members, zero spread on both sides, or a non-finite test result,
    yields ``(1.0, True)``.
    Underflowed p-values are clamped to the smallest positive float.
    """
    y = np.asarray(phenotype, dtype=float).ravel()
    mask = np.asarray(carrier).ravel().astype(bool)
    if mask.size != y.size:
        raise ValueError("carrier mask length must match phenotype length.")

    n_carrier = int(mask.sum())
    if n_carrier < min_group_size or (mask.size - n_carrier) < min_group_size:
        return 1.0, True

    carriers = y[mask]
    others = y[~mask]
    if np.ptp(carriers) == 0.0 and np.ptp(others) == 0.0:
        return 1.0, True

    with warnings.catch_warnings(), np.errstate(all="ignore"):
        warnings.simplefilter("ignore", RuntimeWarning)
        res = ttest_ind(carriers, others, equal_var=False)
    p = float(res.pvalue)
    if not np.isfinite(p):
        return 1.0, True
    return min(1.0, max(p, P_FLOOR)), False

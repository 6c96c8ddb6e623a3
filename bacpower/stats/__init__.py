"""Statistical utilities for bacpower."""

from bacpower.stats.multiple_testing import bh_fdr, bonferroni_threshold
from bacpower.stats.ttest import welch_pvalue

__all__ = [
    "bh_fdr",
    "bonferroni_threshold",
    "welch_pvalue",
]

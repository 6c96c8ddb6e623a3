"""Per-replicate simulation of genotypes, phenotypes and gene-level tests."""

from __future__ import annotations

import numpy as np

from bacpower.core.types import ArchitectureModel, ReplicateResult
from bacpower.stats.ttest import welch_pvalue


def draw_genotypes(f: np.ndarray, K: int, rng: np.random.Generator) -> np.ndarray:
    """K x n presence/absence matrix, column j ~ Bernoulli(f[j]).

    Columns are independent (linkage equilibrium).
    """
    freqs = np.asarray(f, dtype=float).ravel()
    return (rng.random((int(K), freqs.size)) < freqs[None, :]).astype(np.int8)


def gene_pvalues(genotypes: np.ndarray, phenotype: np.ndarray) -> tuple[np.ndarray, int]:
    """Per-gene Welch p-values and the number of degenerate genes."""
    G = np.asarray(genotypes)
    y = np.asarray(phenotype, dtype=float).ravel()
    if G.ndim != 2 or G.shape[0] != y.size:
        raise ValueError("genotypes must be a (K, n) matrix matching phenotype length.")

    pvals = np.ones(G.shape[1], dtype=float)
    n_degenerate = 0
    for j in range(G.shape[1]):
        p, degenerate = welch_pvalue(y, G[:, j])
        pvals[j] = p
        n_degenerate += int(degenerate)
    return pvals, n_degenerate


def simulate_replicate(
    architecture: ArchitectureModel, K: int, rng: np.random.Generator
) -> ReplicateResult:
    """Simulate one population of size K and test every causal gene."""
    K_i = int(K)
    if K_i < 1:
        raise ValueError(f"K must be >= 1, got {K}.")

    genotypes = draw_genotypes(architecture.f, K_i, rng)
    signal = genotypes @ architecture.beta
    phenotype = signal + rng.normal(0.0, architecture.sigma, size=K_i)
    pvalues, n_degenerate = gene_pvalues(genotypes, phenotype)

    return ReplicateResult(
        genotypes=genotypes,
        phenotype=phenotype,
        signal=signal,
        pvalues=pvalues,
        n_degenerate=n_degenerate,
    )

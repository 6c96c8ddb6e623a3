"""Replicate sweep: simulate, score and collect one row per replicate."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import pandas as pd

from bacpower.core.types import (
    TABLE_COLUMNS,
    ArchitectureModel,
    ReplicateSummary,
    SimulationSettings,
)
from bacpower.parallel import parallel_map, resolve_n_jobs
from bacpower.scoring import score_replicate
from bacpower.seeding import replicate_seed, rng_from_seed
from bacpower.simulate import simulate_replicate


@dataclass(frozen=True)
class ReplicateTask:
    index: int
    seed: int
    architecture: ArchitectureModel
    K: int
    alpha: float
    fdr_thr: float


def run_replicate(task: ReplicateTask) -> tuple[ReplicateSummary, int]:
    """Run one replicate on its own generator; returns the summary and degenerate-gene count."""
    rng = rng_from_seed(task.seed)
    arch = task.architecture
    rep = simulate_replicate(arch, task.K, rng)
    summary = score_replicate(
        rep.pvalues,
        arch.n,
        arch.N,
        task.alpha,
        task.fdr_thr,
        rep.genotypes,
        arch.beta,
        rep.phenotype,
        rng,
    )
    return summary, rep.n_degenerate


def summaries_to_table(summaries: list[ReplicateSummary]) -> pd.DataFrame:
    table = pd.DataFrame([s.as_row() for s in summaries], columns=list(TABLE_COLUMNS))
    table = table.astype(
        {
            "min_p": float,
            "max_p": float,
            "bonferroni_true": int,
            "fdr_detected": int,
            "fdr_true": int,
            "h2": float,
        }
    )
    table.index.name = "replicate"
    return table


def run_simulation(
    architecture: ArchitectureModel,
    K: int,
    R: int,
    alpha: float,
    fdr_thr: float,
    seed: int,
    *,
    n_jobs: int | None = None,
    backend: str = "loky",
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """Run R independent replicates and return the R-row SimulationTable.

    Replicate i draws from a generator seeded by ``(seed, i)``, so the table
    is identical for any `n_jobs` or backend. Row i is replicate i.
    """
    settings = SimulationSettings(
        K=K, R=R, alpha=alpha, fdr_thr=fdr_thr, seed=seed, n_jobs=n_jobs, backend=backend
    )
    tasks = [
        ReplicateTask(
            index=i,
            seed=replicate_seed(settings.seed, i),
            architecture=architecture,
            K=int(settings.K),
            alpha=float(settings.alpha),
            fdr_thr=float(settings.fdr_thr),
        )
        for i in range(int(settings.R))
    ]

    if logger is not None:
        logger.info(
            "Simulating R=%d replicates: n=%d N=%d K=%d h2=%.4g sigma=%.4g seed=%d",
            settings.R,
            architecture.n,
            architecture.N,
            settings.K,
            architecture.h2,
            architecture.sigma,
            settings.seed,
        )
    t0 = time.time()
    results = parallel_map(
        run_replicate,
        tasks,
        n_jobs=resolve_n_jobs(settings.n_jobs),
        backend=settings.backend,
        logger=logger,
    )
    table = summaries_to_table([summary for summary, _ in results])

    if logger is not None:
        n_degenerate = sum(count for _, count in results)
        if n_degenerate:
            logger.debug(
                "%d gene tests across %d replicates fell back to p=1 (too few carriers or zero variance).",
                n_degenerate,
                settings.R,
            )
        logger.info("Simulation complete in %.2fs (%d rows).", time.time() - t0, len(table))
    return table


def run_from_settings(
    architecture: ArchitectureModel,
    settings: SimulationSettings,
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    return run_simulation(
        architecture,
        settings.K,
        settings.R,
        settings.alpha,
        settings.fdr_thr,
        settings.seed,
        n_jobs=settings.n_jobs,
        backend=settings.backend,
        logger=logger,
    )

"""Deterministic parallel map for replicate workloads."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from joblib import Parallel, cpu_count, delayed

from bacpower.core.types import BACKENDS

T = TypeVar("T")
R = TypeVar("R")


def _call_indexed(func: Callable[[T], R], indexed: tuple[int, T]) -> tuple[int, R]:
    idx, item = indexed
    return idx, func(item)


def resolve_n_jobs(n_jobs: int | None) -> int:
    """`None` means one worker per available core."""
    if n_jobs is None:
        return max(1, int(cpu_count()))
    jobs = int(n_jobs)
    if jobs < 1:
        raise ValueError(f"n_jobs must be >= 1 or None, got {n_jobs}.")
    return jobs


def parallel_map(
    func: Callable[[T], R],
    items: Iterable[T],
    *,
    n_jobs: int | None = 1,
    backend: str = "loky",
    chunk_size: int | str = "auto",
    logger: logging.Logger | None = None,
) -> list[R]:
    """Apply `func` to items; output order always follows input order.

    Items carry their own random state, so results do not depend on
    scheduling or on which worker runs an item.
    """
    seq = list(items)
    if not seq:
        return []
    if backend not in BACKENDS:
        raise ValueError(f"backend must be one of {BACKENDS}, got '{backend}'.")

    jobs = resolve_n_jobs(n_jobs)
    if jobs == 1 or len(seq) == 1:
        if logger is not None:
            logger.info("parallel_map serial execution: n_items=%d", len(seq))
        return [func(item) for item in seq]

    if logger is not None:
        logger.info(
            "parallel_map n_items=%d n_jobs=%d backend=%s batch_size=%s",
            len(seq),
            jobs,
            backend,
            chunk_size,
        )
    rows = Parallel(n_jobs=jobs, backend=backend, batch_size=chunk_size)(
        delayed(_call_indexed)(func, pair) for pair in enumerate(seq)
    )
    rows.sort(key=lambda x: x[0])
    return [row for _, row in rows]

"""Typed configuration and result containers for bacpower simulations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from bacpower.errors import InvalidArchitecture

BACKENDS = ("loky", "multiprocessing", "threading")

TABLE_COLUMNS = ("min_p", "max_p", "bonferroni_true", "fdr_detected", "fdr_true", "h2")


def _as_count(name: str, value: Any) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArchitecture(f"{name} must be an integer, got {value!r}.")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    raise InvalidArchitecture(f"{name} must be an integer, got {value!r}.")


def _readonly_vector(name: str, values: Any, n: int) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        arr = np.full(n, float(arr))
    arr = np.array(arr.ravel(), dtype=float)
    if arr.size != n:
        raise InvalidArchitecture(f"{name} must have length n={n}, got {arr.size}.")
    if not np.all(np.isfinite(arr)):
        raise InvalidArchitecture(f"{name} must be finite.")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class ArchitectureModel:
    """Fixed genetic architecture shared read-only by all replicates.

    - `n`: number of causal genes.
    - `N`: total number of tested genes (causal plus null).
    - `f`: per-causal-gene allele frequency, each in (0, 1).
    - `beta`: per-causal-gene effect size.
    - `h2`: target narrow-sense heritability in (0, 1).

    Scalar `f` or `beta` values are broadcast to length `n`.
    """

    n: int
    N: int
    f: np.ndarray
    beta: np.ndarray
    h2: float

    def __post_init__(self) -> None:
        n = _as_count("n", self.n)
        N = _as_count("N", self.N)
        if n < 1:
            raise InvalidArchitecture(f"n must be >= 1, got {n}.")
        if N < n:
            raise InvalidArchitecture(f"N must be >= n (N={N}, n={n}).")
        h2 = float(self.h2)
        if not (0.0 < h2 < 1.0):
            raise InvalidArchitecture(f"h2 must lie strictly in (0, 1), got {h2}.")

        f = _readonly_vector("f", self.f, n)
        if np.any((f <= 0.0) | (f >= 1.0)):
            raise InvalidArchitecture("every allele frequency in f must lie strictly in (0, 1).")
        beta = _readonly_vector("beta", self.beta, n)

        object.__setattr__(self, "n", n)
        object.__setattr__(self, "N", N)
        object.__setattr__(self, "h2", h2)
        object.__setattr__(self, "f", f)
        object.__setattr__(self, "beta", beta)

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "ArchitectureModel":
        missing = [k for k in ("n", "N", "f", "beta", "h2") if k not in cfg]
        if missing:
            raise KeyError(f"architecture config missing keys: {missing}")
        return cls(n=cfg["n"], N=cfg["N"], f=cfg["f"], beta=cfg["beta"], h2=cfg["h2"])

    @property
    def vg(self) -> float:
        """Additive genetic variance assuming linkage equilibrium."""
        return float(np.sum(self.beta**2 * self.f * (1.0 - self.f)))

    @property
    def sigma2(self) -> float:
        return (1.0 - self.h2) / self.h2 * self.vg

    @property
    def sigma(self) -> float:
        return math.sqrt(self.sigma2)

    @property
    def expected_h2(self) -> float:
        vg = self.vg
        total = vg + self.sigma2
        if total <= 0.0:
            return float("nan")
        return vg / total

    def to_dict(self) -> dict[str, Any]:
        return {
            "n": self.n,
            "N": self.N,
            "f": self.f.tolist(),
            "beta": self.beta.tolist(),
            "h2": self.h2,
            "vg": self.vg,
            "sigma2": self.sigma2,
            "sigma": self.sigma,
        }


@dataclass(frozen=True)
class SimulationSettings:
    """Run-level settings for a replicate sweep."""

    K: int
    R: int
    alpha: float = 0.05
    fdr_thr: float = 0.05
    seed: int = 0
    n_jobs: int | None = None
    backend: str = "loky"

    def __post_init__(self) -> None:
        if int(self.K) < 1:
            raise ValueError(f"K must be >= 1, got {self.K}.")
        if int(self.R) < 1:
            raise ValueError(f"R must be >= 1, got {self.R}.")
        if not (0.0 < float(self.alpha) < 1.0):
            raise ValueError(f"alpha must lie in (0, 1), got {self.alpha}.")
        if not (0.0 < float(self.fdr_thr) <= 1.0):
            raise ValueError(f"fdr_thr must lie in (0, 1], got {self.fdr_thr}.")
        if self.n_jobs is not None and int(self.n_jobs) < 1:
            raise ValueError(f"n_jobs must be >= 1 or None, got {self.n_jobs}.")
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got '{self.backend}'.")

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "SimulationSettings":
        missing = [k for k in ("K", "R") if k not in cfg]
        if missing:
            raise KeyError(f"simulation config missing keys: {missing}")
        n_jobs = cfg.get("n_jobs")
        return cls(
            K=int(cfg["K"]),
            R=int(cfg["R"]),
            alpha=float(cfg.get("alpha", 0.05)),
            fdr_thr=float(cfg.get("fdr_thr", 0.05)),
            seed=int(cfg.get("seed", 0)),
            n_jobs=int(n_jobs) if n_jobs is not None else None,
            backend=str(cfg.get("backend", "loky")),
        )


@dataclass(frozen=True, eq=False)
class ReplicateResult:
    """One simulated dataset and its per-gene p-values."""

    genotypes: np.ndarray
    phenotype: np.ndarray
    signal: np.ndarray
    pvalues: np.ndarray
    n_degenerate: int = 0


@dataclass(frozen=True)
class ReplicateSummary:
    """Detection statistics for one replicate."""

    min_p: float
    max_p: float
    bonferroni_true: int
    fdr_detected: int
    fdr_true_detected: int
    realized_h2: float

    def as_row(self) -> dict[str, float | int]:
        return {
            "min_p": self.min_p,
            "max_p": self.max_p,
            "bonferroni_true": self.bonferroni_true,
            "fdr_detected": self.fdr_detected,
            "fdr_true": self.fdr_true_detected,
            "h2": self.realized_h2,
        }

from operator import itemgetter

import numpy as np
import pytest

from bacpower.core.types import ArchitectureModel
from bacpower.parallel import parallel_map, resolve_n_jobs
from bacpower.runner import ReplicateTask, run_replicate
from bacpower.seeding import replicate_seed, rng_from_seed, stable_entropy


def test_stable_entropy_is_deterministic_and_token_sensitive():
    assert stable_entropy(42, "replicate", 0) == stable_entropy(42, "replicate", 0)
    assert stable_entropy(42, "replicate", 0) != stable_entropy(42, "replicate", 1)
    assert stable_entropy(42, "replicate", 0) != stable_entropy(43, "replicate", 0)
    assert stable_entropy(-1, "replicate", 0) != stable_entropy(1, "replicate", 0)
    assert 0 <= stable_entropy(42, "x") < 2**256


def test_replicate_seeds_unique_over_large_runs():
    seeds = {replicate_seed(42, i) for i in range(200_000)}
    assert len(seeds) == 200_000


def test_indices_that_collided_under_32_bit_seeds_get_distinct_streams():
    assert replicate_seed(42, 91441) != replicate_seed(42, 166086)
    a = rng_from_seed(replicate_seed(42, 91441)).random(8)
    b = rng_from_seed(replicate_seed(42, 166086)).random(8)
    assert not np.array_equal(a, b)

    arch = ArchitectureModel(n=2, N=4, f=[0.5, 0.5], beta=[1.0, 1.0], h2=0.5)
    rows = [
        run_replicate(
            ReplicateTask(index=i, seed=replicate_seed(42, i), architecture=arch, K=100, alpha=0.05, fdr_thr=0.05)
        )[0]
        for i in (91441, 166086)
    ]
    assert rows[0] != rows[1]


def test_replicate_streams_are_distinct():
    draws = [rng_from_seed(replicate_seed(7, i)).random(4) for i in range(50)]
    assert len({tuple(d) for d in draws}) == 50


def test_negative_master_seed_supported():
    assert rng_from_seed(replicate_seed(-5, 0)).random() != rng_from_seed(replicate_seed(5, 0)).random()


@pytest.mark.parametrize(
    "n_jobs, backend",
    [(1, "loky"), (3, "threading"), (2, "loky")],
)
def test_parallel_map_preserves_input_order(n_jobs, backend):
    items = [{"value": v} for v in range(25)]
    out = parallel_map(itemgetter("value"), items, n_jobs=n_jobs, backend=backend, chunk_size=4)
    assert out == list(range(25))


def test_parallel_map_rejects_unknown_backend():
    with pytest.raises(ValueError, match="backend"):
        parallel_map(itemgetter("value"), [{"value": 1}], backend="dask")


def test_parallel_map_empty():
    assert parallel_map(itemgetter("value"), [], n_jobs=4) == []


def test_resolve_n_jobs():
    assert resolve_n_jobs(None) >= 1
    assert resolve_n_jobs(3) == 3
    with pytest.raises(ValueError):
        resolve_n_jobs(0)


def test_rng_from_seed_matches_numpy_seed_sequence():
    assert np.array_equal(rng_from_seed(5).random(3), np.random.default_rng(5).random(3))

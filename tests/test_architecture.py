import numpy as np
import pytest

from bacpower.core.types import ArchitectureModel, SimulationSettings
from bacpower.errors import InvalidArchitecture


def _arch(**overrides):
    params = dict(n=3, N=10, f=[0.2, 0.5, 0.7], beta=[1.0, -0.5, 2.0], h2=0.3)
    params.update(overrides)
    return ArchitectureModel(**params)


def test_derived_variances():
    arch = _arch()
    f = np.array([0.2, 0.5, 0.7])
    beta = np.array([1.0, -0.5, 2.0])
    vg = float(np.sum(beta**2 * f * (1 - f)))
    assert np.isclose(arch.vg, vg)
    assert np.isclose(arch.sigma2, (1 - 0.3) / 0.3 * vg)
    assert np.isclose(arch.sigma, np.sqrt(arch.sigma2))
    assert arch.sigma2 >= 0.0


@pytest.mark.parametrize("h2", [0.01, 0.3, 0.5, 0.9, 0.999])
def test_h2_reconstructed_from_variances(h2):
    arch = _arch(h2=h2)
    assert arch.vg > 0.0
    assert np.isclose(arch.vg / (arch.vg + arch.sigma2), h2)
    assert np.isclose(arch.expected_h2, h2)


def test_zero_effects_give_zero_variance():
    arch = _arch(beta=0.0)
    assert arch.vg == 0.0
    assert arch.sigma == 0.0
    assert np.isnan(arch.expected_h2)


def test_scalar_parameters_broadcast():
    arch = ArchitectureModel(n=4, N=4, f=0.5, beta=1.0, h2=0.5)
    assert arch.f.shape == (4,)
    assert arch.beta.tolist() == [1.0, 1.0, 1.0, 1.0]


def test_vectors_are_read_only():
    arch = _arch()
    with pytest.raises(ValueError):
        arch.f[0] = 0.9
    with pytest.raises(ValueError):
        arch.beta[0] = 0.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"N": 2},
        {"n": 0, "f": [], "beta": []},
        {"h2": 0.0},
        {"h2": 1.0},
        {"h2": -0.1},
        {"f": [0.0, 0.5, 0.5]},
        {"f": [0.2, 1.0, 0.5]},
        {"f": [0.2, 0.5]},
        {"beta": [1.0, 2.0]},
        {"beta": [1.0, np.nan, 2.0]},
    ],
)
def test_invalid_architecture_rejected(overrides):
    with pytest.raises(InvalidArchitecture):
        _arch(**overrides)


def test_invalid_architecture_is_value_error():
    with pytest.raises(ValueError):
        _arch(N=1)


def test_from_config_requires_all_keys():
    arch = ArchitectureModel.from_config({"n": 2, "N": 5, "f": 0.3, "beta": [1, 2], "h2": 0.4})
    assert arch.n == 2 and arch.N == 5
    with pytest.raises(KeyError, match="h2"):
        ArchitectureModel.from_config({"n": 2, "N": 5, "f": 0.3, "beta": 1})


def test_to_dict_echoes_derived_values():
    payload = _arch().to_dict()
    assert payload["f"] == [0.2, 0.5, 0.7]
    assert set(payload) >= {"vg", "sigma2", "sigma"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"K": 0, "R": 1},
        {"K": 10, "R": 0},
        {"K": 10, "R": 1, "alpha": 0.0},
        {"K": 10, "R": 1, "fdr_thr": 1.5},
        {"K": 10, "R": 1, "n_jobs": 0},
        {"K": 10, "R": 1, "backend": "dask"},
    ],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValueError):
        SimulationSettings(**kwargs)


def test_settings_from_config_defaults():
    settings = SimulationSettings.from_config({"K": 50, "R": 3})
    assert settings.alpha == 0.05
    assert settings.fdr_thr == 0.05
    assert settings.n_jobs is None
    assert settings.backend == "loky"
    with pytest.raises(KeyError):
        SimulationSettings.from_config({"K": 50})


@pytest.mark.parametrize(
    "overrides",
    [{"n": 2.7}, {"N": 10.5}, {"n": "3"}, {"N": True}],
)
def test_non_integer_gene_counts_rejected(overrides):
    with pytest.raises(InvalidArchitecture, match="must be an integer"):
        _arch(**overrides)


def test_integral_float_gene_counts_accepted():
    arch = _arch(n=3.0, N=np.int64(10))
    assert arch.n == 3 and isinstance(arch.n, int)
    assert arch.N == 10 and isinstance(arch.N, int)

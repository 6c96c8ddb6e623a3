"""bacpower public API."""

from bacpower._version import __version__
from bacpower.aggregate import detection_distribution, summarize_table
from bacpower.config import load_run_config
from bacpower.core.types import (
    ArchitectureModel,
    ReplicateResult,
    ReplicateSummary,
    SimulationSettings,
)
from bacpower.errors import InvalidArchitecture, ShapeMismatch
from bacpower.runner import run_from_settings, run_simulation
from bacpower.scoring import score_replicate
from bacpower.simulate import simulate_replicate

__all__ = [
    "__version__",
    "ArchitectureModel",
    "ReplicateResult",
    "ReplicateSummary",
    "SimulationSettings",
    "InvalidArchitecture",
    "ShapeMismatch",
    "simulate_replicate",
    "score_replicate",
    "run_simulation",
    "run_from_settings",
    "load_run_config",
    "detection_distribution",
    "summarize_table",
]

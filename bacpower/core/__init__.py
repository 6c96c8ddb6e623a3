"""Core data model subpackage."""

from bacpower.core.types import (
    TABLE_COLUMNS,
    ArchitectureModel,
    ReplicateResult,
    ReplicateSummary,
    SimulationSettings,
)

__all__ = [
    "TABLE_COLUMNS",
    "ArchitectureModel",
    "ReplicateResult",
    "ReplicateSummary",
    "SimulationSettings",
]

"""Core abstractions for CoM motion representations."""

from commotion.core.phase import (
    PhaseType,
    PhaseInfo,
    unique_phases,
    sweep_phases,
    validate_phase_sequence,
)
from commotion.core.state import ComState
from commotion.core.errors import (
    ComMotionError,
    DimensionMismatchError,
    OutOfRangeTimeError,
    UnderivableBoundaryError,
)
from commotion.core.discretization import discretize_global_times
from commotion.core.motion import ComMotion

__all__ = [
    "PhaseType",
    "PhaseInfo",
    "unique_phases",
    "sweep_phases",
    "validate_phase_sequence",
    "ComState",
    "ComMotionError",
    "DimensionMismatchError",
    "OutOfRangeTimeError",
    "UnderivableBoundaryError",
    "discretize_global_times",
    "ComMotion",
]

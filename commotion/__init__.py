"""
Commotion: pluggable center-of-mass motion representations for legged
robot trajectory optimization.

This library provides:
- An abstract CoM motion contract mapping free coefficients to a continuous
  planar CoM state
- Phase labels (stance, step, flight) and phase-sequence derivation
- Deterministic time discretization for downstream constraint builders
- Spline and linear-inverted-pendulum representations
"""

__version__ = "0.1.0"

from commotion.core.phase import PhaseType, PhaseInfo
from commotion.core.state import ComState
from commotion.core.motion import ComMotion
from commotion.core.errors import (
    DimensionMismatchError,
    OutOfRangeTimeError,
    UnderivableBoundaryError,
)
from commotion.representations.timeline import PhaseTimeline
from commotion.representations.factory import MotionKind, create_com_motion
from commotion.sampling.evaluator import MotionEvaluator

__all__ = [
    "PhaseType",
    "PhaseInfo",
    "ComState",
    "ComMotion",
    "DimensionMismatchError",
    "OutOfRangeTimeError",
    "UnderivableBoundaryError",
    "PhaseTimeline",
    "MotionKind",
    "create_com_motion",
    "MotionEvaluator",
]

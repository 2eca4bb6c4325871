"""Concrete CoM motion representations."""

from commotion.representations.timeline import PhaseSegment, PhaseTimeline
from commotion.representations.spline import SplineComMotion, SplineConfig
from commotion.representations.lipm import LipmComMotion, LipmConfig
from commotion.representations.factory import MotionKind, create_com_motion

__all__ = [
    "PhaseSegment",
    "PhaseTimeline",
    "SplineComMotion",
    "SplineConfig",
    "LipmComMotion",
    "LipmConfig",
    "MotionKind",
    "create_com_motion",
]

"""Discretized sampling of CoM motions."""

from commotion.sampling.trajectory import DiscretizedTrajectory, sample_motion
from commotion.sampling.evaluator import MotionEvaluator

__all__ = [
    "DiscretizedTrajectory",
    "sample_motion",
    "MotionEvaluator",
]

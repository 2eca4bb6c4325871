"""Representation factory and dispatch logic."""

import logging
from enum import Enum, auto
from typing import Optional, Union

from commotion.algebra.protocols import LinearAlgebraBackend
from commotion.core.motion import ComMotion
from commotion.core.state import ComState
from commotion.representations.lipm import LipmComMotion, LipmConfig
from commotion.representations.spline import SplineComMotion, SplineConfig
from commotion.representations.timeline import PhaseTimeline

logger = logging.getLogger(__name__)


class MotionKind(Enum):
    """Available CoM motion representations."""
    SPLINE = auto()  # quartic polynomials, coefficients are spline terms
    LIPM = auto()    # pendulum solutions, coefficients are centers of pressure


def create_com_motion(
    kind: MotionKind,
    timeline: PhaseTimeline,
    initial_state: ComState,
    config: Optional[Union[SplineConfig, LipmConfig]] = None,
    backend: Optional[LinearAlgebraBackend] = None,
) -> ComMotion:
    """
    Build a CoM motion of the requested kind.

    Args:
        kind: Representation to use
        timeline: Phase timeline fixing the total time
        initial_state: CoM state at t = 0
        config: Representation config matching ``kind`` (defaults if None)
        backend: Linear algebra backend for boundary re-derivation

    Returns:
        Motion with default coefficients
    """
    if kind is MotionKind.SPLINE:
        if config is not None and not isinstance(config, SplineConfig):
            raise ValueError("Spline motion needs a SplineConfig")
        motion = SplineComMotion(timeline, initial_state, config, backend)
    elif kind is MotionKind.LIPM:
        if config is not None and not isinstance(config, LipmConfig):
            raise ValueError("LIPM motion needs a LipmConfig")
        motion = LipmComMotion(timeline, initial_state, config, backend)
    else:
        raise ValueError(f"Unknown motion kind {kind}")

    logger.debug(
        "Created %s motion: T=%g, %d free coefficients",
        kind.name, motion.get_total_time(), motion.get_total_free_coeff(),
    )
    return motion

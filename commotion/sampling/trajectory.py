"""Discretized trajectory storage for optimization."""

from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray

from commotion.core.motion import ComMotion
from commotion.core.phase import PhaseInfo


@dataclass
class DiscretizedTrajectory:
    """CoM motion sampled at the discretization nodes."""

    times: NDArray          # (N,)
    pos: NDArray            # (N, 2)
    vel: NDArray            # (N, 2)
    acc: NDArray            # (N, 2)
    phases: list[PhaseInfo] # phase active at each node

    @property
    def n_nodes(self) -> int:
        """Number of discretization nodes."""
        return len(self.times)

    def copy(self) -> "DiscretizedTrajectory":
        """Deep copy of the sampled arrays."""
        return DiscretizedTrajectory(
            times=self.times.copy(),
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            acc=self.acc.copy(),
            phases=list(self.phases),
        )


def sample_motion(motion: ComMotion) -> DiscretizedTrajectory:
    """
    Evaluate a motion at its discretized global times.

    Args:
        motion: Any CoM motion representation

    Returns:
        Trajectory with one row per node
    """
    times = motion.get_discretized_global_times()
    n = len(times)
    pos = np.zeros((n, 2))
    vel = np.zeros((n, 2))
    acc = np.zeros((n, 2))
    phases = []

    for k, t in enumerate(times):
        state = motion.get_com(t)
        pos[k], vel[k], acc[k] = state.pos, state.vel, state.acc
        phases.append(motion.get_current_phase(t))

    return DiscretizedTrajectory(
        times=times, pos=pos, vel=vel, acc=acc, phases=phases
    )

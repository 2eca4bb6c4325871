"""Planar center-of-mass state."""

from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class ComState:
    """Position, velocity and acceleration of the CoM in the plane."""

    pos: NDArray  # (2,)
    vel: NDArray  # (2,)
    acc: NDArray  # (2,)

    @classmethod
    def from_arrays(cls, pos, vel, acc=None) -> "ComState":
        """Build a state from array-likes, copying the data."""
        if acc is None:
            acc = np.zeros(2)
        return cls(
            pos=np.array(pos, dtype=float).reshape(2),
            vel=np.array(vel, dtype=float).reshape(2),
            acc=np.array(acc, dtype=float).reshape(2),
        )

    @classmethod
    def at_rest(cls, pos) -> "ComState":
        """Zero velocity and acceleration at ``pos``."""
        return cls.from_arrays(pos, np.zeros(2))

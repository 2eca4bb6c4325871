"""Optimizer-facing view of a CoM motion."""

from typing import Callable, Optional
import numpy as np
from numpy.typing import NDArray

from commotion.core.motion import ComMotion
from commotion.sampling.trajectory import DiscretizedTrajectory, sample_motion


class MotionEvaluator:
    """
    Maps a flat coefficient vector to the sampled trajectory.

    The evaluator is the single owner allowed to mutate its motion; hand
    other consumers a ``motion.clone()``. Samples are cached and only
    recomputed when the coefficients change.
    """

    def __init__(self, motion: ComMotion):
        self.motion = motion

        # Cached samples (invalidated when coefficients change)
        self._trajectory: Optional[DiscretizedTrajectory] = None
        self._coeff_hash: Optional[int] = None

    @property
    def n_free(self) -> int:
        """Size of the optimizer's decision vector."""
        return self.motion.get_total_free_coeff()

    def initial_guess(self) -> NDArray:
        """Current coefficients of the motion."""
        return self.motion.get_coefficients()

    def trajectory(self, coeff: NDArray) -> DiscretizedTrajectory:
        """
        Sampled trajectory for ``coeff``.

        Args:
            coeff: Coefficients, shape (n_free,)

        Returns:
            Copy of the trajectory at the discretization nodes; editing it
            does not affect the cache
        """
        self._ensure_sampled(coeff)
        assert self._trajectory is not None
        return self._trajectory.copy()

    def scipy_interface(
        self, cost: Callable[[DiscretizedTrajectory], float]
    ) -> Callable[[NDArray], float]:
        """
        Returns fun for scipy.optimize.minimize.

        Args:
            cost: Objective evaluated on the sampled trajectory

        Returns:
            fun: Objective taking the flat coefficient vector
        """
        def fun(coeff: NDArray) -> float:
            return float(cost(self.trajectory(coeff)))

        return fun

    def set_end_at_start(self) -> NDArray:
        """
        Re-derive the motion's coefficients so it ends in its initial state.

        Returns:
            The new coefficients
        """
        self.motion.set_end_at_start()
        self.invalidate()
        return self.motion.get_coefficients()

    def invalidate(self) -> None:
        """Drop cached samples."""
        self._trajectory = None
        self._coeff_hash = None

    def _ensure_sampled(self, coeff: NDArray) -> None:
        """Set coefficients and resample if not cached or coeff changed."""
        coeff = np.asarray(coeff, dtype=float)
        coeff_hash = hash(coeff.tobytes())
        # The motion may have been mutated behind the cache.
        stale = (
            self._trajectory is None
            or self._coeff_hash != coeff_hash
            or not np.array_equal(self.motion.get_coefficients(), coeff)
        )
        if stale:
            self.motion.set_coefficients(coeff)
            self._trajectory = sample_motion(self.motion)
            self._coeff_hash = coeff_hash

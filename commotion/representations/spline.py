"""CoM motion represented by quartic polynomial splines."""

import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from commotion.algebra.dense import DenseBackend
from commotion.algebra.protocols import LinearAlgebraBackend
from commotion.core.errors import DimensionMismatchError
from commotion.core.motion import ComMotion
from commotion.core.phase import PhaseInfo
from commotion.core.state import ComState
from commotion.representations.boundary import solve_boundary
from commotion.representations.timeline import PhaseTimeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplineConfig:
    """Structural parameters of a spline motion."""

    dt: float = 0.1            # discretization step
    polys_per_phase: int = 1   # polynomials each phase is split into

    def __post_init__(self):
        if not self.dt > 0.0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.polys_per_phase < 1:
            raise ValueError("polys_per_phase must be at least 1")


class SplineComMotion(ComMotion):
    """
    Piecewise quartic CoM trajectory.

    Per polynomial and axis, in local time tau:

        x(tau) = a tau^4 + b tau^3 + c tau^2 + d tau + e

    (a, b, c) are free; e and d are the position and velocity at the end of
    the previous polynomial (the initial state for the first one), so
    position and velocity are continuous for any coefficients.
    Coefficients are ordered polynomial-major, then axis (x, y), then
    (a, b, c).
    """

    coeff_per_axis = 3

    def __init__(
        self,
        timeline: PhaseTimeline,
        initial_state: ComState,
        config: Optional[SplineConfig] = None,
        backend: Optional[LinearAlgebraBackend] = None,
    ):
        self.timeline = timeline
        self.config = config if config is not None else SplineConfig()
        self.backend = backend if backend is not None else DenseBackend()
        self.initial_state = ComState.from_arrays(
            initial_state.pos, initial_state.vel, initial_state.acc
        )

        starts = []
        for seg in timeline:
            h = seg.duration / self.config.polys_per_phase
            starts.extend(
                seg.t_start + k * h for k in range(self.config.polys_per_phase)
            )
        self._starts = np.array(starts)
        self._durations = np.diff(np.append(self._starts, timeline.total_time))

        self._coeff = np.zeros(self.get_total_free_coeff())
        self._pos, self._vel = self._chain(self._coeff)

    @property
    def dt(self) -> float:
        return self.config.dt

    @property
    def poly_start_times(self) -> NDArray:
        """Global start time of every polynomial."""
        return self._starts.copy()

    @property
    def n_polys(self) -> int:
        return len(self._starts)

    def get_total_free_coeff(self) -> int:
        return self.n_polys * 2 * self.coeff_per_axis

    def get_total_time(self) -> float:
        return self.timeline.total_time

    def get_coefficients(self) -> NDArray:
        return self._coeff.copy()

    def set_coefficients(self, coeff: NDArray) -> None:
        coeff = np.array(coeff, dtype=float)
        n = self.get_total_free_coeff()
        if coeff.shape != (n,):
            raise DimensionMismatchError(n, coeff.shape)

        pos, vel = self._chain(coeff)
        self._coeff, self._pos, self._vel = coeff, pos, vel
        logger.debug("Set %d spline coefficients", n)

    def get_com(self, t_global: float) -> ComState:
        t = self.check_time(t_global)
        k = self._poly_index(t)
        tau = t - self._starts[k]
        a, b, c = self._abc(self._coeff, k)
        d, e = self._vel[k], self._pos[k]

        return ComState(
            pos=a * tau**4 + b * tau**3 + c * tau**2 + d * tau + e,
            vel=4 * a * tau**3 + 3 * b * tau**2 + 2 * c * tau + d,
            acc=12 * a * tau**2 + 6 * b * tau + 2 * c,
        )

    def get_current_phase(self, t_global: float) -> PhaseInfo:
        return self.timeline.phase_at(self.check_time(t_global))

    def get_phases(self) -> list[PhaseInfo]:
        return self.timeline.phases

    def set_end_at_start(self) -> None:
        """
        Solve the last polynomial's (a, b) so that the motion ends with the
        initial position and velocity. All other coefficients are kept.
        """
        k = self.n_polys - 1
        T = self._durations[k]
        _, _, c = self._abc(self._coeff, k)
        d, e = self._vel[k], self._pos[k]

        A = np.array([
            [T**4, T**3],
            [4 * T**3, 3 * T**2],
        ])
        rhs = np.vstack([
            self.initial_state.pos - (c * T**2 + d * T + e),
            self.initial_state.vel - (2 * c * T + d),
        ])  # (2, axes)
        ab = solve_boundary(A, rhs, self.backend)

        coeff = self._coeff.reshape(self.n_polys, 2, self.coeff_per_axis).copy()
        coeff[k, :, 0] = ab[0]
        coeff[k, :, 1] = ab[1]
        self.set_coefficients(coeff.ravel())
        logger.debug("Re-derived last polynomial to end at the start state")

    def _abc(self, coeff: NDArray, k: int) -> tuple[NDArray, NDArray, NDArray]:
        """(a, b, c) of polynomial k, each of shape (2,)."""
        block = coeff.reshape(self.n_polys, 2, self.coeff_per_axis)[k]
        return block[:, 0], block[:, 1], block[:, 2]

    def _chain(self, coeff: NDArray) -> tuple[NDArray, NDArray]:
        """Start position and velocity of every polynomial, (n_polys, 2) each."""
        pos = np.empty((self.n_polys, 2))
        vel = np.empty((self.n_polys, 2))
        p = self.initial_state.pos.copy()
        v = self.initial_state.vel.copy()

        for k, T in enumerate(self._durations):
            pos[k], vel[k] = p, v
            a, b, c = self._abc(coeff, k)
            p = a * T**4 + b * T**3 + c * T**2 + v * T + p
            v = 4 * a * T**3 + 3 * b * T**2 + 2 * c * T + v

        return pos, vel

    def _poly_index(self, t: float) -> int:
        idx = int(np.searchsorted(self._starts, t, side="right")) - 1
        return min(max(idx, 0), self.n_polys - 1)

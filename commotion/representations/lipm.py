"""CoM motion from the closed-form linear inverted pendulum solution."""

import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from commotion.algebra.dense import DenseBackend
from commotion.algebra.protocols import LinearAlgebraBackend
from commotion.core.errors import DimensionMismatchError, UnderivableBoundaryError
from commotion.core.motion import ComMotion
from commotion.core.phase import PhaseInfo
from commotion.core.state import ComState
from commotion.representations.boundary import solve_boundary
from commotion.representations.timeline import PhaseTimeline, PhaseSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LipmConfig:
    """Pendulum and discretization parameters."""

    dt: float = 0.1
    com_height: float = 0.58  # [m]
    gravity: float = 9.81     # [m/s^2]

    def __post_init__(self):
        if not self.dt > 0.0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if not self.com_height > 0.0:
            raise ValueError("com_height must be positive")
        if not self.gravity > 0.0:
            raise ValueError("gravity must be positive")

    @property
    def omega(self) -> float:
        """Natural frequency sqrt(g / z_c)."""
        return float(np.sqrt(self.gravity / self.com_height))


class LipmComMotion(ComMotion):
    """
    CoM motion as a sequence of linear inverted pendulum solutions.

    During a contact phase with center of pressure p, per axis:

        x(t) = p + (x0 - p) cosh(w t) + v0 / w sinh(w t)

    During a flight phase the planar motion has constant velocity. The free
    coefficients are the planar centers of pressure of the contact phases,
    ordered by phase: [px_0, py_0, px_1, py_1, ...]. Initially every center
    of pressure is at the initial CoM position.
    """

    def __init__(
        self,
        timeline: PhaseTimeline,
        initial_state: ComState,
        config: Optional[LipmConfig] = None,
        backend: Optional[LinearAlgebraBackend] = None,
    ):
        self.timeline = timeline
        self.config = config if config is not None else LipmConfig()
        self.backend = backend if backend is not None else DenseBackend()
        self.initial_state = ComState.from_arrays(
            initial_state.pos, initial_state.vel, initial_state.acc
        )

        # segment index -> row of the center of pressure, contact phases only
        self._cop_row = {}
        for i, seg in enumerate(timeline):
            if seg.phase.is_contact:
                self._cop_row[i] = len(self._cop_row)

        self._coeff = np.tile(self.initial_state.pos, len(self._cop_row))
        self._starts = self._propagate(self._coeff)

    @property
    def dt(self) -> float:
        return self.config.dt

    @property
    def n_contact_phases(self) -> int:
        return len(self._cop_row)

    def get_total_free_coeff(self) -> int:
        return 2 * self.n_contact_phases

    def get_total_time(self) -> float:
        return self.timeline.total_time

    def get_coefficients(self) -> NDArray:
        return self._coeff.copy()

    def set_coefficients(self, coeff: NDArray) -> None:
        coeff = np.array(coeff, dtype=float)
        n = self.get_total_free_coeff()
        if coeff.shape != (n,):
            raise DimensionMismatchError(n, coeff.shape)

        starts = self._propagate(coeff)
        self._coeff, self._starts = coeff, starts
        logger.debug("Set %d centers of pressure", self.n_contact_phases)

    def get_cop(self, segment_index: int) -> Optional[NDArray]:
        """Center of pressure of a timeline segment, None during flight."""
        return self._cop(self._coeff, segment_index)

    def get_com(self, t_global: float) -> ComState:
        t = self.check_time(t_global)
        i = self.timeline.segment_index(t)
        seg = self.timeline.segments[i]
        Phi, b = self._transition(seg, t - seg.t_start)

        cop = self._cop(self._coeff, i)
        X = Phi @ self._starts[i]
        if cop is not None:
            X = X + np.outer(b, cop)
            acc = self.config.omega**2 * (X[0] - cop)
        else:
            acc = np.zeros(2)

        return ComState(pos=X[0], vel=X[1], acc=acc)

    def get_current_phase(self, t_global: float) -> PhaseInfo:
        return self.timeline.phase_at(self.check_time(t_global))

    def get_phases(self) -> list[PhaseInfo]:
        return self.timeline.phases

    def set_end_at_start(self) -> None:
        """
        Move the centers of pressure of the last two contact phases so the
        motion ends with the initial position and velocity.
        """
        rows = sorted(self._cop_row)
        if len(rows) < 2:
            raise UnderivableBoundaryError(
                "Need at least two contact phases to fix position and velocity"
            )
        j1, j2 = rows[-2], rows[-1]

        # M[i] maps the state at the end of segment i to the final state
        M = [None] * len(self.timeline)
        Psi = np.eye(2)
        for i in reversed(range(len(self.timeline))):
            M[i] = Psi
            seg = self.timeline.segments[i]
            Phi, _ = self._transition(seg, seg.duration)
            Psi = Psi @ Phi

        X_init = np.vstack([self.initial_state.pos, self.initial_state.vel])
        fixed = Psi @ X_init
        gains = {}
        for i, seg in enumerate(self.timeline):
            cop = self._cop(self._coeff, i)
            if cop is None:
                continue
            _, b = self._transition(seg, seg.duration)
            gains[i] = M[i] @ b
            if i not in (j1, j2):
                fixed = fixed + np.outer(gains[i], cop)

        A = np.column_stack([gains[j1], gains[j2]])
        cops = solve_boundary(A, X_init - fixed, self.backend)  # (2, axes)

        coeff = self._coeff.reshape(-1, 2).copy()
        coeff[self._cop_row[j1]] = cops[0]
        coeff[self._cop_row[j2]] = cops[1]
        self.set_coefficients(coeff.ravel())
        logger.debug("Re-derived centers of pressure of segments %d, %d", j1, j2)

    def _cop(self, coeff: NDArray, i: int) -> Optional[NDArray]:
        row = self._cop_row.get(i)
        if row is None:
            return None
        return coeff[2 * row:2 * row + 2].copy()

    def _transition(self, seg: PhaseSegment, tau: float) -> tuple[NDArray, NDArray]:
        """
        State transition over ``tau`` inside ``seg``.

        With X = [pos; vel] of shape (2, axes) and center of pressure p:
            X(tau) = Phi X(0) + outer(b, p)
        """
        if not seg.phase.is_contact:
            return np.array([[1.0, tau], [0.0, 1.0]]), np.zeros(2)

        w = self.config.omega
        C, S = np.cosh(w * tau), np.sinh(w * tau)
        Phi = np.array([[C, S / w], [w * S, C]])
        b = np.array([1.0 - C, -w * S])
        return Phi, b

    def _propagate(self, coeff: NDArray) -> list[NDArray]:
        """State [pos; vel] at the start of every segment."""
        X = np.vstack([self.initial_state.pos, self.initial_state.vel])
        starts = []
        for i, seg in enumerate(self.timeline):
            starts.append(X)
            Phi, b = self._transition(seg, seg.duration)
            X = Phi @ X
            cop = self._cop(coeff, i)
            if cop is not None:
                X = X + np.outer(b, cop)
        return starts

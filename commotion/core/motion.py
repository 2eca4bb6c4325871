"""Abstract center-of-mass motion."""

import copy
from abc import ABC, abstractmethod
from numpy.typing import NDArray

from commotion.core.discretization import discretize_global_times
from commotion.core.errors import OutOfRangeTimeError
from commotion.core.phase import PhaseInfo
from commotion.core.state import ComState


class ComMotion(ABC):
    """
    Abstracts the Center of Mass (CoM) motion of any system.

    The optimizer only sees a vector of free coefficients; concrete
    representations (splines, closed-form solutions of the equation of
    motion, ...) map these to a continuous CoM state at any time in
    [0, T].

    A motion instance is not thread safe. The holder that calls
    ``set_coefficients`` or ``set_end_at_start`` owns it; other consumers
    should work on a ``clone()``.
    """

    # Queries this close outside [0, T] are snapped to the boundary.
    time_tolerance: float = 1e-9

    @abstractmethod
    def get_com(self, t_global: float) -> ComState:
        """
        Get the CoM position, velocity and acceleration.

        Args:
            t_global: Time since the start of the motion, in [0, T]

        Returns:
            Planar pos/vel/acc

        Raises:
            OutOfRangeTimeError: if ``t_global`` is outside [0, T]
        """
        ...

    @abstractmethod
    def set_coefficients(self, coeff: NDArray) -> None:
        """
        Replace all coefficients that describe the CoM motion.

        These can be spline coefficients or coefficients of any other
        representation producing x(t). The total time and the phase
        timeline are not affected.

        Raises:
            DimensionMismatchError: if ``coeff`` does not have shape
                (get_total_free_coeff(),). The previous coefficients are
                kept.
        """
        ...

    @abstractmethod
    def get_total_free_coeff(self) -> int:
        """Number of free scalars, fixed for the lifetime of the motion."""
        ...

    @abstractmethod
    def get_coefficients(self) -> NDArray:
        """Copy of the current coefficient vector."""
        ...

    @abstractmethod
    def get_total_time(self) -> float:
        """Duration T of the motion, fixed at construction."""
        ...

    @abstractmethod
    def get_current_phase(self, t_global: float) -> PhaseInfo:
        """
        Phase (stance, step, flight) active at ``t_global``.

        This allows pairing the current instant with the correct footholds
        and support polygon. Phases partition [0, T] into contiguous
        intervals; a break time belongs to the later phase.
        """
        ...

    @abstractmethod
    def get_phases(self) -> list[PhaseInfo]:
        """Phases in order of first occurrence, none duplicated."""
        ...

    @abstractmethod
    def set_end_at_start(self) -> None:
        """
        Re-derive coefficients so the motion ends in its initial state.

        At T the position and velocity equal those at t = 0. Calling this
        twice without other mutation gives identical coefficients.

        Raises:
            UnderivableBoundaryError: if no such coefficients can be found.
                The previous coefficients are kept.
        """
        ...

    @property
    @abstractmethod
    def dt(self) -> float:
        """Sampling step used for discretization."""
        ...

    def get_discretized_global_times(self) -> NDArray:
        """
        Times at which to discretize the trajectory.

        First and last node are 0 and T; the gap before the last node may
        be shorter than ``dt``.
        """
        return discretize_global_times(self.get_total_time(), self.dt)

    def get_total_nodes(self) -> int:
        """Number of discretization nodes."""
        return len(self.get_discretized_global_times())

    def clone(self) -> "ComMotion":
        """Independent copy, safe to mutate without affecting this one."""
        return copy.deepcopy(self)

    def check_time(self, t_global: float) -> float:
        """
        Validate a query time against [0, T].

        Returns:
            ``t_global`` as float, snapped to 0 or T when within
            ``time_tolerance`` of them

        Raises:
            OutOfRangeTimeError: if ``t_global`` is further outside
        """
        t = float(t_global)
        T = self.get_total_time()
        if not (-self.time_tolerance <= t <= T + self.time_tolerance):
            raise OutOfRangeTimeError(t, T)
        return min(max(t, 0.0), T)

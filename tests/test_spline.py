"""Tests for the spline CoM representation."""

import numpy as np
import pytest

from commotion.core.errors import (
    DimensionMismatchError,
    OutOfRangeTimeError,
    UnderivableBoundaryError,
)
from commotion.core.phase import PhaseType
from commotion.core.state import ComState
from commotion.representations.spline import SplineComMotion, SplineConfig
from commotion.representations.timeline import PhaseTimeline


class SingularBackend:
    """Reports every system as singular."""

    def solve(self, A, b):
        raise AssertionError("solve must not be reached")

    def cond(self, A):
        return np.inf


class FailingBackend:
    """Well conditioned on paper, but the solve fails."""

    def solve(self, A, b):
        raise np.linalg.LinAlgError("Matrix is singular.")

    def cond(self, A):
        return 1.0


def _motion(polys_per_phase=2, backend=None):
    timeline = PhaseTimeline.from_gait(n_steps=2, t_swing=0.5, t_stance=0.25)
    initial = ComState.from_arrays([0.1, -0.05], [0.2, 0.0])
    config = SplineConfig(dt=0.1, polys_per_phase=polys_per_phase)
    return SplineComMotion(timeline, initial, config, backend)


def _random_coeff(motion, seed=0):
    rng = np.random.default_rng(seed)
    return rng.normal(size=motion.get_total_free_coeff())


def test_free_coefficient_count():
    """Five phases, two polynomials each, three coefficients per axis."""
    motion = _motion(polys_per_phase=2)

    assert motion.n_polys == 10
    assert motion.get_total_free_coeff() == 60


def test_default_is_constant_velocity():
    motion = _motion()

    assert np.array_equal(motion.get_coefficients(), np.zeros(60))
    for t in [0.0, 0.3, 1.0, 1.75]:
        state = motion.get_com(t)
        assert np.allclose(state.pos, [0.1 + 0.2 * t, -0.05])
        assert np.allclose(state.vel, [0.2, 0.0])
        assert np.allclose(state.acc, 0.0)


def test_single_quartic_evaluation():
    """x(t) = t^4 from rest at the origin."""
    timeline = PhaseTimeline.from_durations([(PhaseType.STANCE, 1.0)])
    motion = SplineComMotion(timeline, ComState.at_rest([0.0, 0.0]))
    coeff = np.zeros(6)
    coeff[0] = 1.0  # a of x
    motion.set_coefficients(coeff)

    state = motion.get_com(0.5)

    assert np.allclose(state.pos, [0.0625, 0.0])
    assert np.allclose(state.vel, [0.5, 0.0])
    assert np.allclose(state.acc, [3.0, 0.0])


def test_initial_state_reproduced():
    motion = _motion()
    motion.set_coefficients(_random_coeff(motion))

    state = motion.get_com(0.0)

    assert np.allclose(state.pos, [0.1, -0.05])
    assert np.allclose(state.vel, [0.2, 0.0])


def test_position_and_velocity_continuous_at_junctions():
    motion = _motion()
    motion.set_coefficients(_random_coeff(motion))

    eps = 1e-7
    for t in motion.poly_start_times[1:]:
        before = motion.get_com(t - eps)
        after = motion.get_com(t)
        assert np.allclose(before.pos, after.pos, atol=1e-5)
        assert np.allclose(before.vel, after.vel, atol=1e-4)


def test_set_coefficients_rejects_wrong_shape():
    motion = _motion()
    coeff = _random_coeff(motion)
    motion.set_coefficients(coeff)

    with pytest.raises(DimensionMismatchError):
        motion.set_coefficients(coeff[:-1])
    with pytest.raises(DimensionMismatchError):
        motion.set_coefficients(coeff.reshape(10, 6))

    assert np.array_equal(motion.get_coefficients(), coeff)


def test_set_end_at_start_returns_to_initial_state():
    motion = _motion()
    motion.set_coefficients(_random_coeff(motion, seed=3))

    motion.set_end_at_start()
    end = motion.get_com(motion.get_total_time())

    assert np.allclose(end.pos, [0.1, -0.05], atol=1e-9)
    assert np.allclose(end.vel, [0.2, 0.0], atol=1e-9)


def test_set_end_at_start_only_touches_last_polynomial():
    motion = _motion()
    coeff = _random_coeff(motion, seed=4)
    motion.set_coefficients(coeff)

    motion.set_end_at_start()
    new = motion.get_coefficients().reshape(10, 2, 3)
    old = coeff.reshape(10, 2, 3)

    assert np.array_equal(new[:-1], old[:-1])
    assert np.array_equal(new[-1, :, 2], old[-1, :, 2])


def test_set_end_at_start_idempotent():
    motion = _motion()
    motion.set_coefficients(_random_coeff(motion, seed=5))

    motion.set_end_at_start()
    first = motion.get_coefficients()
    motion.set_end_at_start()

    assert np.array_equal(motion.get_coefficients(), first)


@pytest.mark.parametrize("backend", [SingularBackend(), FailingBackend()])
def test_set_end_at_start_singular_keeps_coefficients(backend):
    motion = _motion(backend=backend)
    coeff = _random_coeff(motion)
    motion.set_coefficients(coeff)

    with pytest.raises(UnderivableBoundaryError):
        motion.set_end_at_start()

    assert np.array_equal(motion.get_coefficients(), coeff)


def test_linalg_error_is_chained():
    motion = _motion(backend=FailingBackend())

    with pytest.raises(UnderivableBoundaryError) as excinfo:
        motion.set_end_at_start()

    assert isinstance(excinfo.value.__cause__, np.linalg.LinAlgError)


def test_out_of_range_queries_raise():
    motion = _motion()
    T = motion.get_total_time()

    with pytest.raises(OutOfRangeTimeError):
        motion.get_com(-0.01)
    with pytest.raises(OutOfRangeTimeError):
        motion.get_com(T + 0.01)
    with pytest.raises(OutOfRangeTimeError):
        motion.get_current_phase(T + 0.01)

    # Within tolerance the boundary value is returned.
    assert np.allclose(motion.get_com(T + 1e-12).pos, motion.get_com(T).pos)


def test_state_arrays_not_aliased():
    motion = _motion()
    state = motion.get_com(0.0)
    state.pos[:] = 100.0

    assert np.allclose(motion.get_com(0.0).pos, [0.1, -0.05])
    assert np.allclose(motion.initial_state.pos, [0.1, -0.05])


def test_config_validation():
    with pytest.raises(ValueError):
        SplineConfig(dt=0.0)
    with pytest.raises(ValueError):
        SplineConfig(polys_per_phase=0)


def test_poly_start_times_split_each_phase():
    motion = _motion(polys_per_phase=2)
    starts = motion.poly_start_times

    assert len(starts) == motion.n_polys
    assert np.allclose(starts[::2], [seg.t_start for seg in motion.timeline])
    starts[:] = -1.0
    assert motion.poly_start_times[0] == 0.0

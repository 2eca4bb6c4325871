"""Tests for phase labels and phase sequences."""

import dataclasses
import pytest

from commotion.core.phase import (
    PhaseType,
    PhaseInfo,
    unique_phases,
    sweep_phases,
    validate_phase_sequence,
)


def test_phase_info_structural_equality():
    """Phases with equal type and id are equal and hash alike."""
    a = PhaseInfo(PhaseType.STEP, 2)
    b = PhaseInfo(PhaseType.STEP, 2)

    assert a == b
    assert hash(a) == hash(b)
    assert a != PhaseInfo(PhaseType.FLIGHT, 2)
    assert a != PhaseInfo(PhaseType.STEP, 3)


def test_phase_info_immutable():
    phase = PhaseInfo(PhaseType.STANCE, -1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        phase.id = 0


def test_phase_info_rejects_invalid_ids():
    with pytest.raises(ValueError):
        PhaseInfo(PhaseType.STANCE, -2)
    with pytest.raises(ValueError):
        PhaseInfo(PhaseType.STEP, -1)
    with pytest.raises(ValueError):
        PhaseInfo(PhaseType.FLIGHT, -1)


def test_is_contact():
    assert PhaseInfo(PhaseType.STANCE, 0).is_contact
    assert PhaseInfo(PhaseType.STEP, 0).is_contact
    assert not PhaseInfo(PhaseType.FLIGHT, 0).is_contact


def test_unique_phases_keeps_first_occurrence_order():
    s = PhaseInfo(PhaseType.STANCE, -1)
    st = PhaseInfo(PhaseType.STEP, 0)
    s0 = PhaseInfo(PhaseType.STANCE, 0)

    assert unique_phases([s, s, st, st, st, s0, s0]) == [s, st, s0]
    assert unique_phases([]) == []


def test_sweep_phases():
    """Sweeping a step function of time gives each phase once, in order."""
    first = PhaseInfo(PhaseType.STANCE, -1)
    step = PhaseInfo(PhaseType.STEP, 0)
    last = PhaseInfo(PhaseType.STANCE, 0)

    def phase_at(t):
        if t < 1.0:
            return first
        if t < 2.0:
            return step
        return last

    times = [0.1 * k for k in range(31)]
    assert sweep_phases(phase_at, times) == [first, step, last]


def test_validate_walking_sequence():
    phases = [
        PhaseInfo(PhaseType.STANCE, -1),
        PhaseInfo(PhaseType.STEP, 0),
        PhaseInfo(PhaseType.STANCE, 0),
        PhaseInfo(PhaseType.STEP, 1),
        PhaseInfo(PhaseType.STANCE, 1),
    ]
    validate_phase_sequence(phases)


def test_validate_sequences_without_stance():
    """Steps and flights may follow each other directly."""
    validate_phase_sequence([
        PhaseInfo(PhaseType.STEP, 0),
        PhaseInfo(PhaseType.STEP, 1),
        PhaseInfo(PhaseType.STANCE, 1),
    ])
    validate_phase_sequence([
        PhaseInfo(PhaseType.STANCE, -1),
        PhaseInfo(PhaseType.FLIGHT, 0),
        PhaseInfo(PhaseType.FLIGHT, 1),
        PhaseInfo(PhaseType.STANCE, 1),
    ])


@pytest.mark.parametrize(
    "phases",
    [
        [],
        [PhaseInfo(PhaseType.STEP, 0), PhaseInfo(PhaseType.STEP, 0)],
        [PhaseInfo(PhaseType.STANCE, -1), PhaseInfo(PhaseType.STEP, 1)],
        [
            PhaseInfo(PhaseType.STANCE, -1),
            PhaseInfo(PhaseType.STEP, 0),
            PhaseInfo(PhaseType.STANCE, 1),
        ],
        [PhaseInfo(PhaseType.STEP, 0), PhaseInfo(PhaseType.STANCE, -1)],
        [PhaseInfo(PhaseType.STANCE, 0)],
    ],
)
def test_validate_rejects_bad_sequences(phases):
    with pytest.raises(ValueError):
        validate_phase_sequence(phases)

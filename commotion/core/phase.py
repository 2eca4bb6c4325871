"""Phase labels and phase-sequence derivation."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable


class PhaseType(Enum):
    """Support configuration during a phase."""
    STANCE = 0  # all feet in contact
    STEP = 1    # one foot swinging
    FLIGHT = 2  # no contact


@dataclass(frozen=True)
class PhaseInfo:
    """
    One labeled segment of the timeline.

    For a STEP or FLIGHT phase ``id`` is the zero-based index of that step.
    For a STANCE phase it is the index of the last completed step, so the
    first stance (before any step) has id -1.
    """

    type: PhaseType
    id: int

    def __post_init__(self):
        if self.id < -1:
            raise ValueError(f"Phase id must be >= -1, got {self.id}")
        if self.id == -1 and self.type is not PhaseType.STANCE:
            raise ValueError("Only a stance phase can precede the first step")

    @property
    def is_contact(self) -> bool:
        """True if at least one foot is on the ground."""
        return self.type is not PhaseType.FLIGHT


def unique_phases(phases: Iterable[PhaseInfo]) -> list[PhaseInfo]:
    """Deduplicate, keeping the order of first occurrence."""
    seen = set()
    result = []
    for phase in phases:
        if phase not in seen:
            seen.add(phase)
            result.append(phase)
    return result


def sweep_phases(
    phase_at: Callable[[float], PhaseInfo], times: Iterable[float]
) -> list[PhaseInfo]:
    """
    Phases visited while sweeping increasing times.

    Args:
        phase_at: Phase lookup, e.g. ``motion.get_current_phase``
        times: Increasing query times

    Returns:
        Deduplicated phases in visiting order
    """
    return unique_phases(phase_at(t) for t in times)


def validate_phase_sequence(phases: list[PhaseInfo]) -> None:
    """
    Check the id bookkeeping of an ordered phase sequence.

    Raises:
        ValueError: if the sequence is empty, has duplicates, or the ids do
            not follow the step counting rules.
    """
    if not phases:
        raise ValueError("Phase sequence is empty")
    if len(set(phases)) != len(phases):
        raise ValueError("Phase sequence contains duplicates")

    last_step = -1
    for i, phase in enumerate(phases):
        if phase.type is PhaseType.STANCE:
            if phase.id != last_step:
                raise ValueError(
                    f"Stance at index {i} has id {phase.id}, "
                    f"expected {last_step}"
                )
        else:
            if phase.id != last_step + 1:
                raise ValueError(
                    f"{phase.type.name.lower()} at index {i} has id "
                    f"{phase.id}, expected {last_step + 1}"
                )
            last_step = phase.id

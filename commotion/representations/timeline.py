"""Phase timeline shared by the concrete motion representations."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import numpy as np
from numpy.typing import NDArray

from commotion.core.phase import (
    PhaseType,
    PhaseInfo,
    unique_phases,
    validate_phase_sequence,
)


@dataclass(frozen=True)
class PhaseSegment:
    """Time interval [t_start, t_end) during which one phase is active."""

    phase: PhaseInfo
    t_start: float
    t_end: float

    @property
    def duration(self) -> float:
        return self.t_end - self.t_start


class PhaseTimeline:
    """
    Contiguous sequence of phase segments covering [0, T].

    The timeline is structural: it is fixed at construction and does not
    depend on any optimized coefficient.
    """

    def __init__(self, segments: Iterable[PhaseSegment]):
        segments = tuple(segments)
        if not segments:
            raise ValueError("Timeline needs at least one segment")
        if segments[0].t_start != 0.0:
            raise ValueError("Timeline must start at t = 0")
        for i, seg in enumerate(segments):
            if not seg.duration > 0.0:
                raise ValueError(
                    f"Segment {i} has non-positive duration {seg.duration}"
                )
            if i > 0 and seg.t_start != segments[i - 1].t_end:
                raise ValueError(f"Segment {i} is not contiguous")
        validate_phase_sequence([seg.phase for seg in segments])

        self._segments = segments
        self._starts = np.array([seg.t_start for seg in segments])

    @classmethod
    def from_durations(
        cls, entries: Iterable[tuple[PhaseType, float]]
    ) -> "PhaseTimeline":
        """
        Build a timeline from phase types and durations.

        Ids are assigned by counting steps: every STEP or FLIGHT phase is a
        new step, a STANCE phase carries the id of the last step taken.
        Consecutive stance entries are merged into one phase.

        Args:
            entries: (phase type, duration) pairs in time order

        Returns:
            Timeline starting at t = 0
        """
        segments: list[PhaseSegment] = []
        last_step = -1
        t = 0.0
        for phase_type, duration in entries:
            duration = float(duration)
            if not duration > 0.0:
                raise ValueError(
                    f"Phase durations must be positive, got {duration}"
                )
            if phase_type is PhaseType.STANCE:
                phase = PhaseInfo(PhaseType.STANCE, last_step)
            else:
                last_step += 1
                phase = PhaseInfo(phase_type, last_step)

            if segments and segments[-1].phase == phase:
                prev = segments.pop()
                segments.append(PhaseSegment(phase, prev.t_start, t + duration))
            else:
                segments.append(PhaseSegment(phase, t, t + duration))
            t += duration

        return cls(segments)

    @classmethod
    def from_gait(
        cls,
        n_steps: int,
        t_swing: float,
        t_stance: float,
        t_stance_initial: Optional[float] = None,
        t_stance_final: Optional[float] = None,
        insert_stance: bool = True,
        flight: bool = False,
    ) -> "PhaseTimeline":
        """
        Regular gait: initial stance, n steps, final stance.

        Args:
            n_steps: Number of steps (or flight phases)
            t_swing: Duration of each step/flight
            t_stance: Duration of stance between steps
            t_stance_initial: Duration of the first stance (default t_stance,
                0 to start with a step)
            t_stance_final: Duration of the last stance (default t_stance,
                0 to end with a step)
            insert_stance: Put a stance phase between consecutive steps
            flight: Use flight phases instead of steps (bounding, running)
        """
        if n_steps < 0:
            raise ValueError("n_steps must be non-negative")
        if t_stance_initial is None:
            t_stance_initial = t_stance
        if t_stance_final is None:
            t_stance_final = t_stance

        moving = PhaseType.FLIGHT if flight else PhaseType.STEP
        entries = []
        if t_stance_initial > 0.0:
            entries.append((PhaseType.STANCE, t_stance_initial))
        for k in range(n_steps):
            entries.append((moving, t_swing))
            if insert_stance and k < n_steps - 1:
                entries.append((PhaseType.STANCE, t_stance))
        if t_stance_final > 0.0:
            entries.append((PhaseType.STANCE, t_stance_final))

        return cls.from_durations(entries)

    @property
    def segments(self) -> tuple[PhaseSegment, ...]:
        return self._segments

    @property
    def total_time(self) -> float:
        return self._segments[-1].t_end

    @property
    def phases(self) -> list[PhaseInfo]:
        """Phases in the order they are visited sweeping t from 0 to T."""
        return unique_phases(seg.phase for seg in self._segments)

    @property
    def break_times(self) -> NDArray:
        """Times at which the phase changes."""
        return self._starts[1:].copy()

    def segment_index(self, t: float) -> int:
        """
        Index of the segment containing ``t``.

        Segments are half-open [t_start, t_end) except the last one, which
        also contains T.
        """
        if not 0.0 <= t <= self.total_time:
            raise ValueError(f"Time {t} outside of [0, {self.total_time}]")
        idx = int(np.searchsorted(self._starts, t, side="right")) - 1
        return min(max(idx, 0), len(self._segments) - 1)

    def phase_at(self, t: float) -> PhaseInfo:
        return self._segments[self.segment_index(t)].phase

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[PhaseSegment]:
        return iter(self._segments)

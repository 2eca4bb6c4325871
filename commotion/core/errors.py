"""Errors raised by CoM motion representations."""


class ComMotionError(ValueError):
    """Base class for misuse of a CoM motion."""


class DimensionMismatchError(ComMotionError):
    """Coefficient vector does not match the number of free coefficients."""

    def __init__(self, expected: int, got):
        self.expected = expected
        self.got = got
        super().__init__(
            f"Expected {expected} coefficients, got shape {got}"
        )


class OutOfRangeTimeError(ComMotionError):
    """Query time outside [0, total_time]."""

    def __init__(self, t: float, total_time: float):
        self.t = t
        self.total_time = total_time
        super().__init__(
            f"Time {t} outside of motion interval [0, {total_time}]"
        )


class UnderivableBoundaryError(ComMotionError):
    """Terminal state cannot be made equal to the initial state."""

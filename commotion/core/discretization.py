"""Time discretization of a continuous motion."""

import numpy as np
from numpy.typing import NDArray

# Last grid point closer than this to T counts as T itself.
TIME_ATOL = 1e-9


def discretize_global_times(total_time: float, dt: float) -> NDArray:
    """
    Sample times for a motion of duration ``total_time``.

        t(0)------t(1)------t(2)------...------t(N-1)---|------t(N)

    The grid has a fixed spacing ``dt``. If ``total_time`` is not a multiple
    of ``dt``, the last node is ``total_time`` and the gap before it is
    shorter than ``dt``. The first node is always exactly 0 and the last
    exactly ``total_time``.

    Args:
        total_time: Duration T >= 0
        dt: Sampling step > 0

    Returns:
        Increasing times, shape (n_nodes,)
    """
    total_time = float(total_time)
    dt = float(dt)
    if not np.isfinite(dt) or dt <= 0.0:
        raise ValueError(f"dt must be positive and finite, got {dt}")
    if not np.isfinite(total_time) or total_time < 0.0:
        raise ValueError(
            f"total_time must be non-negative and finite, got {total_time}"
        )

    n = int(np.floor(total_time / dt))
    times = dt * np.arange(n + 1, dtype=float)

    if n > 0 and abs(total_time - times[-1]) <= TIME_ATOL:
        times[-1] = total_time
    elif total_time > times[-1]:
        times = np.append(times, total_time)

    return times

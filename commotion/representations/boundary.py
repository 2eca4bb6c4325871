"""Solving the small linear systems behind ``set_end_at_start``."""

import logging
import numpy as np
from numpy.typing import NDArray

from commotion.algebra.protocols import LinearAlgebraBackend
from commotion.core.errors import UnderivableBoundaryError

logger = logging.getLogger(__name__)

MAX_CONDITION = 1.0 / np.finfo(float).eps


def solve_boundary(
    A: NDArray, b: NDArray, backend: LinearAlgebraBackend
) -> NDArray:
    """
    Solve A x = b for a boundary re-derivation.

    Raises:
        UnderivableBoundaryError: if A is singular or ill-conditioned, or
            the solution is not finite
    """
    cond = backend.cond(A)
    if not np.isfinite(cond) or cond > MAX_CONDITION:
        logger.warning("Boundary system is singular (cond=%g)", cond)
        raise UnderivableBoundaryError(
            f"Boundary system is singular (cond={cond:g})"
        )

    try:
        x = backend.solve(A, b)
    except np.linalg.LinAlgError as err:
        logger.warning("Boundary system is singular: %s", err)
        raise UnderivableBoundaryError("Boundary system is singular") from err

    if not np.all(np.isfinite(x)):
        raise UnderivableBoundaryError("Boundary solution is not finite")
    return x

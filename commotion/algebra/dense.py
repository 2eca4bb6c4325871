"""Dense linear algebra backend using NumPy/SciPy."""

import numpy as np
import scipy.linalg
from numpy.typing import NDArray


class DenseBackend:
    """NumPy/SciPy implementation of linear algebra operations."""

    def solve(self, A: NDArray, b: NDArray) -> NDArray:
        """Solve linear system Ax = b using scipy's LU-based solve."""
        return scipy.linalg.solve(A, b)

    def cond(self, A: NDArray) -> float:
        """2-norm condition number."""
        return float(np.linalg.cond(A))

"""Linear algebra backend protocol."""

from typing import Protocol
from numpy.typing import NDArray


class LinearAlgebraBackend(Protocol):
    """
    Protocol for the linear algebra used to re-derive boundary conditions.
    Allows swapping the dense implementation for another one.
    """

    def solve(self, A: NDArray, b: NDArray) -> NDArray:
        """
        Solve linear system Ax = b.

        Args:
            A: System matrix (n, n)
            b: Right-hand side (n,) or (n, k)

        Returns:
            Solution x

        Raises:
            numpy.linalg.LinAlgError: if A is singular
        """
        ...

    def cond(self, A: NDArray) -> float:
        """
        Condition number of A.

        Args:
            A: Square matrix

        Returns:
            2-norm condition number (inf if singular)
        """
        ...

"""Linear algebra backend abstractions."""

from commotion.algebra.protocols import LinearAlgebraBackend
from commotion.algebra.dense import DenseBackend

__all__ = [
    "LinearAlgebraBackend",
    "DenseBackend",
]

#grid.py
import numpy as np
from copy import deepcopy
from shape_calculator import Shape

class Grid:
    """
    A fixed size 2D matrix of floats that knows its own height and width.
    Wraps a 2D numpy array, so ragged rows cannot happen.
    Watch out:
        - Zero sized grids are allowed (e.g. a convolution whose kernel does not fit), but never drawn.
        - Use equal() instead of == if you want to compare values.
    """

    def __init__(self, data) -> None:
        array = np.array(data, dtype=np.float64)
        if array.ndim != 2:
            raise ValueError(f"Expected 2D data, got an array with {array.ndim} dimensions and shape {array.shape}")
        self.data = array

    @classmethod
    def zeros(cls, height: int, width: int) -> 'Grid':
        return cls(np.zeros((max(0, height), max(0, width))))

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> Shape:
        return Shape(self.height, self.width)

    @property
    def size(self) -> int:
        return self.data.size

    def __getitem__(self, index):
        return self.data[index]

    def __setitem__(self, index, value) -> None:
        self.data[index] = value

    def __repr__(self) -> str:
        return f'Grid({self.height}x{self.width})'

    def min(self) -> float:
        return float(self.data.min())

    def max(self) -> float:
        return float(self.data.max())

    def _ensure_compatible(self, other: 'Grid') -> None:
        if not isinstance(other, Grid):
            raise TypeError(f"Compatibility error: 'other' is of type {type(other)}, expected {type(self)}.")
        if self.shape != other.shape:
            raise ValueError(f"Shape mismatch: {self.shape} (self) vs {other.shape} (other).")

    def _clone(self) -> 'Grid':
        return deepcopy(self)

    def __iadd__(self, other: 'Grid') -> 'Grid':
        """In-place element-wise addition. Used to sum per-channel convolutions."""
        self._ensure_compatible(other)
        self.data += other.data
        return self

    def __add__(self, other: 'Grid') -> 'Grid':
        result = self._clone()
        result += other
        return result

    def equal(self, other: 'Grid', tol: float = 1e-9) -> bool:
        """
        Compares values within a tolerance. Grids of different shape are never equal.
        Not overloading __eq__ because that would also require __hash__ on a mutable object.
        """
        if not isinstance(other, Grid) or self.shape != other.shape:
            return False
        return bool(np.allclose(self.data, other.data, atol=tol))

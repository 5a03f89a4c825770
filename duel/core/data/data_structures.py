"""Core spatial data structures.

Positions and velocities on the stage are continuous, so Vector2 stores
floats in screen orientation: x grows to the right and y grows downward,
which puts the floor line at a larger y than the combatants' spawn height.
"""

from dataclasses import dataclass
import math
import numpy as np
from numpy.typing import NDArray


@dataclass
class Vector2:
    """Mutable 2D vector used for combatant position and velocity.

    Physics code updates the components in place every tick, so the class is
    deliberately not frozen. Use :meth:`copy` when handing a vector to code
    that must not observe later mutation (snapshots, events).
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        """Vector addition."""
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        """Vector subtraction."""
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        """Scalar multiplication."""
        return Vector2(self.x * scalar, self.y * scalar)

    def __iter__(self):
        """Make Vector2 iterable for unpacking (x, y order)."""
        yield self.x
        yield self.y

    def __getitem__(self, key: int) -> float:
        """Enable indexed access like Vector2[0] for x, Vector2[1] for y."""
        if key == 0:
            return self.x
        elif key == 1:
            return self.y
        else:
            raise IndexError("Vector2 index out of range (must be 0 or 1)")

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def copy(self) -> "Vector2":
        """Return an independent copy of this vector."""
        return Vector2(self.x, self.y)

    def distance_to(self, other: "Vector2") -> float:
        """Calculate Euclidean distance to another vector."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def magnitude(self) -> float:
        """Calculate vector magnitude (distance from origin)."""
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        """Check that neither component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    @classmethod
    def from_tuple(cls, coords: tuple[float, float]) -> "Vector2":
        """Create Vector2 from coordinate tuple (x, y order)."""
        return cls(float(coords[0]), float(coords[1]))

    def to_tuple(self) -> tuple[float, float]:
        """Convert to coordinate tuple (x, y order)."""
        return (self.x, self.y)

    def to_numpy(self) -> NDArray[np.float64]:
        """Convert to numpy array (x, y order)."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_numpy(cls, arr: NDArray[np.float64]) -> "Vector2":
        """Create Vector2 from numpy array (x, y order)."""
        if arr.shape != (2,):
            raise ValueError("Array must have shape (2,) for Vector2 conversion")
        return cls(float(arr[0]), float(arr[1]))

import math
from typing import Union


class Vector2D:
    """
    A two-dimensional point/vector in model coordinates (meters, y pointing up).

    Instances are treated as values: operations return new vectors and nothing
    in the engine mutates a vector after construction.
    """
    def __init__(self, x: float, y: float):
        self.x: float = float(x)
        self.y: float = float(y)

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: Union[int, float]) -> 'Vector2D':
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: Union[int, float]) -> 'Vector2D':
        return self.__mul__(scalar)

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def with_x(self, x: float) -> 'Vector2D':
        """Returns a copy of this vector with the x component replaced."""
        return Vector2D(x, self.y)

    def with_y(self, y: float) -> 'Vector2D':
        """Returns a copy of this vector with the y component replaced."""
        return Vector2D(self.x, y)

    def blend(self, other: 'Vector2D', ratio: float) -> 'Vector2D':
        """
        Linear interpolation between this vector (ratio 0) and `other` (ratio 1).
        """
        return Vector2D(self.x + (other.x - self.x) * ratio,
                        self.y + (other.y - self.y) * ratio)

    def is_close(self, other: 'Vector2D', abs_tol: float = 1e-9) -> bool:
        return math.isclose(self.x, other.x, abs_tol=abs_tol) and math.isclose(self.y, other.y, abs_tol=abs_tol)

    def __str__(self) -> str:
        return f"Vector2D({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Vector2D(x={self.x}, y={self.y})"

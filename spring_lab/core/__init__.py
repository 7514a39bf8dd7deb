from .vector import Vector2D
from .system import System
from .registry import BodyRegistry
from .exceptions import (
    SpringLabError, InvalidMassError, InvariantViolationError,
    SpringOccupiedError, UnknownSpeedModeError, SceneModeError
)

__all__ = [
    "Vector2D", "System", "BodyRegistry", "SpringLabError", "InvalidMassError",
    "InvariantViolationError", "SpringOccupiedError", "UnknownSpeedModeError", "SceneModeError",
]

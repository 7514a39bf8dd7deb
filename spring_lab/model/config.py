from dataclasses import dataclass, field
from typing import List

from spring_lab.core.exceptions import InvariantViolationError
from spring_lab.core.utils import (
    CEILING_Y, DEFAULT_FRICTION, DEFAULT_SPRING_CONSTANT, DEFAULT_SPRING_LENGTH,
    DROPPING_DISTANCE, FLOOR_Y, GRABBING_DISTANCE, GRAVITY_ACCELERATION
)
from spring_lab.core.vector import Vector2D
from spring_lab.model.mass import ReturnPath


@dataclass
class SpringConfig:
    """A spring hanging from the ceiling at horizontal position `x`."""
    x: float
    natural_resting_length: float = DEFAULT_SPRING_LENGTH
    spring_constant: float = DEFAULT_SPRING_CONSTANT

    def __post_init__(self):
        if self.natural_resting_length <= 0:
            raise ValueError(f"Spring natural_resting_length must be positive, got {self.natural_resting_length}.")


@dataclass
class MassConfig:
    mass_value: float
    position: Vector2D
    adjustable: bool = False
    name: str = ""


@dataclass
class SimulationConfig:
    """
    Layout and global parameters of one simulation.
    The default layout has two springs and six masses resting below them.
    """
    gravity: float = GRAVITY_ACCELERATION
    friction: float = DEFAULT_FRICTION
    floor_y: float = FLOOR_Y
    ceiling_y: float = CEILING_Y
    grabbing_distance: float = GRABBING_DISTANCE
    dropping_distance: float = DROPPING_DISTANCE
    playing: bool = True
    return_path: ReturnPath = ReturnPath.HORIZONTAL
    springs: List[SpringConfig] = field(default_factory=lambda: [SpringConfig(0.50), SpringConfig(0.80)])
    masses: List[MassConfig] = field(default_factory=lambda: [
        MassConfig(0.250, Vector2D(0.30, 0.5)),
        MassConfig(0.100, Vector2D(0.40, 0.5)),
        MassConfig(0.050, Vector2D(0.49, 0.5)),
        MassConfig(0.200, Vector2D(0.80, 0.5)),
        MassConfig(0.150, Vector2D(0.90, 0.5)),
        MassConfig(0.075, Vector2D(0.98, 0.5)),
    ])

    def __post_init__(self):
        if self.gravity < 0:
            raise InvariantViolationError(f"gravity must be 0 or positive, got {self.gravity}.")
        if self.friction < 0:
            raise InvariantViolationError(f"friction must be greater than or equal to 0, got {self.friction}.")
        if self.ceiling_y <= self.floor_y:
            raise ValueError("ceiling_y must lie above floor_y.")
        if self.grabbing_distance <= 0 or self.dropping_distance <= 0:
            raise ValueError("Grabbing and dropping distances must be positive.")

    @classmethod
    def default(cls) -> 'SimulationConfig':
        return cls()

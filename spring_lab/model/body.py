from enum import Enum
from typing import Optional


class Body(Enum):
    """Planetary bodies offering a preset gravitational acceleration (m/s^2)."""
    MOON = ("Moon", 1.62)
    EARTH = ("Earth", 9.8)
    JUPITER = ("Jupiter", 24.79)
    PLANET_X = ("Planet X", 14.2)
    ZERO_G = ("Zero G", 0.0)
    CUSTOM = ("Custom", None)  # gravity chosen freely by the user

    def __init__(self, title: str, gravity: Optional[float]):
        self.title = title
        self.gravity = gravity

from .core.vector import Vector2D
from .model import Body, Mass, MotionState, SimSpeed, SimulationConfig, Spring, SpringLabModel
from .scene import SceneManager, capture_scene, apply_scene

__version__ = "0.1.0"

__all__ = [
    "Vector2D", "Body", "Mass", "MotionState", "SimSpeed", "SimulationConfig", "Spring",
    "SpringLabModel", "SceneManager", "capture_scene", "apply_scene",
]

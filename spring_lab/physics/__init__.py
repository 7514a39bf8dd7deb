from .oscillator import critical_damping, damped_oscillator_step
from .mass_motion_system import MassMotionSystem
from .spring_system import SpringOscillationSystem

__all__ = ["critical_damping", "damped_oscillator_step", "MassMotionSystem", "SpringOscillationSystem"]

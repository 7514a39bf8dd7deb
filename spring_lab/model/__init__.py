from .mass import Mass, MassState, MotionState, ReturnPath
from .spring import Spring, SpringState
from .body import Body
from .config import SimulationConfig, SpringConfig, MassConfig
from .spring_lab_model import SpringLabModel, SimSpeed

__all__ = [
    "Mass", "MassState", "MotionState", "ReturnPath", "Spring", "SpringState", "Body",
    "SimulationConfig", "SpringConfig", "MassConfig", "SpringLabModel", "SimSpeed",
]

from .solver_module import SolverModule
from .energy_recorder import EnergyRecorder

__all__ = ["SolverModule", "EnergyRecorder"]

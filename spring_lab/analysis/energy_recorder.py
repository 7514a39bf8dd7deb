"""
Energy bookkeeping traces for a single mass.

Samples the kinetic, gravitational, elastic and thermal energy of one mass after
every tick of a model, so the energy invariants can be checked over a run:
- without damping, mechanical energy stays constant while the mass swings;
- with damping, thermal energy never decreases.
"""

import logging
from typing import List, Union

import numpy as np

from spring_lab.model.mass import Mass
from spring_lab.model.spring_lab_model import SpringLabModel

logger = logging.getLogger(__name__)

COLUMNS = ("time", "kinetic", "gravitational", "elastic", "thermal", "total")


class EnergyRecorder:
    def __init__(self, model: SpringLabModel, mass: Union[Mass, int]):
        self.model = model
        self.mass = model.registry.get_mass(mass) if isinstance(mass, int) else mass
        self._rows: List[tuple] = []

    def record(self) -> None:
        mass = self.mass
        self._rows.append((
            self.model.time,
            mass.kinetic_energy,
            mass.gravitational_potential_energy,
            mass.elastic_potential_energy,
            mass.thermal_energy,
            mass.total_energy,
        ))

    def run(self, steps: int, dt: float) -> np.ndarray:
        """Records the current state, then steps the model `steps` times recording after each."""
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}.")
        self.record()
        for _ in range(steps):
            self.model.step(dt)
            self.record()
        logger.debug(f"Recorded {steps} steps for mass {self.mass.name}")
        return self.as_array()

    def clear(self) -> None:
        self._rows.clear()

    def as_array(self) -> np.ndarray:
        """Samples as an (n, 6) array, columns in `COLUMNS` order."""
        if not self._rows:
            return np.empty((0, len(COLUMNS)))
        return np.array(self._rows, dtype=float)

    def column(self, name: str) -> np.ndarray:
        return self.as_array()[:, COLUMNS.index(name)]

    def mechanical_energy_drift(self) -> float:
        """Largest deviation of total mechanical energy from its first sample."""
        total = self.column("total")
        if total.size == 0:
            return 0.0
        return float(np.max(np.abs(total - total[0])))

    def thermal_is_non_decreasing(self, tolerance: float = 1e-9) -> bool:
        thermal = self.column("thermal")
        return bool(np.all(np.diff(thermal) >= -tolerance))

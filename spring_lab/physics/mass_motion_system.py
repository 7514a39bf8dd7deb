from typing import TYPE_CHECKING

from spring_lab.core.system import System

if TYPE_CHECKING:
    from spring_lab.model.spring_lab_model import SpringLabModel


class MassMotionSystem(System):
    """Steps every mass that hangs on no spring and is not held: glide back or fall."""

    def __init__(self, model: 'SpringLabModel'):
        super().__init__(model)

    def update(self, dt: float) -> None:
        gravity = self.model.gravity
        floor_y = self.model.floor_y
        for mass in self.model.masses:
            # Fall if not hung or grabbed
            if mass.spring is None and not mass.user_controlled:
                mass.step(gravity, floor_y, dt)

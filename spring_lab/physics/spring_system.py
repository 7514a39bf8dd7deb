from typing import TYPE_CHECKING

from spring_lab.core.system import System

if TYPE_CHECKING:
    from spring_lab.model.spring_lab_model import SpringLabModel


class SpringOscillationSystem(System):
    """
    Oscillates every spring. Runs after MassMotionSystem, so within one tick the
    springs see mass state that free masses already advanced, and hung masses are
    only ever moved here.
    """

    def __init__(self, model: 'SpringLabModel'):
        super().__init__(model)

    def update(self, dt: float) -> None:
        for spring in self.model.springs:
            spring.oscillate(dt)

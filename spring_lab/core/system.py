from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spring_lab.model.spring_lab_model import SpringLabModel


class System(ABC):
    """
    A unit of per-tick work run by the model in a fixed order.
    Systems read and write Mass/Spring state; they hold no state of their own.
    """
    def __init__(self, model: 'SpringLabModel'):
        self.model = model

    @abstractmethod
    def update(self, dt: float) -> None:
        pass

import logging
from enum import Enum
from typing import Dict, Union

from spring_lab.core.exceptions import SceneModeError
from spring_lab.core.utils import DEFAULT_SPRING_LENGTH
from spring_lab.model.spring import Spring
from spring_lab.model.spring_lab_model import SpringLabModel
from spring_lab.scene.snapshot import SceneSnapshot, apply_scene, capture_scene

logger = logging.getLogger(__name__)


class SpringLengthMode(Enum):
    SAME_LENGTH = "same-length"
    ADJUSTABLE_LENGTH = "adjustable-length"


class ConstantParameter(Enum):
    """Which quantity of the first spring stays fixed while its length is adjusted."""
    SPRING_CONSTANT = "spring-constant"
    SPRING_THICKNESS = "spring-thickness"


class SceneManager:
    """
    Manages the two intro scenes of a model: springs of the same length, and a
    first spring whose length can be adjusted.

    Each scene owns a stashed snapshot. Switching modes stashes the scene being
    left and applies the one being entered, so flipping back and forth loses
    nothing. The adjustable scene starts with the first spring at half the
    default length.
    """

    def __init__(self, model: SpringLabModel):
        if not model.springs:
            raise ValueError("SceneManager needs a model with at least one spring.")
        self.model = model
        self.spring_length_mode = SpringLengthMode.SAME_LENGTH
        self.constant_parameter = ConstantParameter.SPRING_CONSTANT
        self._scenes: Dict[SpringLengthMode, SceneSnapshot] = {}
        self._stash_initial_scenes()
        logger.info("SceneManager initialized.")

    @property
    def spring1(self) -> Spring:
        return self.model.springs[0]

    def _stash_initial_scenes(self) -> None:
        spring1 = self.spring1
        default_length = spring1.natural_resting_length
        self._scenes[SpringLengthMode.SAME_LENGTH] = capture_scene(self.model)

        spring1.set_natural_resting_length(DEFAULT_SPRING_LENGTH / 2)
        spring1.update_thickness(spring1.natural_resting_length, spring1.spring_constant)
        self._scenes[SpringLengthMode.ADJUSTABLE_LENGTH] = capture_scene(self.model)

        spring1.set_natural_resting_length(default_length)
        spring1.update_thickness(default_length, spring1.spring_constant)

    def stashed_scene(self, mode: SpringLengthMode) -> SceneSnapshot:
        """The snapshot kept for `mode` (only current while `mode` is not active)."""
        return self._scenes[mode]

    def set_spring_length_mode(self, mode: Union[SpringLengthMode, str]) -> None:
        mode = SpringLengthMode(mode)
        if mode is self.spring_length_mode:
            return
        logger.info(f"Switching scene: {self.spring_length_mode.value} -> {mode.value}")
        self._scenes[self.spring_length_mode] = capture_scene(self.model)
        apply_scene(self.model, self._scenes[mode])
        self.spring_length_mode = mode
        if self._globals_out_of_date():
            # Gravity or friction changed while the scene was stashed
            self.model.apply_global_parameters()

    def _globals_out_of_date(self) -> bool:
        model = self.model
        return (any(spring.gravity != model.gravity or spring.damping_coefficient != model.friction
                    for spring in model.springs) or
                any(mass.gravity != model.gravity for mass in model.masses))

    def set_constant_parameter(self, parameter: Union[ConstantParameter, str]) -> None:
        """
        Selects which quantity stays fixed when the first spring's length changes.
        The newly fixed quantity is reset to its initial value and the other one is
        derived from it.

        Raises:
            SceneModeError: Outside the adjustable-length scene.
        """
        self._require_adjustable("set_constant_parameter")
        self.constant_parameter = ConstantParameter(parameter)
        spring1 = self.spring1
        initial = spring1.initial_state
        if self.constant_parameter is ConstantParameter.SPRING_CONSTANT:
            spring1.spring_constant = initial.spring_constant
        else:
            spring1.thickness = initial.thickness
        self._apply_constant_parameter_to_length()
        if spring1.mass is not None:
            spring1.mass.zero_thermal_energy()

    def set_spring_length(self, length: float) -> None:
        """
        Changes the first spring's natural length, deriving its thickness or spring
        constant according to the constant parameter.

        Raises:
            SceneModeError: Outside the adjustable-length scene.
            ValueError: If `length` is outside the allowed spring length range.
        """
        self._require_adjustable("set_spring_length")
        spring1 = self.spring1
        spring1.set_natural_resting_length(length)
        self._apply_constant_parameter_to_length()
        if spring1.mass is not None:
            spring1.mass.zero_thermal_energy()

    def _apply_constant_parameter_to_length(self) -> None:
        spring1 = self.spring1
        length = spring1.natural_resting_length
        if self.constant_parameter is ConstantParameter.SPRING_CONSTANT:
            spring1.update_thickness(length, spring1.spring_constant)
        else:
            spring1.update_spring_constant(length, spring1.thickness)

    def set_spring_constant(self, spring: Union[Spring, int], spring_constant: float) -> None:
        """
        Sets a spring constant. The drawn thickness always follows it, so a stashed
        scene never holds a thickness that disagrees with its constant.
        """
        self.model.set_spring_constant(spring, spring_constant)
        spring = self.model.springs[spring] if isinstance(spring, int) else spring
        spring.update_thickness(spring.natural_resting_length, spring.spring_constant)

    def _require_adjustable(self, operation: str) -> None:
        if self.spring_length_mode is not SpringLengthMode.ADJUSTABLE_LENGTH:
            raise SceneModeError(f"{operation} is only available in the "
                                 f"{SpringLengthMode.ADJUSTABLE_LENGTH.value} scene.")

    def reset(self) -> None:
        """Resets the model, both stashed scenes and both mode selections."""
        logger.info("Resetting scenes.")
        self.model.reset()
        self.spring_length_mode = SpringLengthMode.SAME_LENGTH
        self.constant_parameter = ConstantParameter.SPRING_CONSTANT
        self._scenes.clear()
        self._stash_initial_scenes()

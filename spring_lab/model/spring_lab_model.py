import logging
from enum import Enum
from typing import List, Optional, Union

from spring_lab.core.exceptions import InvariantViolationError, UnknownSpeedModeError
from spring_lab.core.registry import BodyRegistry
from spring_lab.core.system import System
from spring_lab.core.utils import MAX_DT, SLOW_MOTION_FACTOR, STEP_FORWARD_DT
from spring_lab.core.vector import Vector2D
from spring_lab.model.body import Body
from spring_lab.model.config import SimulationConfig
from spring_lab.model.mass import Mass
from spring_lab.model.spring import Spring
from spring_lab.physics.mass_motion_system import MassMotionSystem
from spring_lab.physics.spring_system import SpringOscillationSystem

logger = logging.getLogger(__name__)


class SimSpeed(Enum):
    NORMAL = "normal"
    SLOW = "slow"


class SpringLabModel:
    """
    Stepping controller for a set of masses and springs.

    Owns the global parameters (gravity, friction, play state, speed), pushes them
    into every body when they change, advances the bodies once per frame and runs
    the grab/release protocol for dragged masses.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig.default()
        self.floor_y = self.config.floor_y
        self.ceiling_y = self.config.ceiling_y
        self.grabbing_distance = self.config.grabbing_distance
        self.dropping_distance = self.config.dropping_distance

        self.registry = BodyRegistry()
        for spring_config in self.config.springs:
            self.registry.add_spring(Spring(
                Vector2D(spring_config.x, self.ceiling_y),
                spring_config.natural_resting_length,
                spring_constant=spring_config.spring_constant,
                damping_coefficient=self.config.friction,
                gravity=self.config.gravity,
            ))
        for mass_config in self.config.masses:
            self.registry.add_mass(Mass(
                mass_config.mass_value,
                mass_config.position,
                gravity=self.config.gravity,
                adjustable=mass_config.adjustable,
                name=mass_config.name,
                return_path=self.config.return_path,
            ))

        self._gravity = self.config.gravity
        self._friction = self.config.friction
        self.body = self._body_for_gravity(self._gravity)
        self.playing = self.config.playing
        self.speed = SimSpeed.NORMAL
        self.time = 0.0

        # Masses advance before springs oscillate
        self.systems: List[System] = [MassMotionSystem(self), SpringOscillationSystem(self)]
        logger.info(f"SpringLabModel initialized with {len(self.springs)} springs and {len(self.masses)} masses.")

    @property
    def masses(self) -> List[Mass]:
        return self.registry.masses

    @property
    def springs(self) -> List[Spring]:
        return self.registry.springs

    # --- Global parameters ---

    @property
    def gravity(self) -> float:
        return self._gravity

    def set_gravity(self, gravity: float) -> None:
        """
        Sets gravity and pushes it into every spring and mass. A value that differs
        from the selected body's preset switches the body to CUSTOM.
        """
        self._apply_gravity(gravity)
        if self.body is not Body.CUSTOM and self.body.gravity != gravity:
            self.body = Body.CUSTOM

    def set_body(self, body: Body) -> None:
        """Selects a planetary body; its preset gravity is applied (CUSTOM keeps the current value)."""
        self.body = body
        if body.gravity is not None:
            self._apply_gravity(body.gravity)

    def _apply_gravity(self, gravity: float) -> None:
        if gravity < 0:
            raise InvariantViolationError(f"gravity must be 0 or positive : {gravity}")
        self._gravity = gravity
        for spring in self.springs:
            spring.gravity = gravity
        for mass in self.masses:
            mass.gravity = gravity
            # Potential energy changed without any dissipation
            mass.zero_thermal_energy()

    @property
    def friction(self) -> float:
        return self._friction

    def set_friction(self, friction: float) -> None:
        if friction < 0:
            raise InvariantViolationError(f"friction must be greater than or equal to 0: {friction}")
        self._friction = friction
        for spring in self.springs:
            spring.damping_coefficient = friction

    def set_playing(self, playing: bool) -> None:
        self.playing = bool(playing)

    def set_speed_mode(self, speed: Union[SimSpeed, str]) -> None:
        try:
            self.speed = SimSpeed(speed)
        except ValueError:
            raise UnknownSpeedModeError(f"Invalid setting for model speed: {speed!r}") from None

    def _speed_factor(self) -> float:
        if self.speed is SimSpeed.NORMAL:
            return 1.0
        if self.speed is SimSpeed.SLOW:
            return 1.0 / SLOW_MOTION_FACTOR
        raise UnknownSpeedModeError(f"Invalid setting for model speed: {self.speed!r}")

    def set_spring_constant(self, spring: Union[Spring, int], spring_constant: float) -> None:
        spring = self._resolve_spring(spring)
        spring.spring_constant = spring_constant
        if spring.mass is not None:
            spring.mass.zero_thermal_energy()

    def apply_global_parameters(self) -> None:
        """Pushes the current gravity and friction into every body."""
        self._apply_gravity(self._gravity)
        self.set_friction(self._friction)

    # --- User interaction ---

    def set_user_controlled(self, mass: Union[Mass, int], user_controlled: bool) -> None:
        self._resolve_mass(mass).user_controlled = user_controlled

    def release_mass(self, mass: Union[Mass, int]) -> None:
        self.set_user_controlled(mass, False)

    def propose_drag_position(self, mass: Union[Mass, int], proposed_position: Vector2D) -> None:
        """Entry point for a drag gesture: marks the mass as held and moves it."""
        mass = self._resolve_mass(mass)
        mass.user_controlled = True
        self.adjust_dragged_mass_position(mass, proposed_position)

    def adjust_dragged_mass_position(self, mass: Mass, proposed_position: Vector2D) -> None:
        """
        Based on a new dragged position of a mass, detach it from or attach it to a
        spring if eligible, then update its position.

        An attached mass pulled sideways past the dropping distance comes off its
        spring. An attached mass moves along its spring's axis and drags the
        spring's bottom with it. A free mass snags the first empty spring whose
        bottom lies within the grabbing distance, and otherwise just follows the
        pointer.
        """
        spring = mass.spring
        if spring is not None and abs(proposed_position.x - mass.position.x) > self.dropping_distance:
            logger.debug(f"Mass {mass.name} dragged off its spring")
            mass.detach()

        spring = mass.spring
        if spring is not None:
            spring.displacement = proposed_position.y - (spring.position.y - spring.natural_resting_length)
            mass.position = Vector2D(spring.position.x, proposed_position.y)
            return

        mass.position = proposed_position
        for candidate in self.springs:
            if candidate.mass is not None:
                continue
            if (abs(proposed_position.x - candidate.position.x) < self.grabbing_distance and
                    abs(proposed_position.y - candidate.bottom) < self.grabbing_distance):
                candidate.add_mass(mass)
                break

    def stop_spring(self, index: int) -> None:
        self.registry.get_spring(index).stop()

    # --- Stepping ---

    def step(self, dt: float) -> None:
        """
        Advances the simulation by `dt` seconds of real time.

        A `dt` above one second means the host was suspended (e.g. a hidden window)
        and is dropped rather than integrated.
        """
        if dt > MAX_DT:
            logger.debug(f"Dropping stale time step dt={dt:.3f}s")
            return
        if not self.playing:
            return

        dt *= self._speed_factor()
        for system in self.systems:
            system.update(dt)
        self.time += dt
        self.check_invariants()

    def step_forward(self) -> None:
        """Advances one nominal frame regardless of the play state, leaving the model paused."""
        self.playing = True
        self.step(STEP_FORWARD_DT)
        self.playing = False

    def reset(self) -> None:
        logger.info("Resetting model.")
        self.speed = SimSpeed.NORMAL
        self._friction = self.config.friction
        self._gravity = self.config.gravity
        self.body = self._body_for_gravity(self._gravity)
        self.playing = self.config.playing
        self.time = 0.0
        for mass in self.masses:
            mass.reset()
        for spring in self.springs:
            spring.reset()
        self.apply_global_parameters()

    # --- Invariants ---

    def check_invariants(self) -> None:
        """
        Raises:
            InvariantViolationError: If gravity or friction is negative, or a
                mass/spring back-reference is not returned by the other side.
        """
        if self._gravity < 0:
            raise InvariantViolationError(f"Negative gravity: {self._gravity}")
        if self._friction < 0:
            raise InvariantViolationError(f"Negative friction: {self._friction}")
        for spring in self.springs:
            if spring.mass is not None and spring.mass.spring is not spring:
                raise InvariantViolationError(f"Spring at x={spring.position.x} holds {spring.mass.name}, "
                                              f"which does not hang on it.")
        for mass in self.masses:
            if mass.spring is None:
                continue
            if mass.spring.mass is not mass:
                raise InvariantViolationError(f"Mass {mass.name} references a spring that does not hold it.")
            if not any(spring is mass.spring for spring in self.springs):
                raise InvariantViolationError(f"Mass {mass.name} hangs on a spring outside this simulation.")

    # --- Helpers ---

    def _resolve_mass(self, mass: Union[Mass, int]) -> Mass:
        return self.registry.get_mass(mass) if isinstance(mass, int) else mass

    def _resolve_spring(self, spring: Union[Spring, int]) -> Spring:
        return self.registry.get_spring(spring) if isinstance(spring, int) else spring

    @staticmethod
    def _body_for_gravity(gravity: float) -> Body:
        for body in Body:
            if body.gravity == gravity:
                return body
        return Body.CUSTOM

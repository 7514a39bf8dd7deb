import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from spring_lab.core.exceptions import InvalidMassError
from spring_lab.core.utils import (
    DENSITY, GRAVITY_ACCELERATION, HEIGHT_RATIO, HOOK_HEIGHT_RATIO,
    RETURN_ANIMATION_RATE, SCALING_FACTOR, cubic_in_out
)
from spring_lab.core.vector import Vector2D

if TYPE_CHECKING:
    from spring_lab.model.spring import Spring

logger = logging.getLogger(__name__)


class MotionState(Enum):
    """What currently drives a mass's position."""
    HELD = auto()       # moved by the user
    FALLING = auto()    # free fall under gravity (or resting on the floor)
    ATTACHED = auto()   # hung from a spring, position set by the spring
    RETURNING = auto()  # gliding back toward its rest x after being let go


class ReturnPath(Enum):
    HORIZONTAL = auto()  # only x returns, y is held during the glide
    DIAGONAL = auto()    # glide straight back to the initial position


@dataclass(frozen=True)
class MassState:
    """Field-level copy of a mass's dynamical state (attachment excluded)."""
    mass_value: float
    position: Vector2D
    vertical_velocity: float
    user_controlled: bool
    motion_state: MotionState
    gravity: float
    initial_total_energy: float
    animation_progress: float
    animation_start_position: Optional[Vector2D]
    animation_end_position: Optional[Vector2D]


class Mass:
    """
    A hookable cylinder of a given mass.

    The position is the top-center of the body (where the hook meets the spring).
    All energy terms are derived on demand from the current state; only
    `initial_total_energy` (the dissipation baseline) is stored.
    """

    def __init__(self, mass_value: float, initial_position: Vector2D,
                 gravity: float = GRAVITY_ACCELERATION, adjustable: bool = False,
                 name: str = "", return_path: ReturnPath = ReturnPath.HORIZONTAL):
        """
        Args:
            mass_value: Mass in kg, must be > 0.
            initial_position: Where the mass sits at construction and after reset.
            gravity: Gravitational acceleration magnitude cached by this mass.
            adjustable: Whether the mass value may be changed at runtime.
            name: Label used in logs.
            return_path: Shape of the glide back to rest after an unattached release.
        """
        if mass_value <= 0:
            raise InvalidMassError(f"Mass must be greater than 0, got {mass_value}.")

        self.name = name or f"{mass_value * 1000:g}g"
        self.adjustable = adjustable
        self.return_path = return_path
        self.initial_position = initial_position
        self._initial_mass_value = mass_value
        self._initial_gravity = gravity

        self._mass_value = mass_value
        self.position = initial_position
        self.vertical_velocity = 0.0
        self.gravity = gravity
        self._spring: Optional['Spring'] = None
        self._user_controlled = False
        self.motion_state = MotionState.FALLING

        # Glide bookkeeping, only meaningful while RETURNING
        self.animation_progress = 0.0
        self.animation_start_position: Optional[Vector2D] = None
        self.animation_end_position: Optional[Vector2D] = None

        self.initial_total_energy = self._mechanical_energy()

    # --- Geometry (pure functions of the mass value) ---

    @property
    def mass_value(self) -> float:
        return self._mass_value

    def set_mass_value(self, value: float) -> None:
        if not self.adjustable:
            raise ValueError(f"Mass {self.name} is not adjustable.")
        if value <= 0:
            raise InvalidMassError(f"Mass must be greater than 0, got {value}.")
        self._mass_value = value
        # Kinetic and gravitational energy changed without any dissipation
        self.zero_thermal_energy()

    @property
    def radius(self) -> float:
        return math.sqrt(self._mass_value / (DENSITY * HEIGHT_RATIO * math.pi)) * SCALING_FACTOR

    @property
    def cylinder_height(self) -> float:
        return self.radius * HEIGHT_RATIO

    @property
    def hook_height(self) -> float:
        return self.radius * HOOK_HEIGHT_RATIO

    @property
    def total_height(self) -> float:
        return self.cylinder_height + self.hook_height

    @property
    def zero_reference_point(self) -> float:
        """Height of the mass when it rests on the shelf."""
        return -self.cylinder_height / 2

    # --- Attachment and control flags ---

    @property
    def spring(self) -> Optional['Spring']:
        return self._spring

    @property
    def user_controlled(self) -> bool:
        return self._user_controlled

    @user_controlled.setter
    def user_controlled(self, value: bool) -> None:
        value = bool(value)
        if value == self._user_controlled:
            return
        self._user_controlled = value
        if value:
            # A residual fall or oscillation speed must not leak into the drag
            self.vertical_velocity = 0.0
        elif self._spring is not None:
            # Letting go of a hung mass restarts the spring system
            self.initial_total_energy = self._mechanical_energy()
        self._update_motion_state()

    @property
    def is_animating(self) -> bool:
        return self.motion_state is MotionState.RETURNING

    def _set_spring(self, spring: Optional['Spring']) -> None:
        # Only Spring.add_mass / Spring.remove_mass call this, keeping both sides in step.
        self._spring = spring
        self._update_motion_state()

    def _update_motion_state(self) -> None:
        """Single transition function, run whenever the control flag or attachment changes."""
        previous = self.motion_state
        if self._user_controlled:
            self.motion_state = MotionState.HELD
        elif self._spring is not None:
            self.motion_state = MotionState.ATTACHED
        elif previous in (MotionState.HELD, MotionState.ATTACHED):
            self._begin_return()
        if self.motion_state is not previous:
            logger.debug(f"Mass {self.name}: {previous.name} -> {self.motion_state.name}")

    def _begin_return(self) -> None:
        self.animation_progress = 0.0
        self.animation_start_position = self.position
        if self.return_path is ReturnPath.DIAGONAL:
            self.animation_end_position = self.initial_position
        else:
            self.animation_end_position = Vector2D(self.initial_position.x, self.position.y)
        self.motion_state = MotionState.RETURNING

    # --- Forces and energy ---

    @property
    def spring_force(self) -> float:
        return self._spring.spring_force if self._spring is not None else 0.0

    @property
    def net_force(self) -> float:
        return self.spring_force - self._mass_value * self.gravity

    @property
    def acceleration(self) -> float:
        return self.net_force / self._mass_value

    @property
    def kinetic_energy(self) -> float:
        if self._user_controlled:
            return 0.0
        return 0.5 * self._mass_value * self.vertical_velocity ** 2

    @property
    def gravitational_potential_energy(self) -> float:
        height_from_zero = self.position.y - self.zero_reference_point - self.total_height
        return self._mass_value * self.gravity * height_from_zero

    @property
    def elastic_potential_energy(self) -> float:
        return self._spring.elastic_potential_energy if self._spring is not None else 0.0

    @property
    def total_energy(self) -> float:
        return self.kinetic_energy + self.gravitational_potential_energy + self.elastic_potential_energy

    @property
    def thermal_energy(self) -> float:
        """Mechanical energy lost since the last baseline; 0 while the user holds the mass."""
        if self._user_controlled:
            return 0.0
        return self.initial_total_energy - self.total_energy

    def _mechanical_energy(self) -> float:
        return self.kinetic_energy + self.gravitational_potential_energy + self.elastic_potential_energy

    # --- Operations ---

    def step(self, gravity: float, floor_y: float, dt: float) -> None:
        """
        Advances an unattached, unheld mass by one tick: either the glide back
        toward its rest x, or free fall onto the floor. Attached or held masses
        are positioned by the spring or by the user and do not move here.
        """
        if self.motion_state is MotionState.RETURNING:
            self.animation_progress = min(1.0, self.animation_progress + dt * RETURN_ANIMATION_RATE)
            ratio = cubic_in_out(self.animation_progress)
            self.position = self.animation_start_position.blend(self.animation_end_position, ratio)
            if self.animation_progress >= 1.0:
                self.motion_state = MotionState.FALLING
        elif self.motion_state is MotionState.FALLING:
            floor_position = floor_y + self.total_height
            old_y = self.position.y
            if old_y != floor_position:
                new_velocity = self.vertical_velocity - gravity * dt
                new_y = old_y + (self.vertical_velocity + new_velocity) * dt / 2
                if new_y < floor_position:
                    # Hit the floor: stop instead of integrating through it
                    self.position = self.position.with_y(floor_position)
                    self.vertical_velocity = 0.0
                else:
                    self.vertical_velocity = new_velocity
                    self.position = self.position.with_y(new_y)

    def detach(self) -> None:
        """Stops the mass vertically and unhooks it from its spring."""
        self.vertical_velocity = 0.0
        if self._spring is not None:
            self._spring.remove_mass()

    def zero_thermal_energy(self) -> None:
        """Re-baselines dissipation bookkeeping at the current mechanical energy."""
        self.initial_total_energy = self._mechanical_energy()

    def reset(self) -> None:
        if self._spring is not None:
            self._spring.remove_mass()
        self.position = self.initial_position
        self._user_controlled = False
        self.vertical_velocity = 0.0
        self.gravity = self._initial_gravity
        if self.adjustable:
            self._mass_value = self._initial_mass_value
        self.motion_state = MotionState.FALLING
        self.animation_progress = 0.0
        self.animation_start_position = None
        self.animation_end_position = None
        self.initial_total_energy = self._mechanical_energy()

    def snapshot(self) -> MassState:
        return MassState(
            mass_value=self._mass_value,
            position=self.position,
            vertical_velocity=self.vertical_velocity,
            user_controlled=self._user_controlled,
            motion_state=self.motion_state,
            gravity=self.gravity,
            initial_total_energy=self.initial_total_energy,
            animation_progress=self.animation_progress,
            animation_start_position=self.animation_start_position,
            animation_end_position=self.animation_end_position,
        )

    def restore(self, state: MassState) -> None:
        """
        Writes a snapshot back verbatim. No transition rules run, and the spring
        attachment is left to the caller (see spring_lab.scene.snapshot).
        """
        self._mass_value = state.mass_value
        self.position = state.position
        self.vertical_velocity = state.vertical_velocity
        self._user_controlled = state.user_controlled
        self.motion_state = state.motion_state
        self.gravity = state.gravity
        self.initial_total_energy = state.initial_total_energy
        self.animation_progress = state.animation_progress
        self.animation_start_position = state.animation_start_position
        self.animation_end_position = state.animation_end_position

    def __repr__(self) -> str:
        return (f"Mass(name={self.name!r}, mass_value={self._mass_value}, position={self.position!r}, "
                f"state={self.motion_state.name})")

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from spring_lab.core.exceptions import SpringOccupiedError
from spring_lab.core.utils import (
    DEFAULT_SPRING_CONSTANT, GRAVITY_ACCELERATION, SPRING_CONSTANT_RANGE,
    SPRING_LENGTH_RANGE, SPRING_RECOIL_MASS, SPRING_SETTLE_TOLERANCE,
    THICKNESS_SCALE, check_in_range, clamp
)
from spring_lab.core.vector import Vector2D
from spring_lab.physics.oscillator import critical_damping, damped_oscillator_step

if TYPE_CHECKING:
    from spring_lab.model.mass import Mass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpringState:
    """Field-level copy of a spring's dynamical state (attachment excluded)."""
    position: Vector2D
    natural_resting_length: float
    spring_constant: float
    damping_coefficient: float
    gravity: float
    thickness: float
    displacement: float
    velocity: float
    animating: bool


class Spring:
    """
    An idealized damped spring hanging from a fixed anchor.

    `displacement` is the signed offset of the spring's bottom from where it sits
    at natural length (negative when stretched), so
    ``bottom = anchor.y - natural_resting_length + displacement`` and the force on
    a hung mass is ``-k * displacement``.
    """

    def __init__(self, position: Vector2D, natural_resting_length: float,
                 spring_constant: float = DEFAULT_SPRING_CONSTANT,
                 damping_coefficient: float = 0.0,
                 gravity: float = GRAVITY_ACCELERATION,
                 spring_constant_range: Tuple[float, float] = SPRING_CONSTANT_RANGE):
        if natural_resting_length <= 0:
            raise ValueError(f"Spring natural resting length must be positive, got {natural_resting_length}.")
        if damping_coefficient < 0:
            raise ValueError(f"Spring damping must be non-negative, got {damping_coefficient}.")
        self.spring_constant_range = spring_constant_range
        check_in_range("Spring constant", spring_constant, spring_constant_range)

        self.position = position
        self.natural_resting_length = natural_resting_length
        self._spring_constant = spring_constant
        self.damping_coefficient = damping_coefficient
        self.gravity = gravity
        self.displacement = 0.0
        self.velocity = 0.0
        self.animating = False
        self._mass: Optional['Mass'] = None
        self.thickness = 0.0
        self.update_thickness(natural_resting_length, spring_constant)

        self._initial_state = self.snapshot()

    # --- Parameters ---

    @property
    def spring_constant(self) -> float:
        return self._spring_constant

    @spring_constant.setter
    def spring_constant(self, value: float) -> None:
        self._spring_constant = check_in_range("Spring constant", value, self.spring_constant_range)

    def set_natural_resting_length(self, length: float) -> None:
        """Changes the natural length, carrying an attached mass along with the bottom."""
        self.natural_resting_length = check_in_range("Spring length", length, SPRING_LENGTH_RANGE)
        self._sync_mass_position()

    def update_thickness(self, length: float, spring_constant: float) -> float:
        """Sets and returns the drawn thickness for a spring of this length and constant."""
        self.thickness = THICKNESS_SCALE * length * spring_constant
        return self.thickness

    def update_spring_constant(self, length: float, thickness: float) -> float:
        """
        Inverse of `update_thickness`: derives the spring constant a spring of this
        length and thickness has. The result is clamped to the allowed range, in which
        case the thickness is recomputed from the clamped constant.
        """
        low, high = self.spring_constant_range
        spring_constant = thickness / (THICKNESS_SCALE * length)
        clamped = clamp(spring_constant, low, high)
        self._spring_constant = clamped
        if clamped != spring_constant:
            logger.debug(f"Spring constant {spring_constant:.3f} clamped to {clamped:.3f}")
            self.update_thickness(length, clamped)
        else:
            self.thickness = thickness
        return clamped

    @property
    def initial_state(self) -> SpringState:
        return self._initial_state

    # --- Derived quantities ---

    @property
    def mass(self) -> Optional['Mass']:
        return self._mass

    @property
    def length(self) -> float:
        return self.natural_resting_length - self.displacement

    @property
    def bottom(self) -> float:
        """y coordinate of the spring's lower end (where a mass hook sits)."""
        return self.position.y - self.natural_resting_length + self.displacement

    @property
    def spring_force(self) -> float:
        return -self._spring_constant * self.displacement

    @property
    def elastic_potential_energy(self) -> float:
        return 0.5 * self._spring_constant * self.displacement ** 2

    @property
    def equilibrium_displacement(self) -> float:
        """Displacement at which k * |x| balances the weight of the attached mass."""
        if self._mass is None:
            return 0.0
        return -self._mass.mass_value * self.gravity / self._spring_constant

    @property
    def equilibrium_position(self) -> float:
        return self.position.y - self.natural_resting_length + self.equilibrium_displacement

    # --- Attachment ---

    def add_mass(self, mass: 'Mass') -> None:
        """
        Hangs `mass` on this spring. The displacement is taken from the mass's
        current height so the mass does not jump.

        Raises:
            SpringOccupiedError: If another mass already hangs here, or `mass`
                hangs on another spring.
        """
        if self._mass is mass:
            return
        if self._mass is not None:
            raise SpringOccupiedError(f"Spring already holds mass {self._mass.name}; remove it first.")
        if mass.spring is not None:
            raise SpringOccupiedError(f"Mass {mass.name} already hangs on another spring.")
        self._mass = mass
        self.displacement = mass.position.y - (self.position.y - self.natural_resting_length)
        self.velocity = mass.vertical_velocity
        self.animating = True
        mass._set_spring(self)
        logger.debug(f"Mass {mass.name} attached to spring at x={self.position.x}")

    def remove_mass(self) -> None:
        """Unhooks the attached mass; the spring keeps moving and recoils to rest."""
        mass = self._mass
        if mass is None:
            return
        self.velocity = mass.vertical_velocity
        self._mass = None
        self.animating = True
        mass._set_spring(None)
        logger.debug(f"Mass {mass.name} removed from spring at x={self.position.x}")

    # --- Motion ---

    def oscillate(self, dt: float) -> None:
        """
        Advances the spring by `dt`.

        With a released mass attached, the mass/spring pair follows the exact damped
        oscillator about the equilibrium point and the mass is placed at the spring's
        bottom. A held mass drives the spring instead, so nothing moves here. An empty
        spring recoils toward its natural length, at least critically damped, and
        stops animating once settled.
        """
        mass = self._mass
        if mass is not None:
            if mass.user_controlled:
                self.velocity = 0.0
                return
            equilibrium = self.equilibrium_displacement
            offset, velocity = damped_oscillator_step(
                self.displacement - equilibrium, mass.vertical_velocity,
                mass.mass_value, self._spring_constant, self.damping_coefficient, dt
            )
            self.displacement = offset + equilibrium
            self.velocity = velocity
            mass.vertical_velocity = velocity
            self._sync_mass_position()
        elif self.animating:
            damping = max(self.damping_coefficient, critical_damping(SPRING_RECOIL_MASS, self._spring_constant))
            self.displacement, self.velocity = damped_oscillator_step(
                self.displacement, self.velocity, SPRING_RECOIL_MASS, self._spring_constant, damping, dt
            )
            if abs(self.displacement) < SPRING_SETTLE_TOLERANCE and abs(self.velocity) < SPRING_SETTLE_TOLERANCE:
                self.displacement = 0.0
                self.velocity = 0.0
                self.animating = False

    def stop(self) -> None:
        """Freezes the spring at natural length; an attached mass stops with it."""
        self.displacement = 0.0
        self.velocity = 0.0
        mass = self._mass
        if mass is not None:
            mass.vertical_velocity = 0.0
            self._sync_mass_position()
            mass.zero_thermal_energy()
        else:
            self.animating = False

    def _sync_mass_position(self) -> None:
        mass = self._mass
        if mass is not None and not mass.user_controlled:
            mass.position = Vector2D(self.position.x, self.bottom)

    def reset(self) -> None:
        if self._mass is not None:
            mass = self._mass
            self._mass = None
            mass._set_spring(None)
        self.restore(self._initial_state)

    def snapshot(self) -> SpringState:
        return SpringState(
            position=self.position,
            natural_resting_length=self.natural_resting_length,
            spring_constant=self._spring_constant,
            damping_coefficient=self.damping_coefficient,
            gravity=self.gravity,
            thickness=self.thickness,
            displacement=self.displacement,
            velocity=self.velocity,
            animating=self.animating,
        )

    def restore(self, state: SpringState) -> None:
        """Writes a snapshot back verbatim; the attachment is left to the caller."""
        self.position = state.position
        self.natural_resting_length = state.natural_resting_length
        self._spring_constant = state.spring_constant
        self.damping_coefficient = state.damping_coefficient
        self.gravity = state.gravity
        self.thickness = state.thickness
        self.displacement = state.displacement
        self.velocity = state.velocity
        self.animating = state.animating

    def _relink(self, mass: Optional['Mass']) -> None:
        # Restores an attachment captured in a snapshot without running any
        # attach/release side effects on either body.
        if self._mass is not None:
            self._mass._spring = None
        self._mass = mass
        if mass is not None:
            mass._spring = self

    def __repr__(self) -> str:
        return (f"Spring(x={self.position.x}, natural_resting_length={self.natural_resting_length}, "
                f"spring_constant={self._spring_constant}, displacement={self.displacement})")

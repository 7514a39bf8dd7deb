import pytest

from spring_lab.core.exceptions import SpringOccupiedError
from spring_lab.core.utils import DEFAULT_THICKNESS
from spring_lab.core.vector import Vector2D
from spring_lab.model.mass import Mass, MotionState
from spring_lab.model.spring import Spring


def make_spring(**kwargs) -> Spring:
    # Anchor at (0.5, 1.2), natural length 0.3: bottom at rest is y = 0.9
    return Spring(Vector2D(0.5, 1.2), 0.3, **kwargs)


class TestSpringConstruction:
    """Parameter validation and derived geometry."""

    def test_invalid_parameters_rejected(self):
        """Non-positive length, negative damping and out of range k are rejected."""
        with pytest.raises(ValueError):
            Spring(Vector2D(0.5, 1.2), 0.0)
        with pytest.raises(ValueError):
            make_spring(damping_coefficient=-0.1)
        with pytest.raises(ValueError):
            make_spring(spring_constant=50.0)

    def test_bottom_and_length(self):
        """bottom = anchor.y - natural length + displacement."""
        spring = make_spring()
        assert spring.bottom == pytest.approx(0.9)
        spring.displacement = -0.1
        assert spring.bottom == pytest.approx(0.8)
        assert spring.length == pytest.approx(0.4)
        assert spring.spring_force == pytest.approx(0.9)
        assert spring.elastic_potential_energy == pytest.approx(0.5 * 9.0 * 0.01)

    def test_spring_constant_setter_checks_range(self):
        """The spring constant stays within its allowed range."""
        spring = make_spring()
        spring.spring_constant = 12.0
        assert spring.spring_constant == 12.0
        with pytest.raises(ValueError):
            spring.spring_constant = 4.0

    def test_natural_length_range(self):
        """Natural length changes are limited to the allowed range."""
        spring = make_spring()
        spring.set_natural_resting_length(0.4)
        assert spring.bottom == pytest.approx(0.8)
        with pytest.raises(ValueError):
            spring.set_natural_resting_length(0.9)


class TestSpringAttachment:
    """addMass / removeMass keep both sides consistent."""

    def test_add_mass_takes_displacement_from_mass(self):
        """Attaching does not make the mass jump."""
        spring = make_spring()
        mass = Mass(0.1, Vector2D(0.5, 0.85))
        spring.add_mass(mass)
        assert spring.mass is mass
        assert mass.spring is spring
        assert spring.displacement == pytest.approx(-0.05)
        assert spring.bottom == pytest.approx(mass.position.y)
        assert spring.animating
        assert mass.motion_state is MotionState.ATTACHED

    def test_add_same_mass_is_noop(self):
        """Re-attaching the attached mass changes nothing."""
        spring = make_spring()
        mass = Mass(0.1, Vector2D(0.5, 0.85))
        spring.add_mass(mass)
        spring.displacement = -0.2
        spring.add_mass(mass)
        assert spring.displacement == -0.2

    def test_occupied_spring_rejects_second_mass(self):
        """A spring holds at most one mass."""
        spring = make_spring()
        first = Mass(0.1, Vector2D(0.5, 0.9))
        second = Mass(0.2, Vector2D(0.5, 0.9))
        spring.add_mass(first)
        with pytest.raises(SpringOccupiedError):
            spring.add_mass(second)
        assert spring.mass is first
        assert second.spring is None

    def test_mass_on_other_spring_rejected(self):
        """A mass hangs on at most one spring."""
        spring = make_spring()
        other = Spring(Vector2D(0.8, 1.2), 0.3)
        mass = Mass(0.1, Vector2D(0.5, 0.9))
        spring.add_mass(mass)
        with pytest.raises(SpringOccupiedError):
            other.add_mass(mass)

    def test_remove_mass_clears_both_sides(self):
        """Removal unlinks both sides and leaves the spring moving."""
        spring = make_spring()
        mass = Mass(0.1, Vector2D(0.5, 0.8))
        spring.add_mass(mass)
        mass.vertical_velocity = 0.3
        spring.remove_mass()
        assert spring.mass is None
        assert mass.spring is None
        assert spring.animating
        assert spring.velocity == pytest.approx(0.3)


class TestSpringOscillation:
    """Damped oscillation with and without a mass."""

    def test_equilibrium(self):
        """Equilibrium displacement balances the weight: k x = -m g."""
        spring = make_spring()
        assert spring.equilibrium_displacement == 0.0
        spring.add_mass(Mass(0.1, Vector2D(0.5, 0.9)))
        assert spring.equilibrium_displacement == pytest.approx(-0.1 * 9.8 / 9.0)
        assert spring.equilibrium_position == pytest.approx(0.9 - 0.1 * 9.8 / 9.0)

    def test_mass_at_equilibrium_stays(self):
        """A mass released at rest at equilibrium does not move."""
        spring = make_spring(damping_coefficient=0.0)
        mass = Mass(0.1, Vector2D(0.5, 0.9 - 0.1 * 9.8 / 9.0))
        spring.add_mass(mass)
        for _ in range(60):
            spring.oscillate(1 / 60)
        assert spring.displacement == pytest.approx(spring.equilibrium_displacement, abs=1e-12)
        assert mass.vertical_velocity == pytest.approx(0.0, abs=1e-12)

    def test_mass_follows_spring_bottom(self):
        """The attached mass is placed at the spring's bottom every step."""
        spring = make_spring()
        mass = Mass(0.1, Vector2D(0.5, 0.9))
        spring.add_mass(mass)
        spring.oscillate(0.05)
        assert mass.position.y == pytest.approx(spring.bottom)
        assert mass.position.x == pytest.approx(0.5)
        assert mass.vertical_velocity == pytest.approx(spring.velocity)
        assert mass.vertical_velocity < 0.0

    def test_frictionless_conserves_mechanical_energy(self):
        """With zero damping total energy stays constant over many steps."""
        spring = make_spring(damping_coefficient=0.0)
        mass = Mass(0.25, Vector2D(0.5, 0.9))
        spring.add_mass(mass)
        mass.zero_thermal_energy()
        initial = mass.total_energy
        for _ in range(600):
            spring.oscillate(1 / 60)
        assert mass.total_energy == pytest.approx(initial, abs=1e-9)
        assert mass.thermal_energy == pytest.approx(0.0, abs=1e-9)

    def test_held_mass_freezes_spring(self):
        """While the mass is held the spring does not move it."""
        spring = make_spring()
        mass = Mass(0.1, Vector2D(0.5, 0.8))
        spring.add_mass(mass)
        mass.user_controlled = True
        spring.oscillate(0.1)
        assert spring.displacement == pytest.approx(-0.1)
        assert mass.position.y == pytest.approx(0.8)

    def test_empty_spring_recoils_and_settles(self):
        """An empty stretched spring returns to natural length and stops animating."""
        spring = make_spring()
        spring.displacement = -0.1
        spring.animating = True
        for _ in range(40):
            spring.oscillate(0.05)
        assert spring.displacement == 0.0
        assert spring.velocity == 0.0
        assert not spring.animating

    def test_stop_with_mass(self):
        """stop() snaps spring and mass to rest and re-baselines thermal energy."""
        spring = make_spring(damping_coefficient=0.5)
        mass = Mass(0.1, Vector2D(0.5, 0.8))
        spring.add_mass(mass)
        for _ in range(30):
            spring.oscillate(1 / 60)
        spring.stop()
        assert spring.displacement == 0.0
        assert spring.velocity == 0.0
        assert mass.vertical_velocity == 0.0
        assert mass.position.y == pytest.approx(0.9)
        assert mass.thermal_energy == pytest.approx(0.0)


class TestSpringThickness:
    """Length/constant/thickness mapping used by the adjustable-length scene."""

    def test_default_thickness(self):
        """A default spring has the default thickness."""
        spring = Spring(Vector2D(0.5, 1.23), 0.5)
        assert spring.thickness == pytest.approx(DEFAULT_THICKNESS)

    @pytest.mark.parametrize("length", [0.1, 0.25, 0.5])
    @pytest.mark.parametrize("spring_constant", [5.0, 9.0, 15.0])
    def test_round_trip(self, length, spring_constant):
        """update_spring_constant inverts update_thickness."""
        spring = make_spring()
        thickness = spring.update_thickness(length, spring_constant)
        assert spring.update_spring_constant(length, thickness) == pytest.approx(spring_constant)

    def test_spring_constant_clamped(self):
        """A derived constant outside the range is clamped and thickness recomputed."""
        spring = make_spring()
        assert spring.update_spring_constant(0.5, 100.0) == 15.0
        assert spring.spring_constant == 15.0
        assert spring.thickness == pytest.approx(spring.update_thickness(0.5, 15.0))


class TestSpringReset:
    """reset() restores initial values and unlinks the mass."""

    def test_reset(self):
        spring = make_spring()
        mass = Mass(0.1, Vector2D(0.5, 0.8))
        spring.add_mass(mass)
        spring.spring_constant = 14.0
        spring.oscillate(0.1)
        spring.reset()
        assert spring.mass is None and mass.spring is None
        assert spring.snapshot() == spring.initial_state

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from spring_lab.model.mass import Mass
    from spring_lab.model.spring import Spring


class BodyRegistry:
    """
    Arena of the masses and springs of one simulation.

    Bodies are addressed by stable integer handles (their insertion index). Bodies
    are never removed during a session, so a handle stays valid for the life of the registry.
    """

    def __init__(self):
        self.masses: List['Mass'] = []
        self.springs: List['Spring'] = []

    def add_mass(self, mass: 'Mass') -> int:
        """Registers a mass and returns its handle."""
        if any(existing is mass for existing in self.masses):
            raise ValueError("Mass is already registered.")
        self.masses.append(mass)
        return len(self.masses) - 1

    def add_spring(self, spring: 'Spring') -> int:
        """Registers a spring and returns its handle."""
        if any(existing is spring for existing in self.springs):
            raise ValueError("Spring is already registered.")
        self.springs.append(spring)
        return len(self.springs) - 1

    def get_mass(self, index: int) -> 'Mass':
        return self.masses[index]

    def get_spring(self, index: int) -> 'Spring':
        return self.springs[index]

    def mass_index(self, mass: 'Mass') -> int:
        """
        Returns the handle of a registered mass (identity lookup).

        Raises:
            ValueError: If the mass does not belong to this registry.
        """
        for index, existing in enumerate(self.masses):
            if existing is mass:
                return index
        raise ValueError("Mass is not registered with this simulation.")

    def attachments(self) -> List[Optional[int]]:
        """For every spring (by handle), the handle of its attached mass or None."""
        return [
            self.mass_index(spring.mass) if spring.mass is not None else None
            for spring in self.springs
        ]

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, List, Optional, Tuple

from spring_lab.model.mass import MassState
from spring_lab.model.spring import SpringState

if TYPE_CHECKING:
    from spring_lab.model.spring_lab_model import SpringLabModel


@dataclass(frozen=True)
class SceneSnapshot:
    """
    Process-local copy of every spring's and mass's dynamical state.

    Attachments are stored as registry handles (for each spring, the index of the
    mass hanging on it), never as object references, so a snapshot can be applied
    to the same model any number of times.
    """
    springs: Tuple[SpringState, ...] = field(default_factory=tuple)
    masses: Tuple[MassState, ...] = field(default_factory=tuple)
    attachments: Tuple[Optional[int], ...] = field(default_factory=tuple)


def capture_scene(model: 'SpringLabModel') -> SceneSnapshot:
    return SceneSnapshot(
        springs=tuple(spring.snapshot() for spring in model.springs),
        masses=tuple(mass.snapshot() for mass in model.masses),
        attachments=tuple(model.registry.attachments()),
    )


def apply_scene(model: 'SpringLabModel', snapshot: SceneSnapshot) -> None:
    """
    Restores `snapshot` into `model` verbatim.

    All attachments are cleared first and re-established afterwards, so the order
    in which bodies are restored never matters and no attach/release transition
    (baseline capture, return glide) runs.

    Raises:
        ValueError: If the snapshot was taken from a model with a different
            number of springs or masses.
    """
    if len(snapshot.springs) != len(model.springs) or len(snapshot.masses) != len(model.masses):
        raise ValueError(f"Snapshot holds {len(snapshot.springs)} springs and {len(snapshot.masses)} masses, "
                         f"model has {len(model.springs)} and {len(model.masses)}.")

    for spring in model.springs:
        spring._relink(None)
    for spring, state in zip(model.springs, snapshot.springs):
        spring.restore(state)
    for mass, state in zip(model.masses, snapshot.masses):
        mass.restore(state)
    for spring, mass_index in zip(model.springs, snapshot.attachments):
        if mass_index is not None:
            spring._relink(model.registry.get_mass(mass_index))


def differing_fields(first: SceneSnapshot, second: SceneSnapshot) -> List[str]:
    """
    Names the body fields that differ between two snapshots of the same model,
    e.g. ``["springs[0].displacement", "attachments[1]"]``. Empty if they match.
    """
    differences = []
    for group in ("springs", "masses"):
        for index, (a, b) in enumerate(zip(getattr(first, group), getattr(second, group))):
            for f in fields(a):
                if getattr(a, f.name) != getattr(b, f.name):
                    differences.append(f"{group}[{index}].{f.name}")
    for index, (a, b) in enumerate(zip(first.attachments, second.attachments)):
        if a != b:
            differences.append(f"attachments[{index}]")
    return differences

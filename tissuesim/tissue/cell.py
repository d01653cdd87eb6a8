"""Cell - a single located entity in the tissue.

Each cell has an immutable type, a mutable health state, and exactly six
membranes (one per side).  Membrane strengths start at zero and are
assigned by the ``PopulationTracker`` when the cell joins a tissue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tissuesim.tissue.geometry import Coordinate, Side


class CellType(Enum):
    """Immune cell kind; decides the default membrane strength."""

    CYTOTOXIC = "cytotoxic"
    HELPER = "helper"


class Health(Enum):
    """Health state.  HEALTHY -> INFECTED is the only transition."""

    HEALTHY = "healthy"
    INFECTED = "infected"


@dataclass
class Membrane:
    """One defensive face of a cell.

    Attributes:
        side: Which face of the cell this membrane covers.
        antibody_strength: Defense against an attack entering through
            this face (never negative).
    """

    side: Side
    antibody_strength: int = 0

    def __post_init__(self) -> None:
        self._check(self.antibody_strength)

    def strengthen(self, strength: int) -> None:
        """Set the antibody strength.

        Raises:
            ValueError: If ``strength`` is negative.
        """
        self._check(strength)
        self.antibody_strength = strength

    @staticmethod
    def _check(strength: int) -> None:
        if strength < 0:
            msg = f"antibody strength must be >= 0, got {strength}"
            raise ValueError(msg)


def _all_membranes() -> dict[Side, Membrane]:
    return {side: Membrane(side=side) for side in Side}


@dataclass(eq=False)
class Cell:
    """A cell in the tissue grid.

    Attributes:
        location: Grid coordinate (fixed for the cell's lifetime).
        cell_type: Cytotoxic or helper.
        health: Current health state.
        membranes: One membrane per side, always all six present.
    """

    location: Coordinate
    cell_type: CellType
    health: Health = Health.HEALTHY
    membranes: dict[Side, Membrane] = field(default_factory=_all_membranes)

    @property
    def is_infected(self) -> bool:
        """Return True if the cell has been infected."""
        return self.health is Health.INFECTED

    def infect(self) -> None:
        """Mark the cell infected.  There is no way back."""
        self.health = Health.INFECTED

    def membrane(self, side: Side) -> Membrane:
        """Return the membrane covering ``side``."""
        return self.membranes[side]

    def strength(self, side: Side) -> int:
        """Return the antibody strength on ``side``."""
        return self.membranes[side].antibody_strength

    def set_all_strengths(self, strength: int) -> None:
        """Give every membrane the same antibody strength."""
        for membrane in self.membranes.values():
            membrane.strengthen(strength)

    def clone_to(self, location: Coordinate) -> Cell:
        """Return a copy of this cell placed at ``location``.

        Type, health, and every membrane strength are carried over.
        """
        return Cell(
            location=location,
            cell_type=self.cell_type,
            health=self.health,
            membranes={
                side: Membrane(side=side, antibody_strength=m.antibody_strength)
                for side, m in self.membranes.items()
            },
        )

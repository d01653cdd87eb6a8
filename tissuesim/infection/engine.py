"""InfectionEngine - infection propagation and cell lifecycle operations.

An infection enters one cell through one membrane and then spreads in
breadth-first rounds.  Every membrane the disease pushes against counts
as an *attempt*; it breaks through only if the attack strength strictly
exceeds that membrane's antibody strength.  Attack strength stays the
same for the whole spread.

Infection round order:

1. Attack the origin through the entry membrane.
2. For each cell in the current frontier, attack its existing, healthy
   neighbours in the order north, east, south, west, up, down, through
   the membrane facing the attacker.
3. Newly infected neighbours form the next frontier; each non-empty
   next frontier adds one to the path length.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from tissuesim.errors import NotFound, TissueSimError
from tissuesim.tissue.cell import Cell, CellType
from tissuesim.tissue.geometry import ATTACK_ORDER, Coordinate, Side
from tissuesim.tissue.population import PopulationTracker
from tissuesim.tissue.tissue import Tissue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InfectionReport:
    """Statistics printed after an infection round.

    Attributes:
        infected: Infected cells in the whole tissue after the round.
        attempts: Membrane attacks made during the round.
        strength_difference: Sum of ``attack - antibody`` over all attempts.
        cytotoxic: Live cytotoxic cells.
        helper: Live helper cells.
        volume: Bounding-box volume of all infected cells.
        path: Number of spreading rounds after the origin round.
    """

    infected: int
    attempts: int
    strength_difference: int
    cytotoxic: int
    helper: int
    volume: int
    path: int

    def as_tuple(self) -> tuple[int, int, int, int, int, int, int]:
        return (
            self.infected,
            self.attempts,
            self.strength_difference,
            self.cytotoxic,
            self.helper,
            self.volume,
            self.path,
        )

    def __str__(self) -> str:
        return " ".join(str(value) for value in self.as_tuple())


class InfectionEngine:
    """Runs infections and lifecycle commands against one tissue.

    Attributes:
        tissue: The tissue being operated on.
        population: Counters subscribed to ``tissue``.
        auto_create_type: When set, ``set_antibody_strength`` on an empty
            coordinate first creates a cell of this type instead of
            raising ``NotFound``.
    """

    def __init__(
        self,
        tissue: Tissue,
        population: PopulationTracker,
        *,
        auto_create_type: CellType | None = None,
    ) -> None:
        self.tissue = tissue
        self.population = population
        self.auto_create_type = auto_create_type

    # -- Infection -----------------------------------------------------------

    def start_infection(
        self,
        origin: Coordinate,
        entry_side: Side,
        attack_strength: int,
    ) -> InfectionReport:
        """Infect from ``origin`` and spread until no more cells fall.

        Args:
            origin: Coordinate of the first cell attacked.
            entry_side: Membrane of the origin cell the disease enters by.
            attack_strength: Constant strength of every attack.

        Returns:
            The statistics for this round.
        """
        attempts = 0
        difference = 0
        path = 0

        cell = self.tissue.cell_at(origin)
        if cell is None:
            logger.info(
                "%s: no cell at infection origin %s",
                self.tissue.name,
                origin,
            )
            return self._report(attempts, difference, path)

        attempts += 1
        difference += attack_strength - cell.strength(entry_side)
        if attack_strength <= cell.strength(entry_side):
            return self._report(attempts, difference, path)

        cell.infect()
        frontier: list[Cell] = [cell]
        while True:
            next_frontier: list[Cell] = []
            for attacker in frontier:
                for side in ATTACK_ORDER:
                    neighbour = attacker.location.neighbour(side)
                    target = self.tissue.cell_at(neighbour)
                    if target is None or target.is_infected:
                        continue
                    defense = target.strength(side.opposite)
                    attempts += 1
                    difference += attack_strength - defense
                    if attack_strength > defense:
                        target.infect()
                        next_frontier.append(target)
            if not next_frontier:
                break
            frontier = next_frontier
            path += 1

        return self._report(attempts, difference, path)

    def infection_volume(self) -> int:
        """Return the volume of the box bounding every infected cell.

        Returns 0 when no cell is infected.
        """
        infected = self.tissue.infected_cells()
        if not infected:
            return 0
        coords = np.array([c.location for c in infected], dtype=np.int64)
        extent = coords.max(axis=0) - coords.min(axis=0) + 1
        return int(np.prod(extent))

    def _report(
        self,
        attempts: int,
        difference: int,
        path: int,
    ) -> InfectionReport:
        return InfectionReport(
            infected=len(self.tissue.infected_cells()),
            attempts=attempts,
            strength_difference=difference,
            cytotoxic=self.population.cytotoxic_count,
            helper=self.population.helper_count,
            volume=self.infection_volume(),
            path=path,
        )

    # -- Lifecycle -----------------------------------------------------------

    def new_cell(self, location: Coordinate, cell_type: CellType) -> Cell:
        """Create a healthy cell with its type's default membranes.

        Raises:
            LocationOccupied: If ``location`` already holds a cell.
        """
        return self.tissue.add_cell(Cell(location=location, cell_type=cell_type))

    def set_antibody_strength(
        self,
        location: Coordinate,
        side: Side,
        strength: int,
    ) -> Cell:
        """Set one membrane's antibody strength.

        Raises:
            NotFound: If no cell is at ``location`` and auto-creation is off.
            ValueError: If ``strength`` is negative.
        """
        cell = self.tissue.cell_at(location)
        if cell is None:
            if self.auto_create_type is None:
                msg = f"{self.tissue.name}: no cell at {location}"
                raise NotFound(msg)
            logger.info(
                "%s: auto-creating %s cell at %s",
                self.tissue.name,
                self.auto_create_type.value,
                location,
            )
            cell = self.new_cell(location, self.auto_create_type)
        cell.membrane(side).strengthen(strength)
        return cell

    def clone_cell(self, location: Coordinate, side: Side) -> Cell:
        """Copy the cell at ``location`` into its neighbour toward ``side``.

        The clone keeps the source's type, health, and membrane strengths.

        Raises:
            NotFound: If there is no source cell.
            LocationOccupied: If the target coordinate is taken.
        """
        source = self.tissue.require_cell(location)
        clone = source.clone_to(location.neighbour(side))
        strengths = {s: m.antibody_strength for s, m in source.membranes.items()}
        self.tissue.add_cell(clone)
        # Creation callbacks reset membranes to type defaults; restore them.
        for s, strength in strengths.items():
            clone.membrane(s).strengthen(strength)
        return clone

    def clone_all_cells(self, side: Side) -> int:
        """Clone every cell toward ``side``, skipping ones that fail.

        Returns:
            Number of clones created.
        """
        created = 0
        for location in self.tissue.locations():
            try:
                self.clone_cell(location, side)
            except TissueSimError as exc:
                logger.debug("%s: skipped clone: %s", self.tissue.name, exc)
                continue
            created += 1
        return created

    def remove_infected_cells(self) -> int:
        """Delete every infected cell.

        Returns:
            Number of cells removed.
        """
        doomed = [cell.location for cell in self.tissue.infected_cells()]
        for location in doomed:
            self.tissue.remove_cell(location, missing_ok=True)
        return len(doomed)

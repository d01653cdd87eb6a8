"""Simulation - named tissues driven by a command script.

Owns every tissue created by the script, each with its own population
tracker and infection engine, and dispatches parsed commands to them.
A failing line is logged and skipped; the run always continues.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TextIO

from tissuesim.errors import NameInUse, NotFound, TissueSimError
from tissuesim.infection.engine import InfectionEngine, InfectionReport
from tissuesim.simulation.commands import (
    CloneAll,
    CloneCell,
    Command,
    NewCell,
    NewTissue,
    RemoveInfected,
    SetAntibodyStrength,
    StartInfection,
    parse_command,
)
from tissuesim.simulation.config import SimulationConfig
from tissuesim.tissue.cell import Cell, CellType
from tissuesim.tissue.geometry import Coordinate, Side
from tissuesim.tissue.population import PopulationTracker
from tissuesim.tissue.tissue import Tissue

logger = logging.getLogger(__name__)


@dataclass
class TissueState:
    """A tissue together with the components bound to it."""

    tissue: Tissue
    population: PopulationTracker
    engine: InfectionEngine


@dataclass
class Simulation:
    """Top-level simulation state.

    Attributes:
        config: Loaded simulation configuration.
        tissues: Every tissue created so far, by name.
        out: Stream infection statistics are written to (stdout if None).
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    tissues: dict[str, TissueState] = field(default_factory=dict)
    out: TextIO | None = field(default=None, repr=False)

    def tissue_new(self, name: str) -> TissueState:
        """Create an empty tissue called ``name``.

        Raises:
            NameInUse: If the name is already taken.
        """
        if name in self.tissues:
            msg = f"tissue {name!r} already exists"
            raise NameInUse(msg)
        tissue = Tissue(name=name)
        population = PopulationTracker.attach(
            tissue,
            cytotoxic_strength=self.config.cytotoxic_antibody_strength,
            helper_strength=self.config.helper_antibody_strength,
        )
        engine = InfectionEngine(
            tissue,
            population,
            auto_create_type=self.config.auto_create_type,
        )
        state = TissueState(tissue=tissue, population=population, engine=engine)
        self.tissues[name] = state
        logger.info("created tissue %r", name)
        return state

    def state(self, name: str) -> TissueState:
        """Return the tissue called ``name``.

        Raises:
            NotFound: If no such tissue was created.
        """
        try:
            return self.tissues[name]
        except KeyError:
            msg = f"no tissue named {name!r}"
            raise NotFound(msg) from None

    def new_cell(
        self,
        name: str,
        location: Coordinate,
        cell_type: CellType,
    ) -> Cell:
        return self.state(name).engine.new_cell(location, cell_type)

    def set_antibody_strength(
        self,
        name: str,
        location: Coordinate,
        side: Side,
        strength: int,
    ) -> Cell:
        engine = self.state(name).engine
        return engine.set_antibody_strength(location, side, strength)

    def start_infection(
        self,
        name: str,
        location: Coordinate,
        side: Side,
        strength: int,
    ) -> InfectionReport:
        """Run an infection and write its statistics line to ``out``."""
        engine = self.state(name).engine
        report = engine.start_infection(location, side, strength)
        print(report, file=self.out or sys.stdout)
        return report

    def remove_infected_cells(self, name: str) -> int:
        return self.state(name).engine.remove_infected_cells()

    def clone_cell(self, name: str, location: Coordinate, side: Side) -> Cell:
        return self.state(name).engine.clone_cell(location, side)

    def clone_all_cells(self, name: str, side: Side) -> int:
        return self.state(name).engine.clone_all_cells(side)

    def execute(self, command: Command) -> None:
        """Dispatch one parsed command."""
        if isinstance(command, NewTissue):
            self.tissue_new(command.tissue)
        elif isinstance(command, NewCell):
            self.new_cell(command.tissue, command.location, command.cell_type)
        elif isinstance(command, SetAntibodyStrength):
            self.set_antibody_strength(
                command.tissue,
                command.location,
                command.side,
                command.strength,
            )
        elif isinstance(command, StartInfection):
            self.start_infection(
                command.tissue,
                command.location,
                command.side,
                command.strength,
            )
        elif isinstance(command, RemoveInfected):
            self.remove_infected_cells(command.tissue)
        elif isinstance(command, CloneCell):
            self.clone_cell(command.tissue, command.location, command.side)
        elif isinstance(command, CloneAll):
            self.clone_all_cells(command.tissue, command.side)
        else:
            msg = f"unsupported command {command!r}"
            raise TypeError(msg)

    def run_line(self, line: str) -> None:
        """Parse and execute one script line.

        Raises:
            TissueSimError: If the line is malformed or the command fails.
        """
        command = parse_command(line)
        if command is not None:
            self.execute(command)

    def run_lines(self, lines: Iterable[str]) -> int:
        """Run every line, skipping the ones that fail.

        Args:
            lines: Script lines, e.g. an open file.

        Returns:
            Number of lines that were skipped because of an error.
        """
        failures = 0
        for lineno, line in enumerate(lines, start=1):
            try:
                self.run_line(line)
            except TissueSimError as exc:
                failures += 1
                logger.warning(
                    "line %d skipped (%s): %s",
                    lineno,
                    line.strip(),
                    exc,
                )
        return failures

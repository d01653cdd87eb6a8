"""Tissue - the authoritative collection of cells keyed by coordinate.

The tissue owns cell lifecycle and notifies subscribers synchronously:
``created`` callbacks run after a cell is inserted, ``deleted``
callbacks run before it is removed so they can still read its state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from tissuesim.errors import LocationOccupied, NotFound
from tissuesim.tissue.cell import Cell
from tissuesim.tissue.geometry import Coordinate

logger = logging.getLogger(__name__)

CellCallback = Callable[[Cell], None]


@dataclass
class Tissue:
    """A sparse 3D grid of cells.

    Attributes:
        name: Name the tissue was created under.
        cells: Mapping from coordinate to the cell living there.
    """

    name: str = "tissue"
    cells: dict[Coordinate, Cell] = field(default_factory=dict, repr=False)
    _on_created: list[CellCallback] = field(
        default_factory=list,
        init=False,
        repr=False,
    )
    _on_deleted: list[CellCallback] = field(
        default_factory=list,
        init=False,
        repr=False,
    )

    def subscribe(
        self,
        *,
        on_created: CellCallback | None = None,
        on_deleted: CellCallback | None = None,
    ) -> None:
        """Register lifecycle callbacks.

        Args:
            on_created: Called with each cell right after it is inserted.
            on_deleted: Called with each cell right before it is removed.
        """
        if on_created is not None:
            self._on_created.append(on_created)
        if on_deleted is not None:
            self._on_deleted.append(on_deleted)

    def add_cell(self, cell: Cell) -> Cell:
        """Insert ``cell`` at its own location.

        Raises:
            LocationOccupied: If a cell already lives at that coordinate.
        """
        if cell.location in self.cells:
            msg = f"{self.name}: location {cell.location} is occupied"
            raise LocationOccupied(msg)
        self.cells[cell.location] = cell
        logger.debug(
            "%s: added %s cell at %s",
            self.name,
            cell.cell_type.value,
            cell.location,
        )
        for callback in self._on_created:
            callback(cell)
        return cell

    def remove_cell(
        self,
        location: Coordinate,
        *,
        missing_ok: bool = False,
    ) -> Cell | None:
        """Remove and return the cell at ``location``.

        Args:
            location: Coordinate to clear.
            missing_ok: Return None instead of raising when empty.

        Raises:
            NotFound: If no cell is there and ``missing_ok`` is False.
        """
        cell = self.cells.get(location)
        if cell is None:
            if missing_ok:
                return None
            msg = f"{self.name}: no cell at {location}"
            raise NotFound(msg)
        for callback in self._on_deleted:
            callback(cell)
        del self.cells[location]
        logger.debug("%s: removed cell at %s", self.name, location)
        return cell

    def cell_at(self, location: Coordinate) -> Cell | None:
        """Return the cell at ``location``, or None."""
        return self.cells.get(location)

    def require_cell(self, location: Coordinate) -> Cell:
        """Return the cell at ``location``.

        Raises:
            NotFound: If the coordinate is empty.
        """
        cell = self.cells.get(location)
        if cell is None:
            msg = f"{self.name}: no cell at {location}"
            raise NotFound(msg)
        return cell

    @property
    def cell_count(self) -> int:
        """Number of live cells."""
        return len(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, location: object) -> bool:
        return location in self.cells

    def __iter__(self) -> Iterator[Cell]:
        # Each call starts a fresh pass; callers that mutate the tissue
        # must iterate over a snapshot instead.
        return iter(self.cells.values())

    def locations(self) -> list[Coordinate]:
        """Return a snapshot of every occupied coordinate."""
        return list(self.cells)

    def infected_cells(self) -> list[Cell]:
        """Return a snapshot of every infected cell."""
        return [cell for cell in self.cells.values() if cell.is_infected]

"""PopulationTracker - running per-type cell counts for one tissue.

The tracker subscribes to a tissue's lifecycle callbacks.  Besides
counting, it gives each newly created cell its type's default antibody
strength on all six membranes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tissuesim.tissue.cell import Cell, CellType
from tissuesim.tissue.tissue import Tissue

DEFAULT_CYTOTOXIC_STRENGTH = 100
DEFAULT_HELPER_STRENGTH = 0


@dataclass
class PopulationTracker:
    """Event-driven counters tied to a single tissue.

    Attributes:
        cytotoxic_strength: Membrane strength given to new cytotoxic cells.
        helper_strength: Membrane strength given to new helper cells.
        counts: Live cell count per type.
    """

    cytotoxic_strength: int = DEFAULT_CYTOTOXIC_STRENGTH
    helper_strength: int = DEFAULT_HELPER_STRENGTH
    counts: dict[CellType, int] = field(
        default_factory=lambda: {cell_type: 0 for cell_type in CellType},
    )

    @classmethod
    def attach(
        cls,
        tissue: Tissue,
        *,
        cytotoxic_strength: int = DEFAULT_CYTOTOXIC_STRENGTH,
        helper_strength: int = DEFAULT_HELPER_STRENGTH,
    ) -> PopulationTracker:
        """Create a tracker and subscribe it to ``tissue``.

        Cells already in the tissue are counted but keep their membranes.
        """
        tracker = cls(
            cytotoxic_strength=cytotoxic_strength,
            helper_strength=helper_strength,
        )
        for cell in tissue:
            tracker.counts[cell.cell_type] += 1
        tissue.subscribe(
            on_created=tracker.on_cell_created,
            on_deleted=tracker.on_cell_deleted,
        )
        return tracker

    @property
    def cytotoxic_count(self) -> int:
        return self.counts[CellType.CYTOTOXIC]

    @property
    def helper_count(self) -> int:
        return self.counts[CellType.HELPER]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def default_strength(self, cell_type: CellType) -> int:
        """Return the antibody strength new cells of ``cell_type`` get."""
        if cell_type is CellType.CYTOTOXIC:
            return self.cytotoxic_strength
        return self.helper_strength

    def on_cell_created(self, cell: Cell) -> None:
        self.counts[cell.cell_type] += 1
        cell.set_all_strengths(self.default_strength(cell.cell_type))

    def on_cell_deleted(self, cell: Cell) -> None:
        self.counts[cell.cell_type] -= 1

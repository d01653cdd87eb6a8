"""Tests for tissuesim.tissue - Cell, Membrane, Tissue, PopulationTracker."""

import pytest

from tissuesim.errors import LocationOccupied, NotFound
from tissuesim.tissue.cell import Cell, CellType, Health, Membrane
from tissuesim.tissue.geometry import Coordinate, Side
from tissuesim.tissue.population import PopulationTracker
from tissuesim.tissue.tissue import Tissue

ORIGIN = Coordinate(0, 0, 0)


class TestMembrane:
    """Tests for the Membrane dataclass."""

    def test_default_strength(self) -> None:
        assert Membrane(side=Side.UP).antibody_strength == 0

    def test_strengthen(self) -> None:
        membrane = Membrane(side=Side.UP)
        membrane.strengthen(42)
        assert membrane.antibody_strength == 42

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            Membrane(side=Side.UP).strengthen(-1)
        with pytest.raises(ValueError):
            Membrane(side=Side.UP, antibody_strength=-5)


class TestCell:
    """Tests for the Cell dataclass."""

    def test_defaults(self) -> None:
        cell = Cell(location=ORIGIN, cell_type=CellType.HELPER)
        assert cell.health is Health.HEALTHY
        assert not cell.is_infected
        assert set(cell.membranes) == set(Side)
        assert all(cell.strength(side) == 0 for side in Side)

    def test_membranes_not_shared(self) -> None:
        a = Cell(location=ORIGIN, cell_type=CellType.HELPER)
        b = Cell(location=Coordinate(1, 0, 0), cell_type=CellType.HELPER)
        a.membrane(Side.UP).strengthen(9)
        assert b.strength(Side.UP) == 0

    def test_infect(self) -> None:
        cell = Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC)
        cell.infect()
        assert cell.health is Health.INFECTED
        assert cell.is_infected

    def test_clone_to_copies_state(self) -> None:
        cell = Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC)
        cell.set_all_strengths(100)
        cell.membrane(Side.WEST).strengthen(3)
        cell.infect()
        clone = cell.clone_to(Coordinate(0, 1, 0))
        assert clone.location == Coordinate(0, 1, 0)
        assert clone.cell_type is CellType.CYTOTOXIC
        assert clone.is_infected
        assert clone.strength(Side.WEST) == 3
        assert clone.strength(Side.EAST) == 100
        assert clone.membrane(Side.WEST) is not cell.membrane(Side.WEST)


class TestTissue:
    """Tests for the Tissue container and its callbacks."""

    def test_add_and_lookup(self, tissue: Tissue) -> None:
        cell = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.HELPER))
        assert tissue.cell_at(ORIGIN) is cell
        assert tissue.cell_count == 1
        assert len(tissue) == 1
        assert ORIGIN in tissue

    def test_cell_at_empty(self, tissue: Tissue) -> None:
        assert tissue.cell_at(ORIGIN) is None

    def test_add_occupied_raises(self, tissue: Tissue) -> None:
        first = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.HELPER))
        with pytest.raises(LocationOccupied):
            tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC))
        assert tissue.cell_at(ORIGIN) is first
        assert tissue.cell_count == 1

    def test_remove(self, tissue: Tissue) -> None:
        cell = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.HELPER))
        assert tissue.remove_cell(ORIGIN) is cell
        assert tissue.cell_count == 0

    def test_remove_missing(self, tissue: Tissue) -> None:
        with pytest.raises(NotFound):
            tissue.remove_cell(ORIGIN)
        assert tissue.remove_cell(ORIGIN, missing_ok=True) is None

    def test_require_cell_missing(self, tissue: Tissue) -> None:
        with pytest.raises(NotFound):
            tissue.require_cell(ORIGIN)

    def test_iteration_is_restartable(self, tissue: Tissue) -> None:
        for z in range(3):
            tissue.add_cell(
                Cell(location=Coordinate(0, 0, z), cell_type=CellType.HELPER),
            )
        first = [c.location for c in tissue]
        second = [c.location for c in tissue]
        assert first == second
        assert len(set(first)) == 3

    def test_created_callback_sees_inserted_cell(self, tissue: Tissue) -> None:
        seen: list[bool] = []
        tissue.subscribe(on_created=lambda c: seen.append(c.location in tissue))
        tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.HELPER))
        assert seen == [True]

    def test_deleted_callback_runs_before_removal(self, tissue: Tissue) -> None:
        seen: list[tuple[bool, bool]] = []
        tissue.subscribe(
            on_deleted=lambda c: seen.append((c.location in tissue, c.is_infected)),
        )
        cell = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.HELPER))
        cell.infect()
        tissue.remove_cell(ORIGIN)
        assert seen == [(True, True)]

    def test_locations_is_a_snapshot(self, tissue: Tissue) -> None:
        tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.HELPER))
        snapshot = tissue.locations()
        tissue.remove_cell(ORIGIN)
        assert snapshot == [ORIGIN]


class TestPopulationTracker:
    """Tests for event-driven population counting."""

    def test_starts_at_zero(self, population: PopulationTracker) -> None:
        assert population.cytotoxic_count == 0
        assert population.helper_count == 0

    def test_counts_follow_lifecycle(
        self,
        tissue: Tissue,
        population: PopulationTracker,
    ) -> None:
        tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC))
        tissue.add_cell(Cell(location=Coordinate(1, 0, 0), cell_type=CellType.HELPER))
        tissue.add_cell(Cell(location=Coordinate(2, 0, 0), cell_type=CellType.HELPER))
        assert population.cytotoxic_count == 1
        assert population.helper_count == 2
        assert population.total == tissue.cell_count

        tissue.remove_cell(Coordinate(1, 0, 0))
        assert population.helper_count == 1
        assert population.total == tissue.cell_count

    def test_assigns_default_strengths(
        self,
        tissue: Tissue,
        population: PopulationTracker,
    ) -> None:
        cyto = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC))
        helper = tissue.add_cell(
            Cell(location=Coordinate(0, 1, 0), cell_type=CellType.HELPER),
        )
        assert all(cyto.strength(side) == 100 for side in Side)
        assert all(helper.strength(side) == 0 for side in Side)

    def test_custom_strengths(self) -> None:
        tissue = Tissue()
        PopulationTracker.attach(tissue, cytotoxic_strength=7, helper_strength=2)
        cyto = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC))
        assert all(cyto.strength(side) == 7 for side in Side)

    def test_attach_counts_existing_cells(self) -> None:
        tissue = Tissue()
        cell = tissue.add_cell(Cell(location=ORIGIN, cell_type=CellType.CYTOTOXIC))
        tracker = PopulationTracker.attach(tissue)
        assert tracker.cytotoxic_count == 1
        assert cell.strength(Side.UP) == 0

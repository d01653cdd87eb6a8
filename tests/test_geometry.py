"""Tests for tissuesim.tissue.geometry - Coordinate and Side."""

import pytest

from tissuesim.errors import InvalidSide, MalformedCommand
from tissuesim.tissue.geometry import ATTACK_ORDER, Coordinate, Side


class TestSide:
    """Tests for the Side enum."""

    def test_opposite_is_involution(self) -> None:
        for side in Side:
            assert side.opposite is not side
            assert side.opposite.opposite is side

    def test_opposite_pairs(self) -> None:
        assert Side.NORTH.opposite is Side.SOUTH
        assert Side.EAST.opposite is Side.WEST
        assert Side.UP.opposite is Side.DOWN

    def test_deltas(self) -> None:
        assert Side.NORTH.delta == (0, 1, 0)
        assert Side.SOUTH.delta == (0, -1, 0)
        assert Side.EAST.delta == (1, 0, 0)
        assert Side.WEST.delta == (-1, 0, 0)
        assert Side.UP.delta == (0, 0, 1)
        assert Side.DOWN.delta == (0, 0, -1)

    def test_opposite_deltas_cancel(self) -> None:
        for side in Side:
            a, b = side.delta, side.opposite.delta
            assert (a.x + b.x, a.y + b.y, a.z + b.z) == (0, 0, 0)

    def test_from_name(self) -> None:
        assert Side.from_name("west") is Side.WEST

    def test_from_name_rejects_unknown(self) -> None:
        with pytest.raises(InvalidSide):
            Side.from_name("sideways")

    def test_invalid_side_is_malformed_command(self) -> None:
        assert issubclass(InvalidSide, MalformedCommand)

    def test_attack_order_covers_every_side_once(self) -> None:
        assert ATTACK_ORDER[:4] == (Side.NORTH, Side.EAST, Side.SOUTH, Side.WEST)
        assert set(ATTACK_ORDER) == set(Side)
        assert len(ATTACK_ORDER) == 6


class TestCoordinate:
    """Tests for Coordinate values."""

    def test_value_equality_and_hash(self) -> None:
        assert Coordinate(1, -2, 3) == Coordinate(1, -2, 3)
        assert len({Coordinate(0, 0, 0), Coordinate(0, 0, 0)}) == 1

    def test_neighbour(self) -> None:
        origin = Coordinate(-1, 0, 5)
        assert origin.neighbour(Side.NORTH) == Coordinate(-1, 1, 5)
        assert origin.neighbour(Side.DOWN) == Coordinate(-1, 0, 4)

    def test_neighbour_round_trip(self) -> None:
        origin = Coordinate(2, 3, 4)
        for side in Side:
            assert origin.neighbour(side).neighbour(side.opposite) == origin

    def test_str(self) -> None:
        assert str(Coordinate(1, 2, -3)) == "(1,2,-3)"

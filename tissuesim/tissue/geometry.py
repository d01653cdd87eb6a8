"""Coordinate and Side - the 6-connected 3D grid geometry.

Cells live at integer coordinates that may be negative and sparse, so
the tissue indexes them by value rather than by array position.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from tissuesim.errors import InvalidSide


class Coordinate(NamedTuple):
    """An immutable integer position in the tissue grid."""

    x: int
    y: int
    z: int

    def neighbour(self, side: Side) -> Coordinate:
        """Return the adjacent coordinate one step toward ``side``."""
        dx, dy, dz = side.delta
        return Coordinate(self.x + dx, self.y + dy, self.z + dz)

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.z})"


class Side(Enum):
    """One of the six faces of a cell, named by grid direction."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> Side:
        """Return the face pointing the other way (an involution)."""
        return _OPPOSITES[self]

    @property
    def delta(self) -> Coordinate:
        """Return the unit offset for moving one cell in this direction."""
        return _DELTAS[self]

    @classmethod
    def from_name(cls, name: str) -> Side:
        """Look up a side by its lowercase script name.

        Raises:
            InvalidSide: If ``name`` is not one of the six directions.
        """
        try:
            return cls(name)
        except ValueError:
            msg = f"unrecognized membrane side {name!r}"
            raise InvalidSide(msg) from None


# Fixed visiting order for neighbour attacks during an infection round.
ATTACK_ORDER: tuple[Side, ...] = (
    Side.NORTH,
    Side.EAST,
    Side.SOUTH,
    Side.WEST,
    Side.UP,
    Side.DOWN,
)

_OPPOSITES: dict[Side, Side] = {
    Side.NORTH: Side.SOUTH,
    Side.SOUTH: Side.NORTH,
    Side.EAST: Side.WEST,
    Side.WEST: Side.EAST,
    Side.UP: Side.DOWN,
    Side.DOWN: Side.UP,
}

_DELTAS: dict[Side, Coordinate] = {
    Side.NORTH: Coordinate(0, 1, 0),
    Side.SOUTH: Coordinate(0, -1, 0),
    Side.EAST: Coordinate(1, 0, 0),
    Side.WEST: Coordinate(-1, 0, 0),
    Side.UP: Coordinate(0, 0, 1),
    Side.DOWN: Coordinate(0, 0, -1),
}

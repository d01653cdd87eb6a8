"""Script commands - one text line parsed into one command object.

Grammar (whitespace-separated tokens)::

    Tissue tissueNew NAME
    Tissue NAME cytotoxicCellNew X Y Z
    Tissue NAME helperCellNew X Y Z
    Tissue NAME infectionStartLocationIs X Y Z SIDE STRENGTH
    Tissue NAME infectedCellsDel
    Tissue NAME cloneCellsNew SIDE
    Cell NAME X Y Z membrane SIDE antibodyStrengthIs STRENGTH
    Cell NAME X Y Z cloneNew SIDE

Blank lines and ``#`` comments parse to None.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from tissuesim.errors import MalformedCommand
from tissuesim.tissue.cell import CellType
from tissuesim.tissue.geometry import Coordinate, Side


@dataclass(frozen=True)
class NewTissue:
    tissue: str


@dataclass(frozen=True)
class NewCell:
    tissue: str
    location: Coordinate
    cell_type: CellType


@dataclass(frozen=True)
class SetAntibodyStrength:
    tissue: str
    location: Coordinate
    side: Side
    strength: int


@dataclass(frozen=True)
class StartInfection:
    tissue: str
    location: Coordinate
    side: Side
    strength: int


@dataclass(frozen=True)
class RemoveInfected:
    tissue: str


@dataclass(frozen=True)
class CloneCell:
    tissue: str
    location: Coordinate
    side: Side


@dataclass(frozen=True)
class CloneAll:
    tissue: str
    side: Side


Command = Union[
    NewTissue,
    NewCell,
    SetAntibodyStrength,
    StartInfection,
    RemoveInfected,
    CloneCell,
    CloneAll,
]

_CELL_VERBS: dict[str, CellType] = {
    "cytotoxicCellNew": CellType.CYTOTOXIC,
    "helperCellNew": CellType.HELPER,
}


def parse_command(line: str) -> Command | None:
    """Parse one script line.

    Args:
        line: Raw text, with or without the trailing newline.

    Returns:
        The command, or None for blank and comment lines.

    Raises:
        MalformedCommand: If the line does not match the grammar.
        InvalidSide: If a side token is not a known direction.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    tokens = stripped.split()
    head, rest = tokens[0], tokens[1:]
    if head == "Tissue":
        return _parse_tissue(rest, line)
    if head == "Cell":
        return _parse_cell(rest, line)
    msg = f"unknown command {head!r} in {line.strip()!r}"
    raise MalformedCommand(msg)


def _parse_tissue(tokens: list[str], line: str) -> Command:
    _expect_at_least(tokens, 2, line)
    if tokens[0] == "tissueNew":
        _expect_exactly(tokens[1:], 1, line)
        return NewTissue(tissue=tokens[1])

    name, verb, args = tokens[0], tokens[1], tokens[2:]
    if verb in _CELL_VERBS:
        _expect_exactly(args, 3, line)
        return NewCell(
            tissue=name,
            location=_coordinate(args, line),
            cell_type=_CELL_VERBS[verb],
        )
    if verb == "infectionStartLocationIs":
        _expect_exactly(args, 5, line)
        return StartInfection(
            tissue=name,
            location=_coordinate(args[:3], line),
            side=Side.from_name(args[3]),
            strength=_strength(args[4], line),
        )
    if verb == "infectedCellsDel":
        _expect_exactly(args, 0, line)
        return RemoveInfected(tissue=name)
    if verb == "cloneCellsNew":
        _expect_exactly(args, 1, line)
        return CloneAll(tissue=name, side=Side.from_name(args[0]))

    msg = f"unknown tissue command {verb!r} in {line.strip()!r}"
    raise MalformedCommand(msg)


def _parse_cell(tokens: list[str], line: str) -> Command:
    _expect_at_least(tokens, 5, line)
    name = tokens[0]
    location = _coordinate(tokens[1:4], line)
    verb, args = tokens[4], tokens[5:]

    if verb == "membrane":
        _expect_exactly(args, 3, line)
        if args[1] != "antibodyStrengthIs":
            msg = f"unknown membrane command {args[1]!r} in {line.strip()!r}"
            raise MalformedCommand(msg)
        return SetAntibodyStrength(
            tissue=name,
            location=location,
            side=Side.from_name(args[0]),
            strength=_strength(args[2], line),
        )
    if verb == "cloneNew":
        _expect_exactly(args, 1, line)
        return CloneCell(
            tissue=name,
            location=location,
            side=Side.from_name(args[0]),
        )

    msg = f"unknown cell command {verb!r} in {line.strip()!r}"
    raise MalformedCommand(msg)


def _expect_at_least(tokens: list[str], count: int, line: str) -> None:
    if len(tokens) < count:
        msg = f"too few arguments in {line.strip()!r}"
        raise MalformedCommand(msg)


def _expect_exactly(tokens: list[str], count: int, line: str) -> None:
    if len(tokens) != count:
        msg = f"expected {count} arguments, got {len(tokens)} in {line.strip()!r}"
        raise MalformedCommand(msg)


def _integer(token: str, line: str) -> int:
    try:
        return int(token)
    except ValueError:
        msg = f"expected an integer, got {token!r} in {line.strip()!r}"
        raise MalformedCommand(msg) from None


def _coordinate(tokens: list[str], line: str) -> Coordinate:
    x, y, z = (_integer(t, line) for t in tokens)
    return Coordinate(x, y, z)


def _strength(token: str, line: str) -> int:
    value = _integer(token, line)
    if value < 0:
        msg = f"strength must be >= 0, got {value} in {line.strip()!r}"
        raise MalformedCommand(msg)
    return value

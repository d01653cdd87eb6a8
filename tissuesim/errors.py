"""Errors raised by tissue operations and the script interpreter.

Every error derives from ``TissueSimError`` so the script runner can
skip a failing line with a single ``except`` clause.
"""

from __future__ import annotations


class TissueSimError(Exception):
    """Base class for all recoverable simulation errors."""


class LocationOccupied(TissueSimError):
    """A cell already exists at the target coordinate."""


class NotFound(TissueSimError):
    """No cell (or tissue) exists at the addressed location or name."""


class NameInUse(TissueSimError):
    """A tissue with this name has already been created."""


class MalformedCommand(TissueSimError):
    """A script line could not be parsed into a command."""


class InvalidSide(MalformedCommand):
    """A side token is not one of the six membrane directions."""

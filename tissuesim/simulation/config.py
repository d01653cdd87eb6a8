"""Config - load simulation parameters from YAML files.

Membrane defaults per cell type, the antibody-strength auto-creation
option, and the log level live in YAML and are parsed into a typed
dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from tissuesim.tissue.cell import CellType
from tissuesim.tissue.population import (
    DEFAULT_CYTOTOXIC_STRENGTH,
    DEFAULT_HELPER_STRENGTH,
)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        cytotoxic_antibody_strength: Strength given to all six membranes
            of a new cytotoxic cell.
        helper_antibody_strength: Strength given to all six membranes of
            a new helper cell.
        auto_create_cells: If True, setting a membrane strength on an
            empty coordinate creates a cell there first instead of
            failing.
        auto_create_cell_type: Type of the cell auto-created above.
        log_level: Name of the logging level for the ``tissuesim`` logger.
    """

    cytotoxic_antibody_strength: int = DEFAULT_CYTOTOXIC_STRENGTH
    helper_antibody_strength: int = DEFAULT_HELPER_STRENGTH
    auto_create_cells: bool = False
    auto_create_cell_type: CellType = CellType.CYTOTOXIC
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Reject values that would only fail once the script is running."""
        for name in ("cytotoxic_antibody_strength", "helper_antibody_strength"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                msg = f"{name} must be a non-negative integer, got {value!r}"
                raise ValueError(msg)
        flag = self.auto_create_cells
        if not isinstance(flag, bool):
            msg = f"auto_create_cells must be true or false, got {flag!r}"
            raise ValueError(msg)

    @property
    def auto_create_type(self) -> CellType | None:
        """Cell type to auto-create, or None when the option is off."""
        return self.auto_create_cell_type if self.auto_create_cells else None

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a strength is negative or not an integer,
                ``auto_create_cells`` is not a boolean, or
                ``auto_create_cell_type`` is not a cell type.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            cytotoxic_antibody_strength=data.get(
                "cytotoxic_antibody_strength",
                cls.cytotoxic_antibody_strength,
            ),
            helper_antibody_strength=data.get(
                "helper_antibody_strength",
                cls.helper_antibody_strength,
            ),
            auto_create_cells=data.get("auto_create_cells", cls.auto_create_cells),
            auto_create_cell_type=CellType(
                data.get(
                    "auto_create_cell_type",
                    cls.auto_create_cell_type.value,
                ),
            ),
            log_level=str(data.get("log_level", cls.log_level)).upper(),
        )

"""Pygame 2D viewer for one tissue.

Shows a single z-layer of a tissue as a grid of coloured squares: cell
type picks the base colour and infected cells are drawn in red.  PAGE UP
and PAGE DOWN step through the layers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from tissuesim.simulation.simulation import Simulation, TissueState

from tissuesim.tissue.cell import CellType
from tissuesim.tissue.geometry import Coordinate

# Colour palette
_BG = (20, 20, 30)
_GRID_LINE = (40, 40, 55)
_TEXT = (200, 200, 200)
_INFECTED = (220, 60, 60)

_CELL_COLOURS: dict[CellType, tuple[int, int, int]] = {
    CellType.CYTOTOXIC: (90, 160, 255),
    CellType.HELPER: (120, 210, 120),
}


def layer_bounds(state: TissueState) -> tuple[Coordinate, Coordinate]:
    """Return the (min, max) corners of the box holding every cell.

    An empty tissue is treated as a single cell at the origin.
    """
    if state.tissue.cell_count == 0:
        origin = Coordinate(0, 0, 0)
        return origin, origin
    coords = np.array(state.tissue.locations(), dtype=np.int64)
    lo = coords.min(axis=0)
    hi = coords.max(axis=0)
    return Coordinate(*map(int, lo)), Coordinate(*map(int, hi))


class TissueRenderer:
    """Renders one tissue of a Simulation into a Pygame window.

    Attributes:
        simulation: The simulation holding the tissue.
        tissue_name: Name of the tissue to display.
        cell_size: Pixel size of each grid cell.
        layer: The z coordinate currently shown.
    """

    def __init__(
        self,
        simulation: Simulation,
        tissue_name: str,
        cell_size: int = 24,
    ) -> None:
        """Initialise the renderer.

        Args:
            simulation: The simulation to render.
            tissue_name: Which tissue to show.
            cell_size: Pixel width/height per grid cell.

        Raises:
            NotFound: If the simulation has no tissue by that name.
        """
        self.simulation = simulation
        self.tissue_name = tissue_name
        self.state = simulation.state(tissue_name)
        self.cell_size = cell_size
        self.lo, self.hi = layer_bounds(self.state)
        self.layer = self.lo.z

        w = (self.hi.x - self.lo.x + 1) * cell_size
        h = (self.hi.y - self.lo.y + 1) * cell_size
        self._panel_width = 220
        self._win_w = w + self._panel_width
        self._win_h = max(h, 240)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption(f"tissuesim - {tissue_name}")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events and redraw.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_PAGEUP:
                    self.layer = min(self.hi.z, self.layer + 1)
                elif event.key == pygame.K_PAGEDOWN:
                    self.layer = max(self.lo.z, self.layer - 1)

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw every cell in the current layer, north at the top."""
        cs = self.cell_size
        for cell in self.state.tissue:
            if cell.location.z != self.layer:
                continue
            col = cell.location.x - self.lo.x
            row = self.hi.y - cell.location.y
            if cell.is_infected:
                colour = _INFECTED
            else:
                colour = _CELL_COLOURS[cell.cell_type]
            rect = (col * cs, row * cs, cs, cs)
            pygame.draw.rect(self.screen, colour, rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, width=1)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self._win_w - self._panel_width + 10
        y = 10
        population = self.state.population

        lines = [
            f"Tissue: {self.tissue_name}",
            f"Layer z: {self.layer}",
            "",
            "--- Population ---",
            f"Cytotoxic: {population.cytotoxic_count}",
            f"Helper: {population.helper_count}",
            f"Infected: {len(self.state.tissue.infected_cells())}",
            f"Volume: {self.state.engine.infection_volume()}",
            "",
            "--- Controls ---",
            "PGUP/PGDN: layer",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

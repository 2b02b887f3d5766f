from __future__ import annotations

from typing import List, Tuple

import numpy as np
import pygame

from .state import RoverState
from .world import Plateau


Color = Tuple[int, int, int]

# Dark theme palette
THEME = {
    "bg": (18, 22, 32),
    "grid": (28, 34, 48),
    "obstacle_fill": (45, 52, 70),
    "obstacle_edge": (65, 75, 98),
    "obstacle_highlight": (85, 95, 120),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_halted": (255, 90, 90),
    "rover_arrow": (140, 240, 255),
    "trail_start": (60, 160, 200),
    "trail_end": (100, 220, 255),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
}


class PygameRenderer:
    """Top-down view of the plateau, its obstacles and the rover.

    Coordinates:
    - Cell (0,0) is drawn at the bottom-left of the screen.
    - Y axis is flipped so that plateau +y (north) is up.
    """

    def __init__(
        self,
        plateau: Plateau,
        cell_size: int = 48,
        show_trail: bool = True,
        trail_max_length: int = 200,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Grid Rover")
        self.plateau = plateau
        self.cell_size = cell_size
        self.window_width = plateau.grid.width * cell_size
        self.window_height = plateau.grid.height * cell_size
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

        self.show_trail = show_trail
        self.trail_max_length = trail_max_length
        self.trail: List[Tuple[int, int]] = []
        self._occupancy = plateau.occupancy()

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        """Screen rectangle covering plateau cell (x, y)."""
        sy = self.window_height - (y + 1) * self.cell_size
        return pygame.Rect(x * self.cell_size, sy, self.cell_size, self.cell_size)

    def _cell_center(self, x: int, y: int) -> Tuple[int, int]:
        return self._cell_rect(x, y).center

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _draw_grid(self) -> None:
        color = THEME["grid"]
        for i in range(self.plateau.grid.width + 1):
            sx = i * self.cell_size
            pygame.draw.line(self.screen, color, (sx, 0), (sx, self.window_height), 1)
        for j in range(self.plateau.grid.height + 1):
            sy = j * self.cell_size
            pygame.draw.line(self.screen, color, (0, sy), (self.window_width, sy), 1)

    def _draw_obstacles(self) -> None:
        for y, x in np.argwhere(self._occupancy):
            rect = self._cell_rect(int(x), int(y)).inflate(-4, -4)
            pygame.draw.rect(self.screen, THEME["obstacle_fill"], rect)
            pygame.draw.rect(self.screen, THEME["obstacle_edge"], rect, 2)
            pygame.draw.line(self.screen, THEME["obstacle_highlight"], rect.topleft, rect.topright, 1)
            pygame.draw.line(self.screen, THEME["obstacle_highlight"], rect.topleft, rect.bottomleft, 1)

    def _draw_trail(self) -> None:
        if len(self.trail) < 2:
            return
        pts = [self._cell_center(x, y) for x, y in self.trail]
        n = len(pts) - 1
        for i in range(n):
            ax, ay = self.trail[i]
            bx, by = self.trail[i + 1]
            # Skip segments that jump across a wrapped edge.
            if abs(ax - bx) > 1 or abs(ay - by) > 1:
                continue
            t = (i + 1) / max(n, 1)
            start, end = THEME["trail_start"], THEME["trail_end"]
            color = tuple(int(start[k] + t * (end[k] - start[k])) for k in range(3))
            pygame.draw.line(self.screen, color, pts[i], pts[i + 1], 2 if i == n - 1 else 1)

    def draw(self, rover_state: RoverState, step: int = 0) -> None:
        """Render one frame."""
        self.screen.fill(THEME["bg"])
        self._draw_grid()
        self._draw_obstacles()

        if self.show_trail:
            cell = (rover_state.position.x, rover_state.position.y)
            if not self.trail or self.trail[-1] != cell:
                self.trail.append(cell)
            if len(self.trail) > self.trail_max_length:
                self.trail = self.trail[-self.trail_max_length :]
            self._draw_trail()

        self._draw_rover(rover_state)
        self._draw_hud(rover_state, step)
        pygame.display.flip()

    def _draw_rover(self, state: RoverState) -> None:
        center = self._cell_center(state.position.x, state.position.y)
        radius_px = max(2, int(self.cell_size * 0.3))
        fill = THEME["rover_halted"] if state.error else THEME["rover_fill"]
        pygame.draw.circle(self.screen, fill, center, radius_px, 0)
        pygame.draw.circle(self.screen, THEME["rover_outline"], center, radius_px, 2)

        # Screen y grows downward
        dx, dy = state.direction.step
        cx, cy = center
        arrow_len = self.cell_size * 0.45
        head = (int(cx + dx * arrow_len), int(cy - dy * arrow_len))
        pygame.draw.line(self.screen, THEME["rover_arrow"], center, head, 4)
        wing = self.cell_size * 0.12
        back = (head[0] - dx * wing, head[1] + dy * wing)
        tri = [
            head,
            (int(back[0] - dy * wing), int(back[1] - dx * wing)),
            (int(back[0] + dy * wing), int(back[1] + dx * wing)),
        ]
        pygame.draw.polygon(self.screen, THEME["rover_arrow"], tri)
        pygame.draw.polygon(self.screen, THEME["rover_outline"], tri, 1)

    def _draw_hud(self, state: RoverState, step: int) -> None:
        pad = 10
        font = pygame.font.SysFont("monospace", 13)
        text = f"  step={step}   {state.format()}  "
        surf = font.render(text, True, THEME["hud_text"])
        r = surf.get_rect(topleft=(pad, pad))
        panel = r.inflate(pad, pad)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        self.screen.blit(surf, (panel.x + 4, panel.y + 4))

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple
import json

import numpy as np


@dataclass(frozen=True)
class Position:
    """Integer cell coordinate on the plateau.

    Origin is the bottom-left cell; x increases to the right (east) and y
    increases upward (north).
    """

    x: int
    y: int

    def format(self) -> str:
        return f"{self.x}:{self.y}"


@dataclass(frozen=True)
class Grid:
    """Plateau bounds used as the wrap-around modulus on each axis.

    Attributes
    ----------
    width : int
        Number of cells along x.
    height : int
        Number of cells along y.
    """

    width: int = 10
    height: int = 10

    def __post_init__(self) -> None:
        for name, value in (("width", self.width), ("height", self.height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Grid {name} must be a positive integer, got {value!r}")

    def wrap(self, position: Position) -> Position:
        """Wrap a position onto the torus, both edges on both axes."""
        return Position(
            self._wrap_coordinate(position.x, self.width),
            self._wrap_coordinate(position.y, self.height),
        )

    def contains(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    @staticmethod
    def _wrap_coordinate(coordinate: int, bound: int) -> int:
        return ((coordinate % bound) + bound) % bound


DEFAULT_GRID = Grid(10, 10)


@dataclass(frozen=True)
class Obstacle:
    """Impassable plateau cell."""

    position: Position

    @classmethod
    def at(cls, x: int, y: int) -> "Obstacle":
        return cls(Position(x, y))


class Plateau:
    """Wrap-around grid plus the fixed set of obstacle cells.

    Parameters
    ----------
    grid : Grid, optional
        Plateau bounds. Defaults to a 10x10 grid.
    obstacles : iterable of Obstacle, optional
        Blocked cells. Defaults to none.

    The obstacle set is fixed at construction; rovers only read it, so one
    plateau can be shared between any number of rovers.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        obstacles: Optional[Iterable[Obstacle]] = None,
    ) -> None:
        self._grid = grid if grid is not None else DEFAULT_GRID
        self._obstacles: Tuple[Obstacle, ...] = tuple(obstacles) if obstacles is not None else ()
        for obstacle in self._obstacles:
            if not self._grid.contains(obstacle.position):
                raise ValueError(
                    f"Obstacle at {obstacle.position.format()} lies outside "
                    f"the {self._grid.width}x{self._grid.height} grid"
                )
        self._blocked: FrozenSet[Position] = frozenset(o.position for o in self._obstacles)

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        return self._obstacles

    def is_blocked(self, position: Position) -> bool:
        """Return True if an obstacle occupies exactly this cell."""
        return position in self._blocked

    # ------------------------------------------------------------------
    # Map loading
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any], grid: Optional[Grid] = None) -> "Plateau":
        """Create a plateau from a dict describing grid size and obstacles.

        An explicit ``grid`` overrides the map's own ``width``/``height``.
        """
        if grid is None:
            grid = Grid(
                int(data.get("width", DEFAULT_GRID.width)),
                int(data.get("height", DEFAULT_GRID.height)),
            )
        obstacles = [Obstacle.at(int(o["x"]), int(o["y"])) for o in data.get("obstacles", [])]
        return cls(grid=grid, obstacles=obstacles)

    @classmethod
    def from_map_file(cls, path: str, grid: Optional[Grid] = None) -> "Plateau":
        """Create a plateau from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_map_dict(data, grid=grid)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize plateau description to a Python dict."""
        obstacles: List[Dict[str, int]] = [
            {"x": o.position.x, "y": o.position.y} for o in self._obstacles
        ]
        return {"width": self._grid.width, "height": self._grid.height, "obstacles": obstacles}

    def occupancy(self) -> np.ndarray:
        """Boolean occupancy array indexed as ``[y, x]``."""
        grid = np.zeros((self._grid.height, self._grid.width), dtype=bool)
        for position in self._blocked:
            grid[position.y, position.x] = True
        return grid

    def __repr__(self) -> str:
        return (
            f"Plateau(grid={self._grid.width}x{self._grid.height}, "
            f"obstacles={len(self._obstacles)})"
        )

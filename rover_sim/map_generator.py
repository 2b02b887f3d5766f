"""
Procedural obstacle layouts for the grid plateau.

Generates obstacle cell layouts: random scatter, a wall row with a gap, and a
border ring with openings. Output is compatible with Plateau.from_map_dict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple
import json
import os
import random

from .world import Grid, Plateau


Cell = Tuple[int, int]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass
class MapGeneratorConfig:
    """Parameters for procedural map generation."""

    width: int = 10
    height: int = 10
    obstacle_count: int = 8
    wall_row: Optional[int] = None
    border_openings: int = 2
    keep_clear: List[Cell] = field(default_factory=lambda: [(0, 0)])
    seed: Optional[int] = None


def _map_dict(width: int, height: int, cells: Sequence[Cell]) -> Dict[str, Any]:
    return {
        "width": width,
        "height": height,
        "obstacles": [{"x": x, "y": y} for x, y in sorted(cells)],
    }


# ---------------------------------------------------------------------------
# Random scatter
# ---------------------------------------------------------------------------


def generate_scatter_map(
    width: int,
    height: int,
    obstacle_count: int,
    keep_clear: Sequence[Cell] = ((0, 0),),
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """Place up to ``obstacle_count`` obstacles on distinct random free cells."""
    rng = rng or random.Random()
    clear: Set[Cell] = set(keep_clear)
    free = [(x, y) for y in range(height) for x in range(width) if (x, y) not in clear]
    count = max(0, min(obstacle_count, len(free)))
    return _map_dict(width, height, rng.sample(free, count))


# ---------------------------------------------------------------------------
# Wall with a single gap
# ---------------------------------------------------------------------------


def generate_wall_map(
    width: int,
    height: int,
    row: Optional[int] = None,
    keep_clear: Sequence[Cell] = ((0, 0),),
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Generate a horizontal wall spanning the full width with one open cell.
    Keep-clear cells are never walled, so the wall may have extra gaps.
    """
    rng = rng or random.Random()
    if row is None:
        row = height // 2
    row = row % height
    gap = rng.randrange(width)
    clear: Set[Cell] = set(keep_clear)
    cells = [(x, row) for x in range(width) if x != gap and (x, row) not in clear]
    return _map_dict(width, height, cells)


# ---------------------------------------------------------------------------
# Border ring
# ---------------------------------------------------------------------------


def generate_border_map(
    width: int,
    height: int,
    openings: int = 2,
    keep_clear: Sequence[Cell] = ((0, 0),),
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """Generate a rectangular ring one cell in from the edges with a few openings."""
    rng = rng or random.Random()
    if width < 3 or height < 3:
        return _map_dict(width, height, [])

    ring: List[Cell] = []
    for x in range(1, width - 1):
        ring.append((x, 1))
        ring.append((x, height - 2))
    for y in range(2, height - 2):
        ring.append((1, y))
        ring.append((width - 2, y))
    ring = sorted(set(ring))

    opened = set(rng.sample(ring, min(openings, len(ring))))
    clear: Set[Cell] = set(keep_clear)
    cells = [c for c in ring if c not in opened and c not in clear]
    return _map_dict(width, height, cells)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def _scatter(cfg: MapGeneratorConfig, rng: random.Random) -> Dict[str, Any]:
    return generate_scatter_map(cfg.width, cfg.height, cfg.obstacle_count, cfg.keep_clear, rng=rng)


def _wall(cfg: MapGeneratorConfig, rng: random.Random) -> Dict[str, Any]:
    return generate_wall_map(cfg.width, cfg.height, cfg.wall_row, cfg.keep_clear, rng=rng)


def _border(cfg: MapGeneratorConfig, rng: random.Random) -> Dict[str, Any]:
    return generate_border_map(cfg.width, cfg.height, cfg.border_openings, cfg.keep_clear, rng=rng)


_PRESETS: Dict[str, Callable[[MapGeneratorConfig, random.Random], Dict[str, Any]]] = {
    "scatter": _scatter,
    "wall": _wall,
    "border": _border,
}


def list_presets() -> List[str]:
    return sorted(_PRESETS.keys())


def generate_map(gen_config: MapGeneratorConfig, preset: str = "scatter") -> Dict[str, Any]:
    """Generate a map dict for a named preset."""
    if preset not in _PRESETS:
        raise KeyError(f"Unknown map preset: {preset}. Available: {list_presets()}")
    rng = random.Random(gen_config.seed) if gen_config.seed is not None else random.Random()
    return _PRESETS[preset](gen_config, rng)


def plateau_from_generator(
    gen_config: MapGeneratorConfig,
    preset: str = "scatter",
) -> Plateau:
    """
    Build a Plateau instance from a generator preset.
    """
    data = generate_map(gen_config, preset)
    return Plateau.from_map_dict(data, grid=Grid(gen_config.width, gen_config.height))


def save_generated_map(data: Dict[str, Any], path: str) -> None:
    """Write generated map dict to a JSON file."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

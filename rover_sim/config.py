from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import os

import yaml

from .map_generator import MapGeneratorConfig, plateau_from_generator
from .state import RoverState
from .world import DEFAULT_GRID, Grid, Obstacle, Plateau


MAPS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "maps")


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class RenderConfig:
    cell_size: int = 48
    fps: int = 4
    show_trail: bool = True
    trail_max_length: int = 200


@dataclass
class SimConfig:
    """Simulation settings as read from ``configs/sim.yaml``."""

    width: Optional[int] = None
    height: Optional[int] = None
    map_name: Optional[str] = None
    obstacles: List[Tuple[int, int]] = field(default_factory=list)
    start_x: int = 0
    start_y: int = 0
    start_heading: str = "N"
    generator_preset: Optional[str] = None
    generator_count: int = 8
    seed: Optional[int] = None
    telemetry_path: Optional[str] = None
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "SimConfig":
        plateau_cfg = cfg.get("plateau", {}) or {}
        rover_cfg = cfg.get("rover", {}) or {}
        generator_cfg = cfg.get("generator", {}) or {}
        render_cfg = cfg.get("render", {}) or {}
        logging_cfg = cfg.get("logging", {}) or {}

        obstacles = [(int(o[0]), int(o[1])) for o in plateau_cfg.get("obstacles", []) or []]
        seed = cfg.get("seed")
        return cls(
            width=plateau_cfg.get("width"),
            height=plateau_cfg.get("height"),
            map_name=plateau_cfg.get("map"),
            obstacles=obstacles,
            start_x=int(rover_cfg.get("x", 0)),
            start_y=int(rover_cfg.get("y", 0)),
            start_heading=str(rover_cfg.get("heading", "N")),
            generator_preset=generator_cfg.get("preset"),
            generator_count=int(generator_cfg.get("count", 8)),
            seed=int(seed) if seed is not None else None,
            telemetry_path=logging_cfg.get("telemetry_path"),
            render=RenderConfig(
                cell_size=int(render_cfg.get("cell_size", 48)),
                fps=int(render_cfg.get("fps", 4)),
                show_trail=bool(render_cfg.get("show_trail", True)),
                trail_max_length=int(render_cfg.get("trail_max_length", 200)),
            ),
        )


def load_config(path: str) -> SimConfig:
    return SimConfig.from_dict(load_yaml(path))


def build_start_state(cfg: SimConfig) -> RoverState:
    return RoverState.at(cfg.start_x, cfg.start_y, cfg.start_heading)


def build_plateau_grid(cfg: SimConfig) -> Optional[Grid]:
    """Grid set explicitly by the config, or None when it gives no size."""
    if cfg.width is None and cfg.height is None:
        return None
    return Grid(
        cfg.width if cfg.width is not None else DEFAULT_GRID.width,
        cfg.height if cfg.height is not None else DEFAULT_GRID.height,
    )


def build_plateau(cfg: SimConfig, maps_dir: str = MAPS_DIR) -> Plateau:
    """Build the plateau described by the config.

    Precedence: generator preset, then named map, then inline obstacles.
    A named map keeps its own size unless the config sets one.
    """
    grid = build_plateau_grid(cfg)
    if cfg.generator_preset:
        size = grid if grid is not None else DEFAULT_GRID
        gen_cfg = MapGeneratorConfig(
            width=size.width,
            height=size.height,
            obstacle_count=cfg.generator_count,
            keep_clear=[(cfg.start_x, cfg.start_y)],
            seed=cfg.seed,
        )
        return plateau_from_generator(gen_cfg, preset=cfg.generator_preset)
    if cfg.map_name:
        path = os.path.join(maps_dir, f"{cfg.map_name}.json")
        return Plateau.from_map_file(path, grid=grid)
    return Plateau(grid=grid, obstacles=[Obstacle.at(x, y) for x, y in cfg.obstacles])

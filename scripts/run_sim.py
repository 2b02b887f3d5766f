from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_sim.config import SimConfig, build_plateau, build_start_state, load_config
from rover_sim.map_generator import list_presets
from rover_sim.rover import NavigationReport, Rover
from rover_sim.state import RoverState
from telemetry.logger import TelemetryLogger


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drive a grid rover with an M/L/R command string.")
    parser.add_argument(
        "--config",
        type=str,
        default=str(_project_root / "configs" / "sim.yaml"),
        help="Path to sim YAML config.",
    )
    parser.add_argument("--commands", type=str, default="", help="Command string, e.g. MMRMMLM.")
    parser.add_argument("--map", type=str, default=None, help="Name of a map under rover_sim/maps.")
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        choices=list_presets(),
        help="Generate obstacles with a procedural preset.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for procedural maps.")
    parser.add_argument("--telemetry", type=str, default=None, help="Append per-step JSONL telemetry here.")
    parser.add_argument("--render", action="store_true", help="Replay the commands in a pygame window.")
    return parser.parse_args(argv)


def apply_overrides(cfg: SimConfig, args: argparse.Namespace) -> SimConfig:
    if args.map is not None:
        cfg.map_name = args.map
    if args.preset is not None:
        cfg.generator_preset = args.preset
    if args.seed is not None:
        cfg.seed = args.seed
    if args.telemetry is not None:
        cfg.telemetry_path = args.telemetry
    return cfg


def replay(rover: Rover, commands: str, cfg: SimConfig) -> NavigationReport:
    """Step through the commands one frame at a time in a pygame window."""
    import pygame

    from rover_sim.render import PygameRenderer

    renderer = PygameRenderer(
        plateau=rover.plateau,
        cell_size=cfg.render.cell_size,
        show_trail=cfg.render.show_trail,
        trail_max_length=cfg.render.trail_max_length,
    )

    def on_step(step: int, state: RoverState) -> None:
        pygame.event.pump()
        renderer.draw(state, step=step)
        renderer.tick(cfg.render.fps)

    try:
        renderer.draw(rover.state, step=0)
        report = rover.run(commands, on_step=on_step)

        print("Replay finished. Close the window or press ESC to exit.")
        waiting = True
        while waiting:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    waiting = False
            renderer.tick(cfg.render.fps)
    finally:
        renderer.close()
    return report


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)

    try:
        cfg = apply_overrides(load_config(args.config), args)
        plateau = build_plateau(cfg)
        rover = Rover(plateau=plateau, state=build_start_state(cfg))
        telemetry = TelemetryLogger(cfg.telemetry_path) if cfg.telemetry_path else None
    except (OSError, KeyError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    rover.telemetry = telemetry

    try:
        if args.render:
            report = replay(rover, args.commands, cfg)
        else:
            report = rover.run(args.commands)
    finally:
        if telemetry is not None:
            telemetry.close()

    print(report.state.format())
    if report.ignored:
        print(f"Ignored unknown commands: {''.join(report.ignored)}", file=sys.stderr)
    if report.skipped:
        print(f"Halted by obstacle; {report.skipped} command(s) not executed", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

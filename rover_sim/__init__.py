"""
Top-level package for the grid rover navigator.

Components:
- world: positions, wrap-around grid, obstacles and the plateau
- state: headings and rover state
- commands: M/L/R command executors
- rover: command-string orchestration
- config: YAML configuration loading
- map_generator: procedural obstacle layouts (scatter, wall, border)
- render: pygame-based visualization
"""

from .world import Grid, Obstacle, Plateau, Position
from .state import Direction, RoverState
from .rover import NavigationReport, Rover

__all__ = [
    "Grid",
    "Obstacle",
    "Plateau",
    "Position",
    "Direction",
    "RoverState",
    "NavigationReport",
    "Rover",
]

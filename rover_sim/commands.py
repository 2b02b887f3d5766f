"""
Command alphabet and executors.

Each executor is a pure function of a command character and a rover state.
An executor handed a command it does not own returns the state unchanged, so
characters outside the alphabet fall through every executor as no-ops.
"""

from __future__ import annotations

from typing import Tuple

from .state import RoverState
from .world import Plateau, Position


MOVE = "M"
ROTATE_LEFT = "L"
ROTATE_RIGHT = "R"

COMMANDS: Tuple[str, ...] = (MOVE, ROTATE_LEFT, ROTATE_RIGHT)


def is_command(character: str) -> bool:
    return character in COMMANDS


def move(command: str, state: RoverState, plateau: Plateau) -> RoverState:
    """Step one cell forward, wrapping at the plateau edges.

    A move onto an obstacle is rejected: the rover keeps its pre-move position
    and heading and the returned state carries ``error=True``.
    """
    if command != MOVE:
        return state

    dx, dy = state.direction.step
    unwrapped = Position(state.position.x + dx, state.position.y + dy)
    target = plateau.grid.wrap(unwrapped)

    if plateau.is_blocked(target):
        return RoverState(state.position, state.direction, error=True)
    return RoverState(target, state.direction, state.error)


def rotate_left(command: str, state: RoverState) -> RoverState:
    if command != ROTATE_LEFT:
        return state
    return RoverState(state.position, state.direction.left(), state.error)


def rotate_right(command: str, state: RoverState) -> RoverState:
    if command != ROTATE_RIGHT:
        return state
    return RoverState(state.position, state.direction.right(), state.error)


def execute(command: str, state: RoverState, plateau: Plateau) -> RoverState:
    """Dispatch one command character to its executor."""
    if command == MOVE:
        return move(command, state, plateau)
    elif command == ROTATE_LEFT:
        return rotate_left(command, state)
    elif command == ROTATE_RIGHT:
        return rotate_right(command, state)
    return state

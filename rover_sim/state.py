from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple

from .world import Position


# Clockwise order; rotation adjacency is read from this sequence.
HEADINGS: Tuple[str, ...] = ("N", "E", "S", "W")

# Unit step (dx, dy) for a forward move on each heading.
HEADING_STEPS: Dict[str, Tuple[int, int]] = {
    "N": (0, 1),
    "E": (1, 0),
    "S": (0, -1),
    "W": (-1, 0),
}


@dataclass(frozen=True)
class Direction:
    """Compass heading stored as an index into ``HEADINGS``."""

    ordinal: int

    def __post_init__(self) -> None:
        if not 0 <= self.ordinal < len(HEADINGS):
            raise ValueError(f"Direction ordinal must be in [0, {len(HEADINGS)}), got {self.ordinal}")

    @classmethod
    def from_letter(cls, letter: str) -> "Direction":
        try:
            return cls(HEADINGS.index(letter))
        except ValueError:
            raise ValueError(f"Unknown heading {letter!r}, expected one of {', '.join(HEADINGS)}") from None

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Direction":
        return cls(ordinal % len(HEADINGS))

    @property
    def letter(self) -> str:
        return HEADINGS[self.ordinal]

    @property
    def step(self) -> Tuple[int, int]:
        return HEADING_STEPS[self.letter]

    def rotated(self, delta: int) -> "Direction":
        """Rotate by ``delta`` quarter turns (negative is counter-clockwise)."""
        count = len(HEADINGS)
        return Direction(((self.ordinal + delta) + count) % count)

    def left(self) -> "Direction":
        return self.rotated(-1)

    def right(self) -> "Direction":
        return self.rotated(1)

    def format(self) -> str:
        return self.letter


@dataclass(frozen=True)
class RoverState:
    """Pose of the rover on the plateau.

    Attributes
    ----------
    position : Position
        Current cell.
    direction : Direction
        Current heading.
    error : bool
        True once the rover has halted after hitting an obstacle.
    """

    position: Position
    direction: Direction
    error: bool = False

    STARTING_STATE: ClassVar["RoverState"]

    @classmethod
    def at(cls, x: int, y: int, heading: str = "N", error: bool = False) -> "RoverState":
        return cls(Position(x, y), Direction.from_letter(heading), error)

    def format(self) -> str:
        prefix = "Err:" if self.error else ""
        return f"{prefix}{self.position.format()}:{self.direction.format()}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to a dict for logging/telemetry."""
        return {
            "x": self.position.x,
            "y": self.position.y,
            "heading": self.direction.letter,
            "error": self.error,
        }


RoverState.STARTING_STATE = RoverState(Position(0, 0), Direction.from_letter("N"))

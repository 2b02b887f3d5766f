from __future__ import annotations

import pytest

from rover_sim.state import HEADINGS, Direction, RoverState
from rover_sim.world import Position


def test_direction_letters_follow_clockwise_order() -> None:
    assert [Direction.from_ordinal(i).format() for i in range(4)] == ["N", "E", "S", "W"]
    assert Direction.from_letter("W").ordinal == 3


def test_from_ordinal_wraps() -> None:
    assert Direction.from_ordinal(4).letter == "N"
    assert Direction.from_ordinal(-1).letter == "W"


def test_unknown_heading_letter_is_rejected() -> None:
    with pytest.raises(ValueError):
        Direction.from_letter("X")


@pytest.mark.parametrize(
    "start,left,right",
    [("N", "W", "E"), ("E", "N", "S"), ("S", "E", "W"), ("W", "S", "N")],
)
def test_rotation_neighbours(start: str, left: str, right: str) -> None:
    d = Direction.from_letter(start)
    assert d.left().letter == left
    assert d.right().letter == right


def test_rotation_is_cyclic_of_order_four() -> None:
    for letter in HEADINGS:
        d = Direction.from_letter(letter)
        assert d.rotated(4) == d
        assert d.rotated(-4) == d
        assert d.left().right() == d
        assert d.right().left() == d


def test_state_format() -> None:
    assert RoverState.STARTING_STATE.format() == "0:0:N"
    assert RoverState.at(4, 6, "S").format() == "4:6:S"
    assert RoverState(Position(0, 1), Direction.from_letter("N"), error=True).format() == "Err:0:1:N"


def test_state_to_dict() -> None:
    assert RoverState.at(2, 3, "E").to_dict() == {"x": 2, "y": 3, "heading": "E", "error": False}

from __future__ import annotations

import random
import re

import pytest

from rover_sim.rover import Rover
from rover_sim.state import RoverState
from rover_sim.world import Grid, Obstacle, Plateau


OUTPUT_PATTERN = re.compile(r"^(Err:)?\d+:\d+:[NESW]$")


@pytest.mark.parametrize(
    "commands,expected",
    [
        (None, "0:0:N"),
        ("", "0:0:N"),
        ("MMRMMLM", "2:3:N"),
        ("MMMMMMMMMM", "0:0:N"),
        ("MTM", "0:2:N"),
    ],
)
def test_default_rover_scenarios(commands, expected: str) -> None:
    assert Rover().navigate(commands) == expected


def test_starts_at_given_state() -> None:
    rover = Rover(state=RoverState.at(4, 6, "S"))
    assert rover.navigate("") == "4:6:S"


def test_obstacle_halts_before_blocked_cell() -> None:
    rover = Rover(Plateau(obstacles=[Obstacle.at(0, 2)]), RoverState.STARTING_STATE)
    assert rover.navigate("MM") == "Err:0:1:N"


def test_obstacle_on_explicit_grid() -> None:
    rover = Rover(Plateau(Grid(10, 10), [Obstacle.at(0, 3)]))
    assert rover.navigate("MMMM") == "Err:0:2:N"


def test_halt_freezes_remaining_commands() -> None:
    rover = Rover(Plateau(obstacles=[Obstacle.at(0, 2)]))
    report = rover.run("MMRRMLLM")
    assert report.halted
    assert report.state.format() == "Err:0:1:N"
    assert report.executed == 2
    assert report.skipped == 6


def test_halt_persists_across_calls() -> None:
    rover = Rover(Plateau(obstacles=[Obstacle.at(0, 2)]))
    rover.navigate("MM")
    assert rover.navigate("RM") == "Err:0:1:N"


def test_state_carries_over_between_calls() -> None:
    rover = Rover()
    rover.navigate("MM")
    assert rover.navigate("RM") == "1:2:E"


def test_report_lists_ignored_characters() -> None:
    report = Rover().run("MxMy")
    assert report.ignored == ["x", "y"]
    assert report.executed == 2
    assert report.to_dict()["result"] == "0:2:N"


def test_on_step_sees_every_processed_character() -> None:
    seen = []
    Rover().run("MRz", on_step=lambda i, s: seen.append((i, s.format())))
    assert seen == [(1, "0:1:N"), (2, "0:1:E"), (3, "0:1:E")]


def test_rejects_start_on_obstacle() -> None:
    with pytest.raises(ValueError):
        Rover(Plateau(obstacles=[Obstacle.at(0, 0)]))


def test_rejects_start_outside_grid() -> None:
    with pytest.raises(ValueError):
        Rover(Plateau(Grid(3, 3)), RoverState.at(3, 0))


def test_four_turns_return_to_heading() -> None:
    for heading in "NESW":
        for commands in ("LLLL", "RRRR", "LR", "RL"):
            rover = Rover(state=RoverState.at(1, 1, heading))
            assert rover.navigate(commands) == f"1:1:{heading}"


def test_random_walks_stay_on_grid() -> None:
    rng = random.Random(0)
    for _ in range(50):
        width, height = rng.randint(1, 7), rng.randint(1, 7)
        obstacles = {(rng.randrange(width), rng.randrange(height)) for _ in range(rng.randint(0, 3))}
        obstacles.discard((0, 0))
        plateau = Plateau(Grid(width, height), [Obstacle.at(x, y) for x, y in obstacles])
        commands = "".join(rng.choice("MMMLRX") for _ in range(rng.randint(0, 40)))

        rover = Rover(plateau)
        result = rover.navigate(commands)

        assert OUTPUT_PATTERN.match(result)
        state = rover.get_state()
        assert 0 <= state.position.x < width
        assert 0 <= state.position.y < height
        assert result.startswith("Err:") == state.error

from __future__ import annotations

import numpy as np

from rover_sim.rover import Rover
from rover_sim.world import Obstacle, Plateau
from telemetry.logger import TelemetryLogger, break_wrapped_path, read_telemetry


def test_rover_logs_one_record_per_processed_command(tmp_path) -> None:
    path = tmp_path / "logs" / "nav.jsonl"
    logger = TelemetryLogger(str(path))
    rover = Rover(Plateau(obstacles=[Obstacle.at(0, 2)]), telemetry=logger)
    rover.navigate("MqMMM")
    logger.close()

    records = read_telemetry(str(path))
    assert [r["command"] for r in records] == ["M", "q", "M"]
    assert [r["recognized"] for r in records] == [True, False, True]
    assert records[-1]["state"] == {"x": 0, "y": 1, "heading": "N", "error": True}


def test_closed_logger_drops_records(tmp_path) -> None:
    path = tmp_path / "nav.jsonl"
    logger = TelemetryLogger(str(path))
    logger.close()
    assert logger.closed
    logger.log_step({"step": 1})
    assert read_telemetry(str(path)) == []


def test_read_telemetry_skips_bad_lines(tmp_path) -> None:
    path = tmp_path / "nav.jsonl"
    path.write_text('{"step": 1}\n\nnot json\n{"step": 2}\n{"step": 3}\n', encoding="utf-8")
    assert [r["step"] for r in read_telemetry(str(path))] == [1, 2, 3]
    assert [r["step"] for r in read_telemetry(str(path), max_rows=2)] == [2, 3]
    assert read_telemetry(str(tmp_path / "missing.jsonl")) == []


def test_wrapped_path_is_broken_at_edge_jumps() -> None:
    # 0:8 -> 0:9 -> 0:0 (wrap north) -> 9:0 (wrap west) -> 8:0
    xs = np.array([0, 0, 0, 9, 8])
    ys = np.array([8, 9, 0, 0, 0])
    path_x, path_y = break_wrapped_path(xs, ys)

    assert path_x.shape == (7,)
    assert np.isnan(path_x[2]) and np.isnan(path_y[2])
    assert np.isnan(path_x[4]) and np.isnan(path_y[4])
    assert list(path_x[~np.isnan(path_x)]) == [0, 0, 0, 9, 8]


def test_unwrapped_path_is_unchanged() -> None:
    path_x, path_y = break_wrapped_path(np.array([0, 1, 1]), np.array([0, 0, 1]))
    assert not np.any(np.isnan(path_x))
    assert list(path_y) == [0, 0, 1]

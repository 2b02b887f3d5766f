from __future__ import annotations

import gc
import importlib.util
import warnings
from pathlib import Path

import yaml


SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run_sim.py"


def load_script():
    spec = importlib.util.spec_from_file_location("run_sim", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cli_prints_final_state(capsys) -> None:
    run_sim = load_script()
    assert run_sim.main(["--commands", "MMRMMLM"]) == 0
    assert capsys.readouterr().out.strip() == "2:3:N"


def test_cli_reports_ignored_and_halt(tmp_path, capsys) -> None:
    config = tmp_path / "sim.yaml"
    config.write_text(yaml.safe_dump({"plateau": {"obstacles": [[0, 2]]}}), encoding="utf-8")
    telemetry = tmp_path / "nav.jsonl"

    run_sim = load_script()
    code = run_sim.main(["--config", str(config), "--commands", "MxMM", "--telemetry", str(telemetry)])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.strip() == "Err:0:1:N"
    assert "Ignored unknown commands: x" in captured.err
    assert "1 command(s) not executed" in captured.err
    assert telemetry.exists()


def test_cli_rejects_invalid_start(tmp_path, capsys) -> None:
    config = tmp_path / "sim.yaml"
    config.write_text(yaml.safe_dump({"plateau": {"obstacles": [[0, 0]]}}), encoding="utf-8")
    telemetry = tmp_path / "nav.jsonl"

    run_sim = load_script()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        code = run_sim.main(["--config", str(config), "--telemetry", str(telemetry)])
        gc.collect()

    assert code == 1
    assert "Invalid configuration" in capsys.readouterr().err
    leaked = [w for w in caught if issubclass(w.category, ResourceWarning) and "nav.jsonl" in str(w.message)]
    assert not leaked
    assert not telemetry.exists()

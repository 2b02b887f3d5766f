from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, List, Optional, TextIO, Tuple

import numpy as np


class TelemetryLogger:
    """Structured JSONL logger for rover navigation telemetry.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    @property
    def closed(self) -> bool:
        return self._fp is None


def read_telemetry(path: str, max_rows: Optional[int] = None) -> List[Dict[str, Any]]:
    """Load records from a JSONL telemetry file.

    Blank and malformed lines are skipped. Returns an empty list when the file
    does not exist yet.
    """
    if not os.path.exists(path):
        return []
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    if max_rows is not None:
        records = records[-max_rows:]
    return records


def break_wrapped_path(xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Insert NaN between consecutive cells that jump across a wrapped edge.

    Matplotlib leaves a gap at NaN, so the plotted path is not drawn across
    the whole plateau when the rover wraps.
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if xs.size < 2:
        return xs, ys
    jumps = (np.abs(np.diff(xs)) > 1) | (np.abs(np.diff(ys)) > 1)
    insert_at = np.nonzero(jumps)[0] + 1
    return np.insert(xs, insert_at, np.nan), np.insert(ys, insert_at, np.nan)

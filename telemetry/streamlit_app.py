from __future__ import annotations

import argparse
import time

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import streamlit as st

from telemetry.logger import break_wrapped_path, read_telemetry


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--log-path",
        type=str,
        default="telemetry_logs/navigation.jsonl",
        help="Path to telemetry JSONL log file.",
    )
    parser.add_argument("--width", type=int, default=10, help="Plateau width for the path plot.")
    parser.add_argument("--height", type=int, default=10, help="Plateau height for the path plot.")
    return parser.parse_args()


def load_telemetry(path: str, max_rows: int = 2000) -> pd.DataFrame:
    records = read_telemetry(path, max_rows=max_rows)
    if not records:
        return pd.DataFrame()
    return pd.json_normalize(records)


def main() -> None:
    args = parse_args()

    st.set_page_config(page_title="Rover Navigation Telemetry", layout="wide")
    st.title("Rover Navigation Telemetry")

    status_placeholder = st.empty()
    col1, col2 = st.columns(2)
    path_fig = col1.empty()
    table = col2.empty()

    refresh_interval = st.sidebar.slider("Refresh interval (s)", 0.5, 5.0, 1.0, 0.5)

    while True:
        df = load_telemetry(args.log_path)
        if df.empty:
            status_placeholder.info(f"Waiting for telemetry at '{args.log_path}'...")
            time.sleep(refresh_interval)
            continue

        status_placeholder.success(f"Streaming from '{args.log_path}' ({len(df)} records)")
        latest = df.iloc[-1]

        st.sidebar.subheader("Rover State")
        prefix = "Err:" if bool(latest.get("state.error", False)) else ""
        st.sidebar.write(
            f"{prefix}{int(latest.get('state.x', 0))}:{int(latest.get('state.y', 0))}:"
            f"{latest.get('state.heading', 'N')}"
        )

        with path_fig.container():
            fig, ax = plt.subplots()
            if "state.x" in df.columns and "state.y" in df.columns:
                xs = df["state.x"].to_numpy(dtype=float)
                ys = df["state.y"].to_numpy(dtype=float)
                path_x, path_y = break_wrapped_path(xs, ys)
                ax.plot(path_x + 0.5, path_y + 0.5, "-y", label="Path")
                ax.scatter([xs[-1] + 0.5], [ys[-1] + 0.5], c="b", label="Rover")
                if "state.error" in df.columns:
                    halted = df["state.error"].to_numpy(dtype=bool)
                    if np.any(halted):
                        ax.scatter(xs[halted] + 0.5, ys[halted] + 0.5, c="r", marker="x", label="Halted")
            ax.set_xlim(0, args.width)
            ax.set_ylim(0, args.height)
            ax.set_xticks(np.arange(0, args.width + 1))
            ax.set_yticks(np.arange(0, args.height + 1))
            ax.grid(True)
            ax.set_aspect("equal", adjustable="box")
            ax.set_title("Rover Path")
            ax.legend(loc="upper right")
            path_fig.pyplot(fig)
            plt.close(fig)

        table.dataframe(df.tail(50))

        time.sleep(refresh_interval)


if __name__ == "__main__":
    main()

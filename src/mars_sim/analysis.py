"""Analyze a recorded experiment run and plot the longitudes over time."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mars_sim.core.config import ORBIT_CFG, OrbitCfg
from mars_sim.core.simulator import OrbitalSimulator

TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
RAY_EVENTS = ("ray", "final_ray")


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row or not row.get("type"):
                continue
            event = {
                "day": float(row["day"]),
                "type": row["type"],
                "helio_lon": float(row["helio_lon"]),
                "geo_lon": float(row["geo_lon"]),
            }
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {"ray": 0, "final_ray": 0, "reset": 0}
    for event in events:
        if event["type"] in summary:
            summary[event["type"]] += 1
    return summary


def longitude_shift(start_deg: float, end_deg: float) -> float:
    """Signed change from *start_deg* to *end_deg*, wrapped into (-180, 180]."""

    delta = (end_deg - start_deg) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return delta


def ray_intervals(events: List[dict]) -> List[dict]:
    """Pair every cast ray with the final ray that closed its interval.

    A reset between the two drops the open ray.
    """

    intervals: List[dict] = []
    pending: dict | None = None
    for event in events:
        kind = event["type"]
        if kind == "reset":
            pending = None
        elif kind == "ray":
            pending = event
        elif kind == "final_ray" and pending is not None:
            intervals.append(
                {
                    "start_day": pending["day"],
                    "end_day": event["day"],
                    "geo_start": pending["geo_lon"],
                    "geo_end": event["geo_lon"],
                    "geo_shift": longitude_shift(pending["geo_lon"], event["geo_lon"]),
                    "helio_shift": longitude_shift(pending["helio_lon"], event["helio_lon"]),
                }
            )
            pending = None
    return intervals


def plot_longitudes(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> Path:
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(ts["day"], ts["helio_lon"], ".", ms=1.5, color="#1c5ad8", label="Heliocentric (Earth)")
    ax.plot(ts["day"], ts["geo_lon"], ".", ms=1.5, color="#d2322a", label="Geocentric (Mars)")
    for event in events:
        if event["type"] == "ray":
            ax.axvline(event["day"], color="#d2322a", linestyle="--", alpha=0.5)
        elif event["type"] == "final_ray":
            ax.axvline(event["day"], color="#962078", linestyle=":", alpha=0.7)
    ax.set_xlabel("Simulated days")
    ax.set_ylabel("Longitude [deg]")
    ax.set_ylim(0.0, 360.0)
    ax.set_title("Longitude over time")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")
    fig.tight_layout()
    out_path = fig_dir / "longitudes.png"
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def plot_rays(fig_dir: Path, events: List[dict], cfg: OrbitCfg = ORBIT_CFG) -> Path:
    sim = OrbitalSimulator(cfg)
    fig, ax = plt.subplots(figsize=(6, 6))
    for body, color in ((sim.earth, "#1c5ad8"), (sim.mars, "#d2322a")):
        points = sim.orbit_points(body)
        closed = np.vstack((points, points[:1]))
        ax.plot(closed[:, 0], -closed[:, 1], color=color, lw=1.0, alpha=0.6, label=body.name)
    ax.scatter([0.0], [0.0], color="#ffcd28", s=80, label="Sun")
    for event in events:
        details = event.get("details")
        if event["type"] not in RAY_EVENTS or not isinstance(details, dict):
            continue
        earth = np.asarray(details["earth"], dtype=float)
        mars = np.asarray(details["mars"], dtype=float)
        color = "#962078" if event["type"] == "final_ray" else "#d2322a"
        # Flip y so the figure matches the on-screen orientation.
        ax.plot([earth[0], mars[0]], [-earth[1], -mars[1]], color=color, lw=1.2)
    ax.set_aspect("equal", "box")
    ax.set_title("Observation rays")
    ax.legend(loc="upper right")
    fig.tight_layout()
    out_path = fig_dir / "rays.png"
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def print_summary(
    run_dir: Path,
    ts: Dict[str, np.ndarray],
    meta: dict,
    event_summary: Dict[str, int],
    intervals: List[dict],
) -> None:
    days = ts.get("day", np.array([]))
    print(f"Run: {run_dir.name}")
    print(f" Simulated days: {int(days[-1]) if days.size else 0}")
    print(
        " Events:" + ",".join(f" {etype}: {count}" for etype, count in event_summary.items())
    )
    if not intervals:
        print(f" No completed {meta.get('final_ray_day', 687)}-day interval")
    for idx, interval in enumerate(intervals, start=1):
        print(
            f" Interval {idx}: day {interval['start_day']:.0f} -> {interval['end_day']:.0f},"
            f" geocentric {interval['geo_start']:.1f}° -> {interval['geo_end']:.1f}°"
            f" (shift {interval['geo_shift']:+.1f}°),"
            f" heliocentric shift {interval['helio_shift']:+.1f}°"
        )


def resolve_run_dir(parser: argparse.ArgumentParser, run_dir: str | None, base_runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_path = base_runs_dir / last_run_file.read_text(encoding="utf-8").strip()
    if not run_path.is_dir():
        parser.error(f"Run folder not found: {run_path}")
    return run_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a logged run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a run folder")
    parser.add_argument("--runs-dir", default="data/runs", help="Folder holding the runs")
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(parser, args.run_dir, Path(args.runs_dir))
    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not ts_path.exists() or not ev_path.exists():
        parser.error("Run folder is missing timeseries.csv or events.csv.")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or not ts.get("day", np.array([])).size:
        parser.error("timeseries.csv is empty, nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    plot_longitudes(fig_dir, ts, events)
    plot_rays(fig_dir, events)
    print_summary(run_path, ts, meta, summarize_events(events), ray_intervals(events))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_bench.py
------------
Timing harness comparing planners on identical queries:
- Fixed scenarios (straight line 5x5, obstacle 7x7, tiled obstacle 28x28, corner 4x4)
- Optional generated weighted grids (sizes x densities x seeds)
- Every selected planner runs each query `--repeats` times; min/mean/std
  wall time in microseconds is recorded with path length and success.
- Writes a CSV to --outdir (default $GRIDASTAR_OUT_DIR or results/bench).

Example:
    python -m cli.run_bench \
        --scenarios straight_5x5,obstacle_7x7,obstacle_28x28 \
        --planners grid_astar,reference \
        --repeats 200 \
        --sizes 32x32,64x64 --densities 0.15 --num-envs 3 --seed 0
"""

from __future__ import annotations
import argparse
import csv
import logging
import os
import sys
import time
from typing import Dict, List, Tuple

import numpy as np
from tqdm import tqdm

from envs.fixtures import SCENARIOS, Scenario
from envs.generator import generate_scenario
from logging_config import configure_logging
from planners import PLANNERS

logger = logging.getLogger(__name__)

FIELDNAMES = [
    "scenario", "planner", "cardinal_only", "H", "W", "repeats",
    "success", "path_len", "cost", "expanded",
    "min_us", "mean_us", "std_us",
]


# -------------------- helpers -------------------- #

def _parse_sizes(s: str) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for token in s.split(","):
        token = token.strip().lower()
        if not token:
            continue
        if "x" not in token:
            raise ValueError(f"Bad size '{token}', expected like 30x30")
        h, w = token.split("x")
        sizes.append((int(h), int(w)))
    return sizes


def _parse_list(s: str) -> List[str]:
    return [t.strip().lower() for t in s.split(",") if t.strip()]


def time_query(planner, scn: Scenario, repeats: int) -> Dict:
    """Run one query `repeats` times; identical inputs must yield identical paths."""
    samples = np.empty(repeats, dtype=np.float64)
    out = None
    for i in range(repeats):
        t0 = time.perf_counter()
        res = planner.plan(scn.grid, scn.start, scn.goal)
        samples[i] = time.perf_counter() - t0
        if out is None:
            out = res
        elif res["path"] != out["path"]:
            raise RuntimeError(f"{planner!r} returned different paths for {scn.name}")

    H, W = scn.grid.shape
    path = out["path"] or []
    return {
        "scenario": scn.name,
        "H": H, "W": W,
        "repeats": repeats,
        "success": int(bool(out["success"])),
        "path_len": len(path),
        "cost": out.get("cost"),
        "expanded": out.get("expanded"),
        "min_us": float(samples.min() * 1e6),
        "mean_us": float(samples.mean() * 1e6),
        "std_us": float(samples.std() * 1e6),
    }


def build_scenarios(names: List[str], sizes: List[Tuple[int, int]],
                    densities: List[float], num_envs: int, seed: int) -> List[Scenario]:
    scenarios: List[Scenario] = []
    for name in names:
        if name not in SCENARIOS:
            raise ValueError(f"Unknown scenario '{name}', expected one of {sorted(SCENARIOS)}")
        scenarios.append(SCENARIOS[name]())

    for (H, W) in sizes:
        for dens in densities:
            for i_env in range(num_envs):
                # deterministic per-env RNG derived from seed + geometry + density
                base = (int(seed) * 1_000_003 + i_env * 97 + H * 11 + W * 13
                        + int(round(dens * 1000)) * 17) % 2**32
                gen = generate_scenario(H=H, W=W, density=dens, cost_range=(1, 5),
                                        ensure_status="reachable",
                                        rng=np.random.default_rng(base))
                scenarios.append(Scenario(f"gen_{H}x{W}_d{dens}_{i_env}",
                                          gen.grid, gen.start, gen.goal))
    return scenarios


def run(scenarios: List[Scenario], planner_keys: List[str],
        cardinal_only: bool, repeats: int, progress: bool = True) -> List[Dict]:
    planners = {}
    for key in planner_keys:
        if key not in PLANNERS:
            raise ValueError(f"Unknown planner '{key}', expected one of {sorted(PLANNERS)}")
        planners[key] = PLANNERS[key](cardinal_only=cardinal_only)

    rows: List[Dict] = []
    with tqdm(total=len(scenarios) * len(planners), desc="Benchmark",
              disable=not progress) as pbar:
        for scn in scenarios:
            for key, planner in planners.items():
                row = time_query(planner, scn, repeats)
                row["planner"] = key
                row["cardinal_only"] = int(cardinal_only)
                rows.append(row)
                logger.info("%s/%s: %.1f us mean", scn.name, key, row["mean_us"])
                pbar.update(1)
    return rows


def write_csv(rows: List[Dict], outdir: str) -> str:
    os.makedirs(outdir, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_csv = os.path.join(outdir, f"bench_{stamp}.csv")
    tmp_csv = out_csv + f".tmp_{os.getpid()}"
    with open(tmp_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()
        w.writerows(rows)
    # Atomic rename to final path
    os.replace(tmp_csv, out_csv)
    return out_csv


# -------------------- main -------------------- #

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark grid planners on identical queries.")
    ap.add_argument("--scenarios", type=str, default="straight_5x5,obstacle_7x7,obstacle_28x28",
                    help="Comma-separated fixed scenarios (empty for none)")
    ap.add_argument("--planners", type=str, default="grid_astar,reference",
                    help="Comma-separated planners: " + ",".join(PLANNERS))
    ap.add_argument("--repeats", type=int, default=100, help="Timed runs per query")
    ap.add_argument("--cardinal", action="store_true", help="4-directional movement only")
    ap.add_argument("--sizes", type=str, default="",
                    help="Comma-separated generated grid sizes like 32x32,64x64")
    ap.add_argument("--densities", type=str, default="0.15", help="Comma-separated wall densities")
    ap.add_argument("--num-envs", type=int, default=1, help="Generated grids per (size,density)")
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--outdir", type=str,
                    default=os.getenv("GRIDASTAR_OUT_DIR", "results/bench"),
                    help="Output directory for CSV")
    ap.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    args = ap.parse_args(argv)

    configure_logging(args.log_level)
    if args.repeats <= 0:
        print("error: --repeats must be positive", file=sys.stderr)
        return 2

    try:
        scenarios = build_scenarios(
            _parse_list(args.scenarios), _parse_sizes(args.sizes),
            [float(d) for d in _parse_list(args.densities)],
            args.num_envs, args.seed,
        )
        rows = run(scenarios, _parse_list(args.planners), args.cardinal,
                   args.repeats, progress=not args.no_progress)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    out_csv = write_csv(rows, args.outdir)
    print(f"Saved: {out_csv}")
    print(f"{'scenario':24} {'planner':11} {'succ':4} {'len':>4} {'mean[us]':>10} {'min[us]':>10}")
    for r in rows:
        print(f"{r['scenario']:24} {r['planner']:11} {r['success']:4d} {r['path_len']:4d} "
              f"{r['mean_us']:10.1f} {r['min_us']:10.1f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

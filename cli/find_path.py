#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
find_path.py
------------
Run one GridAStar query on a map file and print the result.

Example:
    python -m cli.find_path maps/weighted_valley.txt --cardinal --render out/valley.png

Start/goal are x,y coordinates; when omitted, the map's S/G markers are used.
Exit codes: 0 path found, 1 goal unreachable, 2 invalid input.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

from envs.grid import CostGrid
from envs.maps import MapFormatError, format_map, load_map
from logging_config import configure_logging
from planners import GridAStar, HEURISTICS, SearchStatus

EXIT_FOUND, EXIT_UNREACHABLE, EXIT_INVALID = 0, 1, 2


def _parse_xy(s: str, grid: CostGrid) -> int:
    try:
        x, y = (int(t) for t in s.split(","))
    except ValueError:
        raise ValueError(f"Bad coordinate '{s}', expected like 3,4")
    return grid.index(x, y)


def _resolve(arg: Optional[str], marker: Optional[int], name: str, grid: CostGrid) -> int:
    if arg is not None:
        return _parse_xy(arg, grid)
    if marker is None:
        raise ValueError(f"no --{name} given and the map has no marker for it")
    return marker


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Find the lowest-cost path on a cost-grid map.")
    ap.add_argument("map", type=str, help="Map file (.txt/.map ASCII or .npy)")
    ap.add_argument("--start", type=str, default=None, help="Start as x,y (default: S marker)")
    ap.add_argument("--goal", type=str, default=None, help="Goal as x,y (default: G marker)")
    ap.add_argument("--cardinal", action="store_true", help="4-directional movement only")
    ap.add_argument("--heuristic", type=str, default="manhattan", choices=sorted(HEURISTICS))
    ap.add_argument("--render", type=str, default=None, help="Save a PNG of the result here")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    args = ap.parse_args(argv)

    configure_logging(args.log_level)

    try:
        parsed = load_map(args.map)
        grid = parsed.grid
        start = _resolve(args.start, parsed.start, "start", grid)
        goal = _resolve(args.goal, parsed.goal, "goal", grid)
    except (OSError, MapFormatError, ValueError, IndexError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    planner = GridAStar(cardinal_only=args.cardinal, heuristic=args.heuristic)
    res = planner.search(grid, start, goal)

    if res.status is SearchStatus.INVALID_INPUT:
        print(f"error: {res.message}", file=sys.stderr)
        return EXIT_INVALID

    if res.found:
        print(f"[OK] {len(res.path)} steps, cost {res.cost}, {res.expanded} expansions")
        print("path:", " ".join(str(i) for i in res.path))
        print("xy:  ", " ".join("({},{})".format(*grid.xy(i)) for i in res.path))
    else:
        print(f"[--] goal unreachable ({res.expanded} expansions)")
    print(format_map(grid, path=res.path, start=start, goal=goal))

    if args.render:
        from tools.render import save_render
        title = f"cost {res.cost}" if res.found else "unreachable"
        out = save_render(grid, args.render, start=start, goal=goal, path=res.path, title=title)
        print(f"Saved: {out}")

    return EXIT_FOUND if res.found else EXIT_UNREACHABLE


if __name__ == "__main__":
    sys.exit(main())

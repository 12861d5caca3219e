#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Procedural weighted cost grids for exercising and benchmarking planners.

A scenario is built in three layers:
- Terrain: a random field smoothed with a gaussian kernel and quantised into
  integer costs in `cost_range` (so cheap and expensive regions are spatially
  coherent instead of salt-and-pepper noise).
- Walls: rectangles and random-growth blobs stamped until a target density is
  reached, each kept `moat` cells away from earlier ones.
- Status shaping: "reachable" clears walls until start and goal connect;
  "failure" seals the goal behind a ring of walls.

Dependencies:
    numpy
    scipy.ndimage   (binary dilation for moats, gaussian smoothing for terrain)

Reproducibility: pass an explicit np.random.Generator.

Usage (quick smoke test):
    python3 -m envs.generator
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np
from scipy.ndimage import binary_dilation, gaussian_filter

from .grid import CostGrid

logger = logging.getLogger(__name__)


# ------------------------------- Data classes ------------------------------- #

@dataclass
class GridScenario:
    """A generated cost grid with its query endpoints."""
    grid: CostGrid
    start: int
    goal: int
    settings: Dict              # generator settings used (for provenance)
    rng: np.random.Generator

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape


# ------------------------------ Utility helpers ----------------------------- #

DELTAS_8 = np.array([
    (-1, -1), (-1, 0), (-1, +1),
    ( 0, -1),          ( 0, +1),
    (+1, -1), (+1, 0), (+1, +1),
], dtype=np.int8)

DELTAS_4 = np.array([
    (-1, 0), (1, 0), (0, -1), (0, 1)
], dtype=np.int8)


def _dilate_bool(img: np.ndarray, iters: int = 1) -> np.ndarray:
    if iters <= 0:
        return img
    structure = np.ones((3, 3), dtype=bool)
    return binary_dilation(img, structure=structure, iterations=int(iters))


def has_path(passable: np.ndarray,
             start: Tuple[int, int],
             goal: Tuple[int, int],
             cardinal_only: bool = False) -> bool:
    """
    Boolean reachability over passable cells (True = free).
    start/goal are (row, col).
    """
    H, W = passable.shape
    sr, sc = start
    gr, gc = goal
    if not passable[sr, sc] or not passable[gr, gc]:
        return False

    visited = np.zeros_like(passable, dtype=bool)
    visited[sr, sc] = True
    q = [(sr, sc)]
    deltas = DELTAS_4 if cardinal_only else DELTAS_8

    head = 0  # manual queue for speed
    while head < len(q):
        r, c = q[head]
        head += 1
        if (r, c) == (gr, gc):
            return True
        for dr, dc in deltas:
            nr, nc = r + int(dr), c + int(dc)
            if 0 <= nr < H and 0 <= nc < W and not visited[nr, nc] and passable[nr, nc]:
                visited[nr, nc] = True
                q.append((nr, nc))
    return False


# -------------------------- Shape / stamping helpers ------------------------ #

def _stamp_mask(walls: np.ndarray, top_left: Tuple[int, int],
                mask: np.ndarray, moat: int) -> bool:
    """
    Stamp `mask` (True = wall) onto `walls` at `top_left` unless it overlaps
    an existing wall or its `moat`-dilated ring touches one.
    """
    H, W = walls.shape
    mr, mc = mask.shape
    r0, c0 = top_left
    r1, c1 = r0 + mr, c0 + mc
    if r0 < 0 or c0 < 0 or r1 > H or c1 > W:
        return False

    target = walls[r0:r1, c0:c1]
    if (target & mask).any():
        return False

    if moat > 0:
        canvas = np.zeros_like(walls)
        canvas[r0:r1, c0:c1] = mask
        if (_dilate_bool(canvas, moat) & walls).any():
            return False

    target |= mask
    return True


def _random_rectangle_mask(rng: np.random.Generator,
                           h_range: Tuple[int, int],
                           w_range: Tuple[int, int]) -> np.ndarray:
    h = max(1, int(rng.integers(h_range[0], h_range[1] + 1)))
    w = max(1, int(rng.integers(w_range[0], w_range[1] + 1)))
    return np.ones((h, w), dtype=bool)


def _random_blob_mask(rng: np.random.Generator, min_cells: int, max_cells: int) -> np.ndarray:
    """Connected blob grown cell by cell from a seed; tight bounding-box mask."""
    n = max(1, int(rng.integers(min_cells, max_cells + 1)))
    side = int(np.ceil(np.sqrt(n))) * 2 + 3
    canvas = np.zeros((side, side), dtype=bool)
    r = c = side // 2
    canvas[r, c] = True
    coords = [(r, c)]

    while len(coords) < n:
        base_r, base_c = coords[int(rng.integers(0, len(coords)))]
        dr, dc = DELTAS_4[int(rng.integers(0, len(DELTAS_4)))]
        nr, nc = base_r + int(dr), base_c + int(dc)
        if 0 <= nr < side and 0 <= nc < side and not canvas[nr, nc]:
            canvas[nr, nc] = True
            coords.append((nr, nc))

    ys, xs = np.where(canvas)
    return canvas[ys.min():ys.max() + 1, xs.min():xs.max() + 1]


def terrain_costs(H: int, W: int, cost_range: Tuple[int, int],
                  smoothing: float, rng: np.random.Generator) -> np.ndarray:
    """Spatially coherent integer costs in [lo, hi]."""
    lo, hi = int(cost_range[0]), int(cost_range[1])
    if lo < 1 or hi < lo:
        raise ValueError(f"cost_range must satisfy 1 <= lo <= hi, got {cost_range}")
    if lo == hi:
        return np.full((H, W), lo, dtype=np.int64)

    field = rng.random((H, W))
    if smoothing > 0:
        field = gaussian_filter(field, sigma=float(smoothing), mode="reflect")
    span = field.max() - field.min()
    if span > 0:
        field = (field - field.min()) / span
    else:
        field = np.zeros_like(field)
    return (lo + np.rint(field * (hi - lo))).astype(np.int64)


# ------------------------------- Core generator ----------------------------- #

def generate_scenario(
    H: int = 32,
    W: int = 32,
    *,
    density: float = 0.18,
    cost_range: Tuple[int, int] = (1, 1),
    smoothing: float = 2.0,
    start: Tuple[int, int] = (0, 0),
    goal: Optional[Tuple[int, int]] = None,
    moat: int = 1,
    rect_size: Tuple[Tuple[int, int], Tuple[int, int]] = ((2, 5), (2, 7)),  # (min_h,max_h),(min_w,max_w)
    blob_cells: Tuple[int, int] = (4, 16),
    rect_prob: float = 0.6,
    ensure_status: str = "any",              # "any" | "reachable" | "failure"
    cardinal_only: bool = False,
    rng: Optional[np.random.Generator] = None,
    max_place_tries: int = 5000,
) -> GridScenario:
    """
    Create a weighted cost grid with walls.

    start/goal are (row, col); goal defaults to the bottom-right corner.

    ensure_status:
        "any"       : no guarantee about path existence.
        "reachable" : walls are removed until start and goal connect.
        "failure"   : the goal is sealed inside a ring of walls.
    """
    if ensure_status not in ("any", "reachable", "failure"):
        raise ValueError(f"unknown ensure_status '{ensure_status}'")
    if H <= 0 or W <= 0:
        raise ValueError(f"grid must be non-empty, got {H}x{W}")
    if goal is None:
        goal = (H - 1, W - 1)
    for name, (r, c) in (("start", start), ("goal", goal)):
        if not (0 <= r < H and 0 <= c < W):
            raise ValueError(f"{name} {(r, c)} outside {H}x{W} grid")
    if ensure_status == "failure" and tuple(start) == tuple(goal):
        raise ValueError("ensure_status='failure' needs distinct start and goal")

    rng = rng or np.random.default_rng()
    settings = dict(
        H=H, W=W, density=density, cost_range=cost_range, smoothing=smoothing,
        start=start, goal=goal, moat=moat, rect_size=rect_size,
        blob_cells=blob_cells, rect_prob=rect_prob, ensure_status=ensure_status,
        cardinal_only=cardinal_only, max_place_tries=max_place_tries,
        seed=int(rng.integers(0, 2**31 - 1)),
    )

    costs = terrain_costs(H, W, cost_range, smoothing, rng)
    walls = np.zeros((H, W), dtype=bool)

    # -------------------- 1) Random wall placement -------------------- #
    target_cells = int(round(float(np.clip(density, 0.0, 0.9)) * H * W))
    tries = 0
    while tries < max_place_tries and int(walls.sum()) < target_cells:
        tries += 1
        if rng.random() < rect_prob:
            mask = _random_rectangle_mask(rng, *rect_size)
        else:
            mask = _random_blob_mask(rng, *blob_cells)
        mr, mc = mask.shape
        if mr > H or mc > W:
            continue
        r0 = int(rng.integers(0, H - mr + 1))
        c0 = int(rng.integers(0, W - mc + 1))
        _stamp_mask(walls, (r0, c0), mask, moat=moat)

    walls[start] = False
    walls[goal] = False

    # -------------------- 2) Status shaping -------------------- #
    if ensure_status == "reachable":
        wall_cells = np.argwhere(walls)
        rng.shuffle(wall_cells)
        i = 0
        while not has_path(~walls, start, goal, cardinal_only) and i < len(wall_cells):
            walls[tuple(wall_cells[i])] = False
            i += 1
        logger.debug("cleared %d wall cells to connect %s -> %s", i, start, goal)

    elif ensure_status == "failure":
        ring = np.zeros((H, W), dtype=bool)
        ring[goal] = True
        ring = _dilate_bool(ring, 1)
        ring[goal] = False
        if ring[start]:
            raise ValueError("start is adjacent to goal; cannot seal the goal off")
        walls |= ring

    costs[walls] = 0
    grid = CostGrid.from_array(costs)
    logger.debug("generated %dx%d grid, %d walls, status=%s",
                 H, W, int(walls.sum()), ensure_status)
    return GridScenario(
        grid=grid,
        start=start[0] * W + start[1],
        goal=goal[0] * W + goal[1],
        settings=settings,
        rng=rng,
    )


# ---------------------------------- Demo ------------------------------------ #

if __name__ == "__main__":
    from .maps import format_map

    scn = generate_scenario(H=16, W=32, density=0.2, cost_range=(1, 5),
                            ensure_status="reachable", rng=np.random.default_rng(123))
    print("Scenario:", scn.shape, "Start:", scn.start, "Goal:", scn.goal)
    print(format_map(scn.grid, start=scn.start, goal=scn.goal))

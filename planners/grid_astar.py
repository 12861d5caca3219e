#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A* on weighted cost grids (4- or 8-directional).
- Cells are flattened row-major indices into a CostGrid; cost 0 is a wall.
- Step cost: cost of entering the neighbor + Manhattan distance of the move
  (1 for cardinal steps, 2 for diagonal steps).
- Diagonals may cut a corner formed by two blocked cardinal cells.
- Heuristic: Manhattan (default), Chebyshev, or zero (uniform-cost order).
- Ties on priority expand the higher cell index first.

Returns a SearchResult; `plan()` wraps it into
{'success': bool, 'path': list[int] or None, 'cost': int or None, 'expanded': int}.
The path excludes start and includes goal.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Union

import numpy as np

from envs.grid import CostGrid

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Start/goal outside the grid, or grid dimensions inconsistent."""


class SearchStatus(enum.Enum):
    FOUND = "found"
    UNREACHABLE = "unreachable"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    path: List[int] = field(default_factory=list)
    cost: Optional[int] = None
    expanded: int = 0
    message: str = ""

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND


def manhattan(x1: int, y1: int, x2: int, y2: int) -> int:
    return abs(x1 - x2) + abs(y1 - y2)


def chebyshev(x1: int, y1: int, x2: int, y2: int) -> int:
    return max(abs(x1 - x2), abs(y1 - y2))


def _zero(x1: int, y1: int, x2: int, y2: int) -> int:
    return 0


HEURISTICS: Dict[str, Callable[[int, int, int, int], int]] = {
    "manhattan": manhattan,
    "chebyshev": chebyshev,
    "zero": _zero,
}


def neighbors(current: int, cells: Sequence[int], width: int,
              cardinal_only: bool = False) -> List[int]:
    """Passable neighbors of `current`.

    Emission order is top, top-left, top-right, left, right, bottom,
    bottom-left, bottom-right (diagonals skipped when `cardinal_only`).
    """
    n = len(cells)
    is_top = current < width
    is_bottom = current >= n - width
    x = current % width
    is_left = x == 0
    is_right = x == width - 1

    out: List[int] = []
    if not is_top:
        top = current - width
        if cells[top] > 0:
            out.append(top)
        if not cardinal_only:
            if not is_left and cells[top - 1] > 0:
                out.append(top - 1)
            if not is_right and cells[top + 1] > 0:
                out.append(top + 1)
    if not is_left and cells[current - 1] > 0:
        out.append(current - 1)
    if not is_right and cells[current + 1] > 0:
        out.append(current + 1)
    if not is_bottom:
        bottom = current + width
        if cells[bottom] > 0:
            out.append(bottom)
        if not cardinal_only:
            if not is_left and cells[bottom - 1] > 0:
                out.append(bottom - 1)
            if not is_right and cells[bottom + 1] > 0:
                out.append(bottom + 1)
    return out


def _reconstruct(came_from: Dict[int, int], start: int, goal: int) -> List[int]:
    path: List[int] = []
    last = goal
    while last in came_from:
        path.append(last)
        last = came_from[last]
        if last == start:
            break
    path.reverse()
    return path


class GridAStar:
    def __init__(self, cardinal_only: bool = False, heuristic: str = "manhattan"):
        if heuristic not in HEURISTICS:
            raise ValueError(
                f"unknown heuristic '{heuristic}', expected one of {sorted(HEURISTICS)}"
            )
        self.cardinal_only = bool(cardinal_only)
        self.heuristic = heuristic
        self._h = HEURISTICS[heuristic]

    def __repr__(self) -> str:
        return f"GridAStar(cardinal_only={self.cardinal_only}, heuristic='{self.heuristic}')"

    @staticmethod
    def _validate(grid: CostGrid, start, goal) -> str:
        for name, idx in (("start", start), ("goal", goal)):
            if not grid.contains(idx):
                return f"{name} index {idx!r} outside [0, {len(grid)})"
        return ""

    def search(self, grid: CostGrid, start: int, goal: int) -> SearchResult:
        problem = self._validate(grid, start, goal)
        if problem:
            logger.debug("rejected query: %s", problem)
            return SearchResult(SearchStatus.INVALID_INPUT, message=problem)
        start, goal = int(start), int(goal)

        if start == goal:
            return SearchResult(SearchStatus.FOUND, path=[], cost=0)
        if not grid.is_passable(start) or not grid.is_passable(goal):
            logger.debug("start %d or goal %d is impassable", start, goal)
            return SearchResult(SearchStatus.UNREACHABLE)

        cells = grid.tolist()
        width = grid.width
        h = self._h
        goal_x, goal_y = goal % width, goal // width

        # (priority, -index): min-heap that pops the higher index on ties
        frontier: List[tuple] = [(0, -start)]
        cost_so_far: Dict[int, int] = {start: 0}
        came_from: Dict[int, int] = {}
        expanded = 0

        while frontier:
            _, neg = heapq.heappop(frontier)
            current = -neg
            if current == goal:
                break
            expanded += 1

            cx, cy = current % width, current // width
            current_cost = cost_so_far[current]
            for nb in neighbors(current, cells, width, self.cardinal_only):
                nx, ny = nb % width, nb // width
                cost = current_cost + cells[nb] + manhattan(cx, cy, nx, ny)
                known = cost_so_far.get(nb)
                if known is None or cost < known:
                    cost_so_far[nb] = cost
                    came_from[nb] = current
                    heapq.heappush(frontier, (cost + h(nx, ny, goal_x, goal_y), -nb))

        path = _reconstruct(came_from, start, goal)
        if not path:
            logger.debug("goal %d unreachable from %d after %d expansions",
                         goal, start, expanded)
            return SearchResult(SearchStatus.UNREACHABLE, expanded=expanded)

        logger.debug("found %d-step path %d -> %d, cost %d, %d expansions",
                     len(path), start, goal, cost_so_far[goal], expanded)
        return SearchResult(SearchStatus.FOUND, path=path,
                            cost=cost_so_far[goal], expanded=expanded)

    def plan(self, grid: CostGrid, start: int, goal: int) -> Dict:
        res = self.search(grid, start, goal)
        return {
            'success': res.found,
            'path': res.path if res.found else None,
            'cost': res.cost,
            'expanded': res.expanded,
        }


GridLike = Union[CostGrid, Sequence[int], np.ndarray]


def _as_grid(grid: GridLike, width: Optional[int]) -> CostGrid:
    if isinstance(grid, CostGrid):
        if width is not None and int(width) != grid.width:
            raise InvalidInputError(f"width {width} does not match grid width {grid.width}")
        return grid
    if width is None:
        try:
            arr = np.asarray(grid)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        if arr.ndim != 2:
            raise InvalidInputError("width is required for a flat cost sequence")
        try:
            return CostGrid.from_array(arr)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
    try:
        return CostGrid(np.asarray(grid), width)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


def find_path(start: int, goal: int, grid: GridLike, cardinal_only: bool = False,
              *, width: Optional[int] = None, heuristic: str = "manhattan") -> List[int]:
    """Lowest-cost path from `start` to `goal` (start excluded, goal included).

    `grid` is a CostGrid, a 2-D cost array, or a flat cost sequence together
    with `width`. Returns [] when the goal cannot be reached or start == goal.
    Raises InvalidInputError for out-of-range endpoints or inconsistent
    dimensions.
    """
    g = _as_grid(grid, width)
    res = GridAStar(cardinal_only=cardinal_only, heuristic=heuristic).search(g, start, goal)
    if res.status is SearchStatus.INVALID_INPUT:
        raise InvalidInputError(res.message)
    return list(res.path)

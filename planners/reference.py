#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reference A* used as a comparison baseline by the benchmark harness.
- Works on the passable/blocked view of a CostGrid (cost > 0 is free);
  entry costs are ignored.
- Edge costs: 1.0 for cardinal moves; 1.4 for diagonals (8-connected).
- Heuristic: Euclidean distance.
- Closed set; stale heap entries are skipped.

Returns {'success': bool, 'path': list[int] or None, 'cost': float or None,
'expanded': int}, with the same index path format as GridAStar
(start excluded, goal included).
"""

from __future__ import annotations
from typing import List, Optional, Dict
import heapq
import math
import numpy as np

from envs.grid import CostGrid


class ReferenceAStar:
    def __init__(self, cardinal_only: bool = False):
        self.cardinal_only = bool(cardinal_only)
        # Neighbor deltas (dy, dx) and step costs
        if cardinal_only:
            self.deltas = np.array([(-1, 0), (1, 0), (0, -1), (0, 1)], dtype=np.int8)
            self.costs = np.ones(4, dtype=np.float32)
        else:
            self.deltas = np.array([
                (-1, -1), (-1, 0), (-1, +1),
                ( 0, -1),          ( 0, +1),
                (+1, -1), (+1, 0), (+1, +1)
            ], dtype=np.int8)
            self.costs = np.array([1.4, 1, 1.4,
                                   1,      1,
                                   1.4, 1, 1.4], dtype=np.float32)

    def __repr__(self) -> str:
        return f"ReferenceAStar(cardinal_only={self.cardinal_only})"

    @staticmethod
    def _heuristic(r: int, c: int, gr: int, gc: int) -> float:
        return math.hypot(r - gr, c - gc)

    @staticmethod
    def _reconstruct(parent: np.ndarray, start: int, goal: int) -> Optional[List[int]]:
        path: List[int] = []
        cur = goal
        while cur != start:
            path.append(int(cur))
            cur = int(parent[cur])
            if cur == -1:  # no parent (shouldn't happen if reachable)
                return None
        path.reverse()
        return path

    def plan(self, grid: CostGrid, start: int, goal: int) -> Dict:
        H, W = grid.shape
        fail = {'success': False, 'path': None, 'cost': None, 'expanded': 0}

        if not (grid.contains(start) and grid.contains(goal)):
            return fail
        start, goal = int(start), int(goal)
        blocked = ~grid.passable_mask()
        sr, sc = divmod(start, W)
        gr, gc = divmod(goal, W)
        if blocked[sr, sc] or blocked[gr, gc]:
            return fail
        if start == goal:
            return {'success': True, 'path': [], 'cost': 0.0, 'expanded': 0}

        g = np.full((H, W), np.inf, dtype=np.float32)
        parent = np.full(H * W, -1, dtype=np.int64)
        closed = np.zeros((H, W), dtype=bool)

        g[sr, sc] = 0.0
        pq: List[tuple] = [(self._heuristic(sr, sc, gr, gc), sr, sc)]
        expanded = 0

        while pq:
            _, r, c = heapq.heappop(pq)
            if closed[r, c]:
                continue
            closed[r, c] = True

            if r == gr and c == gc:
                path = self._reconstruct(parent, start, goal)
                return {'success': path is not None, 'path': path,
                        'cost': float(g[r, c]), 'expanded': expanded}
            expanded += 1

            for k, (dr, dc) in enumerate(self.deltas):
                nr, nc = r + int(dr), c + int(dc)
                if nr < 0 or nr >= H or nc < 0 or nc >= W:
                    continue
                if blocked[nr, nc] or closed[nr, nc]:
                    continue
                tentative_g = g[r, c] + self.costs[k]
                if tentative_g < g[nr, nc]:
                    g[nr, nc] = tentative_g
                    parent[nr * W + nc] = r * W + c
                    heapq.heappush(pq, (tentative_g + self._heuristic(nr, nc, gr, gc), nr, nc))

        fail['expanded'] = expanded
        return fail

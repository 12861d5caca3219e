# -*- coding: utf-8 -*-
"""
Planners on weighted cost grids with a unified API:
planner.plan(grid: CostGrid, start: int, goal: int)
  -> {'success': bool, 'path': List[int] or None, 'cost': ..., 'expanded': int}
Paths are flattened row-major indices, start excluded, goal included.
"""

from __future__ import annotations
from typing import Dict, Type

from .grid_astar import (
    GridAStar,
    SearchResult,
    SearchStatus,
    InvalidInputError,
    HEURISTICS,
    find_path,
    neighbors,
)
from .reference import ReferenceAStar

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type] = {
    "grid_astar": GridAStar,
    "reference": ReferenceAStar,
}

__all__ = [
    "GridAStar",
    "ReferenceAStar",
    "SearchResult",
    "SearchStatus",
    "InvalidInputError",
    "HEURISTICS",
    "find_path",
    "neighbors",
    "PLANNERS",
]
